"""
In-memory collaborators.

Reference implementations of every collaborator interface, backed by
plain dictionaries. Used by tests and by applications that keep their
adaptive media catalogue in memory.

This is NOT optimized. It is CORRECT.

Rules:
------
- Insertion order is enumeration order everywhere
- Configuration identities are unique per company
- No caching, no background work, no locking
"""

import io
from collections import defaultdict
from typing import BinaryIO, Callable, Dict, List, Optional, Sequence, Tuple

from .collaborators import ConfigurationSource, MimeTypeChecker, VariantSource, VersionSource
from .errors import BackendFailureError, InvalidConfigurationError, VersionNotFoundError
from .models import Configuration, FileEntry, FileVersion, Variant
from .settings import DEFAULT_SETTINGS, AdaptiveMediaSettings


class InMemoryConfigurationSource(ConfigurationSource):
    """Configurations grouped by company, in insertion order."""

    def __init__(self):
        # company_id -> (uuid -> Configuration)
        self._configurations: Dict[int, Dict[str, Configuration]] = defaultdict(dict)

    def add_configuration(self, configuration: Configuration) -> None:
        """
        Store a configuration.

        Raises:
            InvalidConfigurationError: If the company already has a
                configuration with the same uuid
        """
        company = self._configurations[configuration.company_id]
        if configuration.uuid in company:
            raise InvalidConfigurationError(
                configuration.company_id,
                f"duplicate configuration uuid '{configuration.uuid}'",
            )
        company[configuration.uuid] = configuration

    def list_configurations(
        self,
        company_id: int,
        predicate: Callable[[Configuration], bool],
    ) -> List[Configuration]:
        company = self._configurations.get(company_id, {})
        return [c for c in company.values() if predicate(c)]

    def lookup_configuration(
        self, company_id: int, configuration_uuid: str
    ) -> Optional[Configuration]:
        return self._configurations.get(company_id, {}).get(configuration_uuid)


class InMemoryVersionSource(VersionSource):
    """
    Versions per file entry.

    The most recently added version of an entry is its current version.
    """

    def __init__(self):
        self._versions: Dict[int, List[FileVersion]] = defaultdict(list)

    def add_version(self, file_version: FileVersion) -> None:
        versions = self._versions[file_version.file_entry_id]
        if any(v.file_version_id == file_version.file_version_id for v in versions):
            raise ValueError(
                f"File version {file_version.file_version_id} already exists "
                f"for file entry {file_version.file_entry_id}"
            )
        versions.append(file_version)

    def versions_of(self, file_entry: FileEntry) -> Sequence[FileVersion]:
        return list(self._versions.get(file_entry.file_entry_id, []))

    def current_version(self, file_entry: FileEntry) -> FileVersion:
        versions = self._versions.get(file_entry.file_entry_id)
        if not versions:
            raise VersionNotFoundError(file_entry.file_entry_id)
        return versions[-1]


class AllowListMimeTypeChecker(MimeTypeChecker):
    """Supports exactly the mime types listed in the settings."""

    def __init__(self, settings: Optional[AdaptiveMediaSettings] = None):
        supported = (settings or DEFAULT_SETTINGS).supported_mime_types
        self._supported = frozenset(m.lower() for m in supported)

    def is_supported(self, mime_type: str) -> bool:
        if not mime_type:
            return False
        return mime_type.lower() in self._supported


class InMemoryVariantSource(VariantSource):
    """Variant records and their bytes, keyed by (configuration uuid, version id)."""

    def __init__(self):
        self._variants: Dict[Tuple[str, int], Variant] = {}
        self._contents: Dict[Tuple[str, int], bytes] = {}

    def add_variant(
        self,
        configuration_uuid: str,
        file_version_id: int,
        variant: Variant,
        content: bytes = b"",
    ) -> None:
        """Store (or replace) the variant for one pairing."""
        key = (configuration_uuid, file_version_id)
        self._variants[key] = variant
        self._contents[key] = content

    def lookup_variant(
        self, configuration_uuid: str, file_version_id: int
    ) -> Optional[Variant]:
        return self._variants.get((configuration_uuid, file_version_id))

    def open_content(
        self, configuration: Configuration, file_version: FileVersion
    ) -> BinaryIO:
        key = (configuration.uuid, file_version.file_version_id)
        if key not in self._contents:
            raise BackendFailureError(
                f"No stored content for configuration {configuration.uuid} "
                f"and version {file_version.file_version_id}"
            )
        return io.BytesIO(self._contents[key])

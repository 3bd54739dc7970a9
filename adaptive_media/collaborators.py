"""
Collaborator interfaces consumed by the finder.

Storage of originals and variants, configuration persistence and the
image pipeline live outside this package. The finder talks to them
only through these interfaces.

Design rules:
- Implementations own their thread-safety and caching
- The finder never retries and never catches what they raise
- InvalidConfigurationError signals inconsistent configuration state;
  anything else is a backend failure
"""

from abc import ABC, abstractmethod
from typing import BinaryIO, Callable, Iterable, Optional, Sequence

from .models import Configuration, FileEntry, FileVersion, Variant


class ConfigurationSource(ABC):
    """Stored adaptive media configurations, per company."""

    @abstractmethod
    def list_configurations(
        self,
        company_id: int,
        predicate: Callable[[Configuration], bool],
    ) -> Iterable[Configuration]:
        """
        Configurations of a company that satisfy predicate.

        Iteration order is the candidate order used by the finder.
        """
        pass

    @abstractmethod
    def lookup_configuration(
        self, company_id: int, configuration_uuid: str
    ) -> Optional[Configuration]:
        """The configuration with this identity, or None."""
        pass


class VersionSource(ABC):
    """Versions of stored file entries."""

    @abstractmethod
    def versions_of(self, file_entry: FileEntry) -> Sequence[FileVersion]:
        """All versions of file_entry, in enumeration order."""
        pass

    @abstractmethod
    def current_version(self, file_entry: FileEntry) -> FileVersion:
        """
        The current version of file_entry.

        Raises:
            VersionNotFoundError: If the entry has no usable version
        """
        pass


class MimeTypeChecker(ABC):
    """Tells whether originals of a mime type can have variants."""

    @abstractmethod
    def is_supported(self, mime_type: str) -> bool:
        pass


class VariantSource(ABC):
    """Persisted variant records and their content."""

    @abstractmethod
    def lookup_variant(
        self, configuration_uuid: str, file_version_id: int
    ) -> Optional[Variant]:
        """The variant stored for this pairing, or None if none exists."""
        pass

    @abstractmethod
    def open_content(
        self, configuration: Configuration, file_version: FileVersion
    ) -> BinaryIO:
        """Open the stored bytes of the variant for this pairing."""
        pass

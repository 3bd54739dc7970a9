"""
AdaptiveMedia - one query result.

Pairs a configuration with the variant stored for a file version.
Nothing is looked up or opened when an instance is created:
- the variant is loaded on first access and kept for the lifetime
  of the instance
- the content stream is opened only when content_stream() is called
"""

from typing import BinaryIO, Callable, Optional

from .attributes import Attribute, AttributeScope, AttributeValue
from .models import Configuration, FileVersion, Variant


_UNLOADED = object()


class AdaptiveMedia:
    """A configuration/variant pair for one file version."""

    def __init__(
        self,
        configuration: Configuration,
        file_version: FileVersion,
        variant_loader: Callable[[], Optional[Variant]],
        content_opener: Callable[[], BinaryIO],
    ):
        """
        Args:
            configuration: Configuration the variant was produced with
            file_version: Original the variant was derived from
            variant_loader: Returns the stored variant, or None if absent
            content_opener: Opens the variant bytes
        """
        self._configuration = configuration
        self._file_version = file_version
        self._variant_loader = variant_loader
        self._content_opener = content_opener
        self._variant = _UNLOADED

    @property
    def configuration(self) -> Configuration:
        return self._configuration

    @property
    def file_version(self) -> FileVersion:
        return self._file_version

    @property
    def variant(self) -> Optional[Variant]:
        """The stored variant, loaded on first access. None if absent."""
        if self._variant is _UNLOADED:
            self._variant = self._variant_loader()
        return self._variant

    def attribute_value(self, attribute: Attribute) -> Optional[AttributeValue]:
        """
        Value of attribute for this match.

        Returns None when the attribute does not apply (for example a
        variant attribute when no variant is stored). Configuration
        attributes never load the variant.
        """
        if attribute.scope is AttributeScope.CONFIGURATION:
            return attribute.extract(self._configuration, None)
        return attribute.extract(self._configuration, self.variant)

    def content_stream(self) -> BinaryIO:
        """Open the variant bytes. Each call opens a new stream."""
        return self._content_opener()

    def __repr__(self) -> str:
        return (
            f"AdaptiveMedia(configuration={self._configuration.uuid!r}, "
            f"file_version_id={self._file_version.file_version_id})"
        )

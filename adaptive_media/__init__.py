"""
Adaptive media - find the precomputed variants of a stored file.

Given a file version (or every version of a file entry), the finder
yields the variants produced by the currently selected configurations
that satisfy a query over typed attributes such as width, height or
configuration identity.

Constraints:
- Queries are built through QueryBuilder only
- Results are lazy and can be consumed once
- Nothing is transcoded, persisted or cached here
- Storage, configuration persistence and the image pipeline are
  collaborators behind the interfaces in collaborators.py

Usage:
    from adaptive_media import AdaptiveMediaFinder, IMAGE_WIDTH

    matches = finder.get_adaptive_media(
        lambda builder: builder.for_version(version).with_attribute(IMAGE_WIDTH, 800).done()
    )
"""

from .attributes import (
    Attribute,
    AttributeKind,
    AttributeRegistry,
    AttributeScope,
    CONFIGURATION_UUID,
    CONTENT_LENGTH,
    CONTENT_TYPE,
    DEFAULT_REGISTRY,
    IMAGE_HEIGHT,
    IMAGE_WIDTH,
    allowed_attributes,
    resolve_attribute,
)
from .collaborators import (
    ConfigurationSource,
    MimeTypeChecker,
    VariantSource,
    VersionSource,
)
from .errors import (
    AdaptiveMediaError,
    AttributeNotFoundError,
    BackendFailureError,
    InvalidArgumentError,
    InvalidConfigurationError,
    VersionNotFoundError,
)
from .finder import AdaptiveMediaFinder
from .media import AdaptiveMedia
from .models import Configuration, FileEntry, FileVersion, Variant
from .query import ConfigurationStatus, OrderBy, Query, QueryBuilder, QueryTarget
from .settings import AdaptiveMediaSettings, DEFAULT_SETTINGS, settings_from_env

__all__ = [
    # Attributes
    "Attribute",
    "AttributeKind",
    "AttributeRegistry",
    "AttributeScope",
    "CONFIGURATION_UUID",
    "CONTENT_LENGTH",
    "CONTENT_TYPE",
    "DEFAULT_REGISTRY",
    "IMAGE_HEIGHT",
    "IMAGE_WIDTH",
    "allowed_attributes",
    "resolve_attribute",
    # Collaborators
    "ConfigurationSource",
    "MimeTypeChecker",
    "VariantSource",
    "VersionSource",
    # Errors
    "AdaptiveMediaError",
    "AttributeNotFoundError",
    "BackendFailureError",
    "InvalidArgumentError",
    "InvalidConfigurationError",
    "VersionNotFoundError",
    # Finder
    "AdaptiveMediaFinder",
    "AdaptiveMedia",
    # Models
    "Configuration",
    "FileEntry",
    "FileVersion",
    "Variant",
    # Queries
    "ConfigurationStatus",
    "OrderBy",
    "Query",
    "QueryBuilder",
    "QueryTarget",
    # Settings
    "AdaptiveMediaSettings",
    "DEFAULT_SETTINGS",
    "settings_from_env",
]

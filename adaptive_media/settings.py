"""
Adaptive media settings.

Resolution order:
1. Environment variables (ADAPTIVE_MEDIA_*)
2. Built-in defaults

Malformed environment values are logged and ignored. No files, no
network, no background refresh.
"""

import logging
import os
from dataclasses import dataclass, field
from typing import FrozenSet, Mapping, Optional

from .query import ConfigurationStatus


logger = logging.getLogger(__name__)


SUPPORTED_MIME_TYPES_ENV_VAR = "ADAPTIVE_MEDIA_SUPPORTED_MIME_TYPES"
DEFAULT_STATUS_ENV_VAR = "ADAPTIVE_MEDIA_DEFAULT_STATUS"

DEFAULT_SUPPORTED_MIME_TYPES: FrozenSet[str] = frozenset({
    "image/bmp",
    "image/gif",
    "image/jpeg",
    "image/pjpeg",
    "image/png",
    "image/tiff",
    "image/webp",
    "image/x-png",
})


@dataclass(frozen=True)
class AdaptiveMediaSettings:
    """Immutable settings shared by the finder and the reference backends."""

    supported_mime_types: FrozenSet[str] = field(
        default_factory=lambda: DEFAULT_SUPPORTED_MIME_TYPES
    )
    default_configuration_status: ConfigurationStatus = ConfigurationStatus.ENABLED


DEFAULT_SETTINGS = AdaptiveMediaSettings()


def _parse_mime_types(raw: str) -> Optional[FrozenSet[str]]:
    mime_types = frozenset(
        part.strip().lower() for part in raw.split(",") if part.strip()
    )
    if not mime_types:
        logger.warning(
            f"{SUPPORTED_MIME_TYPES_ENV_VAR} is set but lists no mime types, using defaults"
        )
        return None
    return mime_types


def _parse_status(raw: str) -> Optional[ConfigurationStatus]:
    try:
        return ConfigurationStatus(raw.strip().lower())
    except ValueError:
        logger.warning(
            f"Unknown configuration status '{raw}' in {DEFAULT_STATUS_ENV_VAR}. "
            f"Valid statuses: {[s.value for s in ConfigurationStatus]}"
        )
        return None


def settings_from_env(environ: Optional[Mapping[str, str]] = None) -> AdaptiveMediaSettings:
    """
    Build settings from environment variables.

    Args:
        environ: Mapping to read instead of os.environ

    Returns:
        AdaptiveMediaSettings with every unset or invalid value defaulted
    """
    if environ is None:
        environ = os.environ

    supported_mime_types = DEFAULT_SETTINGS.supported_mime_types
    raw_mime_types = environ.get(SUPPORTED_MIME_TYPES_ENV_VAR)
    if raw_mime_types is not None:
        supported_mime_types = _parse_mime_types(raw_mime_types) or supported_mime_types

    default_status = DEFAULT_SETTINGS.default_configuration_status
    raw_status = environ.get(DEFAULT_STATUS_ENV_VAR)
    if raw_status:
        default_status = _parse_status(raw_status) or default_status

    settings = AdaptiveMediaSettings(
        supported_mime_types=supported_mime_types,
        default_configuration_status=default_status,
    )
    logger.info(
        f"Adaptive media settings resolved: {len(settings.supported_mime_types)} mime types, "
        f"default status {settings.default_configuration_status.value}"
    )
    return settings

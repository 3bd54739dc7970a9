"""
Adaptive media data models.

Configurations and variants are validated value objects (Pydantic).
File entries and versions are plain immutable facts owned by the
document store; this package only reads them.

Rules:
------
- Nothing here is mutable after construction
- Missing data remains missing (None), never guessed
- Variants are not cached by this package
"""

from dataclasses import dataclass
from typing import Dict, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from .errors import InvalidConfigurationError


MAX_WIDTH_PROPERTY = "max-width"
MAX_HEIGHT_PROPERTY = "max-height"


@dataclass(frozen=True)
class FileEntry:
    """A stored file, independent of its versions."""

    file_entry_id: int
    company_id: int
    file_name: str


@dataclass(frozen=True)
class FileVersion:
    """
    One stored version of a file entry (the "original").

    company_id is the owning tenant. Configurations are always looked up
    in the tenant of the version being queried.
    """

    file_version_id: int
    file_entry_id: int
    company_id: int
    version: str
    mime_type: str
    file_name: str = ""


class Configuration(BaseModel):
    """
    A recipe for one derived variant.

    Identity (uuid) is unique per company. Properties are free-form
    strings as stored by the configuration backend, e.g. max-width.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    company_id: int
    uuid: str
    name: str
    description: str = ""
    enabled: bool = True
    properties: Dict[str, str] = Field(default_factory=dict)

    @field_validator("uuid", "name")
    @classmethod
    def validate_non_empty(cls, v: str) -> str:
        """Identity and name must be non-empty."""
        if not v or not v.strip():
            raise ValueError("Configuration uuid and name cannot be empty")
        return v

    def int_property(self, key: str) -> Optional[int]:
        """
        Read an integer property.

        Returns:
            The parsed value, or None if the property is not set

        Raises:
            InvalidConfigurationError: If the stored value is not an integer
        """
        raw = self.properties.get(key)
        if raw is None or raw == "":
            return None
        try:
            return int(raw)
        except ValueError:
            raise InvalidConfigurationError(
                self.company_id,
                f"property '{key}' of configuration '{self.uuid}' is not an integer: {raw!r}",
            ) from None

    @property
    def max_width(self) -> Optional[int]:
        return self.int_property(MAX_WIDTH_PROPERTY)

    @property
    def max_height(self) -> Optional[int]:
        return self.int_property(MAX_HEIGHT_PROPERTY)


class Variant(BaseModel):
    """
    A persisted derived rendition of one file version.

    Produced by the variant store. Content bytes are not held here;
    they are opened on demand through the store.
    """

    model_config = ConfigDict(extra="forbid", frozen=True)

    width: int
    height: int
    size: int
    mime_type: Optional[str] = None

    @field_validator("width", "height")
    @classmethod
    def validate_positive(cls, v: int) -> int:
        """Dimensions must be positive."""
        if v <= 0:
            raise ValueError("Variant dimensions must be positive")
        return v

    @field_validator("size")
    @classmethod
    def validate_size(cls, v: int) -> int:
        if v < 0:
            raise ValueError("Variant size cannot be negative")
        return v

"""
Resource response models.
"""

from dataclasses import dataclass
from typing import BinaryIO, Optional

from pydantic import BaseModel, ConfigDict

from ..attributes import CONFIGURATION_UUID, CONTENT_LENGTH, IMAGE_HEIGHT, IMAGE_WIDTH
from ..media import AdaptiveMedia


class AdaptiveMediaRepr(BaseModel):
    """Listing entry for one adaptive media of a file version."""

    model_config = ConfigDict(extra="forbid", frozen=True)

    url: str
    """Where the variant content can be fetched."""

    configuration_uuid: str
    """Identity of the producing configuration."""

    name: str
    """Human name of the configuration."""

    description: str = ""

    width: Optional[int] = None
    height: Optional[int] = None

    content_length: Optional[int] = None
    """Variant size in bytes."""

    @classmethod
    def from_media(cls, media: AdaptiveMedia, url: str) -> "AdaptiveMediaRepr":
        configuration = media.configuration
        return cls(
            url=url,
            configuration_uuid=media.attribute_value(CONFIGURATION_UUID),
            name=configuration.name,
            description=configuration.description,
            width=media.attribute_value(IMAGE_WIDTH),
            height=media.attribute_value(IMAGE_HEIGHT),
            content_length=media.attribute_value(CONTENT_LENGTH),
        )


@dataclass(frozen=True)
class MediaContent:
    """A content stream together with the mime type to serve it as."""

    mime_type: str
    stream: BinaryIO
    original: bool = False

"""
Tests for AdaptiveMedia.
"""

from unittest.mock import MagicMock

import pytest

from .attributes import CONFIGURATION_UUID, IMAGE_HEIGHT, IMAGE_WIDTH
from .media import AdaptiveMedia
from .models import Configuration, FileVersion, Variant


@pytest.fixture
def configuration():
    return Configuration(company_id=1, uuid="small", name="Small")


@pytest.fixture
def file_version():
    return FileVersion(
        file_version_id=5,
        file_entry_id=2,
        company_id=1,
        version="1.0",
        mime_type="image/jpeg",
    )


def make_media(configuration, file_version, variant=None):
    loader = MagicMock(return_value=variant)
    opener = MagicMock()
    return AdaptiveMedia(configuration, file_version, loader, opener), loader, opener


class TestAdaptiveMedia:

    def test_construction_calls_nothing(self, configuration, file_version):
        _, loader, opener = make_media(configuration, file_version, Variant(width=1, height=1, size=1))

        loader.assert_not_called()
        opener.assert_not_called()

    def test_variant_is_loaded_once(self, configuration, file_version):
        media, loader, _ = make_media(configuration, file_version, Variant(width=10, height=20, size=1))

        assert media.attribute_value(IMAGE_WIDTH) == 10
        assert media.attribute_value(IMAGE_HEIGHT) == 20
        assert media.variant.width == 10

        loader.assert_called_once_with()

    def test_absent_variant_is_cached_too(self, configuration, file_version):
        media, loader, _ = make_media(configuration, file_version, None)

        assert media.variant is None
        assert media.attribute_value(IMAGE_WIDTH) is None

        loader.assert_called_once_with()

    def test_configuration_attribute_does_not_load_variant(self, configuration, file_version):
        media, loader, _ = make_media(configuration, file_version, None)

        assert media.attribute_value(CONFIGURATION_UUID) == "small"

        loader.assert_not_called()

    def test_content_stream_opens_on_each_call(self, configuration, file_version):
        media, _, opener = make_media(configuration, file_version)

        media.content_stream()
        media.content_stream()

        assert opener.call_count == 2

    def test_repr_does_not_load(self, configuration, file_version):
        media, loader, _ = make_media(configuration, file_version)

        assert "small" in repr(media)
        assert "5" in repr(media)
        loader.assert_not_called()

    def test_exposes_pairing(self, configuration, file_version):
        media, _, _ = make_media(configuration, file_version)

        assert media.configuration is configuration
        assert media.file_version is file_version

"""
Tests for FileVersionResource over the in-memory backends.
"""

import io

import pytest
from fastapi import HTTPException

from ..finder import AdaptiveMediaFinder
from ..memory import (
    AllowListMimeTypeChecker,
    InMemoryConfigurationSource,
    InMemoryVariantSource,
    InMemoryVersionSource,
)
from ..models import Configuration, FileVersion, Variant
from .errors import BadRequestError, NotFoundError, ResourceError
from .file_version import FileVersionResource


COMPANY_ID = 10


def url_factory(file_version, configuration_uuid):
    return f"/adaptive-media/{file_version.file_version_id}/{configuration_uuid}"


@pytest.fixture
def file_version():
    return FileVersion(
        file_version_id=300,
        file_entry_id=30,
        company_id=COMPANY_ID,
        version="1.0",
        mime_type="image/jpeg",
        file_name="dog.jpg",
    )


@pytest.fixture
def configurations():
    source = InMemoryConfigurationSource()
    for uuid, name in (("large", "Large"), ("medium", "Medium"), ("small", "Small"), ("empty", "Empty")):
        source.add_configuration(
            Configuration(company_id=COMPANY_ID, uuid=uuid, name=name, description=f"{name} preview")
        )
    return source


@pytest.fixture
def resource(file_version, configurations):
    versions = InMemoryVersionSource()
    versions.add_version(file_version)

    variants = InMemoryVariantSource()
    variants.add_variant("large", 300, Variant(width=1200, height=800, size=9000, mime_type="image/webp"), b"large")
    variants.add_variant("medium", 300, Variant(width=600, height=400, size=3000), b"medium")
    variants.add_variant("small", 300, Variant(width=300, height=200, size=1000), b"small")

    finder = AdaptiveMediaFinder(configurations, versions, AllowListMimeTypeChecker(), variants)
    return FileVersionResource(
        file_version,
        finder,
        configurations,
        url_factory,
        lambda version: io.BytesIO(b"original"),
    )


class TestGetConfiguration:

    def test_serves_variant(self, resource):
        content = resource.get_configuration("large")

        assert content.mime_type == "image/webp"
        assert content.stream.read() == b"large"
        assert not content.original

    def test_variant_without_mime_type_uses_version_mime_type(self, resource):
        content = resource.get_configuration("small")

        assert content.mime_type == "image/jpeg"

    def test_unknown_configuration_falls_back_to_original(self, resource):
        content = resource.get_configuration("huge")

        assert content.original
        assert content.mime_type == "image/jpeg"
        assert content.stream.read() == b"original"

    def test_unknown_configuration_without_fallback(self, resource):
        with pytest.raises(HTTPException) as exc_info:
            resource.get_configuration("huge", original=False)

        assert isinstance(exc_info.value, NotFoundError)
        assert exc_info.value.status_code == 404
        assert exc_info.value.detail == "Unknown configuration: huge"

    def test_unknown_configuration_on_empty_stores(self, file_version):
        configurations = InMemoryConfigurationSource()
        finder = AdaptiveMediaFinder(
            configurations,
            InMemoryVersionSource(),
            AllowListMimeTypeChecker(),
            InMemoryVariantSource(),
        )
        resource = FileVersionResource(
            file_version, finder, configurations, url_factory, lambda version: io.BytesIO(b"raw")
        )

        content = resource.get_configuration("huge", original=True)

        assert content.original
        assert content.stream.read() == b"raw"

    def test_missing_variant_falls_back_to_original(self, resource):
        content = resource.get_configuration("empty")

        assert content.original
        assert content.mime_type == "image/jpeg"
        assert content.stream.read() == b"original"

    def test_missing_variant_without_fallback(self, resource):
        with pytest.raises(NotFoundError):
            resource.get_configuration("empty", original=False)


class TestGetData:

    def test_first_match(self, resource):
        content = resource.get_data({"width": "600"})

        assert content.stream.read() == b"medium"

    def test_no_valid_query(self, resource):
        with pytest.raises(BadRequestError) as exc_info:
            resource.get_data({"width": "wide", "colour": "red"})

        assert exc_info.value.status_code == 400
        assert isinstance(exc_info.value, ResourceError)
        assert exc_info.value.detail == "You must provide a valid query"

    def test_no_match_falls_back_to_original(self, resource):
        content = resource.get_data({"width": "42"})

        assert content.original
        assert content.stream.read() == b"original"

    def test_no_match_without_fallback(self, resource):
        with pytest.raises(NotFoundError):
            resource.get_data({"width": "42"}, original=False)


class TestGetVariants:

    def test_by_query(self, resource):
        variants = resource.get_variants(params={"height": "400"})

        assert len(variants) == 1
        listed = variants[0]
        assert listed.configuration_uuid == "medium"
        assert listed.name == "Medium"
        assert listed.description == "Medium preview"
        assert listed.url == "/adaptive-media/300/medium"
        assert (listed.width, listed.height, listed.content_length) == (600, 400, 3000)

    def test_by_order(self, resource):
        variants = resource.get_variants(order="content-length:desc")

        assert [v.configuration_uuid for v in variants] == ["large", "medium", "small"]

    def test_last_order_wins(self, resource):
        variants = resource.get_variants(order="width:desc,height:asc")

        assert [v.configuration_uuid for v in variants] == ["small", "medium", "large"]

    def test_query_and_order_together(self, resource):
        with pytest.raises(BadRequestError):
            resource.get_variants(params={"width": "600"}, order="width")

    def test_neither_query_nor_order(self, resource):
        with pytest.raises(BadRequestError):
            resource.get_variants()
        with pytest.raises(BadRequestError):
            resource.get_variants(params={"colour": "red"}, order="configuration-uuid")

    def test_no_matches_is_empty(self, resource):
        assert resource.get_variants(params={"width": "1"}) == []

"""
Tests for configuration and variant models.
"""

import pytest
from pydantic import ValidationError

from .errors import InvalidConfigurationError
from .models import Configuration, Variant


class TestConfiguration:

    def test_defaults(self):
        configuration = Configuration(company_id=1, uuid="small", name="Small")

        assert configuration.enabled
        assert configuration.description == ""
        assert configuration.properties == {}
        assert configuration.max_width is None

    def test_dimension_properties(self):
        configuration = Configuration(
            company_id=1,
            uuid="small",
            name="Small",
            properties={"max-width": "320", "max-height": "240"},
        )

        assert configuration.max_width == 320
        assert configuration.max_height == 240

    def test_malformed_property(self):
        configuration = Configuration(
            company_id=1, uuid="small", name="Small", properties={"max-width": "wide"}
        )

        with pytest.raises(InvalidConfigurationError) as exc_info:
            configuration.max_width

        assert exc_info.value.company_id == 1
        assert "max-width" in str(exc_info.value)

    @pytest.mark.parametrize("field", ["uuid", "name"])
    def test_identity_must_not_be_blank(self, field):
        values = {"company_id": 1, "uuid": "small", "name": "Small", field: "  "}

        with pytest.raises(ValidationError):
            Configuration(**values)

    def test_unknown_fields_rejected(self):
        with pytest.raises(ValidationError):
            Configuration(company_id=1, uuid="small", name="Small", width=3)

    def test_frozen(self):
        configuration = Configuration(company_id=1, uuid="small", name="Small")

        with pytest.raises(ValidationError):
            configuration.enabled = False


class TestVariant:

    def test_valid(self):
        variant = Variant(width=10, height=20, size=0)

        assert variant.mime_type is None

    @pytest.mark.parametrize("values", [
        {"width": 0, "height": 1, "size": 1},
        {"width": 1, "height": -5, "size": 1},
        {"width": 1, "height": 1, "size": -1},
    ])
    def test_invalid(self, values):
        with pytest.raises(ValidationError):
            Variant(**values)

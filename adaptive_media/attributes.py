"""
Attribute registry.

An attribute is a named, typed property of a match. Queries constrain
and order matches by attributes, and untyped request parameters are
turned into typed query values through the registry.

Two scopes exist:
- CONFIGURATION attributes are read from the configuration alone and
  never trigger a variant lookup
- VARIANT attributes are read from the resolved variant

Only integer attributes have a total order and may be used for ordering.
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Optional, Union

from .errors import AttributeNotFoundError
from .models import Configuration, Variant


AttributeValue = Union[int, str]


class AttributeKind(str, Enum):
    """Value type carried by an attribute."""

    INTEGER = "integer"
    STRING = "string"

    @property
    def orderable(self) -> bool:
        return self is AttributeKind.INTEGER

    def accepts(self, value: Any) -> bool:
        """True if value is a well-typed value of this kind."""
        if self is AttributeKind.INTEGER:
            return isinstance(value, int) and not isinstance(value, bool)
        return isinstance(value, str)

    def convert(self, raw: str) -> AttributeValue:
        """
        Parse an untyped string into a value of this kind.

        Raises:
            ValueError: If raw is not a valid value of this kind
        """
        if self is AttributeKind.INTEGER:
            value = raw.strip()
            # Plain decimal digits only: no "+5", no "1_000"
            if not value.lstrip("-").isdigit():
                raise ValueError(f"Not an integer: {raw!r}")
            return int(value)
        return raw


class AttributeScope(str, Enum):
    """Which half of a match an attribute is read from."""

    CONFIGURATION = "configuration"
    VARIANT = "variant"


@dataclass(frozen=True)
class Attribute:
    """
    A registered attribute. Equality and hashing use the name only.

    The extractor receives a Configuration for CONFIGURATION attributes
    and a Variant for VARIANT attributes, and returns None when the
    attribute does not apply.
    """

    name: str
    kind: AttributeKind = field(compare=False)
    scope: AttributeScope = field(compare=False)
    extractor: Callable[[Any], Optional[AttributeValue]] = field(
        compare=False, repr=False
    )

    @property
    def orderable(self) -> bool:
        return self.kind.orderable

    def extract(
        self,
        configuration: Configuration,
        variant: Optional[Variant],
    ) -> Optional[AttributeValue]:
        """
        Read this attribute from a configuration/variant pair.

        Returns None for a VARIANT attribute without a variant, and for
        values the extractor produced with the wrong type.
        """
        if self.scope is AttributeScope.CONFIGURATION:
            value = self.extractor(configuration)
        elif variant is None:
            return None
        else:
            value = self.extractor(variant)

        if value is None or not self.kind.accepts(value):
            return None
        return value

    def convert(self, raw: str) -> AttributeValue:
        """Parse an untyped string (e.g. a request parameter) for this attribute."""
        return self.kind.convert(raw)


class AttributeRegistry:
    """
    Name -> Attribute registry.

    Attributes are registered once and never replaced. Lookups of
    unknown names fail; there is no default attribute.
    """

    def __init__(self):
        self._attributes: Dict[str, Attribute] = {}

    def register(
        self,
        name: str,
        kind: AttributeKind,
        scope: AttributeScope,
        extractor: Callable[[Any], Optional[AttributeValue]],
    ) -> Attribute:
        """
        Register a new attribute.

        Raises:
            ValueError: If the name is empty or already registered
        """
        if not name or not name.strip():
            raise ValueError("Attribute name cannot be empty")
        if name in self._attributes:
            raise ValueError(f"Attribute '{name}' is already registered")

        attribute = Attribute(name=name, kind=kind, scope=scope, extractor=extractor)
        self._attributes[name] = attribute
        return attribute

    def resolve(self, name: str) -> Attribute:
        """
        Look up an attribute by name.

        Raises:
            AttributeNotFoundError: If no attribute has this name
        """
        try:
            return self._attributes[name]
        except KeyError:
            raise AttributeNotFoundError(name) from None

    def allowed_attributes(self) -> Dict[str, Attribute]:
        """All registered attributes, keyed by name. Returns a copy."""
        return dict(self._attributes)

    def __contains__(self, name: object) -> bool:
        return name in self._attributes

    def __len__(self) -> int:
        return len(self._attributes)


DEFAULT_REGISTRY = AttributeRegistry()

CONFIGURATION_UUID = DEFAULT_REGISTRY.register(
    "configuration-uuid",
    AttributeKind.STRING,
    AttributeScope.CONFIGURATION,
    lambda configuration: configuration.uuid,
)

IMAGE_WIDTH = DEFAULT_REGISTRY.register(
    "width",
    AttributeKind.INTEGER,
    AttributeScope.VARIANT,
    lambda variant: variant.width,
)

IMAGE_HEIGHT = DEFAULT_REGISTRY.register(
    "height",
    AttributeKind.INTEGER,
    AttributeScope.VARIANT,
    lambda variant: variant.height,
)

CONTENT_LENGTH = DEFAULT_REGISTRY.register(
    "content-length",
    AttributeKind.INTEGER,
    AttributeScope.VARIANT,
    lambda variant: variant.size,
)

CONTENT_TYPE = DEFAULT_REGISTRY.register(
    "content-type",
    AttributeKind.STRING,
    AttributeScope.VARIANT,
    lambda variant: variant.mime_type,
)


def resolve_attribute(name: str) -> Attribute:
    """Look up a built-in attribute by name."""
    return DEFAULT_REGISTRY.resolve(name)


def allowed_attributes() -> Dict[str, Attribute]:
    """All built-in attributes, keyed by name."""
    return DEFAULT_REGISTRY.allowed_attributes()

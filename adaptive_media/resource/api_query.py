"""
Parsing of untyped request parameters.

Query parameters arrive as strings. They are turned into typed
(attribute, value) pairs and field orders using the allowed attributes
of the registry. Unknown names are ignored; values that do not parse
for their attribute are dropped with a warning.

Order expressions look like "width:asc,height:desc". A bare field name
means ascending.
"""

import logging
from dataclasses import dataclass
from typing import Iterable, List, Mapping, Optional

from ..attributes import Attribute, AttributeValue


logger = logging.getLogger(__name__)


ASCENDING = "asc"
DESCENDING = "desc"


@dataclass(frozen=True)
class QueryAttribute:
    attribute: Attribute
    value: AttributeValue


@dataclass(frozen=True)
class FieldOrder:
    field_name: str
    ascending: bool = True


def select_query_attributes(
    params: Optional[Mapping[str, str]],
    allowed_attributes: Mapping[str, Attribute],
) -> List[QueryAttribute]:
    """
    Select the typed query attributes present in params.

    Args:
        params: Raw name -> value parameters
        allowed_attributes: Attributes a caller may query, by name

    Returns:
        Parsed attributes in parameter order (may be empty)
    """
    if not params:
        return []

    selected = []
    for name, raw in params.items():
        attribute = allowed_attributes.get(name)
        if attribute is None:
            continue
        try:
            value = attribute.convert(raw)
        except (TypeError, ValueError):
            logger.warning(
                f"Ignoring query parameter '{name}': {raw!r} is not a valid "
                f"{attribute.kind.value} value"
            )
            continue
        selected.append(QueryAttribute(attribute=attribute, value=value))
    return selected


def select_field_orders(
    raw: Optional[str],
    allowed_names: Iterable[str],
) -> List[FieldOrder]:
    """
    Parse an order expression.

    Args:
        raw: Comma-separated "field[:asc|desc]" items
        allowed_names: Field names that may be ordered by

    Returns:
        Field orders in expression order (may be empty)
    """
    if not raw:
        return []

    allowed = set(allowed_names)
    orders = []
    for item in raw.split(","):
        item = item.strip()
        if not item:
            continue

        field_name, _, direction = item.partition(":")
        field_name = field_name.strip()
        direction = direction.strip().lower() or ASCENDING

        if field_name not in allowed:
            continue
        if direction not in (ASCENDING, DESCENDING):
            logger.warning(f"Ignoring order '{item}': unknown direction '{direction}'")
            continue

        orders.append(FieldOrder(field_name=field_name, ascending=direction == ASCENDING))
    return orders

"""
Request-level facade over the finder.

Parses untyped request input, enforces request rules and shapes
results. No HTTP routing lives here.
"""

from .api_query import FieldOrder, QueryAttribute, select_field_orders, select_query_attributes
from .errors import BadRequestError, NotFoundError, ResourceError
from .file_version import FileVersionResource
from .schemas import AdaptiveMediaRepr, MediaContent

__all__ = [
    "FieldOrder",
    "QueryAttribute",
    "select_field_orders",
    "select_query_attributes",
    "BadRequestError",
    "NotFoundError",
    "ResourceError",
    "FileVersionResource",
    "AdaptiveMediaRepr",
    "MediaContent",
]

"""
Resource facade error types.

Each error is a fastapi HTTPException carrying the status an outer
router should answer with. This package registers no routes itself.
"""

from fastapi import HTTPException


class ResourceError(HTTPException):
    """Base exception for resource facade failures."""

    default_status_code = 500

    def __init__(self, detail: str):
        super().__init__(status_code=self.default_status_code, detail=detail)


class BadRequestError(ResourceError):
    """Raised when request parameters do not form a usable query."""

    default_status_code = 400


class NotFoundError(ResourceError):
    """Raised when nothing can be served for a request."""

    default_status_code = 404

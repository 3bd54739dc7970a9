"""
Adaptive media error types.

All errors inherit from AdaptiveMediaError for easy catching.
Errors are explicit and provide actionable messages.

Only query construction errors are raised eagerly. Everything a
collaborator raises surfaces unchanged while the result is iterated.
"""

from typing import Optional


class AdaptiveMediaError(Exception):
    """Base exception for all adaptive media failures."""
    pass


class InvalidArgumentError(AdaptiveMediaError, ValueError):
    """Raised when a query cannot be built from what the caller supplied."""

    def __init__(self, reason: str):
        self.reason = reason
        super().__init__(f"Invalid query: {reason}")


class InvalidConfigurationError(AdaptiveMediaError):
    """
    Raised when stored configuration state is inconsistent.

    Kept apart from BackendFailureError so callers can tell a broken
    configuration from an unavailable backend.
    """

    def __init__(self, company_id: int, reason: str):
        self.company_id = company_id
        self.reason = reason
        super().__init__(
            f"Invalid adaptive media configuration for company {company_id}: {reason}"
        )


class BackendFailureError(AdaptiveMediaError):
    """Raised by a collaborator when its backing store fails."""
    pass


class VersionNotFoundError(BackendFailureError):
    """Raised when a file version cannot be resolved."""

    def __init__(self, file_entry_id: int, version: Optional[str] = None):
        self.file_entry_id = file_entry_id
        self.version = version
        if version is None:
            message = f"No current version for file entry {file_entry_id}"
        else:
            message = f"Version {version} not found for file entry {file_entry_id}"
        super().__init__(message)


class AttributeNotFoundError(AdaptiveMediaError, KeyError):
    """Raised when an attribute name is not registered."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown attribute: {name}")

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return self.args[0]

"""
Adaptive media queries.

A Query is an immutable description of which adaptive media a caller
wants. Queries are only ever produced by a QueryBuilder; the finder
rejects any Query its own builder did not produce.

Builder steps:
    start -> target selected -> [with_attribute | order_by |
    for_configuration | with_configuration_status]* -> done()

Rules:
------
- Exactly one target, selected before any other step
- with_attribute() on an already constrained attribute overwrites it
- order_by() called twice keeps the last ordering
- done() freezes the builder; later calls are rejected
- All misuse raises InvalidArgumentError immediately
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, Optional, Tuple

from .attributes import Attribute, AttributeValue
from .errors import InvalidArgumentError
from .models import Configuration, FileEntry, FileVersion


def _is_enabled(configuration: Configuration) -> bool:
    return configuration.enabled


def _is_disabled(configuration: Configuration) -> bool:
    return not configuration.enabled


def _is_any(configuration: Configuration) -> bool:
    return True


class ConfigurationStatus(str, Enum):
    """Which configurations are candidates for a query."""

    ENABLED = "enabled"
    DISABLED = "disabled"
    ALL = "all"

    @property
    def predicate(self) -> Callable[[Configuration], bool]:
        """
        The predicate handed to the configuration source.

        The same function object is returned on every call, so sources
        may key caches on it.
        """
        return _STATUS_PREDICATES[self]


_STATUS_PREDICATES: Dict[ConfigurationStatus, Callable[[Configuration], bool]] = {
    ConfigurationStatus.ENABLED: _is_enabled,
    ConfigurationStatus.DISABLED: _is_disabled,
    ConfigurationStatus.ALL: _is_any,
}


class QueryTarget(str, Enum):
    """What a query is evaluated against."""

    ALL_FOR_FILE_ENTRY = "all_for_file_entry"  # every version of the entry
    FOR_FILE_ENTRY = "for_file_entry"  # current version of the entry
    ALL_FOR_VERSION = "all_for_version"
    FOR_VERSION = "for_version"


@dataclass(frozen=True)
class OrderBy:
    attribute: Attribute
    ascending: bool = True


@dataclass(frozen=True)
class Query:
    """
    Immutable query value.

    Construct through QueryBuilder only. Exactly one of file_entry and
    file_version is set, depending on the target.
    """

    target: QueryTarget
    file_entry: Optional[FileEntry] = None
    file_version: Optional[FileVersion] = None
    constraints: Tuple[Tuple[Attribute, AttributeValue], ...] = ()
    order_by: Optional[OrderBy] = None
    configuration_uuid: Optional[str] = None
    configuration_status: ConfigurationStatus = ConfigurationStatus.ENABLED

    @property
    def company_id(self) -> int:
        """Tenant that owns the target and its configurations."""
        if self.file_version is not None:
            return self.file_version.company_id
        return self.file_entry.company_id

    @property
    def spans_file_entry(self) -> bool:
        """True if the target is resolved through the file entry."""
        return self.target in (QueryTarget.ALL_FOR_FILE_ENTRY, QueryTarget.FOR_FILE_ENTRY)


class QueryBuilder:
    """
    Fluent, single-use builder for Query values.

    Every step returns the builder itself so calls can be chained.
    """

    def __init__(
        self,
        default_status: ConfigurationStatus = ConfigurationStatus.ENABLED,
    ):
        self._target: Optional[QueryTarget] = None
        self._file_entry: Optional[FileEntry] = None
        self._file_version: Optional[FileVersion] = None
        self._constraints: Dict[Attribute, AttributeValue] = {}
        self._order_by: Optional[OrderBy] = None
        self._configuration_uuid: Optional[str] = None
        self._status = default_status
        self._query: Optional[Query] = None

    @property
    def query(self) -> Optional[Query]:
        """The Query produced by done(), or None before that."""
        return self._query

    # ------------------------------------------------------------------
    # Target selection
    # ------------------------------------------------------------------

    def all_for_file_entry(self, file_entry: FileEntry) -> "QueryBuilder":
        """Match variants of every version of file_entry."""
        return self._select_entry(QueryTarget.ALL_FOR_FILE_ENTRY, file_entry)

    def for_file_entry(self, file_entry: FileEntry) -> "QueryBuilder":
        """Match variants of the current version of file_entry."""
        return self._select_entry(QueryTarget.FOR_FILE_ENTRY, file_entry)

    def all_for_version(self, file_version: FileVersion) -> "QueryBuilder":
        """Match every variant of file_version."""
        return self._select_version(QueryTarget.ALL_FOR_VERSION, file_version)

    def for_version(self, file_version: FileVersion) -> "QueryBuilder":
        """Match variants of file_version, narrowed by later steps."""
        return self._select_version(QueryTarget.FOR_VERSION, file_version)

    def _select_entry(self, target: QueryTarget, file_entry: FileEntry) -> "QueryBuilder":
        self._check_can_select_target()
        if not isinstance(file_entry, FileEntry):
            raise InvalidArgumentError(f"{target.value} requires a FileEntry, got {file_entry!r}")
        self._target = target
        self._file_entry = file_entry
        return self

    def _select_version(self, target: QueryTarget, file_version: FileVersion) -> "QueryBuilder":
        self._check_can_select_target()
        if not isinstance(file_version, FileVersion):
            raise InvalidArgumentError(f"{target.value} requires a FileVersion, got {file_version!r}")
        self._target = target
        self._file_version = file_version
        return self

    # ------------------------------------------------------------------
    # Narrowing steps
    # ------------------------------------------------------------------

    def with_attribute(self, attribute: Attribute, value: AttributeValue) -> "QueryBuilder":
        """
        Require attribute to equal value.

        Constraints on different attributes must all hold. Constraining
        the same attribute again replaces the earlier value.
        """
        self._check_target_selected()
        if not isinstance(attribute, Attribute):
            raise InvalidArgumentError(f"Not an attribute: {attribute!r}")
        if not attribute.kind.accepts(value):
            raise InvalidArgumentError(
                f"Attribute '{attribute.name}' expects a {attribute.kind.value} value, got {value!r}"
            )
        self._constraints[attribute] = value
        return self

    def order_by(self, attribute: Attribute, ascending: bool = True) -> "QueryBuilder":
        """Sort results by attribute. Replaces any earlier ordering."""
        self._check_target_selected()
        if not isinstance(attribute, Attribute):
            raise InvalidArgumentError(f"Not an attribute: {attribute!r}")
        if not attribute.orderable:
            raise InvalidArgumentError(
                f"Attribute '{attribute.name}' of kind {attribute.kind.value} cannot be used for ordering"
            )
        self._order_by = OrderBy(attribute=attribute, ascending=bool(ascending))
        return self

    def for_configuration(self, configuration_uuid: str) -> "QueryBuilder":
        """Only consider the configuration with this identity."""
        self._check_target_selected()
        if not isinstance(configuration_uuid, str) or not configuration_uuid:
            raise InvalidArgumentError(f"Invalid configuration uuid: {configuration_uuid!r}")
        self._configuration_uuid = configuration_uuid
        return self

    def with_configuration_status(self, status: ConfigurationStatus) -> "QueryBuilder":
        """Pick candidates among enabled, disabled or all configurations."""
        self._check_target_selected()
        if not isinstance(status, ConfigurationStatus):
            raise InvalidArgumentError(f"Invalid configuration status: {status!r}")
        self._status = status
        return self

    def done(self) -> Query:
        """
        Freeze the accumulated steps.

        Raises:
            InvalidArgumentError: If no target was selected or the builder
                was already finished
        """
        self._check_target_selected()
        self._query = Query(
            target=self._target,
            file_entry=self._file_entry,
            file_version=self._file_version,
            constraints=tuple(self._constraints.items()),
            order_by=self._order_by,
            configuration_uuid=self._configuration_uuid,
            configuration_status=self._status,
        )
        return self._query

    def _check_not_done(self) -> None:
        if self._query is not None:
            raise InvalidArgumentError("query builder already finished")

    def _check_can_select_target(self) -> None:
        self._check_not_done()
        if self._target is not None:
            raise InvalidArgumentError(
                f"target already selected ({self._target.value})"
            )

    def _check_target_selected(self) -> None:
        self._check_not_done()
        if self._target is None:
            raise InvalidArgumentError("no target selected")

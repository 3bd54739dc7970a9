"""
Adaptive media finder - the matching engine.

Turns a Query into a lazy, one-shot iterator of AdaptiveMedia.

Evaluation per target version:
1. Skip the version (no error) if its mime type is not supported
2. Pull candidate configurations for the configuration status
   (narrowed to one identity if the query names one)
3. For each candidate, in candidate order, look up the stored variant;
   candidates without one are skipped
4. Keep a match only if every attribute constraint holds
5. If the query is ordered, sort that version's matches (stable);
   otherwise stream them as they are found

Rules:
------
- Query validation is eager: a bad query fails the get_adaptive_media()
  call itself, before any collaborator is touched
- Every collaborator call is deferred until the consumer pulls
- Collaborator failures propagate from the pull that triggered them
- No retries, no caching across calls, no shared mutable state
"""

import logging
from functools import partial
from typing import Callable, Iterable, Iterator, List, Optional

from .collaborators import ConfigurationSource, MimeTypeChecker, VariantSource, VersionSource
from .errors import InvalidArgumentError
from .media import AdaptiveMedia
from .models import Configuration, FileVersion
from .query import OrderBy, Query, QueryBuilder, QueryTarget
from .settings import DEFAULT_SETTINGS, AdaptiveMediaSettings


logger = logging.getLogger(__name__)


QueryFactory = Callable[[QueryBuilder], Query]


class AdaptiveMediaFinder:
    """
    Finds the adaptive media matching a query.

    The finder holds only its collaborators; each call evaluates
    independently.
    """

    def __init__(
        self,
        configuration_source: ConfigurationSource,
        version_source: VersionSource,
        mime_type_checker: MimeTypeChecker,
        variant_source: VariantSource,
        settings: Optional[AdaptiveMediaSettings] = None,
    ):
        self._configuration_source = configuration_source
        self._version_source = version_source
        self._mime_type_checker = mime_type_checker
        self._variant_source = variant_source
        self._settings = settings or DEFAULT_SETTINGS

    def get_adaptive_media(self, query_factory: QueryFactory) -> Iterator[AdaptiveMedia]:
        """
        Find adaptive media.

        Args:
            query_factory: Receives a fresh QueryBuilder and must return
                the Query produced by that builder's done()

        Returns:
            A lazy iterator of matches. It can be consumed once.

        Raises:
            InvalidArgumentError: If query_factory is missing, or returns
                anything other than the query its builder produced
        """
        if query_factory is None or not callable(query_factory):
            raise InvalidArgumentError("a query factory is required")

        builder = QueryBuilder(default_status=self._settings.default_configuration_status)
        query = query_factory(builder)

        if query is None:
            raise InvalidArgumentError("query factory returned no query")
        if not isinstance(query, Query) or query is not builder.query:
            raise InvalidArgumentError(
                f"query was not produced by the supplied builder: {query!r}"
            )

        logger.debug(
            f"Finding adaptive media: target={query.target.value}, "
            f"status={query.configuration_status.value}, "
            f"constraints={len(query.constraints)}, ordered={query.order_by is not None}"
        )
        return self._evaluate(query)

    def _evaluate(self, query: Query) -> Iterator[AdaptiveMedia]:
        configurations: Optional[List[Configuration]] = None

        for file_version in self._target_versions(query):
            if not self._mime_type_checker.is_supported(file_version.mime_type):
                logger.debug(
                    f"Mime type {file_version.mime_type} not supported, "
                    f"skipping version {file_version.file_version_id}"
                )
                continue

            if configurations is None:
                configurations = self._candidate_configurations(query)

            matches = self._matches(query, file_version, configurations)
            if query.order_by is None:
                yield from matches
            else:
                yield from _sort_matches(matches, query.order_by)

    def _target_versions(self, query: Query) -> Iterator[FileVersion]:
        if query.target is QueryTarget.ALL_FOR_FILE_ENTRY:
            yield from self._version_source.versions_of(query.file_entry)
        elif query.target is QueryTarget.FOR_FILE_ENTRY:
            yield self._version_source.current_version(query.file_entry)
        else:
            yield query.file_version

    def _candidate_configurations(self, query: Query) -> List[Configuration]:
        configurations: Iterable[Configuration] = self._configuration_source.list_configurations(
            query.company_id, query.configuration_status.predicate
        )
        if query.configuration_uuid is not None:
            return [c for c in configurations if c.uuid == query.configuration_uuid]
        return list(configurations)

    def _matches(
        self,
        query: Query,
        file_version: FileVersion,
        configurations: List[Configuration],
    ) -> Iterator[AdaptiveMedia]:
        for configuration in configurations:
            media = AdaptiveMedia(
                configuration,
                file_version,
                partial(
                    self._variant_source.lookup_variant,
                    configuration.uuid,
                    file_version.file_version_id,
                ),
                partial(self._variant_source.open_content, configuration, file_version),
            )

            if media.variant is None:
                logger.debug(
                    f"No variant for configuration {configuration.uuid} "
                    f"and version {file_version.file_version_id}"
                )
                continue

            if all(
                media.attribute_value(attribute) == value
                for attribute, value in query.constraints
            ):
                yield media


def _sort_matches(matches: Iterable[AdaptiveMedia], order_by: OrderBy) -> List[AdaptiveMedia]:
    """
    Stable sort of matches by the ordering attribute.

    Matches without a value for the attribute keep their relative order
    and go last, in both directions.
    """
    attribute = order_by.attribute
    valued = []
    missing = []
    for media in matches:
        if media.attribute_value(attribute) is None:
            missing.append(media)
        else:
            valued.append(media)

    valued.sort(
        key=lambda media: media.attribute_value(attribute),
        reverse=not order_by.ascending,
    )
    return valued + missing

"""
File version resource - request-level access to adaptive media.

Transport-agnostic counterpart of an HTTP resource bound to one file
version. Parses untyped parameters, builds queries through the finder
and shapes the results. Raises ResourceError subclasses that an outer
transport maps to status codes.

Rules:
------
- Queries are always built through the finder's builder
- Attribute queries and ordering cannot be combined in one listing
- A listing needs at least one valid query attribute or order
"""

import logging
from typing import BinaryIO, Callable, Dict, List, Mapping, Optional

from ..attributes import Attribute, allowed_attributes
from ..collaborators import ConfigurationSource
from ..finder import AdaptiveMediaFinder
from ..media import AdaptiveMedia
from ..models import FileVersion
from .api_query import QueryAttribute, select_field_orders, select_query_attributes
from .errors import BadRequestError, NotFoundError
from .schemas import AdaptiveMediaRepr, MediaContent


logger = logging.getLogger(__name__)


UrlFactory = Callable[[FileVersion, str], str]
OriginalOpener = Callable[[FileVersion], BinaryIO]


class FileVersionResource:
    """Adaptive media endpoints for a single file version."""

    def __init__(
        self,
        file_version: FileVersion,
        finder: AdaptiveMediaFinder,
        configuration_source: ConfigurationSource,
        url_factory: UrlFactory,
        original_opener: OriginalOpener,
        attributes: Optional[Mapping[str, Attribute]] = None,
    ):
        """
        Args:
            file_version: Version all requests are answered for
            finder: Finder used to evaluate queries
            configuration_source: Used to check requested configurations exist
            url_factory: Builds the URL of a variant from (version, configuration uuid)
            original_opener: Opens the original bytes of the version
            attributes: Queryable attributes by name; defaults to the built-in ones
        """
        self._file_version = file_version
        self._finder = finder
        self._configuration_source = configuration_source
        self._url_factory = url_factory
        self._original_opener = original_opener
        self._attributes: Dict[str, Attribute] = dict(
            attributes if attributes is not None else allowed_attributes()
        )

    def get_configuration(self, configuration_uuid: str, original: bool = True) -> MediaContent:
        """
        Content of the variant produced by one configuration.

        Unknown configurations are served like any other miss: the
        original content when original is True.

        Raises:
            NotFoundError: If original is False and the configuration does
                not exist or has no variant for this version
        """
        if not original:
            configuration = self._configuration_source.lookup_configuration(
                self._file_version.company_id, configuration_uuid
            )
            if configuration is None:
                raise NotFoundError(f"Unknown configuration: {configuration_uuid}")

        matches = self._finder.get_adaptive_media(
            lambda builder: builder.for_version(self._file_version)
            .for_configuration(configuration_uuid)
            .done()
        )
        return self._first_content(matches, original)

    def get_data(self, params: Mapping[str, str], original: bool = True) -> MediaContent:
        """
        Content of the first variant matching an attribute query.

        Raises:
            BadRequestError: If params contain no valid query attribute
            NotFoundError: If nothing matches and original is False
        """
        query_attributes = select_query_attributes(params, self._attributes)
        if not query_attributes:
            raise BadRequestError("You must provide a valid query")

        return self._first_content(self._query_matches(query_attributes), original)

    def get_variants(
        self,
        params: Optional[Mapping[str, str]] = None,
        order: Optional[str] = None,
    ) -> List[AdaptiveMediaRepr]:
        """
        List the variants matching either an attribute query or an order.

        Raises:
            BadRequestError: If both or neither of query and order are given
        """
        orderable = [name for name, a in self._attributes.items() if a.orderable]
        field_orders = select_field_orders(order, orderable)
        query_attributes = select_query_attributes(params, self._attributes)

        if query_attributes and field_orders:
            raise BadRequestError("Query and order requests cannot be used at the same time")
        if not query_attributes and not field_orders:
            raise BadRequestError("You must provide, at least, a valid query or order")

        if query_attributes:
            matches = self._query_matches(query_attributes)
        else:
            def build(builder):
                builder.for_version(self._file_version)
                for field_order in field_orders:
                    builder.order_by(self._attributes[field_order.field_name], field_order.ascending)
                return builder.done()

            matches = self._finder.get_adaptive_media(build)

        return [self._repr(media) for media in matches]

    def _query_matches(self, query_attributes: List[QueryAttribute]):
        def build(builder):
            builder.for_version(self._file_version)
            for query_attribute in query_attributes:
                builder.with_attribute(query_attribute.attribute, query_attribute.value)
            return builder.done()

        return self._finder.get_adaptive_media(build)

    def _first_content(self, matches, fallback_to_original: bool) -> MediaContent:
        media: Optional[AdaptiveMedia] = next(iter(matches), None)

        if media is not None:
            variant = media.variant
            mime_type = (variant.mime_type if variant else None) or self._file_version.mime_type
            return MediaContent(mime_type=mime_type, stream=media.content_stream())

        if not fallback_to_original:
            raise NotFoundError(
                f"No adaptive media found for version {self._file_version.file_version_id}"
            )

        logger.debug(
            f"No adaptive media for version {self._file_version.file_version_id}, serving original"
        )
        return MediaContent(
            mime_type=self._file_version.mime_type,
            stream=self._original_opener(self._file_version),
            original=True,
        )

    def _repr(self, media: AdaptiveMedia) -> AdaptiveMediaRepr:
        url = self._url_factory(self._file_version, media.configuration.uuid)
        return AdaptiveMediaRepr.from_media(media, url)

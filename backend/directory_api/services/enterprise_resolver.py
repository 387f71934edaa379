"""Enterprise Query Resolver — list/search/detail/create/logo orchestration.

Invariants:
    - List dispatch order: location ("at") > text ("q") > browse; first match wins
    - Malformed "at" raises ClientInputError before any store call
    - Single-record misses (including unparseable ids) raise NotFoundError carrying the id
    - create() raises ForbiddenError with no store call when direct writes are disabled
    - create() transforms the payload fully before the first write

Design Decisions:
    - Store objects, language set and write flag injected at construction
      (no global model registry, no env check inside handlers)
    - Returns core views/dicts; HTTP concerns (headers, status) stay in api/routes
"""

import logging
from collections.abc import Sequence
from uuid import UUID

from directory_api.core.domain_types import EnterpriseId, QueryStrategy
from directory_api.core.enterprise_views import (
    CompleteView, PublicView, project_complete, project_public,
    project_public_many, split_complete_enterprise,
)
from directory_api.core.errors import (
    ClientInputError, ErrorContext, ForbiddenError, NotFoundError,
)
from directory_api.core.languages import resolve_language
from directory_api.core.locations import parse_location_param
from directory_api.core.repository_protocols import EnterpriseStore, LogoStore
from directory_api.core.text_search import normalize_keywords, parse_query

logger = logging.getLogger(__name__)

DEFAULT_LIMIT = 500
DEFAULT_OFFSET = 0


def choose_strategy(search: str | None, location: str | None) -> QueryStrategy:
    """Pick the list strategy from the request parameters."""
    if location:
        return QueryStrategy.LOCATION
    if search:
        return QueryStrategy.TEXT
    return QueryStrategy.BROWSE


def parse_enterprise_id(raw: str) -> EnterpriseId | None:
    try:
        return EnterpriseId(UUID(str(raw)))
    except ValueError:
        return None


class EnterpriseResolver:
    """Answers enterprise read/search/create requests against injected stores."""

    def __init__(
        self,
        store: EnterpriseStore,
        logos: LogoStore,
        *,
        supported_languages: Sequence[str],
        default_language: str,
        allow_direct_writes: bool = False,
    ):
        self._store = store
        self._logos = logos
        self._languages = list(supported_languages)
        self._default_language = default_language
        self._allow_direct_writes = allow_direct_writes

    def language(self, requested: str | None) -> str:
        return resolve_language(
            requested, self._languages, self._default_language,
        )

    async def list_enterprises(
        self,
        search: str | None = None,
        location: str | None = None,
        limit: int | None = None,
        offset: int | None = None,
        lang: str | None = None,
    ) -> list[dict]:
        """Location search, text search, or alphabetical browse."""
        limit = limit or DEFAULT_LIMIT
        offset = offset or DEFAULT_OFFSET
        language = self.language(lang)
        strategy = choose_strategy(search, location)
        logger.debug(
            f"Listing enterprises via {strategy.value}",
            extra={"strategy": strategy.value},
        )

        if strategy is QueryStrategy.LOCATION:
            point = parse_location_param(location)
            if point is None:
                raise ClientInputError("Invalid location parameter", "at")
            documents = await self._store.near(point, limit, offset)
        elif strategy is QueryStrategy.TEXT:
            query = parse_query(normalize_keywords(search))
            documents = await self._store.search(query, limit, offset)
        else:
            documents = await self._store.browse(language, limit, offset)

        return project_public_many(
            documents or [], language, self._default_language,
        )

    async def _get_or_404(self, raw_id: str) -> dict:
        enterprise_id = parse_enterprise_id(raw_id)
        document = None
        if enterprise_id is not None:
            document = await self._store.get(enterprise_id)
        if document is None:
            logger.info(
                f"Enterprise not found for id {raw_id}",
                extra={"enterprise_id": raw_id},
            )
            raise NotFoundError(
                "Enterprise", raw_id, ErrorContext(enterprise_id=raw_id),
            )
        return document

    async def get_public(self, raw_id: str, lang: str | None = None) -> PublicView:
        """One enterprise projected onto the selected language."""
        document = await self._get_or_404(raw_id)
        return project_public(
            document, self.language(lang), self._default_language,
        )

    async def get_complete(self, raw_id: str) -> CompleteView:
        """One enterprise with private fields merged in."""
        document = await self._get_or_404(raw_id)
        private = None
        if document.get("private_info_id"):
            private = await self._store.get_private(document["private_info_id"])
        return project_complete(document, private)

    def ensure_writable(self) -> None:
        """Raise ForbiddenError unless direct writes are enabled."""
        if not self._allow_direct_writes:
            logger.warning("Enterprise creation rejected: direct writes disabled")
            raise ForbiddenError("Not supported yet")

    async def create(self, payload: dict) -> CompleteView:
        """Persist a complete enterprise and return its complete view."""
        self.ensure_writable()

        if self._default_language not in (payload.get("translations") or {}):
            raise ClientInputError(
                f"Enterprise requires a '{self._default_language}' language block",
                self._default_language,
            )

        public_fields, private_fields = split_complete_enterprise(
            payload, self._languages,
        )
        public_doc, private_doc = await self._store.create(
            public_fields, private_fields,
        )
        view = project_complete(public_doc, private_doc)
        logger.info(
            f"Enterprise created (name="
            f"{view.body[self._default_language]['name']} id={view.body['id']})",
            extra={"enterprise_id": view.body["id"], "operation": "create"},
        )
        return view

    async def get_logo(self, raw_id: str) -> dict:
        """Logo bytes and content type for one enterprise."""
        enterprise_id = parse_enterprise_id(raw_id)
        logo = None
        if enterprise_id is not None:
            logo = await self._logos.get_by_enterprise(enterprise_id)
        if logo is None:
            logger.info(
                f"Enterprise logo not found for id {raw_id}",
                extra={"enterprise_id": raw_id},
            )
            raise NotFoundError(
                "Enterprise logo", raw_id, ErrorContext(enterprise_id=raw_id),
            )
        return logo

"""SQL Enterprise Store — SQLAlchemy implementation of EnterpriseStore and LogoStore.

Invariants:
    - Every SQLAlchemyError is logged with operation/enterprise_id and re-raised as StoreError
    - create() writes private then public fields inside ONE transaction; on failure
      both are rolled back (no orphan private record)
    - Offset/limit applied after ordering, for every strategy
    - Documents returned are plain dicts (no ORM instances leak to services)

Design Decisions:
    - Browse ordering pushed to SQL via a JSON path on translations.<lang>.lowercase_name
    - Proximity and relevance ranking run in core/ over a projection of the table:
      identical semantics on PostgreSQL and SQLite, no extension required.
      Cost is one narrow scan per request, linear in directory size; sized for
      directories of up to ~50k enterprises. Past that, move ranking into the
      database (PostGIS for near, a tsvector index for search)
"""

import logging
from contextlib import contextmanager
from uuid import UUID

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.core.domain_types import (
    ContactKind, EnterpriseId, GeoPoint, PRIVATE_FIELDS, PUBLIC_FIELDS,
    TEXT_SEARCH_WEIGHTS,
)
from directory_api.core.errors import ErrorContext, StoreError
from directory_api.core.locations import rank_by_distance
from directory_api.core.text_search import ParsedQuery, rank_by_relevance
from directory_api.models.enterprise import Enterprise
from directory_api.models.enterprise_logo import EnterpriseLogo
from directory_api.models.enterprise_private import EnterprisePrivateFields

logger = logging.getLogger(__name__)


@contextmanager
def _store_errors(operation: str, enterprise_id: object = None):
    """Map SQLAlchemy failures to StoreError with a generic message."""
    try:
        yield
    except SQLAlchemyError as e:
        logger.error(
            f"Store operation '{operation}' failed: {e}",
            extra={"operation": operation, "enterprise_id": enterprise_id},
            exc_info=True,
        )
        raise StoreError(
            "Error accessing the enterprise directory", operation,
            ErrorContext(
                operation=operation,
                enterprise_id=str(enterprise_id) if enterprise_id else None,
            ),
        ) from e


def public_document(row: Enterprise) -> dict:
    """ORM public record -> plain document."""
    doc = {
        "id": row.id,
        "translations": dict(row.translations or {}),
        "locations": list(row.locations or []),
        "private_info_id": row.private_info_id,
    }
    for name in PUBLIC_FIELDS:
        doc[name] = getattr(row, name)
    for kind in ContactKind:
        doc[kind.value] = list(getattr(row, kind.value) or [])
    return doc


def private_document(row: EnterprisePrivateFields) -> dict:
    """ORM private record -> plain document."""
    doc = {"id": row.id}
    for name in PRIVATE_FIELDS:
        doc[name] = getattr(row, name)
    for kind in ContactKind:
        doc[kind.value] = list(getattr(row, kind.value) or [])
    return doc


class SqlEnterpriseStore:
    """Enterprise persistence over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get(self, enterprise_id: EnterpriseId) -> dict | None:
        with _store_errors("get", enterprise_id):
            row = await self._db.get(Enterprise, enterprise_id)
        return public_document(row) if row else None

    async def get_private(self, private_id: UUID) -> dict | None:
        with _store_errors("get_private"):
            row = await self._db.get(EnterprisePrivateFields, private_id)
        return private_document(row) if row else None

    async def browse(self, lang: str, limit: int, offset: int) -> list[dict]:
        """All enterprises alphabetically by lowercase name in `lang`.

        Enterprises without a `lang` block sort after the named ones.
        """
        sort_key = Enterprise.translations[(lang, "lowercase_name")].as_string()
        query = (
            select(Enterprise)
            .order_by(sort_key.nulls_last(), Enterprise.id)
            .limit(limit)
            .offset(offset)
        )
        with _store_errors("browse"):
            result = await self._db.execute(query)
            rows = result.scalars().all()
        return [public_document(r) for r in rows]

    async def near(
        self, point: GeoPoint, limit: int, offset: int,
    ) -> list[dict]:
        """Enterprises by ascending distance of their nearest location to `point`."""
        with _store_errors("near"):
            result = await self._db.execute(
                select(Enterprise.id, Enterprise.locations),
            )
            candidates = [(row.id, row.locations) for row in result.all()]
        page = rank_by_distance(point, candidates)[offset:offset + limit]
        return await self._load_page("near", [key for key, _ in page])

    async def search(
        self, query: ParsedQuery, limit: int, offset: int,
    ) -> list[dict]:
        """Enterprises matching `query`, by descending weighted relevance.

        Only the weighted columns are read for scoring; full rows are loaded
        for the requested page alone.
        """
        columns = [Enterprise.id, Enterprise.translations] + [
            getattr(Enterprise, name)
            for name in PUBLIC_FIELDS if name in TEXT_SEARCH_WEIGHTS
        ]
        with _store_errors("search"):
            result = await self._db.execute(
                select(*columns).order_by(Enterprise.created_at, Enterprise.id),
            )
            candidates = [dict(row._mapping) for row in result.all()]
        page = rank_by_relevance(candidates, query)[offset:offset + limit]
        return await self._load_page("search", [doc["id"] for doc, _ in page])

    async def _load_page(self, operation: str, ids: list) -> list[dict]:
        """Full documents for `ids`, in the given order."""
        if not ids:
            return []
        with _store_errors(operation):
            result = await self._db.execute(
                select(Enterprise).where(Enterprise.id.in_(ids)),
            )
            by_id = {row.id: row for row in result.scalars().all()}
        return [public_document(by_id[i]) for i in ids if i in by_id]

    async def create(
        self, public_fields: dict, private_fields: dict,
    ) -> tuple[dict, dict]:
        """Insert private then public record in one transaction."""
        try:
            private_row = EnterprisePrivateFields(**private_fields)
            self._db.add(private_row)
            await self._db.flush()

            public_row = Enterprise(
                **public_fields, private_info_id=private_row.id,
            )
            self._db.add(public_row)
            await self._db.commit()
        except SQLAlchemyError as e:
            await self._db.rollback()
            logger.error(
                f"Error creating enterprise: {e}",
                extra={"operation": "create"},
                exc_info=True,
            )
            raise StoreError(
                "Error creating enterprise", "create",
                ErrorContext(operation="create"),
            ) from e
        return public_document(public_row), private_document(private_row)


class SqlLogoStore:
    """Logo lookup over an AsyncSession."""

    def __init__(self, db: AsyncSession):
        self._db = db

    async def get_by_enterprise(self, enterprise_id: EnterpriseId) -> dict | None:
        with _store_errors("get_logo", enterprise_id):
            result = await self._db.execute(
                select(EnterpriseLogo).where(
                    EnterpriseLogo.enterprise_id == enterprise_id,
                ),
            )
            logo = result.scalar_one_or_none()
        if not logo:
            return None
        return {"image": logo.image, "content_type": logo.content_type}

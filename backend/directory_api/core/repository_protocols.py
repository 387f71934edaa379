"""Boundary Protocols — contracts between core/services and the store.

Invariants:
    - Services NEVER import SQLAlchemy; store access goes through these Protocols
    - Documents cross the boundary as plain dicts (see core/enterprise_views)
    - Implementations provided by infrastructure via dependency injection

Design Decisions:
    - Protocol over ABC: structural subtyping, tests can pass simple fakes
    - Offset/limit are applied by the store after ordering
"""

from typing import Protocol
from uuid import UUID

from directory_api.core.domain_types import EnterpriseId, GeoPoint
from directory_api.core.text_search import ParsedQuery


class EnterpriseStore(Protocol):
    """Contract for public/private enterprise persistence."""
    async def get(self, enterprise_id: EnterpriseId) -> dict | None: ...
    async def get_private(self, private_id: UUID) -> dict | None: ...
    async def browse(
        self, lang: str, limit: int, offset: int,
    ) -> list[dict]: ...
    async def near(
        self, point: GeoPoint, limit: int, offset: int,
    ) -> list[dict]: ...
    async def search(
        self, query: ParsedQuery, limit: int, offset: int,
    ) -> list[dict]: ...
    async def create(
        self, public_fields: dict, private_fields: dict,
    ) -> tuple[dict, dict]: ...


class LogoStore(Protocol):
    """Contract for enterprise logo lookup."""
    async def get_by_enterprise(
        self, enterprise_id: EnterpriseId,
    ) -> dict | None: ...

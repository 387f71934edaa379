"""Enterprise Routes — list/search, detail, complete view, creation, logo.

Invariants:
    - Every successful read carries Cache-Control: max-age=<enterprise_cache_control>
    - POST is refused (403) before the body is read when direct writes are disabled
    - Path ids are taken as strings: unparseable ids are 404, not 400

Design Decisions:
    - Resolver built per request from the request's DB session and cached settings
    - POST parses its own body so the write gate runs first; body errors reuse
      the RequestValidationError envelope (400)
"""

import logging

from fastapi import APIRouter, Depends, Query, Request, Response, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse
from pydantic import ValidationError
from sqlalchemy.ext.asyncio import AsyncSession

from directory_api.config import Settings, get_settings
from directory_api.infrastructure.database import get_db
from directory_api.infrastructure.enterprise_store import (
    SqlEnterpriseStore, SqlLogoStore,
)
from directory_api.schemas.enterprise import EnterpriseCreate
from directory_api.services.enterprise_resolver import (
    DEFAULT_LIMIT, DEFAULT_OFFSET, EnterpriseResolver,
)

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1/enterprise", tags=["enterprise"])


def get_enterprise_resolver(
    db: AsyncSession = Depends(get_db),
    settings: Settings = Depends(get_settings),
) -> EnterpriseResolver:
    return EnterpriseResolver(
        SqlEnterpriseStore(db),
        SqlLogoStore(db),
        supported_languages=settings.supported_languages,
        default_language=settings.default_language,
        allow_direct_writes=settings.direct_writes_enabled,
    )


def _cache_headers(settings: Settings) -> dict[str, str]:
    return {"Cache-Control": f"max-age={settings.enterprise_cache_control}"}


@router.get("")
async def list_enterprises(
    q: str | None = Query(None),
    at: str | None = Query(None),
    count: int = Query(DEFAULT_LIMIT, ge=1),
    offset: int = Query(DEFAULT_OFFSET, ge=0),
    lang: str | None = Query(None),
    resolver: EnterpriseResolver = Depends(get_enterprise_resolver),
    settings: Settings = Depends(get_settings),
):
    """Geo search (at), keyword search (q), or alphabetical browse."""
    enterprises = await resolver.list_enterprises(
        search=q, location=at, limit=count, offset=offset, lang=lang,
    )
    return JSONResponse(content=enterprises, headers=_cache_headers(settings))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_enterprise(
    request: Request,
    resolver: EnterpriseResolver = Depends(get_enterprise_resolver),
):
    """Create an enterprise from its complete representation."""
    resolver.ensure_writable()
    try:
        body = EnterpriseCreate.model_validate_json(await request.body())
    except ValidationError as e:
        raise RequestValidationError(
            [{**err, "loc": ("body", *err["loc"])} for err in e.errors()],
        ) from e
    view = await resolver.create(body.model_dump())
    return JSONResponse(status_code=status.HTTP_201_CREATED, content=view.body)


@router.get("/{enterprise_id}/complete")
async def get_enterprise_complete(
    enterprise_id: str,
    resolver: EnterpriseResolver = Depends(get_enterprise_resolver),
    settings: Settings = Depends(get_settings),
):
    """Public and private fields of one enterprise, all languages."""
    view = await resolver.get_complete(enterprise_id)
    return JSONResponse(content=view.body, headers=_cache_headers(settings))


@router.get("/{enterprise_id}/logo")
async def get_enterprise_logo(
    enterprise_id: str,
    resolver: EnterpriseResolver = Depends(get_enterprise_resolver),
    settings: Settings = Depends(get_settings),
):
    """Raw logo bytes with their stored content type."""
    logo = await resolver.get_logo(enterprise_id)
    return Response(
        content=logo["image"],
        media_type=logo["content_type"],
        headers=_cache_headers(settings),
    )


@router.get("/{enterprise_id}")
async def get_enterprise(
    enterprise_id: str,
    lang: str | None = Query(None),
    resolver: EnterpriseResolver = Depends(get_enterprise_resolver),
    settings: Settings = Depends(get_settings),
):
    """One enterprise in the selected language."""
    view = await resolver.get_public(enterprise_id, lang)
    return JSONResponse(content=view.body, headers=_cache_headers(settings))

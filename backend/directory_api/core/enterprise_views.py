"""Enterprise Views — projection of stored documents into API shapes, and the reverse split.

Invariants:
    - PublicView exposes one language's text fields plus public contact items only
    - CompleteView exposes every language block, private fields, and all contact items
    - Any malformed stored document surfaces as ProjectionError (never KeyError/TypeError)
    - split_complete_enterprise never touches the store; failures happen before any write

Design Decisions:
    - Tagged union (PublicView | CompleteView) with one projection function per variant,
      instead of runtime shape-sniffing of the document
    - Contact items route by their `public` flag: public record gets public items,
      private record gets the rest
"""

from dataclasses import dataclass, field

from directory_api.core.domain_types import (
    ContactKind, LOCALIZED_FIELDS, PRIVATE_FIELDS, PUBLIC_FIELDS, ViewKind,
)
from directory_api.core.errors import ErrorContext, ProjectionError
from directory_api.core.languages import select_language_block


@dataclass(frozen=True)
class PublicView:
    """One enterprise in a single language."""
    lang: str
    body: dict
    kind: ViewKind = field(default=ViewKind.PUBLIC, init=False)


@dataclass(frozen=True)
class CompleteView:
    """One enterprise with all languages and private fields merged in."""
    body: dict
    kind: ViewKind = field(default=ViewKind.COMPLETE, init=False)


EnterpriseView = PublicView | CompleteView


# ─── Store → API ────────────────────────────────────────────────

def project_public(document: dict, lang: str, default_lang: str) -> PublicView:
    """Project a stored public document onto one language."""
    try:
        block = select_language_block(
            document.get("translations") or {}, lang, default_lang,
        )
        body = {"id": str(document["id"])}
        for name in LOCALIZED_FIELDS:
            body[name] = _copy_value(block.get(name))
        _copy_neutral_fields(document, body)
        for kind in ContactKind:
            body[kind.value] = [
                _copy_contact(item, kind)
                for item in document.get(kind.value) or []
                if item.get("public")
            ]
        body["locations"] = _copy_locations(document.get("locations"))
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ProjectionError(
            "Error transforming enterprise",
            ErrorContext(
                enterprise_id=str(document.get("id")), operation="project_public",
                debug_info={"reason": str(e)},
            ),
        ) from e
    return PublicView(lang=lang, body=body)


def project_public_many(
    documents: list[dict], lang: str, default_lang: str,
) -> list[dict]:
    return [project_public(d, lang, default_lang).body for d in documents]


def project_international(document: dict) -> dict:
    """All language blocks plus language-neutral fields, public items only."""
    body = {"id": str(document["id"])}
    for code, block in (document.get("translations") or {}).items():
        body[code] = {
            name: _copy_value(block.get(name)) for name in LOCALIZED_FIELDS
        }
    _copy_neutral_fields(document, body)
    for kind in ContactKind:
        body[kind.value] = [
            _copy_contact(item, kind) for item in document.get(kind.value) or []
        ]
    body["locations"] = _copy_locations(document.get("locations"))
    return body


def append_private_info(body: dict, private: dict | None) -> dict:
    """Merge private fields and private contact items into an API body."""
    private = private or {}
    for name in PRIVATE_FIELDS:
        body[name] = _copy_value(private.get(name))
    for kind in ContactKind:
        body[kind.value] = body.get(kind.value, []) + [
            _copy_contact(item, kind) for item in private.get(kind.value) or []
        ]
    return body


def project_complete(document: dict, private: dict | None) -> CompleteView:
    """Project a stored public document and its private record together."""
    try:
        body = append_private_info(project_international(document), private)
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ProjectionError(
            "Error transforming enterprise",
            ErrorContext(
                enterprise_id=str(document.get("id")), operation="project_complete",
                debug_info={"reason": str(e)},
            ),
        ) from e
    return CompleteView(body=body)


# ─── API → Store ────────────────────────────────────────────────

def split_complete_enterprise(
    payload: dict, supported_languages: list[str],
) -> tuple[dict, dict]:
    """Split a complete payload into (public fields, private fields).

    Language blocks outside `supported_languages` are dropped. Each kept block
    gains a `lowercase_name` used for alphabetical browsing.
    """
    try:
        translations = {}
        for code, block in (payload.get("translations") or {}).items():
            if code not in supported_languages:
                continue
            kept = {name: _copy_value(block.get(name)) for name in LOCALIZED_FIELDS}
            kept["lowercase_name"] = (kept["name"] or "").lower()
            translations[code] = kept

        public = {"translations": translations}
        for name in PUBLIC_FIELDS:
            public[name] = payload.get(name)
        public["locations"] = _copy_locations(payload.get("locations"))

        private = {name: _copy_value(payload.get(name)) for name in PRIVATE_FIELDS}
        for kind in ContactKind:
            items = [
                _copy_contact(item, kind) for item in payload.get(kind.value) or []
            ]
            public[kind.value] = [i for i in items if i["public"]]
            private[kind.value] = [i for i in items if not i["public"]]
    except (KeyError, TypeError, AttributeError, ValueError) as e:
        raise ProjectionError(
            "Error transforming enterprise for storage",
            ErrorContext(operation="split", debug_info={"reason": str(e)}),
        ) from e
    return public, private


# ─── Helpers ────────────────────────────────────────────────────

def _copy_neutral_fields(document: dict, body: dict) -> None:
    for name in PUBLIC_FIELDS:
        body[name] = document.get(name)


def _copy_contact(item: dict, kind: ContactKind) -> dict:
    return {
        kind.value_key: item[kind.value_key],
        "tags": list(item.get("tags") or []),
        "public": bool(item.get("public", False)),
    }


def _copy_locations(locations) -> list[list[float]]:
    return [[float(lon), float(lat)] for lon, lat in locations or []]


def _copy_value(value):
    if isinstance(value, (list, tuple)):
        return list(value)
    return value

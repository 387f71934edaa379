"""Domain Types — rich types that replace bare primitives across the codebase.

Invariants:
    - EnterpriseId wraps UUID — never use bare UUID in domain logic
    - GeoPoint longitude in [-180, 180], latitude in [-90, 90] (checked by core/locations)
    - Field groupings below are the single source for splitting and projecting documents

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NamedTuple, NewType
from uuid import UUID


# ─── Identity Types ──────────────────────────────────────────────

EnterpriseId = NewType("EnterpriseId", UUID)
LanguageCode = NewType("LanguageCode", str)


# ─── Value Types ─────────────────────────────────────────────────

class GeoPoint(NamedTuple):
    """A WGS84 point in [longitude, latitude] order, as stored."""
    longitude: float
    latitude: float


# ─── Enums ───────────────────────────────────────────────────────

class QueryStrategy(str, Enum):
    """How a list request is answered — first match wins in this order."""
    LOCATION = "location"
    TEXT = "text"
    BROWSE = "browse"


class ViewKind(str, Enum):
    """API representation variants of an enterprise."""
    PUBLIC = "public"
    COMPLETE = "complete"


class ContactKind(str, Enum):
    """Contact list names — each maps to the key holding the item's value."""
    EMAILS = "emails"
    PHONES = "phones"
    FAXES = "faxes"
    ADDRESSES = "addresses"

    @property
    def value_key(self) -> str:
        return _CONTACT_VALUE_KEYS[self]


_CONTACT_VALUE_KEYS: dict[ContactKind, str] = {
    ContactKind.EMAILS: "email",
    ContactKind.PHONES: "number",
    ContactKind.FAXES: "fax",
    ContactKind.ADDRESSES: "address",
}


# ─── Field Groupings ─────────────────────────────────────────────

LOCALIZED_FIELDS: tuple[str, ...] = (
    "name", "short_description", "description", "offering", "purposes",
)

PUBLIC_FIELDS: tuple[str, ...] = (
    "year_started", "website", "facebook", "instagram", "twitter",
)

PRIVATE_FIELDS: tuple[str, ...] = (
    "clusters", "segments", "parent_organization", "contact_person",
    "annual_revenue_range", "stage_of_development",
)

# Relative weights of the full-text index
TEXT_SEARCH_WEIGHTS: dict[str, int] = {
    "name": 20,
    "website": 20,
    "facebook": 20,
    "instagram": 20,
    "twitter": 20,
    "short_description": 15,
    "offering": 10,
    "description": 5,
    "purposes": 3,
}

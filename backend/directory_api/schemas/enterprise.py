"""Enterprise Schemas — Pydantic validation of the complete enterprise payload.

Invariants:
    - Language blocks arrive as top-level keys ("en": {...}) and are collected into
      `translations`; at least one block is required and each needs a non-blank name
    - Every location is [lon, lat] within WGS84 bounds
    - Contact items require their value field (email/number/fax/address)

Design Decisions:
    - model_validator(mode="before") folds dynamic language keys into one field,
      so the supported-language set stays configuration, not schema
"""

from pydantic import BaseModel, Field, field_validator, model_validator

from directory_api.core.locations import is_valid_coords


class LanguageBlock(BaseModel):
    """Text fields for one language."""
    name: str = Field(min_length=1, max_length=500)
    short_description: str | None = Field(None, max_length=1000)
    description: str | None = Field(None, max_length=20_000)
    offering: str | None = Field(None, max_length=5000)
    purposes: list[str] = Field(default_factory=list)

    @field_validator("name")
    @classmethod
    def strip_name(cls, v: str) -> str:
        v = v.strip()
        if not v:
            raise ValueError("name cannot be empty or whitespace")
        return v


class EmailContact(BaseModel):
    email: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    public: bool = False


class PhoneContact(BaseModel):
    number: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    public: bool = False


class FaxContact(BaseModel):
    fax: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    public: bool = False


class AddressContact(BaseModel):
    address: str = Field(min_length=1)
    tags: list[str] = Field(default_factory=list)
    public: bool = False


class EnterpriseCreate(BaseModel):
    """Complete enterprise: language blocks, public fields, private fields."""
    translations: dict[str, LanguageBlock]

    # public
    year_started: int | None = Field(None, ge=1000, le=9999)
    website: str | None = Field(None, max_length=500)
    facebook: str | None = Field(None, max_length=500)
    instagram: str | None = Field(None, max_length=500)
    twitter: str | None = Field(None, max_length=500)
    locations: list[tuple[float, float]] = Field(default_factory=list)

    # contacts (split by their `public` flag)
    emails: list[EmailContact] = Field(default_factory=list)
    phones: list[PhoneContact] = Field(default_factory=list)
    faxes: list[FaxContact] = Field(default_factory=list)
    addresses: list[AddressContact] = Field(default_factory=list)

    # private
    clusters: list[str] = Field(default_factory=list)
    segments: list[str] = Field(default_factory=list)
    parent_organization: str | None = Field(None, max_length=500)
    contact_person: list[str] = Field(default_factory=list)
    annual_revenue_range: str | None = Field(None, max_length=100)
    stage_of_development: str | None = Field(None, max_length=100)

    @model_validator(mode="before")
    @classmethod
    def collect_language_blocks(cls, data):
        if not isinstance(data, dict):
            return data
        data = dict(data)
        translations = dict(data.pop("translations", None) or {})
        for key in list(data):
            if key not in cls.model_fields and isinstance(data[key], dict):
                translations[key] = data.pop(key)
        data["translations"] = translations
        return data

    @field_validator("translations")
    @classmethod
    def require_a_language(cls, v: dict) -> dict:
        if not v:
            raise ValueError("at least one language block is required")
        return v

    @field_validator("locations")
    @classmethod
    def check_locations(cls, v: list) -> list:
        for lon, lat in v:
            if not is_valid_coords(lon, lat):
                raise ValueError(f"invalid location [{lon}, {lat}]")
        return v

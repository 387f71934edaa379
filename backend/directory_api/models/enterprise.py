"""Enterprise ORM — the public record of a directory entry.

Invariants:
    - id is UUID primary key, assigned on insert
    - translations maps language code -> {name, lowercase_name, short_description,
      description, offering, purposes}
    - private_info_id is unique: at most one private record per enterprise
    - locations holds [lon, lat] pairs, validated before write

Design Decisions:
    - JSON columns for the multi-language block and contact lists: the record is
      read and written as a whole document, never queried field-by-field
      (except lowercase_name, reached with a JSON path for browse ordering)
"""

import uuid
from datetime import datetime, timezone

from sqlalchemy import DateTime, ForeignKey, Integer, JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from directory_api.db.base import Base


class Enterprise(Base):
    """Public enterprise record."""
    __tablename__ = "enterprises"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    translations: Mapped[dict] = mapped_column(
        JSON, nullable=False, default=dict,
    )
    year_started: Mapped[int | None] = mapped_column(Integer, nullable=True)
    website: Mapped[str | None] = mapped_column(String(500), nullable=True)
    facebook: Mapped[str | None] = mapped_column(String(500), nullable=True)
    instagram: Mapped[str | None] = mapped_column(String(500), nullable=True)
    twitter: Mapped[str | None] = mapped_column(String(500), nullable=True)
    emails: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    phones: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    faxes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    addresses: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    locations: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    private_info_id: Mapped[uuid.UUID | None] = mapped_column(
        Uuid,
        ForeignKey("enterprise_private_fields.id", ondelete="SET NULL"),
        nullable=True, unique=True,
    )
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )

    # Relationships
    logo: Mapped["EnterpriseLogo | None"] = relationship(
        "EnterpriseLogo", back_populates="enterprise",
        cascade="all, delete-orphan", uselist=False,
    )

"""Enterprise Private Fields ORM — fields never exposed through the public view.

Invariants:
    - Referenced by exactly one Enterprise.private_info_id
    - Not addressable by clients; only reached through its public record
"""

import uuid

from sqlalchemy import JSON, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column

from directory_api.db.base import Base


class EnterprisePrivateFields(Base):
    """Private half of an enterprise."""
    __tablename__ = "enterprise_private_fields"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    clusters: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    segments: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    parent_organization: Mapped[str | None] = mapped_column(
        String(500), nullable=True,
    )
    contact_person: Mapped[list] = mapped_column(
        JSON, nullable=False, default=list,
    )
    annual_revenue_range: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    stage_of_development: Mapped[str | None] = mapped_column(
        String(100), nullable=True,
    )
    emails: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    phones: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    faxes: Mapped[list] = mapped_column(JSON, nullable=False, default=list)
    addresses: Mapped[list] = mapped_column(JSON, nullable=False, default=list)

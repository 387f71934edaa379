"""Enterprise Logo ORM — binary image stored alongside its content type.

Invariants:
    - enterprise_id is unique: at most one logo per enterprise
    - image and content_type are non-nullable
"""

import uuid

from sqlalchemy import ForeignKey, LargeBinary, String, Uuid
from sqlalchemy.orm import Mapped, mapped_column, relationship

from directory_api.db.base import Base


class EnterpriseLogo(Base):
    """Logo blob for one enterprise."""
    __tablename__ = "enterprise_logos"

    id: Mapped[uuid.UUID] = mapped_column(
        Uuid, primary_key=True, default=uuid.uuid4,
    )
    enterprise_id: Mapped[uuid.UUID] = mapped_column(
        Uuid, ForeignKey("enterprises.id", ondelete="CASCADE"),
        nullable=False, unique=True,
    )
    image: Mapped[bytes] = mapped_column(LargeBinary, nullable=False)
    content_type: Mapped[str] = mapped_column(String(100), nullable=False)

    # Relationships
    enterprise: Mapped["Enterprise"] = relationship(
        "Enterprise", back_populates="logo",
    )

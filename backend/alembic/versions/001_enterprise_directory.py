"""Enterprise directory schema — public records, private fields, logos.

Revision ID: 001_enterprise_directory
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_enterprise_directory"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _contact_columns() -> list[sa.Column]:
    return [
        sa.Column("emails", sa.JSON, nullable=False),
        sa.Column("phones", sa.JSON, nullable=False),
        sa.Column("faxes", sa.JSON, nullable=False),
        sa.Column("addresses", sa.JSON, nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "enterprise_private_fields",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("clusters", sa.JSON, nullable=False),
        sa.Column("segments", sa.JSON, nullable=False),
        sa.Column("parent_organization", sa.String(500), nullable=True),
        sa.Column("contact_person", sa.JSON, nullable=False),
        sa.Column("annual_revenue_range", sa.String(100), nullable=True),
        sa.Column("stage_of_development", sa.String(100), nullable=True),
        *_contact_columns(),
    )

    op.create_table(
        "enterprises",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column("translations", sa.JSON, nullable=False),
        sa.Column("year_started", sa.Integer, nullable=True),
        sa.Column("website", sa.String(500), nullable=True),
        sa.Column("facebook", sa.String(500), nullable=True),
        sa.Column("instagram", sa.String(500), nullable=True),
        sa.Column("twitter", sa.String(500), nullable=True),
        *_contact_columns(),
        sa.Column("locations", sa.JSON, nullable=False),
        sa.Column(
            "private_info_id", sa.Uuid,
            sa.ForeignKey("enterprise_private_fields.id", ondelete="SET NULL"),
            nullable=True, unique=True,
        ),
        sa.Column(
            "created_at", sa.DateTime(timezone=True), nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        "enterprise_logos",
        sa.Column("id", sa.Uuid, primary_key=True),
        sa.Column(
            "enterprise_id", sa.Uuid,
            sa.ForeignKey("enterprises.id", ondelete="CASCADE"),
            nullable=False, unique=True,
        ),
        sa.Column("image", sa.LargeBinary, nullable=False),
        sa.Column("content_type", sa.String(100), nullable=False),
    )


def downgrade() -> None:
    op.drop_table("enterprise_logos")
    op.drop_table("enterprises")
    op.drop_table("enterprise_private_fields")

"""Create flavors and store_settings

Revision ID: 5c0f3a9e2b71
Revises:
Create Date: 2026-10-19 09:12:44.201337

"""

from collections.abc import Sequence

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "5c0f3a9e2b71"
down_revision: str | None = None
branch_labels: str | Sequence[str] | None = None
depends_on: str | Sequence[str] | None = None


def upgrade() -> None:
    op.create_table(
        "flavors",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("flavor_name", sa.String(length=255), nullable=False),
        sa.Column("manufacturer", sa.String(length=255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False),
        sa.Column("short_description", sa.String(length=500), nullable=False),
        sa.Column("type", sa.String(length=20), nullable=False),
        sa.Column("categories", sa.JSON(), nullable=False),
        sa.Column("variants", sa.JSON(), nullable=False),
        sa.Column("vg_pg_ratio", sa.String(length=20), nullable=False),
        sa.Column("image_url", sa.String(length=1000), nullable=True),
        sa.Column("date_added", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_flavors_flavor_name"), "flavors", ["flavor_name"], unique=False)
    op.create_index(op.f("ix_flavors_manufacturer"), "flavors", ["manufacturer"], unique=False)
    op.create_index(op.f("ix_flavors_type"), "flavors", ["type"], unique=False)
    op.create_index(op.f("ix_flavors_date_added"), "flavors", ["date_added"], unique=False)

    op.create_table(
        "store_settings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("logo_url", sa.String(length=1000), nullable=True),
        sa.Column("line_of_the_month", sa.String(length=255), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.text("now()"), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )


def downgrade() -> None:
    op.drop_table("store_settings")
    op.drop_index(op.f("ix_flavors_date_added"), table_name="flavors")
    op.drop_index(op.f("ix_flavors_type"), table_name="flavors")
    op.drop_index(op.f("ix_flavors_manufacturer"), table_name="flavors")
    op.drop_index(op.f("ix_flavors_flavor_name"), table_name="flavors")
    op.drop_table("flavors")

"""Create media table."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20261019_01"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "media",
        sa.Column("id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=255)),
        sa.Column("description", sa.Text()),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("provider_name", sa.String(length=64), nullable=False),
        sa.Column("provider_status", sa.Integer()),
        sa.Column("provider_reference", sa.String(length=255)),
        sa.Column("context", sa.String(length=64)),
        sa.Column("content_type", sa.String(length=128)),
        sa.Column("size", sa.Integer()),
        sa.Column("extension", sa.String(length=16)),
        sa.Column("width", sa.Integer()),
        sa.Column("height", sa.Integer()),
        sa.Column("author_name", sa.String(length=255)),
        sa.Column("copyright", sa.String(length=255)),
        sa.Column(
            "cdn_is_flushable", sa.Boolean(), nullable=False, server_default=sa.false()
        ),
        sa.Column("created_at", sa.DateTime(timezone=True)),
        sa.Column("updated_at", sa.DateTime(timezone=True)),
    )
    op.create_index("ix_media_provider_name", "media", ["provider_name"])
    op.create_index("ix_media_context", "media", ["context"])


def downgrade() -> None:
    op.drop_index("ix_media_context", table_name="media")
    op.drop_index("ix_media_provider_name", table_name="media")
    op.drop_table("media")

"""create billing tables

Revision ID: 3b7c41e9a0d2
Revises:
Create Date: 2026-10-19 10:12:40.518311
"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

# revision identifiers, used by Alembic.
revision: str = "3b7c41e9a0d2"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1) Stripe deliveries
    op.create_table(
        "events",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("source", sa.String(length=50), nullable=False, server_default="stripe"),
        sa.Column("provider_event_id", sa.String(length=100), nullable=True),
        sa.Column("event_type", sa.String(length=100), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="verified"),
        sa.Column("outcome", sa.String(length=60), nullable=True),
        sa.Column("signature", sa.String(), nullable=True),
        sa.Column("livemode", sa.Boolean(), nullable=True),
        sa.Column("created_at_provider", sa.DateTime(timezone=True), nullable=True),
        sa.Column("raw", postgresql.JSONB(astext_type=sa.Text()), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_events_source", "events", ["source"])
    op.create_index("ix_events_provider_event_id", "events", ["provider_event_id"], unique=True)
    op.create_index("ix_events_event_type", "events", ["event_type"])
    op.create_index("ix_events_status", "events", ["status"])
    op.create_index("ix_events_outcome", "events", ["outcome"])

    # 2) Memberships (one row per account)
    op.create_table(
        "memberships",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("user_id", sa.String(length=100), nullable=False),
        sa.Column("user_email", sa.String(length=320), nullable=False),
        sa.Column("user_name", sa.String(length=200), nullable=True),
        sa.Column("status", sa.String(length=20), nullable=False, server_default="active"),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("last_renewal_type", sa.String(length=20), nullable=True),
        sa.Column("last_coupon_code", sa.String(length=100), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_memberships_user_id", "memberships", ["user_id"], unique=True)
    op.create_index("ix_memberships_status", "memberships", ["status"])
    op.create_index("ix_memberships_expires_at", "memberships", ["expires_at"])

    # 3) Studios
    op.create_table(
        "studios",
        sa.Column("id", sa.String(length=100), primary_key=True),
        sa.Column("owner_id", sa.String(length=100), nullable=False),
        sa.Column("name", sa.String(length=200), nullable=False),
        sa.Column("is_featured", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("featured_until", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_studios_owner_id", "studios", ["owner_id"])
    op.create_index("ix_studios_is_featured", "studios", ["is_featured"])

    # 4) Rights confirmation audit trail
    op.create_table(
        "rights_confirmations",
        sa.Column("id", sa.Integer(), primary_key=True),
        sa.Column("actor_id", sa.String(length=100), nullable=False),
        sa.Column("confirmation_text", sa.Text(), nullable=False),
        sa.Column("client_ip", sa.String(length=64), nullable=True),
        sa.Column("confirmed_at", sa.DateTime(timezone=True), server_default=sa.func.now(), nullable=False),
    )
    op.create_index("ix_rights_confirmations_actor_id", "rights_confirmations", ["actor_id"])
    op.create_index("ix_rights_confirmations_confirmed_at", "rights_confirmations", ["confirmed_at"])


def downgrade() -> None:
    op.execute("DROP TABLE IF EXISTS rights_confirmations;")
    op.execute("DROP TABLE IF EXISTS studios;")
    op.execute("DROP TABLE IF EXISTS memberships;")
    op.execute("DROP TABLE IF EXISTS events;")

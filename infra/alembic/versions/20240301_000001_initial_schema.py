"""Initial support center schema."""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision = "20240301_000001"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "tickets",
        sa.Column("number", sa.Integer(), primary_key=True, nullable=False),
        sa.Column("account_id", sa.Integer(), nullable=False),
        sa.Column("text", sa.String(length=100), nullable=False),
        sa.Column("date_opened", sa.DateTime(timezone=True), nullable=False),
        sa.Column("state", sa.String(length=50), nullable=False),
        sa.Column("device_name", sa.String(length=255), nullable=True),
        sqlite_autoincrement=True,
    )
    op.create_index("ix_tickets_state", "tickets", ["state"])

    op.create_table(
        "ticket_responses",
        sa.Column("id", sa.Integer(), primary_key=True, nullable=False),
        sa.Column(
            "ticket_number",
            sa.Integer(),
            sa.ForeignKey("tickets.number", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("text", sa.String(length=100), nullable=False),
        sa.Column("date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("is_client_response", sa.Boolean(), nullable=False),
    )
    op.create_index("ix_ticket_responses_ticket_number", "ticket_responses", ["ticket_number"])


def downgrade() -> None:
    op.drop_index("ix_ticket_responses_ticket_number", table_name="ticket_responses")
    op.drop_table("ticket_responses")
    op.drop_index("ix_tickets_state", table_name="tickets")
    op.drop_table("tickets")

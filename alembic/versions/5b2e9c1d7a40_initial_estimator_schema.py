"""initial estimator schema

Revision ID: 5b2e9c1d7a40
Revises:
Create Date: 2026-10-19 10:02:11.418233

Creates every table idempotently. Databases first built by
Base.metadata.create_all() already have them and only get stamped.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy import inspect


# revision identifiers, used by Alembic.
revision: str = '5b2e9c1d7a40'
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _table_exists(table_name):
    bind = op.get_bind()
    insp = inspect(bind)
    return table_name in insp.get_table_names()


def upgrade() -> None:
    if not _table_exists("admin_users"):
        op.create_table(
            "admin_users",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("email", sa.String(), nullable=False),
            sa.Column("password_hash", sa.String(), nullable=False),
            sa.Column("full_name", sa.String(), nullable=True),
            sa.Column("is_active", sa.Boolean(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("email"),
        )
        op.create_index("ix_admin_users_id", "admin_users", ["id"])

    if not _table_exists("exhibitors"):
        op.create_table(
            "exhibitors",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("company", sa.String(), nullable=True),
            sa.Column("email", sa.String(), nullable=True),
            sa.Column("phone", sa.String(), nullable=True),
            sa.Column("industry", sa.String(), nullable=True),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_exhibitors_id", "exhibitors", ["id"])

    if not _table_exists("vendors"):
        op.create_table(
            "vendors",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("name", sa.String(), nullable=False),
            sa.Column("category", sa.String(), nullable=False),
            sa.Column("location", sa.String(), nullable=True),
            sa.Column("city", sa.String(), nullable=False),
            sa.Column("state", sa.String(), nullable=False),
            sa.Column("description", sa.Text(), nullable=True),
            sa.Column("specialties", sa.JSON(), nullable=True),
            sa.Column("services", sa.JSON(), nullable=True),
            sa.Column("contact", sa.JSON(), nullable=True),
            sa.Column("rating", sa.Float(), nullable=True),
            sa.Column("experience", sa.String(), nullable=True),
            sa.Column("price_range", sa.String(), nullable=False),
            sa.Column("keywords", sa.JSON(), nullable=True),
            sa.Column("logo_url", sa.String(), nullable=True),
            sa.Column("is_active", sa.Boolean(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )
        op.create_index("ix_vendors_id", "vendors", ["id"])

    if not _table_exists("wizard_sessions"):
        op.create_table(
            "wizard_sessions",
            sa.Column("id", sa.String(), nullable=False),
            sa.Column("step", sa.String(), nullable=True),
            sa.Column("state_json", sa.JSON(), nullable=True),
            sa.Column("estimate_json", sa.JSON(), nullable=True),
            sa.Column("status", sa.String(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.PrimaryKeyConstraint("id"),
        )

    if not _table_exists("quotes"):
        op.create_table(
            "quotes",
            sa.Column("id", sa.Integer(), nullable=False),
            sa.Column("quote_number", sa.String(), nullable=False),
            sa.Column("exhibitor_id", sa.Integer(), nullable=True),
            sa.Column("session_id", sa.String(), nullable=True),
            sa.Column("exhibition_name", sa.String(), nullable=True),
            sa.Column("destination_city", sa.String(), nullable=True),
            sa.Column(
                "status",
                sa.Enum("DRAFT", "SENT", "ACCEPTED", "DECLINED", name="quotestatus"),
                nullable=True,
            ),
            sa.Column("notes", sa.Text(), nullable=True),
            sa.Column("currency", sa.String(), nullable=True),
            sa.Column("total", sa.Float(), nullable=True),
            sa.Column("valid_days", sa.Integer(), nullable=True),
            sa.Column("inputs_json", sa.JSON(), nullable=True),
            sa.Column("outputs_json", sa.JSON(), nullable=True),
            sa.Column("created_at", sa.DateTime(), nullable=True),
            sa.Column("updated_at", sa.DateTime(), nullable=True),
            sa.ForeignKeyConstraint(["exhibitor_id"], ["exhibitors.id"]),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint("quote_number"),
        )
        op.create_index("ix_quotes_id", "quotes", ["id"])


def downgrade() -> None:
    for table in ("quotes", "wizard_sessions", "vendors", "exhibitors", "admin_users"):
        if _table_exists(table):
            op.drop_table(table)

"""create users

Revision ID: 0001_create_users
Revises: 
Create Date: 2026-10-19
"""

from __future__ import annotations

# 执行方式：在项目根目录运行 `alembic upgrade head`。
from alembic import op
import sqlalchemy as sa


revision = "0001_create_users"
down_revision = None
branch_labels = None
depends_on = None


if __name__ == "__main__":
    raise SystemExit(
        "This file is an Alembic migration script. "
        "Do NOT run it with `python`. "
        "Run `alembic upgrade head` from the project root instead."
    )


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.BigInteger(), nullable=False),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)


def downgrade() -> None:
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

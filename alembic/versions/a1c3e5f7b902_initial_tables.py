"""initial_tables

Revision ID: a1c3e5f7b902
Revises:
Create Date: 2026-10-19 09:12:44.318201

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision: str = "a1c3e5f7b902"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "coins",
        sa.Column("id", sa.Integer(), autoincrement=True),
        sa.Column("symbol", sa.String(20), nullable=False),
        sa.Column("enabled", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("coingecko_id", sa.String(100), nullable=True),
        sa.Column("binance_symbol", sa.String(30), nullable=True),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_coins")),
        sa.UniqueConstraint("symbol", name=op.f("uq_coins_symbol")),
    )

    op.create_table(
        "quotes",
        sa.Column("id", sa.Integer(), autoincrement=True),
        sa.Column("coin_id", sa.Integer(), sa.ForeignKey("coins.id", name=op.f("fk_quotes_coin_id_coins")), nullable=False),
        sa.Column("symbol", sa.String(20), nullable=False),
        sa.Column("provider", sa.String(30), nullable=False),
        sa.Column("currency", sa.String(10), nullable=False),
        sa.Column("price", sa.String(64), nullable=False),
        sa.Column("quoted_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_quotes")),
    )
    op.create_index(op.f("ix_quotes_quoted_at"), "quotes", ["quoted_at"])
    op.create_index(
        "ix_quotes_symbol_provider_currency_quoted_at",
        "quotes",
        ["symbol", "provider", "currency", "quoted_at"],
    )

    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), autoincrement=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.PrimaryKeyConstraint("id", name=op.f("pk_users")),
        sa.UniqueConstraint("email", name=op.f("uq_users_email")),
    )

    op.create_table(
        "user_favorites",
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", name=op.f("fk_user_favorites_user_id_users"), ondelete="CASCADE"), nullable=False),
        sa.Column("coin_id", sa.Integer(), sa.ForeignKey("coins.id", name=op.f("fk_user_favorites_coin_id_coins"), ondelete="CASCADE"), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("user_id", "coin_id", name=op.f("pk_user_favorites")),
    )

    op.create_table(
        "refresh_control",
        sa.Column("key", sa.String(64), nullable=False),
        sa.Column("value", sa.String(64), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.PrimaryKeyConstraint("key", name=op.f("pk_refresh_control")),
    )


def downgrade() -> None:
    op.drop_table("refresh_control")
    op.drop_table("user_favorites")
    op.drop_table("users")
    op.drop_index("ix_quotes_symbol_provider_currency_quoted_at", table_name="quotes")
    op.drop_index(op.f("ix_quotes_quoted_at"), table_name="quotes")
    op.drop_table("quotes")
    op.drop_table("coins")

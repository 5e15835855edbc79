"""Append-only price history."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cryptoquotes.db.session import Base, CreatedAtMixin


class QuoteRecord(CreatedAtMixin, Base):
    """One price observation for (coin, provider, currency) at ``quoted_at``.

    ``price`` is kept as the provider's decimal string so it reads back byte-for-byte.
    """

    __tablename__ = "quotes"
    __table_args__ = (
        Index("ix_quotes_symbol_provider_currency_quoted_at", "symbol", "provider", "currency", "quoted_at"),
    )

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    coin_id: Mapped[int] = mapped_column(ForeignKey("coins.id"))
    symbol: Mapped[str] = mapped_column(String(20))
    provider: Mapped[str] = mapped_column(String(30))
    currency: Mapped[str] = mapped_column(String(10))
    price: Mapped[str] = mapped_column(String(64))
    quoted_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), index=True)

from typing import Optional

from sqlalchemy import Boolean, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from cryptoquotes.db.session import Base, TimestampMixin


class CoinRecord(TimestampMixin, Base):
    """A tracked coin. ``symbol`` is the natural key, always uppercase."""

    __tablename__ = "coins"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    symbol: Mapped[str] = mapped_column(String(20), unique=True)
    enabled: Mapped[bool] = mapped_column(Boolean, default=True)
    coingecko_id: Mapped[Optional[str]] = mapped_column(String(100), default=None)
    binance_symbol: Mapped[Optional[str]] = mapped_column(String(30), default=None)

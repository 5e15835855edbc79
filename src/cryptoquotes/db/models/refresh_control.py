from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column

from cryptoquotes.db.session import Base, TimestampMixin


class RefreshControlRecord(TimestampMixin, Base):
    """Process-wide refresh bookkeeping, one row per key."""

    __tablename__ = "refresh_control"

    key: Mapped[str] = mapped_column(String(64), primary_key=True)
    value: Mapped[str] = mapped_column(String(64))

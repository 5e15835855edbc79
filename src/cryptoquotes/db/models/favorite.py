from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column

from cryptoquotes.db.session import Base, CreatedAtMixin


class FavoriteRecord(CreatedAtMixin, Base):
    """Junction row: user ``user_id`` follows coin ``coin_id``."""

    __tablename__ = "user_favorites"

    user_id: Mapped[int] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), primary_key=True)
    coin_id: Mapped[int] = mapped_column(ForeignKey("coins.id", ondelete="CASCADE"), primary_key=True)

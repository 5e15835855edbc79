from cryptoquotes.db.models.coin import CoinRecord
from cryptoquotes.db.models.favorite import FavoriteRecord
from cryptoquotes.db.models.quote import QuoteRecord
from cryptoquotes.db.models.refresh_control import RefreshControlRecord
from cryptoquotes.db.models.user import UserRecord

__all__ = [
    "CoinRecord",
    "FavoriteRecord",
    "QuoteRecord",
    "RefreshControlRecord",
    "UserRecord",
]

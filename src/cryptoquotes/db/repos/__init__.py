from cryptoquotes.db.repos.coin_repo import CoinRepo
from cryptoquotes.db.repos.favorites_repo import FavoritesRepo
from cryptoquotes.db.repos.quote_repo import QuoteRepo
from cryptoquotes.db.repos.refresh_control_repo import RefreshControlRepo
from cryptoquotes.db.repos.user_repo import UserRepo

__all__ = ["CoinRepo", "FavoritesRepo", "QuoteRepo", "RefreshControlRepo", "UserRepo"]

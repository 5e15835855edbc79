from cryptoquotes.domain.models.coin import Coin
from cryptoquotes.domain.models.quote import PriceQuote, Quote, QuoteFilter, QuoteItem, QuotesPage, QuotesSummary
from cryptoquotes.domain.models.refresh import ManualRefreshResult, RefreshResult
from cryptoquotes.domain.models.user import AuthContext, LoginResult, User

__all__ = [
    "AuthContext",
    "Coin",
    "LoginResult",
    "ManualRefreshResult",
    "PriceQuote",
    "Quote",
    "QuoteFilter",
    "QuoteItem",
    "QuotesPage",
    "QuotesSummary",
    "RefreshResult",
    "User",
]

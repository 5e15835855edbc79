"""Quote types: the persisted observation, the provider/latest projection, and search I/O."""

from datetime import datetime

from pydantic import BaseModel


class Quote(BaseModel):
    """One persisted price observation. ``price`` is a decimal string, never a float."""

    id: int | None = None
    coin_id: int
    symbol: str
    provider: str
    currency: str
    price: str
    quoted_at: datetime
    created_at: datetime | None = None

    model_config = {"from_attributes": True}


class PriceQuote(BaseModel):
    """Price as returned by a provider, or the latest persisted quote."""

    symbol: str
    currency: str
    price: str
    provider: str
    timestamp: str = ""  # RFC 3339, empty when the provider does not report one


class QuoteFilter(BaseModel):
    """Normalized repository filter; empty strings mean "any"."""

    symbol: str = ""
    provider: str = ""
    currency: str = ""
    min_price: float | None = None
    max_price: float | None = None
    from_time: datetime | None = None
    to_time: datetime | None = None
    page: int = 1
    page_size: int = 50


class QuoteItem(BaseModel):
    symbol: str
    provider: str
    currency: str
    price: str
    quoted_at: datetime


class QuotesSummary(BaseModel):
    total_items: int
    total_pages: int
    page: int
    page_size: int


class QuotesPage(BaseModel):
    items: list[QuoteItem]
    summary: QuotesSummary

from datetime import datetime

from pydantic import BaseModel


class QuoteItemResponse(BaseModel):
    symbol: str
    provider: str
    currency: str
    price: str
    quoted_at: datetime

    model_config = {"from_attributes": True}


class QuotesSummaryResponse(BaseModel):
    total_items: int
    total_pages: int
    page: int
    page_size: int

    model_config = {"from_attributes": True}


class QuotesPageResponse(BaseModel):
    items: list[QuoteItemResponse]
    summary: QuotesSummaryResponse

    model_config = {"from_attributes": True}

from pydantic import BaseModel


class PriceQuoteResponse(BaseModel):
    symbol: str
    currency: str
    price: str
    provider: str
    timestamp: str

    model_config = {"from_attributes": True}

from pydantic import BaseModel


class CoinCreateRequest(BaseModel):
    symbol: str = ""
    enabled: bool | None = None
    coingecko_id: str | None = None
    binance_symbol: str | None = None


class CoinUpdateRequest(BaseModel):
    enabled: bool | None = None
    coingecko_id: str | None = None
    binance_symbol: str | None = None


class CoinResponse(BaseModel):
    id: int
    symbol: str
    enabled: bool
    coingecko_id: str | None = None
    binance_symbol: str | None = None

    model_config = {"from_attributes": True}


class FavoriteActionResponse(BaseModel):
    ok: bool = True
    action: str
    symbol: str

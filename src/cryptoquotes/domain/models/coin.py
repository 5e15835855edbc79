from pydantic import BaseModel


class Coin(BaseModel):
    """A tracked coin with its per-provider identifiers."""

    id: int | None = None
    symbol: str
    enabled: bool = True
    coingecko_id: str | None = None  # e.g. "bitcoin"
    binance_symbol: str | None = None  # e.g. "BTCUSDT"

    model_config = {"from_attributes": True}

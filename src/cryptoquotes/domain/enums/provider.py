from enum import Enum


class ProviderName(str, Enum):
    """Market-data providers the service knows how to query."""

    BINANCE = "binance"
    COINGECKO = "coingecko"

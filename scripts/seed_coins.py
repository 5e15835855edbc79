"""Seed commonly tracked coins into the database.

Usage:
    PYTHONPATH=src python scripts/seed_coins.py

Idempotent: existing coins keep their stored identifiers; only missing ones are filled in.
"""

import asyncio
import logging
import sys

logging.basicConfig(level=logging.INFO, format="%(asctime)s %(levelname)-5s %(name)s - %(message)s")
logger = logging.getLogger("seed_coins")
logging.getLogger("sqlalchemy.engine").setLevel(logging.WARNING)

COINS = [
    {"symbol": "BTC", "coingecko_id": "bitcoin", "binance_symbol": "BTCUSDT"},
    {"symbol": "ETH", "coingecko_id": "ethereum", "binance_symbol": "ETHUSDT"},
    {"symbol": "BNB", "coingecko_id": "binancecoin", "binance_symbol": "BNBUSDT"},
    {"symbol": "SOL", "coingecko_id": "solana", "binance_symbol": "SOLUSDT"},
    {"symbol": "XRP", "coingecko_id": "ripple", "binance_symbol": "XRPUSDT"},
    {"symbol": "ADA", "coingecko_id": "cardano", "binance_symbol": "ADAUSDT"},
    {"symbol": "DOGE", "coingecko_id": "dogecoin", "binance_symbol": "DOGEUSDT"},
    {"symbol": "LINK", "coingecko_id": "chainlink", "binance_symbol": "LINKUSDT"},
]


def separator(title: str) -> None:
    print(f"\n{'=' * 60}")
    print(f"  {title}")
    print(f"{'=' * 60}\n")


async def main() -> None:
    from cryptoquotes.config import settings
    from cryptoquotes.db.session import build_engine, build_session_factory

    separator("Seed: Tracked Coins")
    print(f"Database: {settings.db_host}:{settings.db_port}/{settings.db_name}\n")

    engine = build_engine(settings.database_url, echo=False)
    session_factory = build_session_factory(engine)

    async with session_factory() as session:
        try:
            await seed(session)
            await session.commit()
        except Exception:
            await session.rollback()
            logger.exception("Seeding failed")
            sys.exit(1)

    await engine.dispose()
    separator("Seeding Complete")


async def seed(session) -> None:
    from cryptoquotes.coins.lifecycle import CoinCreateInput, CoinService
    from cryptoquotes.db.repos import CoinRepo
    from cryptoquotes.infra.price.registry import ProviderRegistry

    # No resolver: the seed list already carries known-good identifiers.
    service = CoinService(CoinRepo(session), ProviderRegistry())
    for entry in COINS:
        coin = await service.create(CoinCreateInput(**entry))
        print(f"  {coin.symbol:<6s} coingecko={coin.coingecko_id or '-':<14s} binance={coin.binance_symbol or '-'}")

    print(f"\nDone. {len(COINS)} coins upserted.")


if __name__ == "__main__":
    asyncio.run(main())

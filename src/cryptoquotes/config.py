from pydantic import field_validator
from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    db_host: str = "localhost"
    db_port: int = 5432
    db_user: str = "postgres"
    db_password: str = "postgres"
    db_name: str = "cryptoquotes"
    jwt_secret: str = "change-me"
    jwt_ttl_minutes: int = 60
    jwt_issuer: str = "cryptoquotes"
    bcrypt_rounds: int = 12
    refresh_cooldown_minutes: int = 20
    refresh_interval_seconds: int = 3600
    refresh_timeout_seconds: float = 50.0
    scheduler_enabled: bool = True
    provider_currencies: dict[str, str] = {"binance": "USDT", "coingecko": "USD"}  # provider -> settlement currency
    binance_quote_currency: str = "USDT"
    coingecko_api_key: str = ""
    http_rate_per_second: float = 10.0
    http_timeout: float = 10.0
    debug: bool = False
    log_level: str = "INFO"

    @field_validator("jwt_ttl_minutes")
    @classmethod
    def default_ttl(cls, v: int) -> int:
        return v if v > 0 else 60

    @field_validator("refresh_cooldown_minutes")
    @classmethod
    def default_cooldown(cls, v: int) -> int:
        return v if v > 0 else 20

    @field_validator("provider_currencies")
    @classmethod
    def normalize_provider_currencies(cls, v: dict[str, str]) -> dict[str, str]:
        return {name.strip().lower(): currency.strip().upper() for name, currency in v.items()}

    @property
    def database_url(self) -> str:
        return f"postgresql+asyncpg://{self.db_user}:{self.db_password}@{self.db_host}:{self.db_port}/{self.db_name}"

    class Config:
        env_file = ".env"


settings = Settings()

from pydantic import BaseModel


class RefreshResult(BaseModel):
    """Counters of one refresh cycle. Partial failure is reported here, not raised."""

    coins_processed: int = 0
    quotes_saved: int = 0
    failed: int = 0


class ManualRefreshResult(RefreshResult):
    retry_after_seconds: int = 0

from pydantic import BaseModel


class RefreshResponse(BaseModel):
    coins_processed: int
    quotes_saved: int
    failed: int
    retry_after_seconds: int = 0

    model_config = {"from_attributes": True}

from datetime import datetime

from pydantic import BaseModel


class User(BaseModel):
    id: int | None = None
    email: str
    name: str
    password_hash: str
    created_at: datetime

    model_config = {"from_attributes": True}


class AuthContext(BaseModel):
    """Identity carried by a verified bearer token."""

    user_id: int
    email: str


class LoginResult(BaseModel):
    access_token: str
    token_type: str = "Bearer"
    expires_at: datetime

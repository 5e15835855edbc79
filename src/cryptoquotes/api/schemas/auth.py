from datetime import datetime

from pydantic import BaseModel


class RegisterRequest(BaseModel):
    email: str = ""
    password: str = ""
    name: str = ""


class LoginRequest(BaseModel):
    email: str = ""
    password: str = ""


class UserResponse(BaseModel):
    id: int
    email: str
    name: str
    created_at: datetime

    model_config = {"from_attributes": True}


class LoginResponse(BaseModel):
    access_token: str
    token_type: str
    expires_at: datetime

    model_config = {"from_attributes": True}


class MeResponse(BaseModel):
    user_id: int
    email: str

    model_config = {"from_attributes": True}

from datetime import datetime
from pydantic import BaseModel
from pydantic.alias_generators import to_camel


class UserResponse(BaseModel):
    """User as returned to clients (never includes the password hash)."""
    id: int
    username: str
    email: str
    wallet: int
    created_at: datetime

    class Config:
        from_attributes = True
        alias_generator = to_camel
        populate_by_name = True


class TokenPayload(BaseModel):
    user_id: int
    username: str
    exp: int
    type: str = "access"


class RegisterRequest(BaseModel):
    username: str | None = None
    email: str | None = None
    password: str | None = None


class LoginRequest(BaseModel):
    identifier: str  # email or username
    password: str


class AuthResponse(BaseModel):
    message: str
    token: str
    user: UserResponse

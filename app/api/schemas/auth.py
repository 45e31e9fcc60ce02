from pydantic import BaseModel

from app.api.schemas.base import ValidEmail
from app.api.schemas.user import UserResponse


class LoginRequest(BaseModel):
    email: ValidEmail
    password: str


class LoginResponse(BaseModel):
    access_token: str
    token_type: str = "bearer"
    expires_in: int  # seconds
    user: UserResponse

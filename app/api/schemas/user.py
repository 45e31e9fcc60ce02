from datetime import datetime

from pydantic import BaseModel, Field

from app.api.schemas.base import CamelModel, ValidEmail
from app.core.dates import as_utc
from app.models.user import UserPublic


class CreateUserRequest(BaseModel):
    email: ValidEmail
    password: str = Field(min_length=8)


class UserResponse(CamelModel):
    id: str
    email: str
    is_admin: bool
    created_at: datetime | None = None


def user_to_response(user: UserPublic) -> UserResponse:
    return UserResponse(
        id=user.id,
        email=user.email,
        is_admin=user.is_admin,
        created_at=as_utc(user.created_at),
    )

from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from app.core.dates import utc_naive_now


def _new_id() -> str:
    return str(uuid4())


class User(SQLModel, table=True):
    __tablename__ = "users"
    id: str = Field(default_factory=_new_id, primary_key=True)
    email: str = Field(unique=True, index=True)
    hashed_password: str
    is_admin: bool = True
    created_at: datetime = Field(
        default_factory=utc_naive_now,
        sa_column=Column(DateTime, nullable=False),
    )


class UserPublic(SQLModel):
    """User projection without the password hash. created_at is absent when
    the summary comes from a session token."""

    id: str
    email: str
    is_admin: bool
    created_at: datetime | None = None

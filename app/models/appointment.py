from datetime import datetime
from uuid import uuid4

from sqlalchemy import Column, DateTime
from sqlmodel import Field, SQLModel

from app.core.dates import utc_naive_now


def _new_id() -> str:
    return str(uuid4())


class Appointment(SQLModel, table=True):
    __tablename__ = "appointments"
    id: str = Field(default_factory=_new_id, primary_key=True)
    name: str
    email: str
    # Plain TIMESTAMP WITHOUT TIME ZONE columns holding naive UTC
    appointment_date_time: datetime = Field(sa_column=Column(DateTime, index=True, nullable=False))
    notes: str | None = None
    google_event_id: str | None = None  # None means not synced to the calendar
    created_at: datetime = Field(
        default_factory=utc_naive_now,
        sa_column=Column(DateTime, nullable=False),
    )
    updated_at: datetime = Field(
        default_factory=utc_naive_now,
        sa_column=Column(DateTime, nullable=False, onupdate=utc_naive_now),
    )


class AppointmentCreate(SQLModel):
    name: str
    email: str
    appointment_date_time: datetime
    notes: str | None = None

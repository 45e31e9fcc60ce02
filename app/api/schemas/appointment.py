from datetime import datetime

from pydantic import field_validator

from app.api.schemas.base import CamelModel


class BookAppointmentRequest(CamelModel):
    name: str
    # Checked and parsed by the booking workflow so the stored email is the
    # one sent and the date-time must be an ISO 8601 string.
    email: str
    appointment_date_time: str
    notes: str | None = None

    @field_validator("name")
    @classmethod
    def name_not_blank(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("name must not be empty")
        return v


class AppointmentResponse(CamelModel):
    id: str
    name: str
    email: str
    appointment_date_time: datetime
    notes: str | None = None
    google_event_id: str | None = None
    created_at: datetime
    updated_at: datetime

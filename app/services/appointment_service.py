import logging
from datetime import datetime

from email_validator import EmailNotValidError, validate_email

from app.core.exceptions import NotFound, ValidationError
from app.models.appointment import Appointment, AppointmentCreate
from app.services.appointment_repository import AppointmentRepository
from app.services.calendar_service import CalendarSyncClient

logger = logging.getLogger(__name__)


def _parse_date_time(value: datetime | str | None) -> datetime:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValidationError("appointmentDateTime", "appointmentDateTime is required")
    try:
        return datetime.fromisoformat(value.strip())
    except ValueError:
        raise ValidationError("appointmentDateTime", "appointmentDateTime must be an ISO 8601 date-time")


def validate_booking(
    name: str | None,
    email: str | None,
    appointment_date_time: datetime | str | None,
    notes: str | None = None,
) -> AppointmentCreate:
    """Check the booking fields and parse the date-time. Raises ValidationError
    naming the first offending field."""
    if not isinstance(name, str) or not name.strip():
        raise ValidationError("name", "name must not be empty")
    if not isinstance(email, str) or not email.strip():
        raise ValidationError("email", "email is required")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise ValidationError("email", str(e))
    when = _parse_date_time(appointment_date_time)
    if notes is not None and not isinstance(notes, str):
        raise ValidationError("notes", "notes must be text")
    return AppointmentCreate(name=name, email=email, appointment_date_time=when, notes=notes)


class AppointmentService:
    """Public booking workflow plus the admin read side."""

    def __init__(self, appointments: AppointmentRepository, calendar: CalendarSyncClient):
        self._appointments = appointments
        self._calendar = calendar

    async def _sync_to_calendar(self, data: AppointmentCreate) -> str | None:
        try:
            return await self._calendar.create_event(
                data.name, data.email, data.appointment_date_time, data.notes
            )
        except Exception as e:
            logger.exception("Calendar sync raised, booking continues unsynced: %s", e)
            return None

    async def book_appointment(
        self,
        name: str,
        email: str,
        appointment_date_time: datetime | str,
        notes: str | None = None,
    ) -> Appointment:
        data = validate_booking(name, email, appointment_date_time, notes)
        google_event_id = await self._sync_to_calendar(data)
        try:
            appointment = await self._appointments.create(data, google_event_id=google_event_id)
        except Exception:
            if google_event_id:
                logger.error(
                    "Appointment not saved; calendar event %s is left without a record",
                    google_event_id,
                )
            raise
        logger.info("Appointment created: %s (calendar event: %s)", appointment.id, google_event_id)
        return appointment

    async def list_appointments(self) -> list[Appointment]:
        return await self._appointments.list_ordered()

    async def get_appointment(self, appointment_id: str) -> Appointment:
        appointment = await self._appointments.get(appointment_id)
        if appointment is None:
            raise NotFound("Appointment not found")
        return appointment

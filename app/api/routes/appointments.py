from fastapi import APIRouter, Depends, status

from app.api.deps import get_appointment_service, require_admin
from app.api.schemas.appointment import AppointmentResponse, BookAppointmentRequest
from app.core.dates import as_utc
from app.models.appointment import Appointment
from app.models.user import UserPublic
from app.services.appointment_service import AppointmentService

router = APIRouter(prefix="/appointments", tags=["appointments"])


def _to_public(a: Appointment) -> AppointmentResponse:
    """Stored datetimes are naive UTC; send them back marked as UTC."""
    return AppointmentResponse(
        id=a.id,
        name=a.name,
        email=a.email,
        appointment_date_time=as_utc(a.appointment_date_time),
        notes=a.notes,
        google_event_id=a.google_event_id,
        created_at=as_utc(a.created_at),
        updated_at=as_utc(a.updated_at),
    )


@router.post("", response_model=AppointmentResponse, status_code=status.HTTP_201_CREATED)
async def book_appointment(
    body: BookAppointmentRequest,
    service: AppointmentService = Depends(get_appointment_service),
) -> AppointmentResponse:
    appointment = await service.book_appointment(
        name=body.name,
        email=body.email,
        appointment_date_time=body.appointment_date_time,
        notes=body.notes,
    )
    return _to_public(appointment)


@router.get("", response_model=list[AppointmentResponse])
async def list_appointments(
    service: AppointmentService = Depends(get_appointment_service),
    _admin: UserPublic = Depends(require_admin),
) -> list[AppointmentResponse]:
    """Admin: every appointment, earliest first."""
    return [_to_public(a) for a in await service.list_appointments()]


@router.get("/{appointment_id}", response_model=AppointmentResponse)
async def get_appointment(
    appointment_id: str,
    service: AppointmentService = Depends(get_appointment_service),
    _admin: UserPublic = Depends(require_admin),
) -> AppointmentResponse:
    return _to_public(await service.get_appointment(appointment_id))

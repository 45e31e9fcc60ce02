import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.dates import to_naive_utc
from app.core.db import session_scope
from app.core.exceptions import PersistenceError
from app.models.appointment import Appointment, AppointmentCreate

logger = logging.getLogger(__name__)


class AppointmentRepository:
    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def create(self, data: AppointmentCreate, google_event_id: str | None = None) -> Appointment:
        appointment = Appointment(
            name=data.name,
            email=data.email,
            appointment_date_time=to_naive_utc(data.appointment_date_time),
            notes=data.notes,
            google_event_id=google_event_id,
        )
        try:
            async with session_scope(self._session_maker) as session:
                session.add(appointment)
                await session.flush()
                await session.refresh(appointment)
        except SQLAlchemyError as e:
            logger.exception("Failed to save appointment: %s", e)
            raise PersistenceError("Could not save appointment") from e
        return appointment

    async def list_ordered(self) -> list[Appointment]:
        """All appointments, earliest appointment time first."""
        async with self._session_maker() as session:
            result = await session.execute(
                select(Appointment).order_by(Appointment.appointment_date_time, Appointment.created_at)
            )
            return list(result.scalars().all())

    async def get(self, appointment_id: str) -> Appointment | None:
        async with self._session_maker() as session:
            return await session.get(Appointment, appointment_id)

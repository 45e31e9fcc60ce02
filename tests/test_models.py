from datetime import datetime

import pytest
from sqlalchemy import DateTime
from sqlalchemy.ext.asyncio import AsyncEngine

from app.main import create_app
from app.models import Appointment, AppointmentCreate, User

from conftest import FakeCalendar


@pytest.mark.parametrize(
    "table,column",
    [
        (Appointment, "appointment_date_time"),
        (Appointment, "created_at"),
        (Appointment, "updated_at"),
        (User, "created_at"),
    ],
)
def test_timestamp_columns_store_naive_values(table, column):
    col = table.__table__.c[column]
    assert isinstance(col.type, DateTime)
    assert col.type.timezone is False
    assert col.nullable is False


def test_appointment_time_is_indexed():
    names = {index.name for index in Appointment.__table__.indexes}
    assert "ix_appointments_appointment_date_time" in names


async def test_naive_utc_times_persist_unchanged(appointment_repository):
    created = await appointment_repository.create(
        AppointmentCreate(name="Ada", email="ada@x.com", appointment_date_time=datetime(2025, 3, 1, 10, 0)),
        google_event_id="evt_1",
    )

    stored = await appointment_repository.get(created.id)
    assert stored.appointment_date_time == datetime(2025, 3, 1, 10, 0)
    assert stored.appointment_date_time.tzinfo is None
    assert stored.created_at.tzinfo is None
    assert stored.updated_at.tzinfo is None


class CloseFailingCalendar(FakeCalendar):
    async def aclose(self) -> None:
        raise RuntimeError("calendar close failed")


async def test_shutdown_disposes_engine_when_calendar_close_fails(settings, monkeypatch):
    disposed = []
    original_dispose = AsyncEngine.dispose

    async def dispose(self, *args, **kwargs):
        disposed.append(self)
        await original_dispose(self, *args, **kwargs)

    monkeypatch.setattr(AsyncEngine, "dispose", dispose)
    app = create_app(settings, calendar=CloseFailingCalendar())

    with pytest.raises(RuntimeError, match="calendar close failed"):
        async with app.router.lifespan_context(app):
            pass

    assert len(disposed) == 1

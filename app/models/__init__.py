from app.models.user import User, UserPublic
from app.models.appointment import Appointment, AppointmentCreate

__all__ = [
    "User",
    "UserPublic",
    "Appointment",
    "AppointmentCreate",
]

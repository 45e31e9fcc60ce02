from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.core.exceptions import Unauthenticated
from app.models.user import UserPublic
from app.services.appointment_service import AppointmentService
from app.services.auth_service import Authenticator
from app.services.user_service import UserService

security = HTTPBearer(auto_error=False)


# Services are built once in create_app and hung off app.state
def get_authenticator(request: Request) -> Authenticator:
    return request.app.state.authenticator


def get_appointment_service(request: Request) -> AppointmentService:
    return request.app.state.appointment_service


def get_user_service(request: Request) -> UserService:
    return request.app.state.user_service


async def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    authenticator: Authenticator = Depends(get_authenticator),
) -> UserPublic:
    if not credentials or credentials.scheme.lower() != "bearer":
        raise Unauthenticated("Missing or invalid authorization header")
    return authenticator.validate_token(credentials.credentials)


async def require_admin(
    current_user: UserPublic = Depends(get_current_user),
    authenticator: Authenticator = Depends(get_authenticator),
) -> UserPublic:
    return authenticator.require_admin(current_user)

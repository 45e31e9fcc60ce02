from fastapi import APIRouter, Depends

from app.api.deps import get_authenticator
from app.api.schemas.auth import LoginRequest, LoginResponse
from app.api.schemas.user import user_to_response
from app.services.auth_service import Authenticator

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=LoginResponse)
async def login(
    body: LoginRequest,
    authenticator: Authenticator = Depends(get_authenticator),
) -> LoginResponse:
    token, user = await authenticator.login(body.email, body.password)
    return LoginResponse(
        access_token=token,
        expires_in=authenticator.access_token_expire_minutes * 60,
        user=user_to_response(user),
    )

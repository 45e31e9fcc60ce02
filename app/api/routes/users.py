from fastapi import APIRouter, Depends, status

from app.api.deps import get_user_service, require_admin
from app.api.schemas.user import CreateUserRequest, UserResponse, user_to_response
from app.services.user_service import UserService

router = APIRouter(prefix="/users", tags=["users"], dependencies=[Depends(require_admin)])


@router.post("", response_model=UserResponse, status_code=status.HTTP_201_CREATED)
async def create_admin_user(
    body: CreateUserRequest,
    service: UserService = Depends(get_user_service),
) -> UserResponse:
    return user_to_response(await service.create_admin_user(body.email, body.password))


@router.get("", response_model=list[UserResponse])
async def list_users(service: UserService = Depends(get_user_service)) -> list[UserResponse]:
    return [user_to_response(u) for u in await service.list_users()]

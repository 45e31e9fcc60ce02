import logging

from app.core.exceptions import Conflict
from app.models.user import UserPublic
from app.services.auth_service import Authenticator, user_to_public
from app.services.user_repository import UserRepository

logger = logging.getLogger(__name__)


class UserService:
    def __init__(self, users: UserRepository, authenticator: Authenticator):
        self._users = users
        self._authenticator = authenticator

    async def create_admin_user(self, email: str, password: str) -> UserPublic:
        existing = await self._users.get_by_email(email)
        if existing:
            raise Conflict("User with this email already exists")
        user = await self._users.create(
            email=email,
            hashed_password=self._authenticator.hash_password(password),
            is_admin=True,
        )
        logger.info("Admin user created: %s", user.id)
        return user_to_public(user)

    async def list_users(self) -> list[UserPublic]:
        return [user_to_public(u) for u in await self._users.list_all()]

    async def seed_admin(self, email: str, password: str) -> UserPublic:
        """Create the initial admin unless the email is already registered."""
        existing = await self._users.get_by_email(email)
        if existing:
            logger.info("Seed admin %s already exists", email)
            return user_to_public(existing)
        try:
            user = await self.create_admin_user(email, password)
        except Conflict:
            # Another process seeded the same email first
            existing = await self._users.get_by_email(email)
            if existing is None:
                raise
            return user_to_public(existing)
        logger.info("Seeded admin user: %s", email)
        return user

import logging

from sqlalchemy import select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from app.core.db import session_scope
from app.core.exceptions import Conflict, PersistenceError
from app.models.user import User

logger = logging.getLogger(__name__)


class UserRepository:
    """Credential store: user rows keyed by id, unique by email."""

    def __init__(self, session_maker: async_sessionmaker[AsyncSession]):
        self._session_maker = session_maker

    async def get_by_email(self, email: str) -> User | None:
        async with self._session_maker() as session:
            result = await session.execute(select(User).where(User.email == email))
            return result.scalar_one_or_none()

    async def get_by_id(self, user_id: str) -> User | None:
        async with self._session_maker() as session:
            return await session.get(User, user_id)

    async def create(self, email: str, hashed_password: str, is_admin: bool = True) -> User:
        user = User(email=email, hashed_password=hashed_password, is_admin=is_admin)
        try:
            async with session_scope(self._session_maker) as session:
                session.add(user)
                await session.flush()
                await session.refresh(user)
        except IntegrityError as e:
            # Unique index on email lost a race with a concurrent create
            raise Conflict("User with this email already exists") from e
        except SQLAlchemyError as e:
            logger.exception("Failed to save user: %s", e)
            raise PersistenceError("Could not save user") from e
        return user

    async def list_all(self) -> list[User]:
        async with self._session_maker() as session:
            result = await session.execute(select(User).order_by(User.created_at, User.email))
            return list(result.scalars().all())

import logging

from app.core.exceptions import Forbidden, InvalidCredentials, Unauthenticated
from app.core.security import create_access_token, decode_access_token, make_password_context
from app.models.user import User, UserPublic
from app.services.user_repository import UserRepository

logger = logging.getLogger(__name__)


def user_to_public(user: User) -> UserPublic:
    return UserPublic(
        id=user.id,
        email=user.email,
        is_admin=user.is_admin,
        created_at=user.created_at,
    )


class Authenticator:
    """Password hashing, login and bearer-token checks.

    Holds no per-request state: a session is valid exactly when its token's
    signature and expiry check out.
    """

    def __init__(
        self,
        users: UserRepository,
        secret_key: str,
        algorithm: str = "HS256",
        access_token_expire_minutes: int = 60 * 24,
        bcrypt_rounds: int = 12,
    ):
        self._users = users
        self._secret_key = secret_key
        self._algorithm = algorithm
        self.access_token_expire_minutes = access_token_expire_minutes
        self._pwd_context = make_password_context(bcrypt_rounds)

    def hash_password(self, password: str) -> str:
        return self._pwd_context.hash(password)

    def verify_password(self, plain_password: str, hashed_password: str) -> bool:
        try:
            return self._pwd_context.verify(plain_password, hashed_password)
        except (TypeError, ValueError):
            # Unrecognised or corrupt stored hash
            return False

    def issue_token(self, user: User | UserPublic) -> str:
        return create_access_token(
            user.id,
            email=user.email,
            is_admin=user.is_admin,
            secret_key=self._secret_key,
            algorithm=self._algorithm,
            expires_minutes=self.access_token_expire_minutes,
        )

    async def login(self, email: str, password: str) -> tuple[str, UserPublic]:
        user = await self._users.get_by_email(email)
        if user is None:
            # Burn a hash round so unknown emails take as long as wrong passwords
            self._pwd_context.dummy_verify()
            raise InvalidCredentials()
        if not self.verify_password(password, user.hashed_password):
            raise InvalidCredentials()
        logger.info("Login succeeded for user %s", user.id)
        return self.issue_token(user), user_to_public(user)

    def validate_token(self, token: str | None) -> UserPublic:
        if not token:
            raise Unauthenticated("Missing or invalid authorization header")
        claims = decode_access_token(token, self._secret_key, self._algorithm)
        if claims is None:
            raise Unauthenticated()
        return UserPublic(
            id=claims["sub"],
            email=claims.get("email", ""),
            is_admin=bool(claims.get("isAdmin", False)),
        )

    @staticmethod
    def require_admin(user: UserPublic) -> UserPublic:
        if not user.is_admin:
            raise Forbidden()
        return user

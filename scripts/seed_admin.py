"""
Create the initial admin user if it does not exist yet.
Run with: python -m scripts.seed_admin --email admin@example.com --password <secret>
"""

import argparse
import asyncio
import logging

from app.core.config import get_settings
from app.core.db import build_engine, create_session_maker, init_db
from app.services.auth_service import Authenticator
from app.services.user_repository import UserRepository
from app.services.user_service import UserService

logger = logging.getLogger(__name__)


async def seed(email: str, password: str) -> None:
    settings = get_settings()
    engine = build_engine(settings)
    try:
        await init_db(engine)
        users = UserRepository(create_session_maker(engine))
        authenticator = Authenticator(
            users,
            secret_key=settings.secret_key,
            algorithm=settings.algorithm,
            bcrypt_rounds=settings.bcrypt_rounds,
        )
        admin = await UserService(users, authenticator).seed_admin(email, password)
        print(f"Seeded admin user: {admin.email}")
    finally:
        await engine.dispose()


def main() -> None:
    parser = argparse.ArgumentParser(description="Seed the initial admin user")
    parser.add_argument("--email", required=True)
    parser.add_argument("--password", required=True)
    args = parser.parse_args()
    logging.basicConfig(level=logging.INFO)
    asyncio.run(seed(args.email, args.password))


if __name__ == "__main__":
    main()

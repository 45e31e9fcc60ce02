import pytest

from app.core.exceptions import Conflict
from app.services.user_service import UserService


@pytest.fixture
def service(user_repository, authenticator) -> UserService:
    return UserService(user_repository, authenticator)


async def test_create_admin_user_hashes_password(service, user_repository, authenticator):
    user = await service.create_admin_user("staff@clinic.io", "staff-pass-1")

    assert user.email == "staff@clinic.io"
    assert user.is_admin is True
    assert user.created_at is not None
    stored = await user_repository.get_by_email("staff@clinic.io")
    assert stored.hashed_password != "staff-pass-1"
    assert authenticator.verify_password("staff-pass-1", stored.hashed_password)


async def test_duplicate_email_conflicts_and_keeps_first_record(service, user_repository, authenticator):
    first = await service.create_admin_user("staff@clinic.io", "staff-pass-1")
    before = await user_repository.get_by_email("staff@clinic.io")

    with pytest.raises(Conflict):
        await service.create_admin_user("staff@clinic.io", "other-pass-2")

    after = await user_repository.get_by_email("staff@clinic.io")
    assert after.id == first.id
    assert after.hashed_password == before.hashed_password
    assert after.created_at == before.created_at
    assert authenticator.verify_password("staff-pass-1", after.hashed_password)
    assert len(await service.list_users()) == 1


async def test_repository_maps_unique_violation_to_conflict(user_repository):
    await user_repository.create(email="race@clinic.io", hashed_password="x")
    with pytest.raises(Conflict):
        await user_repository.create(email="race@clinic.io", hashed_password="y")


async def test_list_users_excludes_password_hash(service):
    await service.create_admin_user("one@clinic.io", "password-one")
    await service.create_admin_user("two@clinic.io", "password-two")

    users = await service.list_users()

    assert {u.email for u in users} == {"one@clinic.io", "two@clinic.io"}
    for u in users:
        assert "hashed_password" not in u.model_dump()


async def test_seed_admin_is_idempotent(service, authenticator):
    first = await service.seed_admin("admin@clinic.io", "first-password")
    again = await service.seed_admin("admin@clinic.io", "second-password")

    assert again.id == first.id
    assert len(await service.list_users()) == 1
    token, user = await authenticator.login("admin@clinic.io", "first-password")
    assert token
    assert user.id == first.id

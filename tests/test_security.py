from jose import jwt

from app.core.security import create_access_token, decode_access_token, make_password_context

SECRET = "unit-test-secret"


def test_password_hash_round_trip():
    ctx = make_password_context(rounds=4)
    hashed = ctx.hash("s3cret-pass")
    assert hashed != "s3cret-pass"
    assert hashed.startswith("$2")
    assert ctx.verify("s3cret-pass", hashed)
    assert not ctx.verify("wrong-pass", hashed)


def test_access_token_carries_admin_claims():
    token = create_access_token("user-1", email="a@clinic.io", is_admin=True, secret_key=SECRET)
    claims = decode_access_token(token, SECRET)
    assert claims is not None
    assert claims["sub"] == "user-1"
    assert claims["email"] == "a@clinic.io"
    assert claims["isAdmin"] is True
    assert claims["type"] == "access"


def test_expired_token_is_rejected():
    token = create_access_token(
        "user-1", email="a@clinic.io", is_admin=True, secret_key=SECRET, expires_minutes=-5
    )
    assert decode_access_token(token, SECRET) is None


def test_token_signed_with_other_secret_is_rejected():
    token = create_access_token("user-1", email="a@clinic.io", is_admin=True, secret_key="other")
    assert decode_access_token(token, SECRET) is None


def test_garbled_token_is_rejected():
    assert decode_access_token("not.a.jwt", SECRET) is None


def test_non_access_token_type_is_rejected():
    token = jwt.encode({"sub": "user-1", "type": "refresh"}, SECRET, algorithm="HS256")
    assert decode_access_token(token, SECRET) is None

import uuid

import pytest

from speedmap.services import auth


def test_token_round_trip():
    token = auth.generate_token("user-1", now_ms=1_000)
    assert token.count(".") == 2
    payload = auth.decode_token(token, now_ms=2_000)
    assert payload["sub"] == "user-1"
    assert payload["iat"] == 1_000
    assert payload["exp"] > 1_000


def test_expired_and_malformed_tokens():
    token = auth.generate_token("user-1", now_ms=0)
    payload = auth.decode_token(token, now_ms=1)
    assert auth.decode_token(token, now_ms=payload["exp"]) is None
    assert auth.decode_token("not-a-token") is None
    assert auth.decode_token("a.!!!.c") is None
    assert auth.validate_token("x.y.z") is False


@pytest.fixture
def db():
    from speedmap.db import Base, SessionLocal, engine
    from speedmap.models import app_settings, sample, tracking_session, user  # noqa: F401

    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    auth.ensure_test_user(session)
    try:
        yield session
    finally:
        session.close()


def test_login_test_user(db):
    user, token = auth.login(db, "test@example.com", "password123")
    assert user.id == auth.TEST_USER_ID
    assert auth.user_for_token(db, token).email == "test@example.com"


@pytest.mark.parametrize(
    "email,password,status",
    [
        ("not-an-email", "password123", 422),
        ("nobody@example.com", "password123", 401),
        ("test@example.com", "wrong-password", 401),
    ],
)
def test_login_rejections(db, email, password, status):
    with pytest.raises(auth.AuthError) as exc:
        auth.login(db, email, password)
    assert exc.value.status_code == status


def test_register_validation(db):
    email = f"new-{uuid.uuid4().hex[:8]}@Example.com"
    with pytest.raises(auth.AuthError) as exc:
        auth.register(db, "A", email, "secret1", "secret1")
    assert exc.value.status_code == 422
    with pytest.raises(auth.AuthError) as exc:
        auth.register(db, "Ann", email, "123", "123")
    assert exc.value.status_code == 422
    with pytest.raises(auth.AuthError) as exc:
        auth.register(db, "Ann", email, "secret1", "secret2")
    assert exc.value.status_code == 422

    user, token = auth.register(db, "Ann", email, "secret1", "secret1")
    assert user.email == email.lower()
    assert user.id.startswith("user-")
    assert auth.validate_token(token)

    with pytest.raises(auth.AuthError) as exc:
        auth.register(db, "Ann", email, "secret1", "secret1")
    assert exc.value.status_code == 409


def test_unknown_user_token(db):
    with pytest.raises(auth.AuthError):
        auth.user_for_token(db, auth.generate_token("ghost"))


def _forged(payload):
    return f"{auth._b64({'alg': 'none'})}.{auth._b64(payload)}.sig"


@pytest.mark.parametrize(
    "payload",
    [
        {"sub": "test-user-001", "exp": "later"},
        {"sub": "test-user-001", "exp": None},
        {"sub": "test-user-001", "exp": True},
        {"sub": "test-user-001"},
        {"sub": 42, "exp": 9_999_999_999_999},
        ["test-user-001"],
    ],
)
def test_forged_payloads_are_rejected(db, payload):
    token = _forged(payload)
    assert auth.decode_token(token) is None
    with pytest.raises(auth.AuthError) as exc:
        auth.user_for_token(db, token)
    assert exc.value.status_code == 401

"""Mock authentication.

Local-only and deliberately not secure: passwords are unsalted sha256,
tokens are base64 JSON with a fake signature. Good enough to tie sessions
to a user in demos.
"""
import base64
import hashlib
import json
import logging
import math
import re
import time
import uuid

from sqlalchemy.orm import Session

from speedmap.core.config import settings
from speedmap.models.user import User

logger = logging.getLogger(__name__)

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")

TEST_USER_ID = "test-user-001"
TEST_CREDENTIALS = {"email": "test@example.com", "password": "password123"}


class AuthError(Exception):
    """Raised for any rejected auth request; `status_code` maps to HTTP."""

    def __init__(self, message: str, status_code: int = 401):
        super().__init__(message)
        self.message = message
        self.status_code = status_code


def _hash_password(password: str) -> str:
    return hashlib.sha256(password.encode("utf-8")).hexdigest()


def _b64(obj) -> str:
    raw = obj if isinstance(obj, bytes) else json.dumps(obj, separators=(",", ":")).encode("utf-8")
    return base64.urlsafe_b64encode(raw).decode("ascii").rstrip("=")


def _unb64(segment: str) -> bytes:
    return base64.urlsafe_b64decode(segment + "=" * (-len(segment) % 4))


def _now_ms() -> int:
    return int(time.time() * 1000)


def generate_token(user_id: str, now_ms: int | None = None) -> str:
    now_ms = _now_ms() if now_ms is None else now_ms
    header = _b64({"alg": "HS256", "typ": "JWT"})
    payload = _b64({
        "sub": user_id,
        "iat": now_ms,
        "exp": now_ms + settings.auth_token_ttl_h * 60 * 60 * 1000,
    })
    signature = _b64(f"mock-signature-{user_id}".encode("utf-8"))
    return f"{header}.{payload}.{signature}"


def decode_token(token: str, now_ms: int | None = None) -> dict | None:
    """Payload of a well-formed, unexpired token, else None."""
    parts = token.split(".")
    if len(parts) != 3:
        return None
    try:
        payload = json.loads(_unb64(parts[1]))
    except (ValueError, TypeError):
        return None
    if not isinstance(payload, dict) or not isinstance(payload.get("sub"), str):
        return None
    exp = payload.get("exp")
    if isinstance(exp, bool) or not isinstance(exp, (int, float)) or not math.isfinite(exp):
        return None
    now_ms = _now_ms() if now_ms is None else now_ms
    if exp <= now_ms:
        return None
    return payload


def validate_token(token: str) -> bool:
    return decode_token(token) is not None


def ensure_test_user(db: Session) -> None:
    if db.query(User).filter(User.email == TEST_CREDENTIALS["email"]).first():
        return
    db.add(User(
        id=TEST_USER_ID,
        email=TEST_CREDENTIALS["email"],
        name="Test User",
        password_hash=_hash_password(TEST_CREDENTIALS["password"]),
    ))
    db.commit()
    logger.info("Seeded mock test user %s", TEST_CREDENTIALS["email"])


def login(db: Session, email: str, password: str) -> tuple[User, str]:
    if not EMAIL_RE.match(email or ""):
        raise AuthError("Invalid email format", 422)
    user = db.query(User).filter(User.email == email.lower()).first()
    if not user:
        raise AuthError("No account found with this email")
    if user.password_hash != _hash_password(password):
        raise AuthError("Incorrect password")
    return user, generate_token(user.id)


def register(db: Session, name: str, email: str, password: str, confirm_password: str) -> tuple[User, str]:
    if not name or len(name.strip()) < 2:
        raise AuthError("Name must be at least 2 characters", 422)
    if not EMAIL_RE.match(email or ""):
        raise AuthError("Invalid email format", 422)
    email = email.lower()
    if db.query(User).filter(User.email == email).first():
        raise AuthError("An account with this email already exists", 409)
    if len(password) < 6:
        raise AuthError("Password must be at least 6 characters", 422)
    if password != confirm_password:
        raise AuthError("Passwords do not match", 422)

    user = User(
        id=f"user-{uuid.uuid4().hex[:12]}",
        email=email,
        name=name.strip(),
        password_hash=_hash_password(password),
    )
    db.add(user)
    db.commit()
    db.refresh(user)
    logger.info("Registered mock user %s", email)
    return user, generate_token(user.id)


def user_for_token(db: Session, token: str) -> User:
    payload = decode_token(token)
    if payload is None:
        raise AuthError("Invalid or expired token")
    user = db.get(User, payload["sub"])
    if user is None:
        raise AuthError("Unknown user")
    return user

from datetime import datetime, timedelta, timezone

import bcrypt
import jwt

from medilearn.core.config import get_settings

ALGORITHM = "HS256"

# bcrypt hard-limit
MAX_PASSWORD_BYTES = 72


class InvalidSessionToken(Exception):
    pass


def password_bytes_ok(password: str) -> bool:
    return len(password.encode("utf-8")) <= MAX_PASSWORD_BYTES


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt()).decode("utf-8")


def verify_password(password: str, password_hash: str) -> bool:
    if not password_hash or not password_bytes_ok(password):
        return False
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("utf-8"))
    except ValueError:
        # stored value is not a bcrypt hash
        return False


def create_session_token(user_id: str) -> str:
    """
    Signed session token stored in the auth cookie (sub = user id).
    """
    settings = get_settings()
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=settings.SESSION_MAX_AGE),
    }
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def decode_session_token(token: str) -> int:
    """
    Verify signature + expiry and return the user id.

    Raw identifiers, unsigned payloads and expired tokens all raise
    InvalidSessionToken.
    """
    settings = get_settings()
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[ALGORITHM],
            options={"require": ["sub", "exp"]},
        )
        return int(payload["sub"])
    except (jwt.PyJWTError, KeyError, TypeError, ValueError) as e:
        raise InvalidSessionToken(str(e)) from e

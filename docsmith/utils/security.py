import os
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta, timezone
from typing import Optional

import jwt

JWT_SECRET_ENV = "JWT_SECRET"
JWT_EXPIRES_ENV = "JWT_EXPIRES_SECONDS"
JWT_ALGORITHM = "HS256"
DEFAULT_EXPIRES_SECONDS = 3600 * 24 * 7

PBKDF2_ITERATIONS = 260000


def _jwt_secret() -> str:
    return os.environ.get(JWT_SECRET_ENV, "supersecret")


def hash_password(password: str, salt: Optional[str] = None) -> str:
    """Return `salt$digest` for storage."""
    if not salt:
        salt = secrets.token_hex(16)
    digest = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt.encode("utf-8"), PBKDF2_ITERATIONS)
    return f"{salt}${digest.hex()}"


def verify_password(password: str, stored: str) -> bool:
    salt, _, expected = stored.partition("$")
    if not salt or not expected:
        return False
    return hmac.compare_digest(hash_password(password, salt), stored)


def generate_token(user_id: str) -> str:
    expires_in = int(os.environ.get(JWT_EXPIRES_ENV, DEFAULT_EXPIRES_SECONDS))
    now = datetime.now(timezone.utc)
    payload = {
        "userId": str(user_id),
        "iat": now,
        "exp": now + timedelta(seconds=expires_in),
    }
    return jwt.encode(payload, _jwt_secret(), algorithm=JWT_ALGORITHM)


def verify_token(token: str) -> dict:
    """Decode a token. Raises jwt.InvalidTokenError (incl. expiry) when it cannot be trusted."""
    return jwt.decode(token, _jwt_secret(), algorithms=[JWT_ALGORITHM])

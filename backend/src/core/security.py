import logging
from datetime import datetime, timedelta, timezone
from typing import Any

import bcrypt
import jwt

from config import settings
from core.errors import InternalError, UnauthorizedError

logger = logging.getLogger(__name__)

JWT_ALGORITHM = "HS256"

# Checked against when the account does not exist. Same cost as real hashes
# so both login failure paths spend the same bcrypt work.
_DUMMY_HASH = bcrypt.hashpw(
    b"not-a-real-password", bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS)
)


def hash_password(plaintext: str) -> str:
    try:
        hashed = bcrypt.hashpw(
            plaintext.encode("utf-8"),
            bcrypt.gensalt(rounds=settings.BCRYPT_ROUNDS),
        )
    except (ValueError, TypeError) as e:
        logger.error("Password hashing failed: %s", e)
        raise InternalError() from e
    return hashed.decode("utf-8")


def verify_password(hashed: str | None, plaintext: str) -> bool:
    """Constant-time bcrypt check. A missing or malformed hash never matches."""
    candidate = hashed.encode("utf-8") if hashed else _DUMMY_HASH
    try:
        matched = bcrypt.checkpw(plaintext.encode("utf-8"), candidate)
    except ValueError:
        return False
    return matched and hashed is not None


def issue_token(user_id: int, user_name: str, user_role: str) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "sub": str(user_id),
        "name": user_name,
        "role": user_role,
        "iss": settings.JWT_ISSUER,
        "aud": settings.JWT_AUDIENCE,
        "iat": now,
        "nbf": now,
        "exp": now + timedelta(hours=settings.TOKEN_TTL_HOURS),
    }
    try:
        return jwt.encode(payload, settings.JWT_SECRET, algorithm=JWT_ALGORITHM)
    except (jwt.PyJWTError, TypeError, ValueError) as e:
        logger.error("Token signing failed for user %s: %s", user_id, e)
        raise InternalError() from e


def decode_token(token: str) -> dict[str, Any]:
    try:
        return jwt.decode(
            token,
            settings.JWT_SECRET,
            algorithms=[JWT_ALGORITHM],
            audience=settings.JWT_AUDIENCE,
            issuer=settings.JWT_ISSUER,
            options={"require": ["exp", "iat", "nbf", "sub"]},
        )
    except jwt.PyJWTError as e:
        logger.info("Rejected token: %s", e)
        raise UnauthorizedError() from e

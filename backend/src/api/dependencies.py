from typing import Any

from fastapi import Depends, Header

from core.errors import BadRequestError, ForbiddenError, UnauthorizedError
from core.security import decode_token

MAX_ID = 2**31 - 1


def parse_id(raw: str) -> int:
    """Path ids must be positive integers that fit an int4 column."""
    if not (raw.isascii() and raw.isdigit()):
        raise BadRequestError("invalid id parameter")
    value = int(raw)
    if not 1 <= value <= MAX_ID:
        raise BadRequestError("invalid id parameter")
    return value


async def current_user(
    authorization: str | None = Header(default=None),
) -> dict[str, Any]:
    if not authorization:
        raise UnauthorizedError()
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise UnauthorizedError()
    return decode_token(token.strip())


async def optional_user(
    authorization: str | None = Header(default=None),
) -> dict[str, Any] | None:
    if not authorization:
        return None
    return await current_user(authorization)


async def require_admin(
    claims: dict[str, Any] = Depends(current_user),
) -> dict[str, Any]:
    if claims.get("role") != "admin":
        raise ForbiddenError()
    return claims

import logging

from fastapi import APIRouter, Depends
from fastapi.concurrency import run_in_threadpool

from api.envelope import json_body, write_json
from core.database import get_db
from core.errors import AppError, NotFoundError, UnauthorizedError, ValidationFailedError
from core.security import hash_password, issue_token, verify_password
from core.validator import validate_signup
from schemas import LoginPayload, SignUpPayload
from services.users import UserService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1/user")

INVALID_CREDENTIALS = "invalid email or password"


def _normalize_email(email: str) -> str:
    return email.strip().lower()


@router.post("/signup/")
async def sign_up(payload: SignUpPayload = Depends(json_body(SignUpPayload))):
    email = _normalize_email(payload.email)
    full_name = payload.full_name.strip()
    v = validate_signup(full_name, email, payload.password)

    async with get_db() as db:
        users = UserService(db)
        if "email" not in v.errors:
            # Lookup failures other than "no such user" propagate as errors
            # rather than being read as an available address.
            try:
                await users.get_user_by_email(email)
            except NotFoundError:
                pass
            else:
                v.add_error("email", "a user with this email address already exists")

        if not v.valid():
            raise ValidationFailedError(v.errors)

        hashed = await run_in_threadpool(hash_password, payload.password)
        user_id = await users.insert_user(full_name, email, hashed)

    logger.info("Created user %s", user_id)
    return write_json({"ok": True, "message": "user created successfully"}, status=201)


@router.post("/login/")
async def login(payload: LoginPayload = Depends(json_body(LoginPayload))):
    email = _normalize_email(payload.email)
    user = None
    try:
        async with get_db() as db:
            user = await UserService(db).get_user_by_email(email)
    except AppError as e:
        logger.info("Login lookup failed: %s", e.message)

    # Runs even without a user so both failure paths cost a bcrypt check
    matched = await run_in_threadpool(
        verify_password, user.password if user else None, payload.password
    )
    if user is None or not matched:
        raise UnauthorizedError(INVALID_CREDENTIALS)

    token = issue_token(user.id, user.full_name, user.user_type)
    logger.info("User %s logged in", user.id)
    return write_json({"ok": True, "message": "logged in successfully", "token": token})

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.base import BaseHTTPMiddleware

from api.envelope import error_json
from api.genres import router as genres_router
from api.health import router as health_router
from api.movies import router as movies_router
from api.users import router as users_router
from config import settings
from core.database import engine
from core.errors import AppError, ValidationFailedError
from models import Base

logger = logging.getLogger("uvicorn.error")

ALLOWED_HEADERS = ["Content-Type", "Authorization"]


@asynccontextmanager
async def lifespan(app: FastAPI):
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    logger.info("Movie catalog ready: env=%s version=%s", settings.ENV, settings.APP_VERSION)

    yield
    await engine.dispose()


app = FastAPI(title="Movie Catalog", version=settings.APP_VERSION, lifespan=lifespan)

# Handles preflight requests
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "PUT", "DELETE", "OPTIONS"],
    allow_headers=ALLOWED_HEADERS,
)


def with_cors(response: Response) -> Response:
    response.headers["Access-Control-Allow-Origin"] = "*"
    response.headers["Access-Control-Allow-Headers"] = ",".join(ALLOWED_HEADERS)
    return response


class CORSHeadersMiddleware(BaseHTTPMiddleware):
    """Permissive CORS headers on every response, with or without an Origin."""

    async def dispatch(self, request: Request, call_next) -> Response:
        return with_cors(await call_next(request))


app.add_middleware(CORSHeadersMiddleware)


@app.exception_handler(ValidationFailedError)
async def validation_failed_handler(request: Request, exc: ValidationFailedError):
    return JSONResponse(content=exc.errors, status_code=exc.status_code)


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError):
    return error_json(exc.message, exc.status_code)


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError):
    first = exc.errors()[0] if exc.errors() else {}
    name = first.get("loc", ["request"])[-1]
    return error_json(f"invalid {name} parameter", 400)


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = exc.detail if isinstance(exc.detail, str) else "request failed"
    return error_json(message.lower(), exc.status_code)


@app.exception_handler(Exception)
async def unhandled_error_handler(request: Request, exc: Exception):
    logger.exception("Unhandled error on %s %s", request.method, request.url.path)
    # Rendered outside the middleware stack, so CORS headers are set here too
    return with_cors(error_json(AppError.message, 500))


app.include_router(health_router)
app.include_router(movies_router)
app.include_router(genres_router)
app.include_router(users_router)

from typing import Any, TypeVar

from fastapi import Request
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from pydantic import BaseModel, ValidationError

from config import settings
from core.errors import BadRequestError

ModelT = TypeVar("ModelT", bound=BaseModel)


async def _read_body(request: Request) -> bytes:
    max_bytes = settings.MAX_BODY_BYTES
    too_large = BadRequestError(f"body must not be larger than {max_bytes} bytes")

    declared = request.headers.get("content-length", "")
    if declared.isdigit() and int(declared) > max_bytes:
        raise too_large

    body = bytearray()
    async for chunk in request.stream():
        body.extend(chunk)
        if len(body) > max_bytes:
            raise too_large
    return bytes(body)


async def read_json(request: Request, model: type[ModelT]) -> ModelT:
    """Decode exactly one JSON value from the request body into ``model``."""
    raw = await _read_body(request)
    try:
        text = raw.decode("utf-8")
    except UnicodeDecodeError as e:
        raise BadRequestError("body contains badly-formed JSON") from e
    if not text.strip():
        raise BadRequestError("body must not be empty")

    try:
        return model.model_validate_json(text)
    except ValidationError as e:
        first = e.errors()[0]
        if first["type"] == "json_invalid":
            detail = str(first.get("ctx", {}).get("error", ""))
            if detail.startswith("trailing characters"):
                raise BadRequestError("body must only contain a single JSON value") from e
            raise BadRequestError(f"body contains badly-formed JSON ({detail})") from e
        field = ".".join(str(part) for part in first["loc"]) or "body"
        raise BadRequestError(f"body contains incorrect JSON for field {field!r}") from e


def json_body(model: type[ModelT]):
    """Dependency factory: ``payload: Model = Depends(json_body(Model))``."""

    async def dependency(request: Request) -> ModelT:
        return await read_json(request, model)

    return dependency


def write_json(data: Any, status: int = 200, wrap: str | None = None) -> JSONResponse:
    if wrap:
        data = {wrap: data}
    return JSONResponse(content=jsonable_encoder(data, exclude_none=True), status_code=status)


def error_json(message: str, status: int = 400) -> JSONResponse:
    return write_json({"message": message}, status=status, wrap="error")

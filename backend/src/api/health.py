from fastapi import APIRouter

from api.envelope import write_json
from config import settings
from schemas import AppStatus

router = APIRouter(prefix="/v1")


@router.get("/status")
async def get_status():
    status = AppStatus(
        status="Available",
        environment=settings.ENV,
        version=settings.APP_VERSION,
    )
    return write_json(status, wrap="app_status")

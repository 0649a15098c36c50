import asyncio
import functools
import logging
from decimal import ROUND_DOWN, Decimal

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from config import settings
from core.errors import PersistenceError, QueryTimeoutError

logger = logging.getLogger(__name__)

DEFAULT_RATING = 1.0


def bounded(func):
    """Run a data access call under DB_QUERY_TIMEOUT and mask store errors.

    Errors already expressed as AppError (e.g. NotFoundError) pass through.
    """

    @functools.wraps(func)
    async def wrapper(self, *args, **kwargs):
        try:
            return await asyncio.wait_for(
                func(self, *args, **kwargs), timeout=settings.DB_QUERY_TIMEOUT
            )
        except asyncio.TimeoutError as e:
            logger.error("%s timed out after %ss", func.__qualname__, settings.DB_QUERY_TIMEOUT)
            raise QueryTimeoutError() from e
        except SQLAlchemyError as e:
            logger.error("%s failed: %s", func.__qualname__, e)
            raise PersistenceError() from e

    return wrapper


class Service:
    def __init__(self, db: AsyncSession):
        self.db = db


def truncate_rating(value) -> float:
    """Average rating truncated to one decimal, 1.0 when there are no ratings."""
    if value is None:
        return DEFAULT_RATING
    # Rounded to 15 significant digits first, like a numeric cast.
    return float(Decimal(f"{value:.15g}").quantize(Decimal("0.1"), rounding=ROUND_DOWN))


def image_url(path: str | None) -> str:
    if not path:
        return settings.PLACEHOLDER_IMAGE_URL
    return f"https://res.cloudinary.com/{settings.CLOUD_NAME}/image/upload/{path}"


def like_pattern(term: str) -> str:
    escaped = term.replace("\\", "\\\\").replace("%", "\\%").replace("_", "\\_")
    return f"%{escaped}%"

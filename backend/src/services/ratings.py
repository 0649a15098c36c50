import logging

from sqlalchemy import func, select, update

from core.errors import NotFoundError
from models.rating import Rating
from schemas import Rating as RatingRecord
from services.base import Service, bounded

logger = logging.getLogger(__name__)


class RatingService(Service):
    @bounded
    async def check_rating(self, movie_id: int, user_id: int) -> int:
        """Return the id of the user's existing rating for the movie."""
        rating_id = await self.db.scalar(
            select(Rating.id).where(Rating.movie_id == movie_id, Rating.user_id == user_id)
        )
        if rating_id is None:
            raise NotFoundError("rating not found")
        return rating_id

    @bounded
    async def insert_rating(self, rating: RatingRecord) -> int:
        row = Rating(movie_id=rating.movie_id, user_id=rating.user_id, rating=rating.rating)
        self.db.add(row)
        await self.db.flush()
        return row.id

    @bounded
    async def update_rating(self, rating: RatingRecord) -> int:
        stmt = (
            update(Rating)
            .where(Rating.id == rating.id)
            .values(rating=rating.rating, updated_at=func.now())
        )
        result = await self.db.execute(stmt)
        if result.rowcount == 0:
            raise NotFoundError("rating not found")
        return rating.id

    async def rate_movie(self, movie_id: int, user_id: int, value: float) -> RatingRecord:
        """Insert the user's rating, or update it when one already exists."""
        rating = RatingRecord(movie_id=movie_id, user_id=user_id, rating=value)
        try:
            rating.id = await self.check_rating(movie_id, user_id)
        except NotFoundError:
            rating.id = await self.insert_rating(rating)
            logger.info("User %s rated movie %s", user_id, movie_id)
        else:
            await self.update_rating(rating)
            logger.info("User %s updated rating %s", user_id, rating.id)
        return rating

from sqlalchemy import func, or_, select

from config import settings
from core.errors import NotFoundError
from models.comment import Comment
from models.favorite import Favorite
from models.movie import Genre, Movie, MovieGenre
from models.rating import Rating
from models.user import User
from schemas import Comment as CommentRecord
from schemas import Favorite as FavoriteRecord
from schemas import Movie as MovieRecord
from schemas import Rating as RatingRecord
from services.base import Service, bounded, image_url, like_pattern, truncate_rating

AVG_RATING = func.avg(Rating.rating)


def _with_rating():
    """Movies joined with their average rating, one row per movie."""
    return (
        select(Movie, AVG_RATING.label("rating"))
        .outerjoin(Rating, Rating.movie_id == Movie.id)
        .group_by(Movie.id)
    )


def _to_record(movie: Movie, rating, image: str | None = None) -> MovieRecord:
    return MovieRecord(
        id=movie.id,
        title=movie.title,
        description=movie.description or "",
        year=movie.year,
        release_date=movie.release_date,
        runtime=movie.runtime,
        rating=truncate_rating(rating),
        image=image if image is not None else image_url(movie.image),
    )


class MovieService(Service):
    async def _genre_maps(self, movie_ids: list[int]) -> dict[int, dict[int, str]]:
        maps: dict[int, dict[int, str]] = {movie_id: {} for movie_id in movie_ids}
        if not movie_ids:
            return maps

        stmt = (
            select(MovieGenre.movie_id, Genre.id, Genre.genre_name)
            .join(Genre, Genre.id == MovieGenre.genre_id)
            .where(MovieGenre.movie_id.in_(movie_ids))
            .order_by(Genre.id)
        )
        result = await self.db.execute(stmt)
        for movie_id, genre_id, genre_name in result.all():
            maps[movie_id][genre_id] = genre_name
        return maps

    async def _attach_genres(self, movies: list[MovieRecord]) -> list[MovieRecord]:
        maps = await self._genre_maps([m.id for m in movies])
        for movie in movies:
            movie.genres = maps[movie.id]
        return movies

    @bounded
    async def list_movies(
        self,
        search_term: str | None = None,
        offset: int | None = None,
        limit: int | None = None,
    ) -> list[MovieRecord]:
        """Search titles and descriptions, best rated first."""
        if search_term is None:
            search_term = settings.MOVIE_SEARCH_TERM
        if offset is None:
            offset = settings.MOVIE_PAGE_OFFSET
        if limit is None:
            limit = settings.MOVIE_PAGE_LIMIT

        pattern = like_pattern(search_term)
        stmt = (
            _with_rating()
            .where(
                or_(
                    Movie.title.ilike(pattern, escape="\\"),
                    Movie.description.ilike(pattern, escape="\\"),
                )
            )
            .order_by(func.coalesce(AVG_RATING, 1.0).desc(), Movie.id)
            .offset(offset)
            .limit(limit)
        )
        result = await self.db.execute(stmt)
        movies = [_to_record(movie, rating) for movie, rating in result.all()]
        return await self._attach_genres(movies)

    @bounded
    async def list_all_movies(self) -> list[MovieRecord]:
        stmt = _with_rating().order_by(Movie.id.asc())
        result = await self.db.execute(stmt)
        movies = [
            _to_record(movie, rating, image=settings.PLACEHOLDER_IMAGE_URL)
            for movie, rating in result.all()
        ]
        return await self._attach_genres(movies)

    @bounded
    async def get_movie(self, movie_id: int) -> MovieRecord:
        favorites_count = (
            select(func.count(Favorite.id))
            .where(Favorite.movie_id == Movie.id)
            .correlate(Movie)
            .scalar_subquery()
        )
        stmt = (
            select(Movie, AVG_RATING.label("rating"), favorites_count.label("favorites"))
            .outerjoin(Rating, Rating.movie_id == Movie.id)
            .where(Movie.id == movie_id)
            .group_by(Movie.id)
        )
        row = (await self.db.execute(stmt)).first()
        if row is None:
            raise NotFoundError("movie not found")

        movie, rating, total_favorites = row
        record = _to_record(movie, rating)
        record.total_favorites = total_favorites or 0

        maps = await self._genre_maps([movie.id])
        record.genres = maps[movie.id]

        record.comments = await self._comments(movie.id)
        record.total_comments = len(record.comments)
        record.ratings = await self._ratings(movie.id)
        record.favorites = await self._favorites(movie.id)
        return record

    async def _comments(self, movie_id: int) -> list[CommentRecord]:
        stmt = (
            select(Comment, User.name)
            .outerjoin(User, User.id == Comment.user_id)
            .where(Comment.movie_id == movie_id)
            .order_by(Comment.created_at.desc(), Comment.id.desc())
        )
        result = await self.db.execute(stmt)
        return [
            CommentRecord(
                id=comment.id,
                user_id=comment.user_id,
                user_name=user_name,
                comment=comment.comment,
                commented_at=comment.updated_at,
            )
            for comment, user_name in result.all()
        ]

    async def _ratings(self, movie_id: int) -> list[RatingRecord]:
        stmt = select(Rating).where(Rating.movie_id == movie_id).order_by(Rating.id)
        result = await self.db.execute(stmt)
        return [RatingRecord.model_validate(r) for r in result.scalars().all()]

    async def _favorites(self, movie_id: int) -> list[FavoriteRecord]:
        stmt = select(Favorite).where(Favorite.movie_id == movie_id).order_by(Favorite.id)
        result = await self.db.execute(stmt)
        return [
            FavoriteRecord(id=f.id, user_id=f.user_id, movie_id=f.movie_id, fav_at=f.updated_at)
            for f in result.scalars().all()
        ]

    @bounded
    async def movie_exists(self, movie_id: int) -> bool:
        found = await self.db.scalar(select(Movie.id).where(Movie.id == movie_id))
        return found is not None

    @bounded
    async def list_movies_by_genre(self, genre_id: int) -> list[MovieRecord]:
        # Grouping by movie keeps one row per movie however many
        # association and rating rows the joins produce.
        stmt = (
            _with_rating()
            .join(MovieGenre, MovieGenre.movie_id == Movie.id)
            .where(MovieGenre.genre_id == genre_id)
            .order_by(Movie.id)
        )
        result = await self.db.execute(stmt)
        movies = [_to_record(movie, rating) for movie, rating in result.all()]
        return await self._attach_genres(movies)

    @bounded
    async def list_latest_movies(self, user_id: int | None = None) -> list[MovieRecord]:
        stmt = (
            _with_rating()
            .order_by(Movie.updated_at.desc(), Movie.id.desc())
            .limit(settings.LATEST_MOVIES_LIMIT)
        )
        result = await self.db.execute(stmt)
        movies = [_to_record(movie, rating) for movie, rating in result.all()]
        await self._attach_genres(movies)

        if user_id is not None and movies:
            fav_stmt = select(Favorite.movie_id).where(
                Favorite.user_id == user_id,
                Favorite.movie_id.in_([m.id for m in movies]),
            )
            favorite_ids = set((await self.db.execute(fav_stmt)).scalars().all())
            for movie in movies:
                movie.is_favorite = movie.id in favorite_ids
        return movies

import logging
from typing import Any

from fastapi import APIRouter, Depends, Query

from api.dependencies import current_user, optional_user, parse_id
from api.envelope import json_body, write_json
from core.database import get_db
from core.errors import BadRequestError, NotFoundError, PersistenceError
from schemas import RatingPayload
from services.genres import GenreService
from services.movies import MovieService
from services.ratings import RatingService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/v1")


@router.get("/movies")
async def list_movies(
    q: str | None = Query(default=None, max_length=100),
    offset: int | None = Query(default=None, ge=0),
    limit: int | None = Query(default=None, ge=1, le=100),
):
    async with get_db() as db:
        movies = await MovieService(db).list_movies(q, offset, limit)
    return write_json(movies, wrap="movies")


@router.get("/movies/all")
async def list_all_movies():
    async with get_db() as db:
        movies = await MovieService(db).list_all_movies()
    return write_json(movies, wrap="movies")


@router.get("/movies/latest")
async def list_latest_movies(claims: dict[str, Any] | None = Depends(optional_user)):
    user_id = int(claims["sub"]) if claims else None
    async with get_db() as db:
        movies = await MovieService(db).list_latest_movies(user_id)
    return write_json(movies, wrap="movies")


@router.get("/movies/genre/{genre_id}")
async def get_all_movies_by_genre(genre_id: str):
    gid = parse_id(genre_id)
    try:
        async with get_db() as db:
            if not await GenreService(db).genre_exists(gid):
                raise NotFoundError("genre not found")
            movies = await MovieService(db).list_movies_by_genre(gid)
    except PersistenceError as e:
        logger.error("Listing movies for genre %s failed: %s", gid, e.__cause__)
        raise BadRequestError("could not fetch movies for this genre") from e
    return write_json(movies, wrap="movies")


@router.get("/movie/{movie_id}")
async def get_one_movie(movie_id: str):
    mid = parse_id(movie_id)
    try:
        async with get_db() as db:
            movie = await MovieService(db).get_movie(mid)
    except PersistenceError as e:
        logger.error("Fetching movie %s failed: %s", mid, e.__cause__)
        raise BadRequestError("could not fetch this movie") from e
    return write_json(movie, wrap="movie")


@router.post("/movie/{movie_id}/rating")
async def rate_movie(
    movie_id: str,
    claims: dict[str, Any] = Depends(current_user),
    payload: RatingPayload = Depends(json_body(RatingPayload)),
):
    mid = parse_id(movie_id)
    async with get_db() as db:
        if not await MovieService(db).movie_exists(mid):
            raise NotFoundError("movie not found")
        rating = await RatingService(db).rate_movie(mid, int(claims["sub"]), payload.rating)
    return write_json(rating, wrap="rating")

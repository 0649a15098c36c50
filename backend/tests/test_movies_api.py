from unittest.mock import AsyncMock, patch

import pytest
from fastapi.testclient import TestClient

from core.errors import NotFoundError, PersistenceError
from core.security import issue_token
from main import app
from schemas import Movie, Rating


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


def _movie(**kwargs) -> Movie:
    data = {"id": 1, "title": "The Matrix", "rating": 4.5, "genres": {3: "Science Fiction"}, "image": "img"}
    data.update(kwargs)
    return Movie(**data)


@pytest.mark.parametrize("raw", ["abc", "0", "-3", "1.5", "²", "٣", "2147483648", "99999999999"])
def test_get_one_movie_rejects_non_numeric_id(client, raw):
    resp = client.get(f"/v1/movie/{raw}")
    assert resp.status_code == 400
    assert resp.json() == {"error": {"message": "invalid id parameter"}}


def test_get_one_movie_not_found(client, mock_get_db):
    with patch("api.movies.get_db", mock_get_db), patch("api.movies.MovieService") as svc_cls:
        svc_cls.return_value.get_movie = AsyncMock(side_effect=NotFoundError("movie not found"))
        resp = client.get("/v1/movie/999")
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "movie not found"}}


def test_get_one_movie_hides_store_errors(client, mock_get_db):
    with patch("api.movies.get_db", mock_get_db), patch("api.movies.MovieService") as svc_cls:
        svc_cls.return_value.get_movie = AsyncMock(side_effect=PersistenceError())
        resp = client.get("/v1/movie/5")
    assert resp.status_code == 400
    assert resp.json() == {"error": {"message": "could not fetch this movie"}}


def test_get_one_movie_envelope(client, mock_get_db):
    movie = _movie(comments=[], total_favorites=2)
    with patch("api.movies.get_db", mock_get_db), patch("api.movies.MovieService") as svc_cls:
        svc_cls.return_value.get_movie = AsyncMock(return_value=movie)
        resp = client.get("/v1/movie/1")
    assert resp.status_code == 200
    body = resp.json()["movie"]
    assert body["id"] == 1
    assert body["rating"] == 4.5
    assert body["total_favorites"] == 2
    assert body["genres"] == {"3": "Science Fiction"}
    assert "ratings" not in body
    svc_cls.return_value.get_movie.assert_awaited_once_with(1)


def test_list_movies_uses_configured_defaults(client, mock_get_db):
    with patch("api.movies.get_db", mock_get_db), patch("api.movies.MovieService") as svc_cls:
        svc_cls.return_value.list_movies = AsyncMock(return_value=[_movie()])
        resp = client.get("/v1/movies")
    assert resp.status_code == 200
    assert [m["title"] for m in resp.json()["movies"]] == ["The Matrix"]
    svc_cls.return_value.list_movies.assert_awaited_once_with(None, None, None)


def test_list_movies_query_params(client, mock_get_db):
    with patch("api.movies.get_db", mock_get_db), patch("api.movies.MovieService") as svc_cls:
        svc_cls.return_value.list_movies = AsyncMock(return_value=[])
        resp = client.get("/v1/movies", params={"q": "matrix", "offset": 0, "limit": 10})
    assert resp.status_code == 200
    assert resp.json() == {"movies": []}
    svc_cls.return_value.list_movies.assert_awaited_once_with("matrix", 0, 10)


def test_list_movies_bad_query_param(client):
    resp = client.get("/v1/movies", params={"limit": "many"})
    assert resp.status_code == 400
    assert resp.json() == {"error": {"message": "invalid limit parameter"}}


@pytest.mark.parametrize("raw", ["drama", "99999999999"])
def test_movies_by_genre_invalid_id(client, raw):
    resp = client.get(f"/v1/movies/genre/{raw}")
    assert resp.status_code == 400
    assert resp.json() == {"error": {"message": "invalid id parameter"}}


def test_movies_by_genre_unknown_genre(client, mock_get_db):
    with (
        patch("api.movies.get_db", mock_get_db),
        patch("api.movies.GenreService") as genre_cls,
        patch("api.movies.MovieService") as svc_cls,
    ):
        genre_cls.return_value.genre_exists = AsyncMock(return_value=False)
        resp = client.get("/v1/movies/genre/77")
    assert resp.status_code == 404
    assert resp.json() == {"error": {"message": "genre not found"}}
    svc_cls.return_value.list_movies_by_genre.assert_not_called()


def test_movies_by_genre(client, mock_get_db):
    with (
        patch("api.movies.get_db", mock_get_db),
        patch("api.movies.GenreService") as genre_cls,
        patch("api.movies.MovieService") as svc_cls,
    ):
        genre_cls.return_value.genre_exists = AsyncMock(return_value=True)
        svc_cls.return_value.list_movies_by_genre = AsyncMock(return_value=[_movie()])
        resp = client.get("/v1/movies/genre/3")
    assert resp.status_code == 200
    assert resp.json()["movies"][0]["genres"] == {"3": "Science Fiction"}
    svc_cls.return_value.list_movies_by_genre.assert_awaited_once_with(3)


def test_latest_movies_anonymous(client, mock_get_db):
    with patch("api.movies.get_db", mock_get_db), patch("api.movies.MovieService") as svc_cls:
        svc_cls.return_value.list_latest_movies = AsyncMock(return_value=[])
        resp = client.get("/v1/movies/latest")
    assert resp.status_code == 200
    svc_cls.return_value.list_latest_movies.assert_awaited_once_with(None)


def test_latest_movies_with_token(client, mock_get_db):
    token = issue_token(7, "Jane Doe", "user")
    with patch("api.movies.get_db", mock_get_db), patch("api.movies.MovieService") as svc_cls:
        svc_cls.return_value.list_latest_movies = AsyncMock(return_value=[_movie(is_favorite=True)])
        resp = client.get("/v1/movies/latest", headers={"Authorization": f"Bearer {token}"})
    assert resp.status_code == 200
    assert resp.json()["movies"][0]["is_favorite"] is True
    svc_cls.return_value.list_latest_movies.assert_awaited_once_with(7)


def test_latest_movies_with_bad_token(client):
    resp = client.get("/v1/movies/latest", headers={"Authorization": "Bearer nope"})
    assert resp.status_code == 401


def test_rate_movie_requires_token(client):
    resp = client.post("/v1/movie/1/rating", json={"rating": 4})
    assert resp.status_code == 401
    assert "error" in resp.json()


def test_rate_movie_checks_token_before_body(client):
    resp = client.post(
        "/v1/movie/1/rating",
        content=b"{not json",
        headers={"Content-Type": "application/json"},
    )
    assert resp.status_code == 401


def test_rate_movie(client, mock_get_db):
    token = issue_token(7, "Jane Doe", "user")
    with (
        patch("api.movies.get_db", mock_get_db),
        patch("api.movies.MovieService") as movie_cls,
        patch("api.movies.RatingService") as rating_cls,
    ):
        movie_cls.return_value.movie_exists = AsyncMock(return_value=True)
        rating_cls.return_value.rate_movie = AsyncMock(
            return_value=Rating(id=3, movie_id=1, user_id=7, rating=4.0)
        )
        resp = client.post(
            "/v1/movie/1/rating",
            json={"rating": 4},
            headers={"Authorization": f"Bearer {token}"},
        )
    assert resp.status_code == 200
    assert resp.json() == {"rating": {"id": 3, "movie_id": 1, "user_id": 7, "rating": 4.0}}
    rating_cls.return_value.rate_movie.assert_awaited_once_with(1, 7, 4.0)


def test_rate_movie_out_of_range(client):
    token = issue_token(7, "Jane Doe", "user")
    resp = client.post(
        "/v1/movie/1/rating",
        json={"rating": 9},
        headers={"Authorization": f"Bearer {token}"},
    )
    assert resp.status_code == 400
    assert "rating" in resp.json()["error"]["message"]

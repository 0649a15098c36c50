from datetime import datetime

import pytest

from config import settings
from core.errors import NotFoundError
from factories import add_genre, add_movie, add_user, stamp
from models import Comment, Favorite
from services.movies import MovieService


@pytest.fixture
def service(db):
    return MovieService(db)


async def test_get_movie_without_ratings_defaults_to_one(db, service):
    movie = await add_movie(db, "Quiet Film")
    result = await service.get_movie(movie.id)
    assert result.rating == 1.0
    assert result.total_favorites == 0
    assert result.comments == []
    assert result.total_comments == 0
    assert result.genres == {}


async def test_get_movie_details(db, service):
    alice = await add_user(db, "Alice Smith", "alice@example.com")
    bob = await add_user(db, "Bobby Jones", "bob@example.com")
    drama = await add_genre(db, "Drama")
    crime = await add_genre(db, "Crime")
    movie = await add_movie(
        db, "The Godfather", image="posters/godfather.jpg",
        genres=[drama, crime], ratings=[(alice, 5), (bob, 4)],
    )
    db.add(Favorite(movie_id=movie.id, user_id=alice.id))
    db.add(Favorite(movie_id=movie.id, user_id=bob.id))
    older = Comment(movie_id=movie.id, user_id=alice.id, comment="Classic.")
    older.created_at = datetime(2024, 1, 1)
    newer = Comment(movie_id=movie.id, user_id=bob.id, comment="Still great.")
    newer.created_at = datetime(2024, 2, 1)
    db.add_all([older, newer])
    await db.flush()

    result = await service.get_movie(movie.id)

    assert result.rating == 4.5
    assert result.total_favorites == 2
    assert result.genres == {drama.id: "Drama", crime.id: "Crime"}
    assert [c.comment for c in result.comments] == ["Still great.", "Classic."]
    assert [c.user_name for c in result.comments] == ["Bobby Jones", "Alice Smith"]
    assert result.total_comments == 2
    assert sorted(r.rating for r in result.ratings) == [4.0, 5.0]
    assert len(result.favorites) == 2
    assert result.image == "https://res.cloudinary.com/demo-cloud/image/upload/posters/godfather.jpg"


async def test_get_movie_rating_truncated_to_one_decimal(db, service):
    users = [await add_user(db, f"User Number{i}", f"u{i}@example.com") for i in range(3)]
    movie = await add_movie(db, "Average", ratings=[(users[0], 4), (users[1], 3), (users[2], 4)])
    result = await service.get_movie(movie.id)
    # 11 / 3 = 3.666...
    assert result.rating == 3.6


async def test_get_movie_not_found(db, service):
    with pytest.raises(NotFoundError):
        await service.get_movie(12345)


async def test_placeholder_image_when_no_path(db, service):
    movie = await add_movie(db, "No Poster", image="")
    result = await service.get_movie(movie.id)
    assert result.image == settings.PLACEHOLDER_IMAGE_URL


async def test_list_movies_search_and_window(db, service):
    users = [await add_user(db, f"User Number{i}", f"u{i}@example.com") for i in range(2)]
    await add_movie(db, "The Best", ratings=[(users[0], 5)])
    await add_movie(db, "Middle Ground", description="the story", ratings=[(users[0], 4)])
    await add_movie(db, "THE LOW", ratings=[(users[0], 2)])
    await add_movie(db, "Unrelated", description="nothing here")

    everything = await service.list_movies("the", offset=0, limit=10)
    assert [m.title for m in everything] == ["The Best", "Middle Ground", "THE LOW"]
    assert all(m.rating >= 0 for m in everything)

    window = await service.list_movies("the", offset=1, limit=2)
    assert [m.title for m in window] == ["Middle Ground", "THE LOW"]


async def test_list_movies_defaults_come_from_settings(db, service):
    for title in ["the a", "the b", "the c", "the d"]:
        await add_movie(db, title)
    result = await service.list_movies()
    assert len(result) == settings.MOVIE_PAGE_LIMIT
    assert result[0].title == "the b"


async def test_list_movies_treats_wildcards_literally(db, service):
    await add_movie(db, "100% Love")
    await add_movie(db, "1000 Loves")
    result = await service.list_movies("100%", offset=0, limit=10)
    assert [m.title for m in result] == ["100% Love"]


async def test_list_all_movies_ordered_by_id_with_placeholder(db, service):
    drama = await add_genre(db, "Drama")
    first = await add_movie(db, "First", image="posters/a.jpg", genres=[drama])
    second = await add_movie(db, "Second")

    result = await service.list_all_movies()

    assert [m.id for m in result] == [first.id, second.id]
    assert result[0].genres == {drama.id: "Drama"}
    assert result[1].genres == {}
    assert {m.image for m in result} == {settings.PLACEHOLDER_IMAGE_URL}
    assert {m.rating for m in result} == {1.0}


async def test_list_movies_by_genre_only_returns_that_genre(db, service):
    users = [await add_user(db, f"User Number{i}", f"u{i}@example.com") for i in range(3)]
    drama = await add_genre(db, "Drama")
    comedy = await add_genre(db, "Comedy")
    both = await add_movie(
        db, "Dramedy", genres=[drama, comedy],
        ratings=[(users[0], 5), (users[1], 3), (users[2], 4)],
    )
    only_drama = await add_movie(db, "Tearjerker", genres=[drama])
    await add_movie(db, "Slapstick", genres=[comedy])

    result = await service.list_movies_by_genre(drama.id)

    assert [m.id for m in result] == [both.id, only_drama.id]
    for movie in result:
        assert drama.id in movie.genres
    assert result[0].genres == {drama.id: "Drama", comedy.id: "Comedy"}
    assert result[0].rating == 4.0


async def test_list_movies_by_genre_empty(db, service):
    horror = await add_genre(db, "Horror")
    assert await service.list_movies_by_genre(horror.id) == []


async def test_list_latest_movies(db, service):
    for day in range(1, 8):
        await add_movie(db, f"Movie {day}", updated_at=stamp(day))

    result = await service.list_latest_movies()

    assert [m.title for m in result] == ["Movie 7", "Movie 6", "Movie 5", "Movie 4", "Movie 3"]
    assert not any(m.is_favorite for m in result)


async def test_list_latest_movies_marks_favorites(db, service):
    user = await add_user(db)
    other = await add_user(db, "Other Person", "other@example.com")
    liked = await add_movie(db, "Liked", updated_at=stamp(2))
    await add_movie(db, "Ignored", updated_at=stamp(1))
    other_liked = await add_movie(db, "Liked By Other", updated_at=stamp(3))
    db.add(Favorite(movie_id=liked.id, user_id=user.id))
    db.add(Favorite(movie_id=other_liked.id, user_id=other.id))
    await db.flush()

    result = await service.list_latest_movies(user.id)

    flags = {m.title: m.is_favorite for m in result}
    assert flags == {"Liked By Other": False, "Liked": True, "Ignored": False}


async def test_movie_exists(db, service):
    movie = await add_movie(db, "Here")
    assert await service.movie_exists(movie.id) is True
    assert await service.movie_exists(movie.id + 100) is False


async def test_get_movie_fractional_ratings_average(db, service):
    first = await add_user(db, "First Viewer", "first@example.com")
    second = await add_user(db, "Second Viewer", "second@example.com")
    movie = await add_movie(db, "Fractions", ratings=[(first, 3.3), (second, 4.1)])
    result = await service.get_movie(movie.id)
    assert result.rating == 3.7

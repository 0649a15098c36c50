"""Seed script to populate the database with sample data for local development."""
import asyncio
import sys
from datetime import date
from pathlib import Path

sys.path.insert(0, str(Path(__file__).resolve().parent.parent / "backend" / "src"))

from core.database import engine, get_db  # noqa: E402
from core.security import hash_password  # noqa: E402
from models import Base, Comment, Favorite, Genre, Movie, MovieGenre, Rating, User  # noqa: E402


async def seed():
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    async with get_db() as db:
        # Create users
        users = [
            User(name="Admin User", email="admin@example.com", user_type="admin",
                 password=hash_password("admin12345")),
            User(name="Marie Curie", email="marie@example.com", password=hash_password("password1")),
            User(name="Paul Martin", email="paul@example.com", password=hash_password("password1")),
        ]
        for u in users:
            db.add(u)
        await db.flush()

        # Create genres
        genres = {name: Genre(genre_name=name) for name in ["Drama", "Thriller", "Science Fiction", "Comedy"]}
        for g in genres.values():
            db.add(g)
        await db.flush()

        # Create movies
        movies_data = [
            {"title": "The Shawshank Redemption", "year": 1994, "release_date": date(1994, 10, 14),
             "runtime": 142, "description": "Two imprisoned men bond over a number of years.",
             "genres": ["Drama"]},
            {"title": "The Godfather", "year": 1972, "release_date": date(1972, 3, 24),
             "runtime": 175, "description": "The aging patriarch of an organized crime dynasty.",
             "genres": ["Drama", "Thriller"]},
            {"title": "Inception", "year": 2010, "release_date": date(2010, 7, 16),
             "runtime": 148, "description": "A thief who steals corporate secrets through dreams.",
             "genres": ["Science Fiction", "Thriller"]},
            {"title": "The Grand Budapest Hotel", "year": 2014, "release_date": date(2014, 3, 28),
             "runtime": 99, "description": "A concierge and his lobby boy at a famous hotel.",
             "genres": ["Comedy"]},
        ]
        movies = []
        for md in movies_data:
            genre_names = md.pop("genres")
            m = Movie(**md)
            db.add(m)
            await db.flush()
            for name in genre_names:
                db.add(MovieGenre(movie_id=m.id, genre_id=genres[name].id))
            movies.append(m)
        await db.flush()

        # Create ratings (movie index, user index, rating)
        ratings_data = [
            (0, 1, 5), (0, 2, 4),
            (1, 1, 5), (1, 2, 5),
            (2, 1, 4), (2, 2, 3),
        ]
        for mi, ui, value in ratings_data:
            db.add(Rating(movie_id=movies[mi].id, user_id=users[ui].id, rating=value))

        db.add(Comment(movie_id=movies[0].id, user_id=users[1].id, comment="A true classic."))
        db.add(Comment(movie_id=movies[2].id, user_id=users[2].id, comment="Still thinking about the ending."))
        db.add(Favorite(movie_id=movies[1].id, user_id=users[1].id))
        await db.flush()

        print("Database seeded with sample data!")
        print(f"  {len(users)} users")
        print(f"  {len(genres)} genres")
        print(f"  {len(movies)} movies")
        print(f"  {len(ratings_data)} ratings")


if __name__ == "__main__":
    asyncio.run(seed())

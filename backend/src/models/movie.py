from datetime import date

from sqlalchemy import Date, ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class Movie(Base):
    __tablename__ = "movies"

    title: Mapped[str] = mapped_column(String(255), nullable=False)
    description: Mapped[str] = mapped_column(Text, nullable=False, default="")
    year: Mapped[int | None] = mapped_column(Integer, nullable=True)
    release_date: Mapped[date | None] = mapped_column(Date, nullable=True)
    runtime: Mapped[int | None] = mapped_column(Integer, nullable=True)
    image: Mapped[str | None] = mapped_column(String(500), nullable=True)

    genres: Mapped[list["MovieGenre"]] = relationship(back_populates="movie")
    ratings: Mapped[list["Rating"]] = relationship(back_populates="movie")  # noqa: F821
    comments: Mapped[list["Comment"]] = relationship(back_populates="movie")  # noqa: F821
    favorites: Mapped[list["Favorite"]] = relationship(back_populates="movie")  # noqa: F821


class Genre(Base):
    __tablename__ = "genres"

    genre_name: Mapped[str] = mapped_column(String(100), nullable=False)

    movies: Mapped[list["MovieGenre"]] = relationship(back_populates="genre")


class MovieGenre(Base):
    __tablename__ = "movies_genres"
    __table_args__ = (
        UniqueConstraint("movie_id", "genre_id", name="uq_movie_genre"),
    )

    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    genre_id: Mapped[int] = mapped_column(
        ForeignKey("genres.id", ondelete="CASCADE"), nullable=False, index=True
    )

    movie: Mapped["Movie"] = relationship(back_populates="genres")
    genre: Mapped["Genre"] = relationship(back_populates="movies")

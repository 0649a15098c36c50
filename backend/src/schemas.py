from datetime import date, datetime

from pydantic import BaseModel, ConfigDict, Field


# --- Genre Schemas ---
class Genre(BaseModel):
    id: int
    genre_name: str

    model_config = ConfigDict(from_attributes=True)


class GenrePayload(BaseModel):
    genre_name: str = Field(min_length=1, max_length=100)

    model_config = ConfigDict(str_strip_whitespace=True)


# --- Rating / Comment / Favorite Schemas ---
class Rating(BaseModel):
    id: int = 0
    movie_id: int
    user_id: int
    rating: float

    model_config = ConfigDict(from_attributes=True)


class RatingPayload(BaseModel):
    rating: float = Field(ge=1, le=5)


class Comment(BaseModel):
    id: int
    user_id: int
    user_name: str | None = None
    movie_id: int | None = None
    comment: str
    commented_at: datetime | None = None


class Favorite(BaseModel):
    id: int
    user_id: int
    movie_id: int
    fav_at: datetime | None = None


# --- Movie Schemas ---
class Movie(BaseModel):
    id: int
    title: str
    description: str = ""
    year: int | None = None
    release_date: date | None = None
    runtime: int | None = None
    rating: float = 1.0
    ratings: list[Rating] | None = None
    total_favorites: int = 0
    is_favorite: bool = False
    favorites: list[Favorite] | None = None
    total_comments: int = 0
    comments: list[Comment] | None = None
    genres: dict[int, str] = Field(default_factory=dict)
    image: str = ""


# --- User Schemas ---
class User(BaseModel):
    id: int
    full_name: str
    email: str
    user_type: str = "user"
    password: str | None = Field(default=None, exclude=True, repr=False)


class SignUpPayload(BaseModel):
    full_name: str = ""
    email: str = ""
    password: str = ""


class LoginPayload(BaseModel):
    email: str = ""
    password: str = ""


# --- Status ---
class AppStatus(BaseModel):
    status: str
    environment: str
    version: str

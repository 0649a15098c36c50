from models.base import Base
from models.comment import Comment
from models.favorite import Favorite
from models.movie import Genre, Movie, MovieGenre
from models.rating import Rating
from models.user import User

__all__ = ["Base", "Comment", "Favorite", "Genre", "Movie", "MovieGenre", "Rating", "User"]

"""create catalog tables

Revision ID: 3c9d2f41a7b0
Revises:
Create Date: 2026-10-17

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "3c9d2f41a7b0"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
        sa.Column("updated_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    ]


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column("name", sa.String(100), nullable=False),
        sa.Column("email", sa.String(255), nullable=False, unique=True),
        sa.Column("user_type", sa.String(20), nullable=False, server_default="user"),
        sa.Column("password", sa.String(60), nullable=False),
    )
    op.create_index("ix_users_email", "users", ["email"])

    op.create_table(
        "movies",
        sa.Column("id", sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=False, server_default=""),
        sa.Column("year", sa.Integer(), nullable=True),
        sa.Column("release_date", sa.Date(), nullable=True),
        sa.Column("runtime", sa.Integer(), nullable=True),
        sa.Column("image", sa.String(500), nullable=True),
    )

    op.create_table(
        "genres",
        sa.Column("id", sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column("genre_name", sa.String(100), nullable=False),
    )

    op.create_table(
        "movies_genres",
        sa.Column("id", sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column("movie_id", sa.Integer(), sa.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False),
        sa.Column("genre_id", sa.Integer(), sa.ForeignKey("genres.id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("movie_id", "genre_id", name="uq_movie_genre"),
    )
    op.create_index("ix_movies_genres_movie_id", "movies_genres", ["movie_id"])
    op.create_index("ix_movies_genres_genre_id", "movies_genres", ["genre_id"])

    op.create_table(
        "ratings",
        sa.Column("id", sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column("movie_id", sa.Integer(), sa.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("rating", sa.Float(), nullable=False),
        sa.UniqueConstraint("movie_id", "user_id", name="uq_rating_user"),
    )
    op.create_index("ix_ratings_movie_id", "ratings", ["movie_id"])

    op.create_table(
        "comments",
        sa.Column("id", sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("movie_id", sa.Integer(), sa.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False),
        sa.Column("comment", sa.Text(), nullable=False),
    )
    op.create_index("ix_comments_movie_id", "comments", ["movie_id"])

    op.create_table(
        "favorites",
        sa.Column("id", sa.Integer(), primary_key=True),
        *_timestamps(),
        sa.Column("user_id", sa.Integer(), sa.ForeignKey("users.id", ondelete="CASCADE"), nullable=False),
        sa.Column("movie_id", sa.Integer(), sa.ForeignKey("movies.id", ondelete="CASCADE"), nullable=False),
        sa.UniqueConstraint("movie_id", "user_id", name="uq_favorite_user"),
    )
    op.create_index("ix_favorites_movie_id", "favorites", ["movie_id"])


def downgrade() -> None:
    op.drop_table("favorites")
    op.drop_table("comments")
    op.drop_table("ratings")
    op.drop_table("movies_genres")
    op.drop_table("genres")
    op.drop_table("movies")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")

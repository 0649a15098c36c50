from sqlalchemy import ForeignKey, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class Comment(Base):
    __tablename__ = "comments"

    user_id: Mapped[int] = mapped_column(
        ForeignKey("users.id", ondelete="CASCADE"), nullable=False
    )
    movie_id: Mapped[int] = mapped_column(
        ForeignKey("movies.id", ondelete="CASCADE"), nullable=False, index=True
    )
    comment: Mapped[str] = mapped_column(Text, nullable=False)

    movie: Mapped["Movie"] = relationship(back_populates="comments")  # noqa: F821
    user: Mapped["User"] = relationship(back_populates="comments")  # noqa: F821

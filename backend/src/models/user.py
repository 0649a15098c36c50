from sqlalchemy import String
from sqlalchemy.orm import Mapped, mapped_column, relationship

from models.base import Base


class User(Base):
    __tablename__ = "users"

    name: Mapped[str] = mapped_column(String(100), nullable=False)
    email: Mapped[str] = mapped_column(String(255), unique=True, nullable=False, index=True)
    user_type: Mapped[str] = mapped_column(String(20), nullable=False, default="user")
    password: Mapped[str] = mapped_column(String(60), nullable=False)

    ratings: Mapped[list["Rating"]] = relationship(back_populates="user")  # noqa: F821
    comments: Mapped[list["Comment"]] = relationship(back_populates="user")  # noqa: F821
    favorites: Mapped[list["Favorite"]] = relationship(back_populates="user")  # noqa: F821

import logging

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError

from core.errors import NotFoundError, PersistenceError
from models.user import User
from schemas import User as UserRecord
from services.base import Service, bounded

logger = logging.getLogger(__name__)


class UserService(Service):
    @bounded
    async def get_user_by_email(self, email: str) -> UserRecord:
        user = await self.db.scalar(select(User).where(User.email == email))
        if user is None:
            raise NotFoundError("user not found")
        return UserRecord(
            id=user.id,
            full_name=user.name,
            email=user.email,
            user_type=user.user_type,
            password=user.password,
        )

    @bounded
    async def insert_user(self, name: str, email: str, hashed_password: str) -> int:
        user = User(name=name, email=email, password=hashed_password)
        self.db.add(user)
        try:
            await self.db.flush()
        except SQLAlchemyError as e:
            await self.db.rollback()
            logger.error("Inserting user failed: %s", e)
            raise PersistenceError("failed to save the credentials") from e
        return user.id

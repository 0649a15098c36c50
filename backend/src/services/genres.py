from sqlalchemy import delete, func, select, update

from core.errors import NotFoundError
from models.movie import Genre
from schemas import Genre as GenreRecord
from services.base import Service, bounded


class GenreService(Service):
    @bounded
    async def list_genres(self) -> list[GenreRecord]:
        result = await self.db.execute(select(Genre).order_by(Genre.id))
        return [GenreRecord.model_validate(g) for g in result.scalars().all()]

    @bounded
    async def get_genre(self, genre_id: int) -> GenreRecord:
        genre = await self.db.scalar(select(Genre).where(Genre.id == genre_id))
        if genre is None:
            raise NotFoundError("genre not found")
        return GenreRecord.model_validate(genre)

    @bounded
    async def genre_exists(self, genre_id: int) -> bool:
        found = await self.db.scalar(select(Genre.id).where(Genre.id == genre_id))
        return found is not None

    @bounded
    async def insert_genre(self, genre_name: str) -> int:
        genre = Genre(genre_name=genre_name)
        self.db.add(genre)
        await self.db.flush()
        return genre.id

    @bounded
    async def update_genre(self, genre_id: int, genre_name: str) -> int:
        """Rename a genre. Succeeds silently when the id matches no row."""
        stmt = (
            update(Genre)
            .where(Genre.id == genre_id)
            .values(genre_name=genre_name, updated_at=func.now())
        )
        await self.db.execute(stmt)
        await self.db.flush()
        return genre_id

    @bounded
    async def delete_genre(self, genre_id: int) -> None:
        await self.db.execute(delete(Genre).where(Genre.id == genre_id))
        await self.db.flush()

from fastapi import APIRouter, Depends

from api.dependencies import parse_id, require_admin
from api.envelope import json_body, write_json
from core.database import get_db
from schemas import GenrePayload
from services.genres import GenreService

router = APIRouter(prefix="/v1")


@router.get("/genres")
async def get_all_genres():
    async with get_db() as db:
        genres = await GenreService(db).list_genres()
    return write_json(genres, wrap="genres")


@router.get("/genre/{genre_id}")
async def get_genre(genre_id: str):
    gid = parse_id(genre_id)
    async with get_db() as db:
        genre = await GenreService(db).get_genre(gid)
    return write_json(genre, wrap="genre")


@router.post("/admin/genres", dependencies=[Depends(require_admin)])
async def create_genre(payload: GenrePayload = Depends(json_body(GenrePayload))):
    async with get_db() as db:
        new_id = await GenreService(db).insert_genre(payload.genre_name)
    return write_json({"id": new_id, "genre_name": payload.genre_name}, status=201, wrap="genre")


@router.put("/admin/genres/{genre_id}", dependencies=[Depends(require_admin)])
async def update_genre(genre_id: str, payload: GenrePayload = Depends(json_body(GenrePayload))):
    gid = parse_id(genre_id)
    async with get_db() as db:
        await GenreService(db).update_genre(gid, payload.genre_name)
    return write_json({"id": gid, "genre_name": payload.genre_name}, wrap="genre")


@router.delete("/admin/genres/{genre_id}", dependencies=[Depends(require_admin)])
async def delete_genre(genre_id: str):
    gid = parse_id(genre_id)
    async with get_db() as db:
        await GenreService(db).delete_genre(gid)
    return write_json({"ok": True, "message": "genre deleted"})

# app/routes/img.py

import os
from fastapi import APIRouter, HTTPException
from fastapi.responses import FileResponse

from app.config import settings

router = APIRouter()


def resolve_image(path: str) -> str | None:
    """Путь к файлу внутри IMG_DIR/img или None, если файла нет или путь выходит за каталог."""
    root = os.path.realpath(os.path.join(settings.IMG_DIR, "img"))
    full = os.path.realpath(os.path.join(root, path))
    if os.path.commonpath([root, full]) != root or not os.path.isfile(full):
        return None
    return full


@router.get("/{path:path}", summary="Картинка товара")
async def read_image(path: str):
    full = resolve_image(path)
    if full is None:
        raise HTTPException(status_code=404, detail="Not Found")
    return FileResponse(full, media_type="image/jpeg")

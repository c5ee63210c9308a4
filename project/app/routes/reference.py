# app/routes/reference.py

from fastapi import APIRouter, Request

from app.services.goods import get_categories, get_category_map, get_colors

router = APIRouter()


@router.get("/categories", summary="Справочник категорий из каталога")
async def read_categories(request: Request):
    return get_categories(request.state.catalog)


@router.get("/category", summary="Категории по товарам: {category: categoryRus}")
async def read_category_map(request: Request):
    return get_category_map(request.state.catalog)


@router.get("/colors", summary="Справочник цветов")
async def read_colors(request: Request):
    return get_colors(request.state.catalog)

# app/routes/goods.py

from fastapi import APIRouter, Request, status

from app.config import settings
from app.schemas.goods import GoodsPage
from app.services.goods import list_goods, get_item
from app.utils.errors import ApiError

router = APIRouter()


def dump_goods(result):
    """Товары в JSON без пустых (None) полей."""
    if isinstance(result, GoodsPage):
        return result.model_dump(exclude_none=True)
    if isinstance(result, list):
        return [item.model_dump(exclude_none=True) for item in result]
    return result.model_dump(exclude_none=True)


# ────────────── LIST ──────────────
@router.get(
    "",
    status_code=status.HTTP_200_OK,
    summary="Список товаров",
    response_description="Конверт пагинации {goods, page, pages, totalCount} или список товаров",
    responses={
        200: {"description": "Товары найдены"},
        403: {"description": "Неизвестный параметр или category без gender"},
        500: {"description": "Внутренняя ошибка сервера"},
    },
)
@router.get("/", include_in_schema=False)
async def read_goods(request: Request):
    """
    **Параметры запроса:**
    - `gender` — all или пол; без category возвращает случайный топ
    - `category` (вместе с gender), `top`, `exclude`
    - `type`, `search`, `list={id},{id}`
    - `color`, `minprice`, `maxprice`, `mindisplay`, `maxdisplay`
    - `sort=price|title`, `direction=up|down`
    - `page` (1), `count` (12 или all)
    """
    params = dict(request.query_params)
    log = request.app.state.log
    try:
        result = list_goods(request.state.catalog, params, strict=settings.GOODS_STRICT_PARAMS)
    except ApiError as e:
        await log.log_warning("goods", f"Запрос отклонён: {e.message}", {"params": params})
        raise

    size = result.totalCount if isinstance(result, GoodsPage) else len(result)
    await log.log_info("goods", "Список товаров выдан", {"params": params, "count": size}, is_console=False)
    return dump_goods(result)


# ────────────── READ ONE ──────────────
@router.get(
    "/{id}",
    status_code=status.HTTP_200_OK,
    summary="Получить товар по ID",
    responses={
        200: {"description": "Товар найден"},
        404: {"description": "Товар не найден"},
    },
)
async def read_item(id: str, request: Request):
    try:
        item = get_item(request.state.catalog, id)
    except ApiError as e:
        await request.app.state.log.log_warning("goods", e.message, {"id": id})
        raise
    return dump_goods(item)

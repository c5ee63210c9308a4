# app/routes/order.py

from fastapi import APIRouter, Request, status
from fastapi.responses import JSONResponse

from app.schemas.order import OrderCreate
from app.services.order import create_order_service, read_order_service
from app.utils.errors import ApiError

router = APIRouter()

# ────────────── CREATE ──────────────
@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
    summary="Оформить заказ",
    response_description="Возвращает созданный заказ, адрес заказа в заголовке Location",
    responses={
        201: {"description": "Заказ успешно создан"},
        400: {"description": "Пустой заказ или товар не найден в каталоге"},
        500: {"description": "Некорректное тело запроса или ошибка сохранения"},
    },
)
async def create_order(request: Request, order: OrderCreate):
    try:
        db_order = await create_order_service(order, request)
    except ApiError as e:
        # ошибка записи журнала уже залогирована в сервисе
        if e.status_code < 500:
            await request.app.state.log.log_warning("order", f"Заказ отклонён: {e.message}")
        raise

    return JSONResponse(
        status_code=status.HTTP_201_CREATED,
        content=db_order.to_json(),
        headers={
            "Location": f"api/order/{db_order.id}",
            "Access-Control-Expose-Headers": "Location",
        },
    )


# ────────────── READ ONE ──────────────
@router.get(
    "/{id}",
    status_code=status.HTTP_200_OK,
    summary="Получить заказ по ID",
    responses={
        200: {"description": "Заказ найден и возвращён"},
        404: {"description": "Заказ не найден"},
    },
)
async def read_order(id: str, request: Request):
    order = await read_order_service(id, request)
    return order.to_json()

# app/services/order.py

import random
from datetime import datetime, timezone
from email.utils import format_datetime
from fastapi import Request

from app.schemas.goods import Catalog
from app.schemas.order import Order, OrderCreate
from app.utils.errors import ApiError, ErrorKind

ORDER_ID_DIGITS = 3


def generate_order_id(taken: set[str], digits: int = ORDER_ID_DIGITS) -> str:
    """
    Короткий случайный числовой id, не совпадающий с занятыми.
    Если все id этой длины заняты, длина увеличивается.
    """
    while sum(1 for i in taken if len(i) == digits and i.isdigit()) >= 10 ** digits:
        digits += 1
    while True:
        candidate = f"{random.randrange(10 ** digits):0{digits}d}"
        if candidate not in taken:
            return candidate


def format_created_at(now: datetime | None = None) -> str:
    """Время в формате GMT: 'Sun, 18 Oct 2026 10:00:00 GMT'."""
    now = now or datetime.now(timezone.utc)
    return format_datetime(now.astimezone(timezone.utc), usegmt=True)


def calc_total_price(catalog: Catalog, order: OrderCreate):
    total = 0
    for line in order.goods:
        product = catalog.find(line.id)
        if product is None:
            raise ApiError(ErrorKind.UNKNOWN_PRODUCT, f"Item Not Found: {line.id}")
        total += line.count * product.price
    return total


def create_order(
    catalog: Catalog, order: OrderCreate, taken_ids: set[str], now: datetime | None = None
) -> Order:
    """
    Собирает заказ: проверка на пустоту, сумма по ценам каталога, id и время создания.
    """
    if not order.goods:
        raise ApiError(ErrorKind.EMPTY_ORDER)

    return Order(
        **order.model_dump(exclude={"goods"}),
        goods=order.goods,
        id=generate_order_id(taken_ids),
        createdAt=format_created_at(now),
        totalPrice=calc_total_price(catalog, order),
    )


async def create_order_service(order: OrderCreate, request: Request) -> Order:
    """
    Создание нового заказа и сохранение журнала заказов.
    """
    catalog: Catalog = request.state.catalog
    store = request.app.state.orders
    log = request.app.state.log

    try:
        db_order = await store.add(lambda taken: create_order(catalog, order, taken))
    except ApiError:
        raise
    except Exception as e:
        await log.log_error("order", f"Журнал заказов не сохранён: {str(e)}", {"path": store.path})
        raise ApiError(ErrorKind.SERVER_ERROR)

    await log.log_info("order", "Заказ создан", {"id": db_order.id, "totalPrice": db_order.totalPrice})
    return db_order


async def read_order_service(id: str, request: Request) -> Order:
    """
    Чтение заказа по ID.
    """
    store = request.app.state.orders
    log = request.app.state.log

    db_order = store.find(id)
    if db_order is None:
        await log.log_error("order", "Заказ не найден", {"id": id})
        raise ApiError(ErrorKind.NOT_FOUND, "Order Not Found")

    await log.log_info("order", "Заказ загружен", {"id": id})
    return db_order

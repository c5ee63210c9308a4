# app/services/store.py

import os
import json
import asyncio
import aiofiles
from typing import Callable

from app.schemas.goods import Catalog
from app.schemas.order import Order


async def read_json(path: str, default=None):
    """Асинхронно читает JSON-файл. Пустой файл → default."""
    async with aiofiles.open(path, mode="r", encoding="utf-8") as f:
        text = await f.read()
    if not text.strip():
        return default
    return json.loads(text)


async def write_json(path: str, data) -> None:
    """Пишет JSON во временный файл и атомарно заменяет исходный."""
    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)
    tmp_path = f"{path}.tmp"
    try:
        async with aiofiles.open(tmp_path, mode="w", encoding="utf-8") as f:
            await f.write(json.dumps(data, ensure_ascii=False))
        os.replace(tmp_path, path)
    except Exception:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise


class CatalogStore:
    """
    Каталог товаров из JSON-файла.
    При reload=True файл перечитывается на каждый запрос, иначе кешируется после load().
    """

    def __init__(self, path: str, reload: bool = False):
        self.path = path
        self.reload = reload
        self.catalog: Catalog | None = None

    async def load(self) -> Catalog:
        if not os.path.exists(self.path):
            raise FileNotFoundError(f"Файл каталога не найден: {self.path}")
        document = await read_json(self.path, default=[])
        self.catalog = Catalog.from_document(document)
        return self.catalog

    async def get(self) -> Catalog:
        if self.reload or self.catalog is None:
            return await self.load()
        return self.catalog


class OrderStore:
    """
    Журнал заказов: только добавление, после каждого добавления файл перезаписывается целиком.
    Добавление и запись идут под одним lock, порядок записи совпадает с порядком добавления.
    """

    def __init__(self, path: str):
        self.path = path
        self.orders: list[Order] = []
        self.lock = asyncio.Lock()

    async def load(self) -> list[Order]:
        if os.path.exists(self.path):
            document = await read_json(self.path, default=[])
            self.orders = [Order.model_validate(item) for item in document]
        else:
            self.orders = []
        return self.orders

    def ids(self) -> set[str]:
        return {order.id for order in self.orders}

    def find(self, order_id: str) -> Order | None:
        return next((order for order in self.orders if order.id == order_id), None)

    def append(self, order: Order) -> None:
        self.orders.append(order)

    async def persist(self) -> None:
        await write_json(self.path, [order.to_json() for order in self.orders])

    async def add(self, build: Callable[[set[str]], Order]) -> Order:
        """
        Создаёт заказ через build(занятые id), добавляет и сохраняет журнал.
        При ошибке записи заказ убирается из памяти.
        """
        async with self.lock:
            order = build(self.ids())
            self.append(order)
            try:
                await self.persist()
            except Exception:
                self.orders.remove(order)
                raise
        return order

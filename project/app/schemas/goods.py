# app/schemas/goods.py

from pydantic import BaseModel, ConfigDict, Field
from typing import Any, Optional, Union

Number = Union[int, float]

# ────────────── Товар ──────────────
class Product(BaseModel):
    """
    Товар каталога. Неизменяем после загрузки.
    Лишние поля (categoryRus, discountPrice и т.п.) сохраняются как есть.
    """
    id: str
    title: str
    price: Number
    category: str = ""
    type: Optional[str] = None
    gender: Optional[str] = None
    top: Optional[bool] = None
    description: Union[str, list[str]] = ""
    image: str = ""
    color: Optional[str] = None
    display: Optional[Number] = None

    model_config = ConfigDict(frozen=True, extra="allow")

    def description_texts(self) -> list[str]:
        """Описание построчно: строка или каждый элемент списка отдельно."""
        if isinstance(self.description, list):
            return self.description
        return [self.description]

# ────────────── Каталог ──────────────
class Catalog(BaseModel):
    goods: tuple[Product, ...] = ()
    categories: Any = Field(default_factory=list)
    colors: Any = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @classmethod
    def from_document(cls, document: Any) -> "Catalog":
        """Документ каталога: объект {goods, categories, colors} или просто массив товаров."""
        if isinstance(document, list):
            return cls(goods=document)
        return cls.model_validate(document)

    def find(self, item_id: str) -> Optional[Product]:
        return next((item for item in self.goods if item.id == item_id), None)

# ────────────── Конверт пагинации ──────────────
class GoodsPage(BaseModel):
    goods: list[Product]
    page: int
    pages: int
    totalCount: int

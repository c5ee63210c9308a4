# app/schemas/order.py

from pydantic import AliasChoices, BaseModel, ConfigDict, Field
from typing import Optional, Union

class OrderItem(BaseModel):
    id: str
    count: int = 1

class OrderBase(BaseModel):
    fio: Optional[str] = None
    address: Optional[str] = None
    phone: Optional[str] = None
    email: Optional[str] = None
    delivery: bool = False
    # клиент присылает позиции в поле "order"
    goods: list[OrderItem] = Field(
        default_factory=list,
        validation_alias=AliasChoices("order", "goods"),
        serialization_alias="order",
    )

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

# ────────────── Схема для CREATE ──────────────
class OrderCreate(OrderBase):
    pass  # id, createdAt и totalPrice от клиента не принимаются

# ────────────── Схема для RESPONSE / журнала ──────────────
class Order(OrderBase):
    id: str
    createdAt: str
    totalPrice: Optional[Union[int, float]] = None  # null в журналах старого сервера

    def to_json(self) -> dict:
        return self.model_dump(by_alias=True)

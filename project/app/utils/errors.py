# app/utils/errors.py

"""
Ошибки API.
Каждая ошибка — вид (ErrorKind) с HTTP-статусом и сообщением по умолчанию.
Перевод в ответ {"message": ...} делает обработчик в app/main.py.
"""

from enum import Enum
from typing import Optional


class ErrorKind(Enum):
    INVALID_PARAMS = (403, "Fail Params")
    MISSING_DEPENDENCY = (403, "Not gender params")
    NOT_FOUND = (404, "Item Not Found")
    EMPTY_ORDER = (400, "Order is empty")
    UNKNOWN_PRODUCT = (400, "Item Not Found")
    SERVER_ERROR = (500, "Server Error")

    @property
    def status_code(self) -> int:
        return self.value[0]

    @property
    def default_message(self) -> str:
        return self.value[1]


class ApiError(Exception):
    """Ошибка с кодом ответа и сообщением для клиента."""

    def __init__(self, kind: ErrorKind, message: Optional[str] = None):
        self.kind = kind
        self.message = message or kind.default_message
        super().__init__(self.message)

    @property
    def status_code(self) -> int:
        return self.kind.status_code

    def to_dict(self) -> dict:
        return {"message": self.message}

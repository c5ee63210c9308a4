# app/services/goods.py

"""
Выборка товаров из каталога.

Запрос /api/goods проходит цепочку чистых стадий, каждая принимает и
возвращает кортеж товаров:

    gender → category → type → search → list → color/price/display → sort

search и list начинают заново от полного каталога, остальные стадии сужают
текущую выборку. Без category стадия gender возвращает перемешанный топ
сразу, следующие стадии не выполняются.
"""

import math
import random
from typing import Mapping, Sequence, Union

from app.schemas.goods import Catalog, GoodsPage, Product
from app.utils.errors import ApiError, ErrorKind

Goods = tuple[Product, ...]

ALLOWED_PARAMS = frozenset({
    "page", "count", "gender", "category", "type", "search", "list", "top", "exclude",
    "color", "minprice", "maxprice", "mindisplay", "maxdisplay", "sort", "direction",
})

DEFAULT_COUNT = 12
GENDER_ALL_COUNT = 4
GENDER_COUNT = 8


# ==========================================================
# ВСПОМОГАТЕЛЬНЫЕ
# ==========================================================
def validate_params(params: Mapping[str, str]) -> None:
    unknown = set(params) - ALLOWED_PARAMS
    if unknown:
        raise ApiError(ErrorKind.INVALID_PARAMS)


def to_positive_int(value, default: int) -> int:
    """Число > 0 из строки, иначе default."""
    try:
        number = int(value)
    except (TypeError, ValueError):
        return default
    return number if number > 0 else default


def to_number(value):
    """Конечное число из строки, иначе None (nan/inf тоже None)."""
    try:
        number = float(value)
    except (TypeError, ValueError):
        return None
    return number if math.isfinite(number) else None


def shuffle(goods: Sequence[Product]) -> Goods:
    """Случайная перестановка (Fisher–Yates), исходная последовательность не меняется."""
    shuffled = list(goods)
    random.shuffle(shuffled)
    return tuple(shuffled)


def top_shuffled(goods: Sequence[Product], count: int) -> Goods:
    return shuffle([item for item in goods if item.top])[:count]


def pagination(data: Sequence[Product], page: int, count: int) -> GoodsPage:
    start = (page - 1) * count
    end = page * count
    return GoodsPage(
        goods=list(data[start:end]),
        page=page,
        pages=math.ceil(len(data) / count),
        totalCount=len(data),
    )


# ==========================================================
# СТАДИИ ФИЛЬТРАЦИИ
# ==========================================================
def filter_gender(data: Goods, gender: str) -> tuple[Goods, int]:
    """Возвращает выборку и размер страницы по умолчанию для этого gender."""
    if gender == "all":
        return data, GENDER_ALL_COUNT
    return tuple(item for item in data if item.gender == gender), GENDER_COUNT


def filter_category(data: Goods, category: str, top: bool, exclude: str | None, count: int) -> Goods:
    category = category.strip().lower()

    def in_category(item: Product) -> bool:
        return item.category.lower() == category

    if top:
        data = top_shuffled(
            [item for item in data if in_category(item) and item.id != exclude],
            count,
        )
    return tuple(item for item in data if in_category(item))


def filter_type(data: Goods, type_: str) -> Goods:
    return tuple(item for item in data if item.type == type_)


def filter_search(catalog: Catalog, search: str) -> Goods:
    search = search.replace("+", " ").strip().lower()
    return tuple(
        item for item in catalog.goods
        if search in item.title.lower()
        or any(search in text.lower() for text in item.description_texts())
    )


def filter_list(catalog: Catalog, list_param: str) -> Goods:
    """Товары из списка id через запятую, в обратном порядке списка."""
    ids = [part.strip().lower() for part in list_param.split(",") if part.strip()]
    by_id = {item.id.lower(): item for item in catalog.goods}
    found = []
    for item_id in dict.fromkeys(ids):
        if item_id in by_id:
            found.append(by_id[item_id])
    return tuple(reversed(found))


def filter_color(data: Goods, color: str) -> Goods:
    colors = {part.strip() for part in color.split(",") if part.strip()}
    return tuple(item for item in data if item.color in colors)


def filter_range(data: Goods, field: str, low=None, high=None) -> Goods:
    result = []
    for item in data:
        value = getattr(item, field)
        if value is None:
            continue
        if low is not None and value < low:
            continue
        if high is not None and value > high:
            continue
        result.append(item)
    return tuple(result)


def sort_goods(data: Goods, sort: str | None, direction: str | None = "up") -> Goods:
    if sort == "price":
        key = lambda item: item.price
    elif sort == "title":
        key = lambda item: item.title.lower()
    else:
        return data
    return tuple(sorted(data, key=key, reverse=direction == "down"))


# ==========================================================
# ОПЕРАЦИИ
# ==========================================================
def list_goods(
    catalog: Catalog, params: Mapping[str, str], strict: bool = True
) -> Union[GoodsPage, list[Product]]:
    """
    Список товаров по параметрам запроса.
    Возвращает конверт пагинации или плоский список (топ по gender, count=all).
    """
    if strict:
        validate_params(params)

    page = to_positive_int(params.get("page"), 1)
    count = to_positive_int(params.get("count"), DEFAULT_COUNT)
    data: Goods = catalog.goods

    gender = params.get("gender")
    category = params.get("category")

    if gender:
        data, gender_count = filter_gender(data, gender)
        count = to_positive_int(params.get("count"), gender_count)
        if not category:
            return list(top_shuffled(data, count))

    if category:
        if not gender:
            raise ApiError(ErrorKind.MISSING_DEPENDENCY)
        data = filter_category(data, category, bool(params.get("top")), params.get("exclude"), count)

    if params.get("type"):
        data = filter_type(data, params["type"])

    if params.get("search"):
        data = filter_search(catalog, params["search"])

    if "list" in params:
        data = filter_list(catalog, params["list"] or "")

    if params.get("color"):
        data = filter_color(data, params["color"])

    for field in ("price", "display"):
        low = to_number(params.get(f"min{field}"))
        high = to_number(params.get(f"max{field}"))
        if low is not None or high is not None:
            data = filter_range(data, field, low, high)

    data = sort_goods(data, params.get("sort"), params.get("direction") or "up")

    if params.get("count") == "all":
        return list(data)

    return pagination(data, page, count)


def get_item(catalog: Catalog, item_id: str) -> Product:
    item = catalog.find(item_id)
    if item is None:
        raise ApiError(ErrorKind.NOT_FOUND)
    return item


def get_categories(catalog: Catalog):
    return catalog.categories


def get_colors(catalog: Catalog):
    return catalog.colors


def get_category_map(catalog: Catalog) -> dict:
    """{category: categoryRus} по всем товарам каталога."""
    category = {}
    for item in catalog.goods:
        category[item.category] = getattr(item, "categoryRus", None)
    return category

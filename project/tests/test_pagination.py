import math
import pytest

from app.services.goods import pagination, to_positive_int


@pytest.mark.parametrize("size", [0, 1, 5, 12, 13, 40])
@pytest.mark.parametrize("count", [1, 4, 12])
@pytest.mark.parametrize("page", [1, 2, 3, 10])
def test_page_length_and_pages(catalog, size, count, page):
    data = [catalog.goods[i % len(catalog.goods)] for i in range(size)]
    result = pagination(data, page, count)

    assert len(result.goods) == min(count, max(0, size - (page - 1) * count))
    assert result.pages == math.ceil(size / count)
    assert result.totalCount == size
    assert result.page == page


def test_second_page_slice(catalog):
    result = pagination(catalog.goods, 2, 4)
    assert [item.id for item in result.goods] == ["5", "6"]


@pytest.mark.parametrize("value, expected", [
    (None, 12), ("", 12), ("abc", 12), ("all", 12), ("0", 12), ("-3", 12), ("5", 5),
])
def test_to_positive_int(value, expected):
    assert to_positive_int(value, 12) == expected

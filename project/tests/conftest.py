import os
import json
import tempfile

# логи тестов пишутся во временный каталог, без вывода в консоль
os.environ.setdefault("LOG_DIR", tempfile.mkdtemp(prefix="catalog-log-"))
os.environ.setdefault("LOG_PRINT", "0")

import pytest
from fastapi.testclient import TestClient

from app.config import settings
from app.schemas.goods import Catalog

GOODS = [
    {"id": "1", "title": "Blue Shirt", "price": 100, "category": "shirts", "type": "casual",
     "gender": "men", "top": True, "description": "Cotton shirt", "image": "1.jpg",
     "color": "blue", "display": 10, "categoryRus": "Рубашки"},
    {"id": "2", "title": "Red Dress", "price": 50, "category": "dresses", "type": "evening",
     "gender": "women", "top": True, "description": "Silk dress for parties", "image": "2.jpg",
     "color": "red", "display": 20, "categoryRus": "Платья"},
    {"id": "3", "title": "White Shirt", "price": 70, "category": "shirts", "type": "office",
     "gender": "men", "top": False, "description": "Formal", "image": "3.jpg",
     "color": "white", "display": 15, "categoryRus": "Рубашки"},
    {"id": "4", "title": "Green Dress", "price": 120, "category": "dresses", "type": "casual",
     "gender": "women", "top": False, "description": "Summer SHIRT-dress", "image": "4.jpg",
     "color": "green", "display": 5, "categoryRus": "Платья"},
    {"id": "5", "title": "Black Shirt", "price": 90, "category": "shirts", "type": "casual",
     "gender": "men", "top": True, "description": "Linen", "image": "5.jpg",
     "color": "black", "display": 25, "categoryRus": "Рубашки"},
    {"id": "6", "title": "Socks", "price": 10, "category": "accessories", "type": "casual",
     "gender": "men", "top": True, "description": "Wool socks", "image": "6.jpg",
     "color": "black", "display": 1, "categoryRus": "Аксессуары"},
]

DOCUMENT = {
    "goods": GOODS,
    "categories": {"men": ["shirts", "accessories"], "women": ["dresses"]},
    "colors": [{"title": "blue", "code": "#00f"}, {"title": "red", "code": "#f00"}],
}


@pytest.fixture
def catalog():
    return Catalog.from_document(DOCUMENT)


@pytest.fixture
def catalog_file(tmp_path):
    path = tmp_path / "db.json"
    path.write_text(json.dumps(DOCUMENT, ensure_ascii=False), encoding="utf-8")
    return path


@pytest.fixture
def orders_file(tmp_path):
    path = tmp_path / "order.json"
    path.write_text("[]", encoding="utf-8")
    return path


@pytest.fixture
def img_dir(tmp_path):
    (tmp_path / "img").mkdir()
    (tmp_path / "img" / "1.jpg").write_bytes(b"\xff\xd8\xff\xe0jpeg-bytes")
    return tmp_path


@pytest.fixture
def client(monkeypatch, catalog_file, orders_file, img_dir):
    monkeypatch.setattr(settings, "CATALOG_PATH", str(catalog_file))
    monkeypatch.setattr(settings, "ORDERS_PATH", str(orders_file))
    monkeypatch.setattr(settings, "IMG_DIR", str(img_dir))
    monkeypatch.setattr(settings, "CATALOG_RELOAD", False)
    monkeypatch.setattr(settings, "GOODS_STRICT_PARAMS", True)

    from app.main import app
    with TestClient(app, raise_server_exceptions=False) as test_client:
        yield test_client

# app/main.py

from fastapi import FastAPI, Request, Response
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
import uvicorn
from dotenv import load_dotenv
from contextlib import asynccontextmanager

from app.config import settings
from app.utils.log import Log
from app.utils.errors import ApiError, ErrorKind
from app.services.store import CatalogStore, OrderStore
from app.middleware.catalog_middleware import CatalogMiddleware

import os
import multiprocessing

# --- загрузка переменных окружения ---
load_dotenv()

# --- sync логгер для раннего старта ---
boot_log = Log()
if os.environ.get("RUN_MAIN") == "true" or multiprocessing.current_process().name == "MainProcess":
    boot_log.log_info_sync(target="startup", message="Импорты main.py выполнены", is_console=False)

ENDPOINTS = [
    "GET /api/goods - список товаров с пагинацией",
    "GET /api/goods/{id} - товар по ID",
    "GET /api/categories - справочник категорий",
    "GET /api/category - категории по товарам",
    "GET /api/colors - справочник цветов",
    "POST /api/order - оформить заказ {fio, address?, phone, email, delivery, order: [{id, count}]}",
    "GET /api/order/{id} - заказ по ID",
]

# ────────────── Lifespan ──────────────
@asynccontextmanager
async def lifespan(app: FastAPI):
    boot_log.log_info_sync(target="startup", message="lifespan: startup начат")

    # Каталог и журнал заказов
    app.state.catalog_store = CatalogStore(settings.CATALOG_PATH, reload=settings.CATALOG_RELOAD)
    catalog = await app.state.catalog_store.load()
    boot_log.log_info_sync(target="startup", message="Каталог загружен", data={
        "path": settings.CATALOG_PATH,
        "goods": len(catalog.goods),
        "reload": settings.CATALOG_RELOAD,
    })

    app.state.orders = OrderStore(settings.ORDERS_PATH)
    orders = await app.state.orders.load()
    boot_log.log_info_sync(target="startup", message="Журнал заказов загружен", data={
        "path": settings.ORDERS_PATH,
        "orders": len(orders),
    })

    app.state.log = Log()
    await app.state.log.log_info(target="startup", message="Доступные методы", data={"endpoints": ENDPOINTS})

    yield

    # shutdown
    await app.state.log.log_info(target="shutdown", message="Остановка приложения")
    await app.state.log.shutdown()
    boot_log.log_info_sync(target="shutdown", message="Log корректно завершён")

# ────────────── Создаём FastAPI приложение ──────────────
app = FastAPI(title="Catalog & Order API", lifespan=lifespan)

# каталог в request.state.catalog
app.add_middleware(CatalogMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["GET", "POST", "OPTIONS"],
    allow_headers=["Content-Type"],
    expose_headers=["Location"],
)

CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Methods": "GET, POST, OPTIONS",
    "Access-Control-Allow-Headers": "Content-Type",
}


# любой OPTIONS (в т.ч. CORS-preflight): пустой ответ 200 с заголовками CORS.
# Регистрируется последним, поэтому внешний слой, до CORSMiddleware
@app.middleware("http")
async def options_any(request: Request, call_next):
    if request.method == "OPTIONS":
        return Response(status_code=200, headers=CORS_HEADERS)
    return await call_next(request)

# ────────────── Ошибки ──────────────
@app.exception_handler(ApiError)
async def api_error_handler(request: Request, exc: ApiError):
    return JSONResponse(status_code=exc.status_code, content=exc.to_dict())


@app.exception_handler(StarletteHTTPException)
async def http_error_handler(request: Request, exc: StarletteHTTPException):
    message = "Not Found" if exc.status_code == 404 else str(exc.detail)
    return JSONResponse(status_code=exc.status_code, content={"message": message}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    await request.app.state.log.log_error("request", "Некорректное тело запроса", {
        "path": request.url.path,
        "errors": [str(err.get("msg")) for err in exc.errors()],
    })
    error = ApiError(ErrorKind.SERVER_ERROR)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())


@app.exception_handler(Exception)
async def server_error_handler(request: Request, exc: Exception):
    await request.app.state.log.log_error("server", f"{type(exc).__name__}: {str(exc)}", {"path": request.url.path})
    error = ApiError(ErrorKind.SERVER_ERROR)
    return JSONResponse(status_code=error.status_code, content=error.to_dict())

# ────────────── Подключение роутов ──────────────
from app.routes import goods, order, reference, img

app.include_router(goods.router, prefix="/api/goods", tags=["goods"])
app.include_router(order.router, prefix="/api/order", tags=["order"])
app.include_router(reference.router, prefix="/api", tags=["reference"])
app.include_router(img.router, prefix="/img", tags=["img"])

# ────────────── Запуск uvicorn ──────────────
if __name__ == "__main__":
    boot_log.log_info_sync(target="startup", message="Запуск uvicorn.run", data={"port": settings.PORT})
    uvicorn.run(
        "app.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level="info",
        reload=True
    )

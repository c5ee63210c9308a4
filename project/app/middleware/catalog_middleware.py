# app/middleware/catalog_middleware.py

from starlette.types import ASGIApp, Receive, Scope, Send


class CatalogMiddleware:
    """Кладёт текущий снимок каталога в request.state.catalog для запросов /api."""

    def __init__(self, app: ASGIApp):
        self.app = app

    async def __call__(self, scope: Scope, receive: Receive, send: Send):
        if scope["type"] != "http" or not scope["path"].startswith("/api"):
            await self.app(scope, receive, send)
            return

        # убедимся, что state есть
        state = scope.setdefault("state", {})
        # при CATALOG_RELOAD файл перечитывается здесь, на каждый запрос
        state["catalog"] = await scope["app"].state.catalog_store.get()
        await self.app(scope, receive, send)

"""Extraction from FastAPI applications, which share Starlette's routing table."""

import pytest

fastapi = pytest.importorskip("fastapi")

from routemap.extract import extract  # noqa: E402
from routemap.hierarchy import build_hierarchy, render  # noqa: E402


def _app():
    app = fastapi.FastAPI()
    items = fastapi.APIRouter(prefix="/items")

    @items.get("/")
    async def list_items():
        return []

    @items.post("/")
    async def create_item():
        return {}

    @items.get("/{item_id}")
    async def read_item(item_id: int):
        return {"id": item_id}

    @items.delete("/{item_id}")
    async def delete_item(item_id: int):
        return None

    app.include_router(items)

    admin = fastapi.FastAPI()

    @admin.get("/stats")
    async def stats():
        return {}

    app.mount("/admin", admin)
    return app


class TestFastAPI:
    def test_routes_merged_by_path(self) -> None:
        routes = {route.path: route for route in extract(_app())}

        assert routes["/items"].methods == {"GET", "POST"}
        assert routes["/items"].middleware == ("list_items", "create_item")
        assert routes["/items/:item_id"].methods == {"GET", "DELETE"}

    def test_mounted_sub_application(self) -> None:
        routes = {route.path: route for route in extract(_app())}
        assert routes["/admin/stats"].methods == {"GET"}
        assert "/admin/docs" in routes

    def test_documentation_routes_listed(self) -> None:
        paths = [route.path for route in extract(_app())]
        assert "/openapi.json" in paths
        assert "/docs" in paths

    def test_tree(self) -> None:
        output = render(build_hierarchy(extract(_app())))
        assert "items [GET, POST]" in output
        assert ":item_id [DELETE, GET]" in output

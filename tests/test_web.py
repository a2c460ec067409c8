"""Tests for routemap.web — page rendering and installing the diagram routes."""

import json
import re

import httpx
import pytest
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.routing import Mount, Route

from routemap.model import Route as RouteRecord
from routemap.web import generate_routes_on_startup, render_diagram_page, routes_payload, setup_web_route


async def homepage(request):
    return PlainTextResponse("home")


async def catch_all(request):
    return PlainTextResponse("spa")


class TestRenderDiagramPage:
    def test_contains_tree_and_data(self) -> None:
        routes = [RouteRecord(path="/users", methods=frozenset({"GET"}))]
        page = render_diagram_page(routes, data_route="/routemap-data")

        assert page.startswith("<!DOCTYPE html>")
        assert '<pre id="route-tree">users [GET]</pre>' in page
        assert 'href="/routemap-data"' in page
        assert "Total routes: 1" in page

        embedded = re.search(r'id="routes-data">(.*)</script>', page).group(1)
        assert json.loads(embedded) == routes_payload(routes)

    def test_escapes_markup(self) -> None:
        routes = [RouteRecord(path="/<b>", methods=frozenset({"GET"}), middleware=("</script>",))]
        page = render_diagram_page(routes, title="A & B")

        assert "<title>A &amp; B</title>" in page
        assert "&lt;b&gt; [GET]" in page
        assert page.count("</script>") == 1
        embedded = re.search(r'id="routes-data">(.*)</script>', page).group(1)
        assert json.loads(embedded)[0]["middleware"] == ["</script>"]

    def test_empty(self) -> None:
        page = render_diagram_page([])
        assert "No routes found" in page
        assert "Total routes: 0" in page


class TestSetupWebRoute:
    @pytest.mark.anyio
    async def test_routes_ahead_of_catch_all(self) -> None:
        app = Starlette(routes=[Route("/", homepage), Mount("", routes=[Route("/{rest:path}", catch_all)])])
        routes = generate_routes_on_startup(app)
        setup_web_route(app, routes, web_route="/diagram")

        async with httpx.AsyncClient(
            transport=httpx.ASGITransport(app=app), base_url="http://testserver"
        ) as client:
            page = await client.get("/diagram")
            data = await client.get("/diagram-data")
            other = await client.get("/anything")

        assert page.status_code == 200
        assert "Total routes: 2" in page.text
        assert [entry["path"] for entry in data.json()] == ["/", "/:rest"]
        assert other.text == "spa"

    def test_named_routes(self) -> None:
        app = Starlette(routes=[Route("/", homepage)])
        setup_web_route(app, generate_routes_on_startup(app))
        assert app.url_path_for("routemap") == "/routemap"
        assert app.url_path_for("routemap-data") == "/routemap-data"

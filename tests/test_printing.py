"""Tests for routemap.printing — console output and the standalone printer."""

from pathlib import Path

import pytest
from starlette.applications import Starlette
from starlette.responses import PlainTextResponse
from starlette.routing import Mount, Route

from routemap.config import DiagramConfig
from routemap.model import Route as RouteRecord
from routemap.printing import print_app_routes, print_route_listing, print_routes


async def homepage(request):
    return PlainTextResponse("home")


async def list_users(request):
    return PlainTextResponse("users")


def _app() -> Starlette:
    return Starlette(
        routes=[
            Route("/", homepage),
            Mount("/api", routes=[Route("/users", list_users, methods=["GET", "POST"])]),
            Mount("/static", routes=[Route("/app.css", homepage)]),
        ]
    )


class TestPrintRoutes:
    def test_empty(self, capsys: pytest.CaptureFixture[str]) -> None:
        print_routes([])
        assert capsys.readouterr().out == "No routes found\n"

    def test_prints_and_saves(self, tmp_path: Path, capsys: pytest.CaptureFixture[str]) -> None:
        target = tmp_path / "routes.txt"
        routes = [RouteRecord(path="/users", methods=frozenset({"GET"}))]
        print_routes(routes, DiagramConfig(output_file=target))

        out = capsys.readouterr().out
        assert "users [GET]" in out
        assert target.read_text(encoding="utf-8") in out


class TestPrintRouteListing:
    def test_plain(self, capsys: pytest.CaptureFixture[str]) -> None:
        routes = [RouteRecord(path="/users", methods=frozenset({"GET", "POST"}))]
        print_route_listing(routes, DiagramConfig(), use_colors=False)
        assert capsys.readouterr().out == "\nROUTES\n======\n\nusers [GET, POST]\n\nTotal routes: 1\n"

    def test_flat(self, capsys: pytest.CaptureFixture[str]) -> None:
        routes = [RouteRecord(path="/users", methods=frozenset({"GET"}))]
        print_route_listing(routes, DiagramConfig(hierarchical=False), use_colors=False)
        assert "[GET] /users" in capsys.readouterr().out

    def test_colors(self, capsys: pytest.CaptureFixture[str]) -> None:
        routes = [RouteRecord(path="/users", methods=frozenset({"GET"}))]
        print_route_listing(routes, DiagramConfig(), use_colors=True)
        assert "\x1b[32mGET\x1b[0m" in capsys.readouterr().out


class TestPrintAppRoutes:
    def test_returns_filtered_routes(self, capsys: pytest.CaptureFixture[str]) -> None:
        config = DiagramConfig(exclude_patterns=("/static",))
        routes = print_app_routes(_app(), config, use_colors=False)

        assert [r.path for r in routes] == ["/", "/api/users"]
        out = capsys.readouterr().out
        assert "api" in out
        assert "static" not in out
        assert "Total routes: 2" in out

    def test_silent(self, capsys: pytest.CaptureFixture[str]) -> None:
        routes = print_app_routes(_app(), DiagramConfig(log_to_console=False))
        assert len(routes) == 3
        assert capsys.readouterr().out == ""

    def test_saves_without_colors(self, tmp_path: Path) -> None:
        target = tmp_path / "routes.txt"
        print_app_routes(_app(), DiagramConfig(log_to_console=False, output_file=target))
        saved = target.read_text(encoding="utf-8")
        assert saved.startswith("ROUTES\n")
        assert "\x1b[" not in saved
        assert "Total routes: 3" in saved

    def test_invalid_app(self, capsys: pytest.CaptureFixture[str]) -> None:
        assert print_app_routes(None, use_colors=False) == []
        assert "Total routes: 0" in capsys.readouterr().out

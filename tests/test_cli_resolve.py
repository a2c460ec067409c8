"""Tests for routemap.cli._resolve — import string resolution."""

import sys
import types
from pathlib import Path

import pytest
from starlette.applications import Starlette

from routemap.cli._resolve import resolve_app
from routemap.errors import AppResolutionError


@pytest.fixture
def _fake_app_module(monkeypatch: pytest.MonkeyPatch) -> None:
    """Register a fake module holding Starlette apps on sys.modules."""
    mod = types.ModuleType("_fake_routemap_app")
    mod.app = Starlette()  # type: ignore[attr-defined]
    mod.custom = Starlette()  # type: ignore[attr-defined]
    mod.create_app = Starlette  # type: ignore[attr-defined]
    monkeypatch.setitem(sys.modules, "_fake_routemap_app", mod)


@pytest.mark.usefixtures("_fake_app_module")
class TestResolveApp:
    def test_explicit_attribute(self) -> None:
        assert resolve_app("_fake_routemap_app:app") is sys.modules["_fake_routemap_app"].app

    def test_custom_attribute(self) -> None:
        assert resolve_app("_fake_routemap_app:custom") is sys.modules["_fake_routemap_app"].custom

    def test_default_attribute(self) -> None:
        """Omitting :attr defaults to 'app'."""
        assert resolve_app("_fake_routemap_app") is sys.modules["_fake_routemap_app"].app

    def test_factory_not_called(self) -> None:
        assert resolve_app("_fake_routemap_app:create_app") is Starlette

    def test_missing_module(self) -> None:
        with pytest.raises(ModuleNotFoundError):
            resolve_app("nonexistent_module_xyz:app")

    def test_missing_attribute(self) -> None:
        with pytest.raises(AppResolutionError, match="does_not_exist"):
            resolve_app("_fake_routemap_app:does_not_exist")


class TestResolveFile:
    def test_file_path(self, tmp_path: Path) -> None:
        source = tmp_path / "service.py"
        source.write_text(
            "from starlette.applications import Starlette\n"
            "application = Starlette()\n",
            encoding="utf-8",
        )
        app = resolve_app(f"{source}:application")
        assert isinstance(app, Starlette)

    def test_missing_file(self, tmp_path: Path) -> None:
        with pytest.raises(AppResolutionError, match="No such file"):
            resolve_app(f"{tmp_path / 'absent.py'}:app")

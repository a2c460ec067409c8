"""Tests for routemap.config — DiagramConfig defaults and normalization."""

import re

import pytest

from routemap.config import DiagramConfig
from routemap.errors import ConfigurationError


class TestDiagramConfig:
    def test_defaults(self) -> None:
        config = DiagramConfig()
        assert config.log_to_console is True
        assert config.hierarchical is True
        assert config.output_file is None
        assert config.color_output is False
        assert config.exclude_patterns == ()
        assert config.generate_web is False
        assert config.web_route == "/routemap"
        assert config.data_route == "/routemap-data"

    def test_frozen(self) -> None:
        config = DiagramConfig()
        with pytest.raises(AttributeError):
            config.hierarchical = False  # type: ignore[misc]

    @pytest.mark.parametrize(
        ("given", "expected"),
        [("routes", "/routes"), ("/routes/", "/routes"), ("/debug/routes", "/debug/routes")],
    )
    def test_web_route_normalized(self, given: str, expected: str) -> None:
        config = DiagramConfig(web_route=given)
        assert config.web_route == expected
        assert config.data_route == f"{expected}-data"

    @pytest.mark.parametrize("given", ["", "/", "  ", "//"])
    def test_web_route_rejected(self, given: str) -> None:
        with pytest.raises(ConfigurationError, match="web_route"):
            DiagramConfig(web_route=given)

    def test_exclude_patterns_become_tuple(self) -> None:
        pattern = re.compile("^/admin")
        config = DiagramConfig(exclude_patterns=["/static", pattern])  # type: ignore[arg-type]
        assert config.exclude_patterns == ("/static", pattern)

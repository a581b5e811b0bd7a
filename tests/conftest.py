from __future__ import annotations

import textwrap
from pathlib import Path

import pytest


BUTTON_SOURCE = """
from styleforge import create_theme, style, map_to_styles

theme_class, vars = create_theme({"color": {"brand": "blue", "text": "white"}}, debug_id="theme")

button = style(
    {
        "color": vars.color.text,
        "background": vars.color.brand,
        "padding": 8,
        ":hover": {"opacity": 0.9},
        "@media": {"(min-width: 768px)": {"padding": 12}},
    },
    debug_id="button",
)

sizes = map_to_styles({"small": {"fontSize": 12}, "large": {"fontSize": 20}}, debug_id="size")

_private = style({"display": "none"})
"""

GLOBAL_SOURCE = """
from styleforge import global_style

global_style("body", {"margin": 0, "fontFamily": "sans-serif"})
"""

BROKEN_SOURCE = """
from styleforge import create_theme, create_theme_vars, style

style({"color": "red"}, debug_id="ok")
vars = create_theme_vars({"a": None, "b": None})
create_theme(vars, {"a": "1px"})
"""

THEME_SOURCE = """
from styleforge import create_theme

theme_class, vars = create_theme({"color": {"brand": "blue"}}, debug_id="theme")
"""

CARD_SOURCE = """
from styleforge import style
from theme_css import vars

card = style({"color": vars.color.brand}, debug_id="card")
"""


def _write(directory: Path, name: str, source: str) -> Path:
    path = directory / name
    path.write_text(textwrap.dedent(source), encoding="utf-8")
    return path


@pytest.fixture
def button_file(tmp_path: Path) -> Path:
    return _write(tmp_path, "button.css.py", BUTTON_SOURCE)


@pytest.fixture
def global_file(tmp_path: Path) -> Path:
    return _write(tmp_path, "global.css.py", GLOBAL_SOURCE)


@pytest.fixture
def broken_file(tmp_path: Path) -> Path:
    return _write(tmp_path, "broken.css.py", BROKEN_SOURCE)


@pytest.fixture
def theme_file(tmp_path: Path) -> Path:
    return _write(tmp_path, "theme_css.py", THEME_SOURCE)


@pytest.fixture
def card_file(tmp_path: Path) -> Path:
    return _write(tmp_path, "card.css.py", CARD_SOURCE)

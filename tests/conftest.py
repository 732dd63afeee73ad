"""
Pytest configuration and shared fixtures for xdiff tests.
"""

import os
import tempfile
from pathlib import Path
from typing import Generator

import pytest
from aiohttp import web

from xdiff.core import config as config_module

FIXTURES_DIR = Path(__file__).parent.parent / "fixtures"

TITLES = {1: "todo", 2: "done"}


@pytest.fixture(autouse=True)
def isolated_settings(monkeypatch) -> Generator[None, None, None]:
    """Reset cached settings and ignore XDIFF_* variables from the environment."""
    for name in list(os.environ):
        if name.upper().startswith("XDIFF_"):
            monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr(config_module, "_settings", None)
    yield


@pytest.fixture
def temp_dir() -> Generator[Path, None, None]:
    """Provide a temporary directory for tests."""
    with tempfile.TemporaryDirectory() as temp_dir:
        yield Path(temp_dir)


@pytest.fixture
def fixtures_dir() -> Path:
    return FIXTURES_DIR


def make_app() -> web.Application:
    """Small API used by executor and end-to-end tests."""

    async def todo(request: web.Request) -> web.Response:
        todo_id = int(request.match_info["id"])
        return web.json_response({"id": todo_id, "title": TITLES.get(todo_id, "")})

    async def echo(request: web.Request) -> web.Response:
        return web.json_response(
            {
                "method": request.method,
                "query": dict(request.query),
                "content_type": request.headers.get("Content-Type"),
                "token": request.headers.get("X-Token"),
                "body": await request.text(),
            }
        )

    async def text(request: web.Request) -> web.Response:
        return web.Response(text="hello\nworld\n")

    app = web.Application()
    app.router.add_get("/todos/{id}", todo)
    app.router.add_route("*", "/echo", echo)
    app.router.add_get("/text", text)
    return app


@pytest.fixture
def app() -> web.Application:
    return make_app()

# File: tests/conftest.py
from __future__ import annotations

import asyncio
from collections import Counter
from collections.abc import AsyncIterator
from dataclasses import dataclass
from typing import Dict, Union

import pytest
import pytest_asyncio
from aiohttp import web

from sitecrawl.exceptions import HTTPStatusError
from sitecrawl.logger import init_logging


class FakeFetcher:
    """
    In-memory stand-in for the HTTP fetcher.

    *pages* maps URL -> HTML, or -> exception instance to raise.
    Unknown URLs fail with a 404. Tracks calls and concurrent fetches.
    """

    def __init__(self, pages: Dict[str, Union[str, Exception]], delay: float = 0.0) -> None:
        self.pages = pages
        self.delay = delay
        self.calls: Counter = Counter()
        self.in_flight = 0
        self.peak = 0

    async def fetch(self, url: str) -> str:
        self.calls[url] += 1
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            await asyncio.sleep(self.delay)
            page = self.pages.get(url)
            if page is None:
                raise HTTPStatusError(url, 404)
            if isinstance(page, Exception):
                raise page
            return page
        finally:
            self.in_flight -= 1


@dataclass
class Page:
    body: str = ""
    status: int = 200
    content_type: str = "text/html"
    delay: float = 0.0


class SiteServer:
    """Local aiohttp site whose pages can be added after startup."""

    def __init__(self, base_url: str) -> None:
        self.base_url = base_url
        self.pages: Dict[str, Page] = {}
        self.hits: Counter = Counter()
        self.user_agents: list[str] = []
        self.in_flight = 0
        self.peak = 0

    def add(self, path: str, body: str = "", **kwargs) -> str:
        self.pages[path] = Page(body, **kwargs)
        return self.base_url + path

    async def handle(self, request: web.Request) -> web.StreamResponse:
        self.hits[request.path] += 1
        self.user_agents.append(request.headers.get("User-Agent", ""))
        self.in_flight += 1
        self.peak = max(self.peak, self.in_flight)
        try:
            page = self.pages.get(request.path)
            if page is None:
                return web.Response(status=404, text="not found")
            if page.delay:
                await asyncio.sleep(page.delay)
            if 300 <= page.status < 400:
                raise web.HTTPFound(page.body)
            return web.Response(status=page.status, body=page.body.encode("utf-8"),
                                content_type=page.content_type, charset="utf-8")
        finally:
            self.in_flight -= 1


async def _serve_app(app: web.Application, port: int) -> AsyncIterator[str]:
    """Start *app* on *port*, yield base URL, ensure cleanup."""
    runner = web.AppRunner(app)
    await runner.setup()
    site = web.TCPSite(runner, "127.0.0.1", port)
    await site.start()
    try:
        yield f"http://127.0.0.1:{port}"
    finally:
        await runner.cleanup()


@pytest_asyncio.fixture
async def site_server(unused_tcp_port: int) -> AsyncIterator[SiteServer]:
    server = SiteServer(f"http://127.0.0.1:{unused_tcp_port}")
    app = web.Application()
    app.router.add_route("GET", "/{tail:.*}", server.handle)
    async for _ in _serve_app(app, unused_tcp_port):
        yield server


@pytest.fixture(autouse=True)
def reset_logging():
    """Give every test a logger bound to the current stdout."""
    init_logging(level="DEBUG")
    yield
    init_logging()

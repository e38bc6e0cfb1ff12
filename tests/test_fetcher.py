# File: tests/test_fetcher.py
import pytest

from sitecrawl.crawler.fetcher import Fetcher, build_session
from sitecrawl.exceptions import ContentTypeError, FetchIOError, FetchTimeoutError, HTTPStatusError


async def fetch(url: str, timeout: float = 2.0, user_agent: str = "crawler/1.0") -> str:
    async with build_session(timeout=timeout, user_agent=user_agent) as session:
        return await Fetcher(session, timeout).fetch(url)


@pytest.mark.asyncio()
async def test_fetch_html(site_server):
    url = site_server.add("/page", "<h1>Hello</h1>")
    assert await fetch(url) == "<h1>Hello</h1>"
    assert site_server.user_agents == ["crawler/1.0"]


@pytest.mark.asyncio()
async def test_custom_user_agent(site_server):
    url = site_server.add("/page", "<p>x</p>")
    await fetch(url, user_agent="TestAgent/2.0")
    assert site_server.user_agents == ["TestAgent/2.0"]


@pytest.mark.asyncio()
@pytest.mark.parametrize("status", [400, 404, 500, 503])
async def test_error_status(site_server, status):
    url = site_server.add("/err", "<h1>oops</h1>", status=status)
    with pytest.raises(HTTPStatusError) as exc_info:
        await fetch(url)
    assert exc_info.value.status == status
    assert site_server.hits["/err"] == 1


@pytest.mark.asyncio()
async def test_redirect_is_followed(site_server):
    target = site_server.add("/new", "<h1>Moved here</h1>")
    url = site_server.add("/old", target, status=302)
    assert await fetch(url) == "<h1>Moved here</h1>"


@pytest.mark.asyncio()
@pytest.mark.parametrize("content_type", ["application/json", "text/plain", "image/png"])
async def test_non_html_rejected(site_server, content_type):
    url = site_server.add("/file", "{}", content_type=content_type)
    with pytest.raises(ContentTypeError) as exc_info:
        await fetch(url)
    assert exc_info.value.content_type.startswith(content_type)


@pytest.mark.asyncio()
async def test_timeout(site_server):
    url = site_server.add("/slow", "<h1>late</h1>", delay=1.0)
    with pytest.raises(FetchTimeoutError):
        await fetch(url, timeout=0.2)


@pytest.mark.asyncio()
async def test_connection_refused(unused_tcp_port):
    with pytest.raises(FetchIOError):
        await fetch(f"http://127.0.0.1:{unused_tcp_port}/")

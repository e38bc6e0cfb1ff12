# sitecrawl/crawler/fetcher.py
"""
Fetcher module: retrieves the HTML body of a page with a per-request timeout.
"""
from __future__ import annotations

import asyncio

from aiohttp import ClientError, ClientSession, ClientTimeout

from sitecrawl.exceptions import ContentTypeError, FetchIOError, FetchTimeoutError, HTTPStatusError

DEFAULT_TIMEOUT: float = 10.0
DEFAULT_USER_AGENT: str = "crawler/1.0"


def build_session(timeout: float = DEFAULT_TIMEOUT, user_agent: str = DEFAULT_USER_AGENT) -> ClientSession:
    """Create the shared client session with timeout and User-Agent applied."""
    return ClientSession(
        timeout=ClientTimeout(total=timeout),
        headers={"User-Agent": user_agent},
        raise_for_status=False,
    )


class Fetcher:
    """Fetches HTML pages through a shared aiohttp session. Never retries."""

    def __init__(self, session: ClientSession, timeout: float = DEFAULT_TIMEOUT) -> None:
        self.session = session
        self.timeout = timeout

    async def fetch(self, url: str) -> str:
        """
        Return the HTML text of *url*.

        Raises HTTPStatusError for status >= 400, ContentTypeError when the
        response is not ``text/html``, FetchTimeoutError and FetchIOError
        for transport failures.
        """
        try:
            async with self.session.get(url) as resp:
                if resp.status >= 400:
                    raise HTTPStatusError(url, resp.status)
                ctype = resp.headers.get("Content-Type", "")
                if not ctype.lower().startswith("text/html"):
                    raise ContentTypeError(url, ctype or None)
                return await resp.text()
        except asyncio.TimeoutError:
            raise FetchTimeoutError(url, self.timeout) from None
        except (ClientError, UnicodeDecodeError, ValueError) as exc:
            raise FetchIOError(url, exc) from exc

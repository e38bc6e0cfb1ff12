# === FILE: sitecrawl/crawler/crawler.py ===
from __future__ import annotations

import asyncio
import time
from typing import Dict, Optional, Protocol

from aiohttp import ClientSession

from sitecrawl.crawler.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT, Fetcher, build_session
from sitecrawl.crawler.models import CrawlState, CrawlStats, PageRecord, RegistrationOutcome, TaskOutcome
from sitecrawl.crawler.normalizer import normalize_url, parse_url, url_host
from sitecrawl.exceptions import FetchError, PageExtractionError, SeedURLError, URLParseError
from sitecrawl.logger import logger
from sitecrawl.parser.html_parser import extract_page_data

__all__ = ("AsyncCrawler", "PageFetcher")

_REJECTED = {
    RegistrationOutcome.CAP_REACHED: TaskOutcome.CAP_REACHED,
    RegistrationOutcome.DUPLICATE: TaskOutcome.DUPLICATE,
}


class PageFetcher(Protocol):
    async def fetch(self, url: str) -> str: ...


class AsyncCrawler:
    """
    Concurrent same-host crawler.

    Every discovered link becomes its own task in a shared TaskGroup; a
    semaphore bounds how many tasks fetch at once and ``CrawlState`` keeps
    the registry of pages deduplicated and capped.  ``crawl()`` returns when
    no task is left.
    """

    def __init__(
        self,
        base_url: str,
        *,
        max_pages: int,
        max_concurrency: int,
        timeout: float = DEFAULT_TIMEOUT,
        user_agent: str = DEFAULT_USER_AGENT,
        fetcher: Optional[PageFetcher] = None,
    ) -> None:
        if max_concurrency < 1:
            raise ValueError("max_concurrency must be >= 1")
        try:
            seed = parse_url(base_url)
            normalize_url(base_url)
        except URLParseError as exc:
            raise SeedURLError(base_url, exc.reason) from exc
        if seed.scheme not in ("http", "https") or not seed.netloc:
            raise SeedURLError(base_url, "expected an absolute http(s) URL")

        self.base_url = base_url
        self.max_concurrency = max_concurrency
        self.timeout = timeout
        self.user_agent = user_agent
        self.state = CrawlState(base_host=seed.netloc, max_pages=max_pages)
        self.stats = CrawlStats()
        self.fetcher: Optional[PageFetcher] = fetcher
        self.session: Optional[ClientSession] = None
        self._semaphore = asyncio.Semaphore(max_concurrency)
        self._tasks: Optional[asyncio.TaskGroup] = None

    @classmethod
    def from_config(cls, config, fetcher: Optional[PageFetcher] = None) -> AsyncCrawler:
        return cls(
            config.base_url,
            max_pages=config.max_pages,
            max_concurrency=config.max_concurrency,
            timeout=config.timeout,
            user_agent=config.user_agent,
            fetcher=fetcher,
        )

    async def __aenter__(self) -> AsyncCrawler:
        if self.fetcher is None:
            self.session = build_session(self.timeout, self.user_agent)
            self.fetcher = Fetcher(self.session, self.timeout)
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        if self.session and not self.session.closed:
            await self.session.close()

    async def crawl(self) -> Dict[str, PageRecord]:
        """Crawl from the seed URL until no task is left; return records by key."""
        if self.fetcher is None:
            raise RuntimeError("Fetcher not initialized, use 'async with AsyncCrawler(...)'")
        logger.info(
            "Starting crawl of %s (max_pages=%d, max_concurrency=%d)",
            self.base_url, self.state.max_pages, self.max_concurrency,
        )
        start = time.monotonic()
        async with asyncio.TaskGroup() as tasks:
            self._tasks = tasks
            self._spawn(self.base_url)
        self._tasks = None
        self.stats.elapsed = time.monotonic() - start

        pages = self.state.snapshot()
        duration = self.stats.elapsed
        logger.info(
            "Finished: %d pages in %.2f s (%.2f pages/s)",
            len(pages), duration, len(pages) / duration if duration else 0,
        )
        logger.info("Task outcomes: %s", self.stats.summary())
        return pages

    def _spawn(self, url: str) -> None:
        if self._tasks is None:
            raise RuntimeError("Tasks can only be spawned while crawl() is running")
        self._tasks.create_task(self._run_task(url))

    async def _run_task(self, url: str) -> None:
        async with self._semaphore:
            try:
                outcome = await self._crawl_page(url)
            except Exception:
                # a broken task must not cancel its siblings through the TaskGroup
                logger.exception("Unexpected error while crawling %s", url)
                outcome = TaskOutcome.UNEXPECTED_ERROR
        self.stats.record(outcome)

    async def _crawl_page(self, url: str) -> TaskOutcome:
        try:
            host = url_host(url)
        except URLParseError as exc:
            logger.debug("Skipping malformed link %r: %s", url, exc.reason)
            return TaskOutcome.MALFORMED_URL
        if host != self.state.base_host:
            logger.debug("Skipping off-host link %s", url)
            return TaskOutcome.OFF_HOST
        try:
            key = normalize_url(url)
        except URLParseError:
            return TaskOutcome.NORMALIZE_FAILED

        claimed = await self.state.claim(key)
        if claimed is not RegistrationOutcome.ACCEPTED:
            logger.debug("Not fetching %s: %s", url, claimed.value)
            return _REJECTED[claimed]

        self.stats.fetch_started()
        try:
            html = await self.fetcher.fetch(url)
        except FetchError as exc:
            logger.warning("Error fetching %s: %s", url, exc.reason)
            return TaskOutcome.FETCH_FAILED
        finally:
            self.stats.fetch_finished()

        try:
            record = extract_page_data(html, url)
        except PageExtractionError as exc:
            logger.warning("%s", exc)
            return TaskOutcome.EXTRACTION_FAILED

        registered = await self.state.register(key, record)
        if registered is not RegistrationOutcome.ACCEPTED:
            logger.debug("Not registering %s: %s", url, registered.value)
            return _REJECTED[registered]
        logger.debug("Registered %s as %s (%d links)", url, key, len(record.outgoing_links))

        for link in record.outgoing_links:
            self._spawn(link)
        return TaskOutcome.REGISTERED

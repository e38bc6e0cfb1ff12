# File: sitecrawl/engine.py
"""sitecrawl.engine: runs a crawl from a config and returns the page records."""

from __future__ import annotations

import asyncio
from typing import Dict, Optional

from sitecrawl.config import CrawlerConfig
from sitecrawl.crawler.crawler import AsyncCrawler, PageFetcher
from sitecrawl.crawler.models import PageRecord

__all__ = ["start_crawl", "run_crawl"]


async def start_crawl(cfg: CrawlerConfig, fetcher: Optional[PageFetcher] = None) -> Dict[str, PageRecord]:
    """
    Run AsyncCrawler inside its context and return records keyed by normalized URL.

    Raises SeedURLError before any request if the seed cannot be crawled.
    """
    async with AsyncCrawler.from_config(cfg, fetcher=fetcher) as crawler:
        return await crawler.crawl()


def run_crawl(cfg: CrawlerConfig) -> Dict[str, PageRecord]:
    """Blocking wrapper around :func:`start_crawl` for the CLI."""
    return asyncio.run(start_crawl(cfg))

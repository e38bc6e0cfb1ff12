"""
Data models for the SiteCrawl crawl engine.
"""
from __future__ import annotations

import asyncio
import enum
from collections import Counter
from dataclasses import dataclass, field
from typing import Dict, Set, Tuple

__all__ = (
    "PageRecord",
    "RegistrationOutcome",
    "TaskOutcome",
    "CrawlState",
    "CrawlStats",
)


@dataclass(frozen=True, slots=True)
class PageRecord:
    """Structured data extracted from one crawled page."""

    url: str
    heading: str = ""
    first_paragraph: str = ""
    outgoing_links: Tuple[str, ...] = ()
    image_urls: Tuple[str, ...] = ()


class RegistrationOutcome(enum.Enum):
    ACCEPTED = "accepted"
    CAP_REACHED = "cap_reached"
    DUPLICATE = "duplicate"


class TaskOutcome(enum.Enum):
    """Terminal state of a single crawl task."""

    REGISTERED = "registered"
    MALFORMED_URL = "malformed_url"
    OFF_HOST = "off_host"
    NORMALIZE_FAILED = "normalize_failed"
    DUPLICATE = "duplicate"
    CAP_REACHED = "cap_reached"
    FETCH_FAILED = "fetch_failed"
    EXTRACTION_FAILED = "extraction_failed"
    UNEXPECTED_ERROR = "unexpected_error"


class CrawlState:
    """
    Shared, lock-guarded registry of pages for one crawl run.

    ``visited`` maps normalized keys to records and never holds more than
    ``max_pages`` entries. ``claimed`` holds every key a task has started
    fetching, so a page is fetched at most once per run.
    """

    def __init__(self, base_host: str, max_pages: int) -> None:
        if max_pages < 1:
            raise ValueError("max_pages must be >= 1")
        self.base_host = base_host
        self.max_pages = max_pages
        self.visited: Dict[str, PageRecord] = {}
        self._claimed: Set[str] = set()
        self._lock = asyncio.Lock()

    async def claim(self, key: str) -> RegistrationOutcome:
        async with self._lock:
            if len(self.visited) >= self.max_pages:
                return RegistrationOutcome.CAP_REACHED
            if key in self._claimed:
                return RegistrationOutcome.DUPLICATE
            self._claimed.add(key)
            return RegistrationOutcome.ACCEPTED

    async def register(self, key: str, record: PageRecord) -> RegistrationOutcome:
        """Insert *record* under *key* unless the cap is hit or the key exists."""
        async with self._lock:
            if len(self.visited) >= self.max_pages:
                return RegistrationOutcome.CAP_REACHED
            if key in self.visited:
                return RegistrationOutcome.DUPLICATE
            self.visited[key] = record
            return RegistrationOutcome.ACCEPTED

    def snapshot(self) -> Dict[str, PageRecord]:
        return dict(self.visited)

    def __len__(self) -> int:
        return len(self.visited)


@dataclass(slots=True)
class CrawlStats:
    """Counters collected during a crawl for the summary log line."""

    outcomes: Counter = field(default_factory=Counter)
    fetches: int = 0
    in_flight: int = 0
    peak_in_flight: int = 0
    elapsed: float = 0.0

    def record(self, outcome: TaskOutcome) -> None:
        self.outcomes[outcome] += 1

    def fetch_started(self) -> None:
        self.fetches += 1
        self.in_flight += 1
        self.peak_in_flight = max(self.peak_in_flight, self.in_flight)

    def fetch_finished(self) -> None:
        self.in_flight -= 1

    def summary(self) -> str:
        parts = [f"{o.value}={n}" for o, n in sorted(self.outcomes.items(), key=lambda i: i[0].value)]
        return ", ".join(parts) or "no tasks"

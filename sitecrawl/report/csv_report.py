# sitecrawl/report/csv_report.py

"""
CSV report for SiteCrawl: one row per crawled page.
"""
from __future__ import annotations

import csv
from pathlib import Path
from typing import Iterable, Union

from sitecrawl.crawler.models import PageRecord
from sitecrawl.exceptions import ReportWriteError

REPORT_HEADER = ("page_url", "h1", "first_paragraph", "outgoing_link_urls", "image_urls")
LIST_SEPARATOR = ";"


def _row(record: PageRecord) -> list[str]:
    return [
        record.url,
        record.heading,
        record.first_paragraph,
        LIST_SEPARATOR.join(record.outgoing_links),
        LIST_SEPARATOR.join(record.image_urls),
    ]


def write_csv_report(records: Iterable[PageRecord], output_path: Union[Path, str]) -> Path:
    """
    Write *records* as UTF-8 CSV to *output_path* and return the path.

    The header row is always written, so an empty crawl produces a file
    with only the header. Raises ReportWriteError on any I/O failure.
    """
    output = Path(output_path)
    try:
        output.parent.mkdir(parents=True, exist_ok=True)
        with output.open("w", encoding="utf-8", newline="") as f:
            writer = csv.writer(f)
            writer.writerow(REPORT_HEADER)
            for record in records:
                writer.writerow(_row(record))
    except OSError as exc:
        raise ReportWriteError(str(output), exc) from exc
    return output

# File: tests/test_report.py
import csv

import pytest

from sitecrawl.crawler.models import PageRecord
from sitecrawl.exceptions import ReportWriteError
from sitecrawl.report import REPORT_HEADER, write_csv_report


def read_rows(path):
    with open(path, encoding="utf-8", newline="") as f:
        return list(csv.reader(f))


def test_rows_and_header(tmp_path):
    records = [
        PageRecord(
            url="https://x.test",
            heading="Hi",
            first_paragraph='Says "hello", then leaves.',
            outgoing_links=("https://x.test/a", "https://x.test/b"),
            image_urls=("https://x.test/logo.png",),
        ),
        PageRecord(url="https://x.test/a", heading="Ünïcödé"),
    ]
    path = write_csv_report(records, tmp_path / "report.csv")

    rows = read_rows(path)
    assert rows[0] == ["page_url", "h1", "first_paragraph", "outgoing_link_urls", "image_urls"]
    assert rows[1] == [
        "https://x.test",
        "Hi",
        'Says "hello", then leaves.',
        "https://x.test/a;https://x.test/b",
        "https://x.test/logo.png",
    ]
    assert rows[2] == ["https://x.test/a", "Ünïcödé", "", "", ""]


def test_empty_report_has_header_only(tmp_path):
    path = write_csv_report([], tmp_path / "out" / "report.csv")
    assert read_rows(path) == [list(REPORT_HEADER)]


def test_unwritable_path(tmp_path):
    with pytest.raises(ReportWriteError) as exc_info:
        write_csv_report([], tmp_path)
    assert isinstance(exc_info.value.original, OSError)

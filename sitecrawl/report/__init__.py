# File: sitecrawl/report/__init__.py
"""sitecrawl.report: writers for the crawl results."""

from sitecrawl.report.csv_report import REPORT_HEADER, write_csv_report

__all__ = ["REPORT_HEADER", "write_csv_report"]

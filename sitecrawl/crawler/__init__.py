"""Crawl engine, fetcher and URL helpers."""

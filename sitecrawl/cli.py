# === FILE: sitecrawl/cli.py ===
#!/usr/bin/env python3
"""
Command-line entry point for the SiteCrawl same-host crawler.

Usage:
  sitecrawl BASE_URL [MAX_CONCURRENCY] [MAX_PAGES] [OPTIONS]

Arguments:
  BASE_URL            Seed URL; only pages on its host are crawled
  MAX_CONCURRENCY     Max simultaneous fetches (default: 3)
  MAX_PAGES           Max pages recorded in the report (default: 10)

Options:
  --config PATH       YAML/JSON file with default settings
  --output PATH       CSV report location (default: report.csv)
  --timeout SEC       Per-request timeout
  --user-agent UA     User-Agent header
  --log-level LEVEL   Logging level (DEBUG, INFO, ...)
  --log-file PATH     Log file (stdout only if omitted)
  --log-format FMT    Logging format string
  --version, -v       Show the SiteCrawl version

Example:
  sitecrawl https://example.com 5 100 --output reports/example.csv
"""
import sys
from pathlib import Path

import click
from pydantic import ValidationError

from sitecrawl import __version__
from sitecrawl.config import load_config
from sitecrawl.engine import run_crawl
from sitecrawl.exceptions import ReportWriteError, SeedURLError
from sitecrawl.logger import DEFAULT_FORMAT, init_logging, logger
from sitecrawl.report.csv_report import write_csv_report

CONTEXT_SETTINGS = dict(help_option_names=["--help", "-h"])


def print_error(message: str):
    click.secho(message, fg='red', err=True)
    sys.exit(1)


@click.command(context_settings=CONTEXT_SETTINGS)
@click.version_option(__version__, '--version', '-v', message='SiteCrawl, version %(version)s')
@click.argument('base_url')
@click.argument('max_concurrency', type=click.IntRange(min=1), required=False)
@click.argument('max_pages', type=click.IntRange(min=1), required=False)
@click.option(
    '--config', '-c', 'config_path',
    default=None,
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help='YAML/JSON file with default settings.'
)
@click.option(
    '--output', '-o', 'output',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='CSV report path  [default: report.csv]'
)
@click.option('--timeout', 'timeout', type=float, default=None, help='Per-request timeout (seconds)')
@click.option('--user-agent', 'user_agent', default=None, help='User-Agent header')
@click.option(
    '--log-level', 'log_level',
    default='INFO', show_default=True,
    type=click.Choice(['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL']),
    help='Logging level'
)
@click.option(
    '--log-file', 'log_file',
    default=None,
    type=click.Path(dir_okay=False, path_type=Path),
    help='Log file path (stdout if omitted)'
)
@click.option(
    '--log-format', 'log_format',
    default=DEFAULT_FORMAT,
    show_default=True,
    help='Logging format string'
)
def cli(base_url, max_concurrency, max_pages, config_path, output, timeout, user_agent,
        log_level, log_file, log_format):
    """Crawl BASE_URL within its host and write a CSV report of every page found."""
    init_logging(level=log_level, log_file=log_file, log_format=log_format)
    try:
        cfg = load_config(
            config_path,
            base_url=base_url,
            max_concurrency=max_concurrency,
            max_pages=max_pages,
            timeout=timeout,
            user_agent=user_agent,
            report_path=str(output) if output else None,
        )
    except ValidationError as e:
        logger.error("Invalid settings: %s", e)
        print_error(f'Invalid settings: {e}')
    except (OSError, ValueError, TypeError) as e:
        logger.error("Cannot load config: %s", e)
        print_error(f'Cannot load config: {e}')

    try:
        pages = run_crawl(cfg)
    except SeedURLError as e:
        logger.error("%s", e)
        print_error(str(e))

    logger.info("Writing %d pages to %s", len(pages), cfg.report_path)
    try:
        saved = write_csv_report(pages.values(), cfg.report_path)
    except ReportWriteError as e:
        logger.error("Error writing report: %s", e)
        print_error(f'Error writing report: {e}')
    logger.info("Report written successfully")
    click.echo(f'CSV report: {saved}')


def main():
    cli(prog_name='sitecrawl')


if __name__ == "__main__":
    main()

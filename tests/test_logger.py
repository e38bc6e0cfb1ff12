# File: tests/test_logger.py
import logging

from sitecrawl.logger import LOGGER_NAME, init_logging


def test_reinit_replaces_handlers():
    init_logging(level="DEBUG")
    lg = init_logging(level="WARNING")
    assert lg is logging.getLogger(LOGGER_NAME)
    assert len(lg.handlers) == 1
    assert lg.level == logging.WARNING
    assert lg.propagate is False


def test_log_file_receives_records(tmp_path):
    log_file = tmp_path / "crawl.log"
    lg = init_logging(level="INFO", log_file=log_file, log_format="%(levelname)s %(message)s")
    assert len(lg.handlers) == 2

    lg.info("crawl finished")
    for handler in lg.handlers:
        handler.flush()

    assert "INFO crawl finished" in log_file.read_text(encoding="utf-8")

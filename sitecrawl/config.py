# === FILE: sitecrawl/config.py ===
"""
Loading and validation of SiteCrawl settings.
Pydantic describes the schema; YAML and JSON files are accepted.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from sitecrawl.crawler.fetcher import DEFAULT_TIMEOUT, DEFAULT_USER_AGENT
from sitecrawl.crawler.normalizer import parse_url
from sitecrawl.exceptions import URLParseError

DEFAULT_REPORT_PATH = "report.csv"


class CrawlerConfig(BaseModel):
    """Settings for one crawl run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: str = Field(..., description="Seed URL; only its host is crawled.")
    max_concurrency: int = Field(3, ge=1, description="Max simultaneous fetches.")
    max_pages: int = Field(10, ge=1, description="Hard limit on pages recorded.")
    timeout: float = Field(DEFAULT_TIMEOUT, gt=0, description="Per-request timeout (seconds).")
    user_agent: str = Field(DEFAULT_USER_AGENT, min_length=1, description="User-Agent header.")
    report_path: str = Field(DEFAULT_REPORT_PATH, min_length=1, description="CSV report location.")

    @field_validator("base_url")
    @classmethod
    def _check_base_url(cls, v: str) -> str:
        try:
            parts = parse_url(v)
        except URLParseError as exc:
            raise ValueError(exc.reason) from exc
        if parts.scheme not in ("http", "https") or not parts.netloc:
            raise ValueError("expected an absolute http(s) URL")
        return v


def _read_yaml(path: Path) -> dict[str, Any]:
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"Invalid YAML in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of YAML must be a mapping, got {type(data).__name__}")
    return data


def _read_json(path: Path) -> dict[str, Any]:
    try:
        data = json.loads(path.read_text(encoding="utf-8")) or {}
    except json.JSONDecodeError as exc:
        raise ValueError(f"Invalid JSON in {path}: {exc}") from exc
    if not isinstance(data, dict):
        raise TypeError(f"Top level of JSON must be a mapping, got {type(data).__name__}")
    return data


def read_config_file(path: Union[str, Path]) -> dict[str, Any]:
    """Read a YAML or JSON settings file into a plain mapping (not validated)."""
    path_obj = Path(path).expanduser().resolve()
    if not path_obj.is_file():
        raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        return _read_yaml(path_obj)
    if suffix == ".json":
        return _read_json(path_obj)
    raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: Union[str, Path, None] = None, **overrides: Any) -> CrawlerConfig:
    """
    Build a validated CrawlerConfig from an optional file plus overrides.

    Overrides whose value is None are ignored, so CLI options that were not
    given fall back to the file and then to the model defaults.
    """
    data: dict[str, Any] = read_config_file(path) if path is not None else {}
    data.update({k: v for k, v in overrides.items() if v is not None})
    return CrawlerConfig(**data)

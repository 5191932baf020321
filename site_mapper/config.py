"""
Loading and validation of the SiteMapper configuration.
The schema is described and checked with Pydantic.
"""
from __future__ import annotations

import errno
import json
import os
from pathlib import Path
from typing import Any, Optional, Union

import yaml
from pydantic import BaseModel, ConfigDict, Field, field_validator

from site_mapper.crawler.fetcher import USER_AGENT


class CrawlerConfig(BaseModel):
    """Settings for one site map run."""
    model_config = ConfigDict(extra="forbid", frozen=True)

    base_url: Optional[str] = Field(None, description="Page the crawl starts from.")
    max_search_depth: int = Field(1, ge=0, description="Deepest link level that is fetched.")
    page_timeout_millis: int = Field(1000, gt=0, description="Timeout for a single page (milliseconds).")
    user_agent: str = Field(USER_AGENT, min_length=1, description="User-Agent header.")
    output_file: Path = Field(Path("siteMap.txt"), description="Where the site map is written.")

    @field_validator("base_url", mode="before")
    def _strip_whitespace(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.strip() or None
        return v


DEFAULT_CFG = Path("configs/default.yaml")


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


def load_config(path: Union[str, Path, None]) -> CrawlerConfig:
    """
    Read a YAML or JSON file and return a validated CrawlerConfig.

    Without *path*, ``configs/default.yaml`` is used when present and the
    model defaults otherwise. A missing explicit file raises FileNotFoundError.
    """
    if path is None:
        if not DEFAULT_CFG.is_file():
            return CrawlerConfig()
        path_obj = DEFAULT_CFG
    else:
        path_obj = Path(path).expanduser().resolve()
        if not path_obj.is_file():
            raise FileNotFoundError(errno.ENOENT, os.strerror(errno.ENOENT), str(path_obj))

    suffix = path_obj.suffix.lower()
    if suffix in (".yaml", ".yml"):
        data = _read_yaml(path_obj)
    elif suffix == ".json":
        data = _read_json(path_obj)
    else:
        raise ValueError(f"Unsupported config format: {suffix}")

    return CrawlerConfig(**data)

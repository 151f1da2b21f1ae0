from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any

import os
import yaml
from dotenv import load_dotenv


@dataclass(frozen=True)
class APIConfig:
    base_url: str
    endpoint: str
    # None: wait forever (no client-side timeout)
    timeout_seconds: float | None = None


@dataclass(frozen=True)
class ViewConfig:
    top_limit: int = 10
    names_limit: int = 10
    name_prefix: str = "P"


@dataclass(frozen=True)
class ReportConfig:
    api: APIConfig
    report: ViewConfig = field(default_factory=ViewConfig)


def _project_root() -> Path:
    # Resolve from this file: .../src/utils/config.py -> project root is 3 parents up.
    return Path(__file__).resolve().parents[2]


def load_report_config(path: str | Path | None = None) -> ReportConfig:
    """
    Load report config from YAML.

    Precedence:
    - explicit `path`
    - env `COUNTRY_REPORT_CONFIG`
    - project default `config/report.yaml`
    """
    load_dotenv()
    cfg_path = Path(path or os.getenv("COUNTRY_REPORT_CONFIG") or (_project_root() / "config" / "report.yaml"))
    cfg = load_yaml(cfg_path)
    api = cfg.get("api") or {}
    rep = cfg.get("report") or {}

    base_url = api.get("base_url")
    endpoint = api.get("endpoint")
    timeout_seconds = api.get("timeout_seconds")

    missing: list[str] = []
    if not base_url:
        missing.append("api.base_url")
    if not endpoint:
        missing.append("api.endpoint")
    if missing:
        raise ValueError(f"Missing {', '.join(missing)} in {cfg_path}")

    # A key present but null falls back to the default.
    defaults = ViewConfig()
    raw_top = rep.get("top_limit")
    raw_names = rep.get("names_limit")
    raw_prefix = rep.get("name_prefix")
    try:
        top_limit = int(raw_top) if raw_top is not None else defaults.top_limit
        names_limit = int(raw_names) if raw_names is not None else defaults.names_limit
    except (TypeError, ValueError) as e:
        raise ValueError(f"report.top_limit and report.names_limit must be integers in {cfg_path}") from e
    name_prefix = str(raw_prefix) if raw_prefix is not None else defaults.name_prefix

    if top_limit <= 0 or names_limit <= 0:
        raise ValueError(f"report.top_limit and report.names_limit must be > 0 in {cfg_path}")
    if not name_prefix:
        raise ValueError(f"report.name_prefix must not be empty in {cfg_path}")

    return ReportConfig(
        api=APIConfig(
            base_url=str(base_url),
            endpoint=str(endpoint),
            timeout_seconds=float(timeout_seconds) if timeout_seconds is not None else None,
        ),
        report=ViewConfig(
            top_limit=top_limit,
            names_limit=names_limit,
            name_prefix=name_prefix,
        ),
    )


def load_yaml(path: str | Path) -> dict[str, Any]:
    p = Path(path)
    return yaml.safe_load(p.read_text(encoding="utf-8")) or {}

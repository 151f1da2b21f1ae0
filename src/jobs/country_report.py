from __future__ import annotations

from dataclasses import dataclass

from src.collector.api_client import RestCountriesClient
from src.report.render import render_report
from src.report.views import group_by_region
from src.utils.config import ReportConfig, load_report_config
from src.utils.logging import get_logger


logger = get_logger(component="jobs_country_report")


@dataclass(frozen=True)
class ReportResult:
    html: str
    records: int
    regions: int


async def run_country_report(
    *,
    config: ReportConfig | None = None,
    client: RestCountriesClient | None = None,
) -> ReportResult:
    """
    Fetch the full country list once and render it.

    Fetch errors propagate untouched; nothing is rendered unless the fetch succeeded.
    """
    cfg = config or load_report_config()
    client2 = client or RestCountriesClient(
        base_url=cfg.api.base_url,
        endpoint=cfg.api.endpoint,
        timeout_seconds=cfg.api.timeout_seconds,
    )
    try:
        records = await client2.fetch_all()
    finally:
        if client is None:
            await client2.aclose()

    html = render_report(
        records,
        top_limit=cfg.report.top_limit,
        names_limit=cfg.report.names_limit,
        name_prefix=cfg.report.name_prefix,
    )
    regions = len(group_by_region(records))
    logger.info("country_report_rendered", records=len(records), regions=regions, bytes=len(html.encode("utf-8")))
    return ReportResult(html=html, records=len(records), regions=regions)

from __future__ import annotations

import argparse
import asyncio
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    # When running as scripts/country_report.py, sys.path[0] is scripts/,
    # so `import src.*` fails unless the project root is on sys.path.
    sys.path.insert(0, str(PROJECT_ROOT))

from src.collector.api_client import CountryAPIError  # noqa: E402
from src.jobs.country_report import run_country_report  # noqa: E402
from src.utils.config import load_report_config  # noqa: E402
from src.utils.logging import get_logger, setup_logging  # noqa: E402


logger = get_logger(script="country_report")


async def _amain(argv: list[str] | None = None) -> int:
    setup_logging()

    parser = argparse.ArgumentParser(description="Render the REST Countries report as HTML on stdout")
    parser.add_argument("--config", type=str, default=None, help="Path to report YAML (default: config/report.yaml)")
    args = parser.parse_args(argv)

    cfg = load_report_config(args.config)
    try:
        result = await run_country_report(config=cfg)
    except CountryAPIError as e:
        logger.error("country_report_failed", error_type=type(e).__name__, error=str(e))
        raise

    sys.stdout.write(result.html)
    sys.stdout.write("\n")
    return 0


def main(argv: list[str] | None = None) -> int:
    return asyncio.run(_amain(argv))


if __name__ == "__main__":
    raise SystemExit(main())

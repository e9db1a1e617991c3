#!/usr/bin/env python3
"""
HubSpot form submission export runner.

Reads API_TOKEN (required), SEARCH_TERM (default "exprom") and DAYS_BACK
(default 30) from the environment and writes matching submissions to an
Excel workbook.

Usage:
  API_TOKEN=pat-xxx python scripts/run_export.py
  SEARCH_TERM="Contact" DAYS_BACK=90 python scripts/run_export.py --output out/contact.xlsx -v
"""

from __future__ import annotations
import argparse
import sys
from pathlib import Path

# --- ensure repo root on sys.path ---
THIS_FILE = Path(__file__).resolve()
REPO_ROOT = THIS_FILE.parents[1]
if str(REPO_ROOT) not in sys.path:
    sys.path.insert(0, str(REPO_ROOT))

from logging_setup import setup_logging, get_logger
from utils.api import HubSpotAPI
from utils.config import load_config, load_env_files
from utils.errors import ConfigurationError, RemoteRequestError
from export.export_submissions import export_submissions

DEFAULT_OUTPUT = Path("form-submissions.xlsx")


def main(argv: list[str] | None = None) -> int:
    p = argparse.ArgumentParser(description="Export HubSpot form submissions to an Excel workbook")
    p.add_argument("--output", type=Path, default=DEFAULT_OUTPUT, help="Workbook path (default: form-submissions.xlsx)")
    p.add_argument(
        "--full-scan",
        dest="assume_newest_first",
        action="store_false",
        default=True,
        help="Scan every submission and filter, instead of stopping at the first one older than the cutoff",
    )
    p.add_argument("-v", "--verbose", action="count", default=0, help="Increase verbosity (-v, -vv)")
    args = p.parse_args(argv)

    setup_logging(verbosity=args.verbose)
    log = get_logger(step="runner")

    load_env_files()
    try:
        config = load_config()
    except ConfigurationError as e:
        log.error("Fatal error: %s", e)
        return 1

    api = HubSpotAPI(config.token)
    try:
        result = export_submissions(config, api, args.output, assume_newest_first=args.assume_newest_first)
    except RemoteRequestError as e:
        log.error("Fatal error: %s", e, extra={"url": e.url, "status_code": e.status_code})
        return 1

    log.debug(
        "export pipeline complete",
        extra={"forms_total": result.forms_total, "forms_matched": result.forms_matched, "rows": result.row_count},
    )
    return 0


if __name__ == "__main__":
    raise SystemExit(main())

# utils/config.py
from __future__ import annotations

import math
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Mapping, Optional

from dotenv import load_dotenv

from utils.dates import cutoff_ms
from utils.errors import ConfigurationError

DEFAULT_SEARCH_TERM = "exprom"
DEFAULT_DAYS_BACK = 30

TOKEN_VARS = ("API_TOKEN", "HUBSPOT_PAT")
SEARCH_TERM_VARS = ("SEARCH_TERM", "REQUEST_TERM")
DAYS_BACK_VAR = "DAYS_BACK"


def load_env_files(root: Optional[Path] = None) -> bool:
    """
    Load `.env` then `.env.local` (overrides) from `root`, by default the
    working directory the job runs in. Variables already set in the process
    environment win over `.env`.
    - PYTHON_DOTENV_DISABLE=1 skips loading (tests set it)
    Returns True when files were looked up.
    """
    if os.getenv("PYTHON_DOTENV_DISABLE") == "1":
        return False
    root = Path.cwd() if root is None else Path(root)
    load_dotenv(root / ".env")
    load_dotenv(root / ".env.local", override=True)
    return True


@dataclass(frozen=True, slots=True)
class ExportConfig:
    token: str
    search_term: str  # lower-cased
    days_back: float
    cutoff_ms: int


def _first_set(environ: Mapping[str, str], names) -> Optional[str]:
    for name in names:
        value = (environ.get(name) or "").strip()
        if value:
            return value
    return None


def parse_days_back(raw: Optional[str]) -> float:
    """
    Positive number of days; anything else falls back to the default.

    >>> parse_days_back("90")
    90
    >>> parse_days_back("abc")
    30
    >>> parse_days_back("-5")
    30
    """
    if raw is None:
        return DEFAULT_DAYS_BACK
    try:
        value = float(raw)
    except ValueError:
        return DEFAULT_DAYS_BACK
    if not math.isfinite(value) or value <= 0:
        return DEFAULT_DAYS_BACK
    return int(value) if value.is_integer() else value


def load_config(environ: Optional[Mapping[str, str]] = None, *, now_ms: Optional[int] = None) -> ExportConfig:
    """
    Build the run configuration from the environment.

    Raises ConfigurationError when no API token is set, so a scheduled job
    fails loudly instead of producing an empty workbook.
    """
    if environ is None:
        environ = os.environ

    token = _first_set(environ, TOKEN_VARS)
    if not token:
        raise ConfigurationError(
            f"Environment variable {TOKEN_VARS[0]} is missing (check your .env)"
        )

    search_term = (_first_set(environ, SEARCH_TERM_VARS) or DEFAULT_SEARCH_TERM).lower()
    days_back = parse_days_back(environ.get(DAYS_BACK_VAR))

    return ExportConfig(
        token=token,
        search_term=search_term,
        days_back=days_back,
        cutoff_ms=cutoff_ms(days_back, now=now_ms),
    )

# tests/conftest.py
from __future__ import annotations

import sys
from pathlib import Path

import pytest

# ---------- import helpers ----------
ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from utils.api import HubSpotAPI  # noqa: E402
from utils.dates import MS_PER_DAY  # noqa: E402

BASE = "https://api.test"
FORMS_URL = f"{BASE}/marketing/v3/forms"

# Fixed "now" for window arithmetic: 2025-08-19T17:52:51.123Z
NOW_MS = 1_755_625_971_123


def submissions_url(form_id: str) -> str:
    return f"{BASE}/form-integrations/v1/submissions/forms/{form_id}"


def days_ago(days: float) -> int:
    return NOW_MS - int(days * MS_PER_DAY)


def make_submission(conversion_id: str, submitted_at: int, *, email: str | None = None,
                    page_url: str = "https://example.com/landing", extra_values=None) -> dict:
    values = []
    if email is not None:
        values.append({"objectTypeId": "0-1", "name": "email", "value": email})
    values.extend(extra_values or [])
    return {
        "conversionId": conversion_id,
        "submittedAt": submitted_at,
        "pageUrl": page_url,
        "values": values,
    }


def forms_page(forms, after: str | None = None) -> dict:
    body = {"results": forms}
    if after:
        body["paging"] = {"next": {"after": after, "link": f"{FORMS_URL}?after={after}"}}
    return body


def submissions_page(subs, offset: int = 0) -> dict:
    return {"results": subs, "hasMore": bool(offset), "offset": offset}


# ---------- common fixtures ----------
@pytest.fixture
def api() -> HubSpotAPI:
    return HubSpotAPI("test-token", base_url=BASE)


@pytest.fixture
def clean_env(monkeypatch):
    """Strip exporter variables so tests control the environment."""
    monkeypatch.setenv("PYTHON_DOTENV_DISABLE", "1")
    for var in ("API_TOKEN", "HUBSPOT_PAT", "SEARCH_TERM", "REQUEST_TERM", "DAYS_BACK"):
        # setenv first so teardown also removes values a .env load adds later
        monkeypatch.setenv(var, "")
        monkeypatch.delenv(var)
    return monkeypatch


@pytest.fixture
def frozen_now(monkeypatch):
    """Pin the wall clock used for the cutoff to NOW_MS."""
    monkeypatch.setattr("utils.dates.now_ms", lambda: NOW_MS)
    return NOW_MS

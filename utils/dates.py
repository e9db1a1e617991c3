#utils/dates.py
from __future__ import annotations

import time
from datetime import datetime, timedelta, timezone
from typing import Optional

MS_PER_DAY = 24 * 60 * 60 * 1_000

_EPOCH = datetime(1970, 1, 1, tzinfo=timezone.utc)


def now_ms() -> int:
    """Current wall-clock time as epoch milliseconds."""
    return int(time.time() * 1_000)


def cutoff_ms(days_back: float, now: Optional[int] = None) -> int:
    """
    Earliest epoch-ms timestamp inside the look-back window.

    Days are plain 24h blocks; no calendar or timezone adjustment.

    >>> cutoff_ms(1, now=MS_PER_DAY * 10)
    777600000
    """
    if now is None:
        now = now_ms()
    return now - int(days_back * MS_PER_DAY)


def epoch_ms_to_iso8601(ms: int) -> str:
    """
    Format epoch milliseconds as ISO-8601 UTC with millisecond precision.

    Examples
    --------
    >>> epoch_ms_to_iso8601(0)
    '1970-01-01T00:00:00.000Z'

    >>> epoch_ms_to_iso8601(1755625971123)
    '2025-08-19T17:52:51.123Z'
    """
    dt = _EPOCH + timedelta(milliseconds=int(ms))
    return dt.strftime("%Y-%m-%dT%H:%M:%S") + f".{dt.microsecond // 1_000:03d}Z"

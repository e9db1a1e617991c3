# tests/test_dates.py
import re

from utils import dates


def test_epoch_ms_to_iso8601_millis():
    assert dates.epoch_ms_to_iso8601(1_755_625_971_123) == "2025-08-19T17:52:51.123Z"


def test_epoch_ms_to_iso8601_epoch():
    assert dates.epoch_ms_to_iso8601(0) == "1970-01-01T00:00:00.000Z"


def test_epoch_ms_to_iso8601_pads_millis():
    assert dates.epoch_ms_to_iso8601(1_000 + 7) == "1970-01-01T00:00:01.007Z"


def test_cutoff_uses_24h_days():
    now = 10 * dates.MS_PER_DAY
    assert dates.cutoff_ms(30, now=now) == now - 30 * 86_400_000
    assert dates.cutoff_ms(0.5, now=now) == now - 43_200_000


def test_now_ms_format():
    ts = dates.epoch_ms_to_iso8601(dates.now_ms())
    assert re.match(r"^\d{4}-\d{2}-\d{2}T\d{2}:\d{2}:\d{2}\.\d{3}Z$", ts)

# -*- coding: utf-8 -*-
"""
Tests de utilidades de fecha para ventanas de reembolso.
"""

from datetime import datetime, timedelta, timezone

from app.modules.refunds.utils.datetime_helpers import days_elapsed, ensure_utc, to_iso8601

T0 = datetime(2026, 1, 1, 8, 30, tzinfo=timezone.utc)


def test_days_elapsed_floors_partial_days():
    assert days_elapsed(T0, T0 + timedelta(days=3, hours=23, minutes=59)) == 3
    assert days_elapsed(T0, T0 + timedelta(days=4)) == 4
    assert days_elapsed(T0, T0 + timedelta(hours=5)) == 0


def test_days_elapsed_accepts_naive_datetimes_as_utc():
    naive = datetime(2026, 1, 1, 8, 30)
    assert days_elapsed(naive, T0 + timedelta(days=2)) == 2


def test_ensure_utc_converts_other_offsets():
    tz = timezone(timedelta(hours=-6))
    local = datetime(2026, 1, 1, 2, 30, tzinfo=tz)
    assert ensure_utc(local) == T0


def test_to_iso8601_uses_z_suffix():
    assert to_iso8601(T0) == "2026-01-01T08:30:00Z"
    assert to_iso8601(None) is None

# -*- coding: utf-8 -*-
"""
backend/app/modules/refunds/utils/datetime_helpers.py

Utilidades para manejo consistente de timestamps UTC.

Autor: Ixchel Beristáin
Fecha: 2026-10-07
"""

from datetime import datetime, timezone
from typing import Optional


def utcnow() -> datetime:
    """
    Retorna el timestamp UTC actual (timezone-aware).

    Examples:
        >>> utcnow().tzinfo == timezone.utc
        True
    """
    return datetime.now(timezone.utc)


def ensure_utc(dt: datetime) -> datetime:
    """
    Asegura que un datetime sea UTC timezone-aware.
    Los datetimes naive (p.ej. leídos de sqlite) se asumen en UTC.
    """
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc)


def to_iso8601(dt: Optional[datetime]) -> Optional[str]:
    """Serializa a ISO 8601 con sufijo Z (None se respeta)."""
    if dt is None:
        return None
    return ensure_utc(dt).isoformat().replace("+00:00", "Z")


def days_elapsed(since: datetime, now: Optional[datetime] = None) -> int:
    """
    Días completos transcurridos: floor((now - since) / 1 día).

    Examples:
        >>> from datetime import timedelta
        >>> t0 = datetime(2026, 1, 1, tzinfo=timezone.utc)
        >>> days_elapsed(t0, t0 + timedelta(days=3, hours=23))
        3
    """
    delta = ensure_utc(now or utcnow()) - ensure_utc(since)
    return int(delta.total_seconds() // 86400)


__all__ = ["utcnow", "ensure_utc", "to_iso8601", "days_elapsed"]

"""
Time Helpers
============

Clock and timezone handling for loans and audit timestamps.

The display timezone comes from ``Settings.timezone``; storage is always UTC.
SQLite and pymongo (without tz_aware) can return naive datetimes, so values
read back from a store pass through ensure_aware() before the domain sees them.
"""
import logging
import zoneinfo
from datetime import datetime, timezone as dt_timezone, tzinfo
from typing import Optional

from bookhub.core.config import get_settings

logger = logging.getLogger(__name__)


def _resolve_timezone() -> tzinfo:
    name = get_settings().timezone
    if name.upper() == "UTC":
        return dt_timezone.utc
    try:
        return zoneinfo.ZoneInfo(name)
    except (zoneinfo.ZoneInfoNotFoundError, ValueError):
        logger.warning(f"Unknown timezone '{name}', using UTC")
        return dt_timezone.utc


def now() -> datetime:
    """Current time as an aware datetime in the configured timezone."""
    return datetime.now(_resolve_timezone())


def ensure_aware(dt: Optional[datetime]) -> Optional[datetime]:
    """
    Attach UTC to a naive datetime loaded from storage.
    
    Aware values and None pass through unchanged.
    """
    if dt is None:
        return None
    if dt.tzinfo is None:
        return dt.replace(tzinfo=dt_timezone.utc)
    return dt


def to_utc(dt: Optional[datetime]) -> Optional[datetime]:
    """Convert to UTC before writing; naive values are taken as local app time."""
    if dt is None:
        return None
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=_resolve_timezone())
    return dt.astimezone(dt_timezone.utc)

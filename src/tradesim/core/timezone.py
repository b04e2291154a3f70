"""Timezone utilities for US/Eastern market time."""

from datetime import datetime
from typing import Optional

import pytz
from dateutil import parser as date_parser

EASTERN_TZ = pytz.timezone("US/Eastern")


def now_eastern() -> datetime:
    """Return current time in US/Eastern timezone."""
    return datetime.now(EASTERN_TZ)


def to_eastern(dt: datetime) -> datetime:
    """Convert a datetime to US/Eastern; naive values are taken as Eastern already."""
    if dt.tzinfo is None:
        return EASTERN_TZ.localize(dt)
    return dt.astimezone(EASTERN_TZ)


def parse_market_timestamp(value: str, tz_name: Optional[str] = None) -> datetime:
    """
    Parse a timestamp reported by a market data source.

    Series endpoints report naive local exchange times together with the
    zone name in their metadata; when no zone is given US/Eastern is assumed.
    """
    dt = date_parser.parse(value)
    if dt.tzinfo is None:
        tz = pytz.timezone(tz_name) if tz_name else EASTERN_TZ
        dt = tz.localize(dt)
    return to_eastern(dt)


def format_timestamp(dt: Optional[datetime]) -> str:
    """Render a timestamp as 'YYYY-MM-DD HH:MM' Eastern time for replies."""
    if dt is None:
        return "-"
    return to_eastern(dt).strftime("%Y-%m-%d %H:%M")

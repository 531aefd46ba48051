"""OData-style filter construction and time windows."""

from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Any, Dict, List, Optional
from urllib.parse import quote as urlquote

from .exceptions import InvalidParameterError

MAX_LIMIT = 1000


class TimeWindow(str, Enum):
    """How far back date-filtered commands look."""

    LAST_7_DAYS = "last_7_days"
    LAST_MONTH = "last_month"
    LAST_THREE_MONTHS = "last_three_months"
    LAST_SIX_MONTHS = "last_six_months"
    ALL = "all"


_WINDOW_DAYS = {
    TimeWindow.LAST_7_DAYS: 7,
    TimeWindow.LAST_MONTH: 30,
    TimeWindow.LAST_THREE_MONTHS: 90,
    TimeWindow.LAST_SIX_MONTHS: 180,
}


def quote(value: Any) -> str:
    """Render ``value`` as a single-quoted literal."""
    return "'" + str(value).replace("'", "''") + "'"


def eq(field: str, value: Any) -> str:
    return f"{field} eq {quote(value)}"


def gt(field: str, value: Any) -> str:
    return f"{field} gt {quote(value)}"


def contains(field: str, value: Any) -> str:
    return f"contains({field},{quote(value)})"


def and_(*clauses: Optional[str]) -> str:
    return " and ".join(c for c in clauses if c)


def check_limit(limit: Optional[int]) -> Optional[int]:
    if limit is not None and not 1 <= limit <= MAX_LIMIT:
        raise InvalidParameterError(f"Limit must be between 1 and {MAX_LIMIT}, got {limit}.")
    return limit


def build_uri(base: str, filter: Optional[str] = None, limit: Optional[int] = None, **params: Any) -> str:
    """Append ``filter``, ``limit`` and any extra params to ``base``."""
    query = []
    if filter:
        query.append("filter=" + urlquote(filter, safe="/(),"))
    if limit is not None:
        query.append(f"limit={check_limit(limit)}")
    for key, value in params.items():
        if value is not None:
            query.append(f"{key}={urlquote(str(value), safe='')}")

    if not query:
        return base
    separator = "&" if "?" in base else "?"
    return base + separator + "&".join(query)


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


def iso_z(value: datetime) -> str:
    """Format ``value`` as a UTC timestamp with a ``Z`` suffix."""
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%SZ")


def parse_timestamp(value: Any) -> Optional[datetime]:
    """Parse an API timestamp, returning None when it is missing or malformed."""
    if isinstance(value, datetime):
        return value if value.tzinfo else value.replace(tzinfo=timezone.utc)
    if not value or not isinstance(value, str):
        return None
    try:
        parsed = datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=timezone.utc)


def window_start(window: TimeWindow, now: Optional[datetime] = None) -> Optional[datetime]:
    """First instant included by ``window``; None means no lower bound."""
    window = TimeWindow(window)
    if window is TimeWindow.ALL:
        return None
    return (now or utcnow()) - timedelta(days=_WINDOW_DAYS[window])


EARLIEST = datetime.min.replace(tzinfo=timezone.utc)


def newest_first(items: List[Dict[str, Any]], field: str = "createdAt") -> List[Dict[str, Any]]:
    """Sort JSON objects by a timestamp field, newest first, undated last."""
    return sorted(items, key=lambda item: parse_timestamp(item.get(field)) or EARLIEST, reverse=True)

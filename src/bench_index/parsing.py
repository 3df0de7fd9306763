import math
from datetime import UTC, datetime
from typing import Any

# GitHub reports unset step/job timestamps as the zero time.
_ZERO_TIME_PREFIX = "0001-01-01T"

OLDEST = datetime.min.replace(tzinfo=UTC)


def round_half_up(value: float, digits: int = 0) -> float:
    """Round half away from zero (Python's round() is banker's rounding)."""
    factor = 10**digits
    scaled = abs(value) * factor
    rounded = math.floor(scaled + 0.5) / factor
    return math.copysign(rounded, value)


def parse_number(value: Any) -> float | None:
    """Parse a number from JSON or text, returning None when not numeric."""
    if value is None or isinstance(value, bool):
        return None
    try:
        number = float(value)
    except (TypeError, ValueError, OverflowError):
        return None
    if math.isnan(number) or math.isinf(number):
        return None
    return number


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 timestamp into an aware datetime.

    Empty strings, the zero time and anything unparseable yield None.
    Naive timestamps are assumed to be UTC.
    """
    if value is None:
        return None
    text = str(value).strip()
    if not text or text.startswith(_ZERO_TIME_PREFIX):
        return None
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError:
        return None
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=UTC)
    return parsed


def duration_seconds(started_at: Any, completed_at: Any) -> float | None:
    started = parse_timestamp(started_at)
    completed = parse_timestamp(completed_at)
    if started is None or completed is None or completed < started:
        return None
    return (completed - started).total_seconds()


def seconds_to_text(value: float) -> str:
    """Format seconds as the "<m>m <s>s" display string, e.g. 90.4 -> "1m 30s"."""
    total = int(round_half_up(value))
    minutes, seconds = divmod(total, 60)
    return f"{minutes}m {seconds}s"


def round_seconds(value: float | None) -> float | None:
    if value is None:
        return None
    return round_half_up(value, 2)

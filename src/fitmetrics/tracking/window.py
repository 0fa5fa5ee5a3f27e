"""Time-window selection of dated records.

All comparisons happen at calendar-day granularity: a record dated
exactly ``days`` ago is inside a ``days``-long window, one dated
``days + 1`` ago is not.
"""

from __future__ import annotations

import logging
from datetime import date, timedelta
from typing import Iterable, Optional, TypeVar, Union

from fitmetrics.tracking.models import DateLike, TimeRange, as_date

logger = logging.getLogger(__name__)


# Any record type with a `date` attribute
R = TypeVar("R")


def parse_time_range(value: Union[TimeRange, str]) -> TimeRange:
    """Coerce a selector such as "30days" into a TimeRange."""
    if isinstance(value, TimeRange):
        return value
    try:
        return TimeRange(str(value).strip().lower())
    except ValueError:
        valid = tuple(member.value for member in TimeRange)
        raise ValueError(f"time_range must be one of {valid}, got '{value}'") from None


def filter_by_interval(
    records: Iterable[R],
    start: DateLike,
    end: DateLike,
) -> list[R]:
    """Return records whose date lies in [start, end], preserving order."""
    start_day = as_date(start)
    end_day = as_date(end)
    return [r for r in records if start_day <= as_date(r.date) <= end_day]


def filter_by_window(
    records: Iterable[R],
    days: int,
    today: Optional[date] = None,
) -> list[R]:
    """Return records dated within the last ``days`` days, today included.

    Args:
        records: Objects with a ``date`` attribute
        days: Window length in days
        today: Reference day, defaults to the current date

    Returns:
        Matching records in input order
    """
    if today is None:
        today = date.today()
    today = as_date(today)
    selected = filter_by_interval(records, today - timedelta(days=days), today)
    logger.debug("Window %d days ending %s kept %d records", days, today, len(selected))
    return selected


def filter_by_time_range(
    records: Iterable[R],
    time_range: Union[TimeRange, str],
    today: Optional[date] = None,
) -> list[R]:
    """Apply a "7days" / "30days" / "90days" selector."""
    return filter_by_window(records, parse_time_range(time_range).days, today)

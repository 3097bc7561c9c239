"""Calendar-day helpers for the trailing 7-day score histogram.

Timestamps are stored in UTC. Day boundaries are evaluated in the
configured zone, so a record at 23:30 UTC may land on "tomorrow" for a
zone east of UTC.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date, datetime, time, timedelta, timezone
from zoneinfo import ZoneInfo

WINDOW_DAYS = 7


def as_aware(dt: datetime) -> datetime:
    """Treat naive datetimes (as returned by SQLite) as UTC."""
    if dt.tzinfo is None:
        return dt.replace(tzinfo=timezone.utc)
    return dt


def local_date(dt: datetime, tz: ZoneInfo) -> date:
    return as_aware(dt).astimezone(tz).date()


def window_days(now: datetime, tz: ZoneInfo) -> list[date]:
    """The 7 calendar days ending today, oldest first."""
    today = local_date(now, tz)
    return [today - timedelta(days=offset) for offset in range(WINDOW_DAYS - 1, -1, -1)]


def window_bounds(now: datetime, tz: ZoneInfo) -> tuple[datetime, datetime]:
    """[00:00 six days ago, 00:00 tomorrow) in UTC."""
    days = window_days(now, tz)
    start = datetime.combine(days[0], time.min, tzinfo=tz)
    end = datetime.combine(days[-1] + timedelta(days=1), time.min, tzinfo=tz)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def bucket_scores(
    records: Iterable[tuple[datetime, int]],
    now: datetime,
    tz: ZoneInfo,
) -> list[int]:
    """Sum scores per local calendar day.

    Index 0 is six days ago and index 6 is today. Records outside the
    window are ignored.
    """
    days = window_days(now, tz)
    index = {day: i for i, day in enumerate(days)}
    buckets = [0] * WINDOW_DAYS
    for completed_at, score in records:
        i = index.get(local_date(completed_at, tz))
        if i is not None:
            buckets[i] += score
    return buckets


def round_half_up(total: int, count: int) -> int:
    """Integer mean of ``total / count`` with .5 rounding up. 0 for no items."""
    if count == 0:
        return 0
    return (2 * total + count) // (2 * count)


def seconds_to_hours(seconds: int) -> float:
    return round(seconds / 3600, 1)

"""Date windows for order lookups spanning many months.

A single ``Order_GetByDate`` call over a long range can exceed what the
service will return in one response, so long ranges are cut into month sized
windows. The service treats both bounds as inclusive days; each window
therefore starts one day after the previous one ended.
"""
from __future__ import annotations

import calendar
from datetime import date, datetime, timedelta
from typing import Iterable, Iterator, NamedTuple, Union

WINDOW_MONTHS = 1
GAP = timedelta(days=1)

DATE_FORMAT = "%Y-%m-%d"
DATETIME_FORMAT = "%Y-%m-%d %H:%M:%S"

DateLike = Union[date, datetime, str]
Status = Union[str, Iterable[int], Iterable[str]]


def as_date(value: DateLike) -> date:
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return date.fromisoformat(value[:10])


def format_status(status: Status) -> str:
    """Join status codes with commas, keeping the caller's order and repeats."""
    if isinstance(status, str):
        return status
    return ",".join(str(s) for s in status)


def add_months(day: date, months: int) -> date:
    """Calendar month step; the 31st lands on the last day of short months."""
    index = day.month - 1 + months
    year = day.year + index // 12
    month = index % 12 + 1
    last = calendar.monthrange(year, month)[1]
    return day.replace(year=year, month=month, day=min(day.day, last))


class DateWindow(NamedTuple):
    start: date
    end: date
    status: str

    def as_args(self) -> dict:
        return {
            "Start": self.start.strftime(DATE_FORMAT),
            "End": self.end.strftime(DATE_FORMAT),
            "Status": self.status,
        }


def month_windows(
    start: DateLike,
    until: DateLike,
    status: Status,
    months: int = WINDOW_MONTHS,
    gap: timedelta = GAP,
) -> Iterator[DateWindow]:
    """Yield windows from ``start`` until one covers the day ``until``.

    ``until`` is the last calendar day that must be fetched, usually today,
    so a window starting on that day is still issued. The last window is not
    clipped to ``until``; its end may lie in the future, which the service
    simply has no orders for.
    """
    cursor = as_date(start)
    until = as_date(until)
    status = format_status(status)
    while cursor <= until:
        end = add_months(cursor, months)
        yield DateWindow(cursor, end, status)
        cursor = end + gap

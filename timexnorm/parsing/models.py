from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime, timedelta
from enum import Enum

from dateutil.relativedelta import relativedelta


class Granularity(str, Enum):
    """Size of the calendar unit a temporal expression denotes."""

    TIME = "time"
    DAY = "day"
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"


@dataclass(frozen=True)
class Temporal:
    """A recognized temporal expression resolved to a half-open span [start, end)."""

    start: datetime
    end: datetime
    granularity: Granularity

    @classmethod
    def spanning(cls, moment: datetime, granularity: Granularity) -> Temporal:
        """Build the span of the given granularity that contains *moment*."""
        start = _truncate(moment, granularity)
        return cls(start=start, end=start + _period(start, granularity), granularity=granularity)

    @property
    def timeml_value(self) -> str:
        """Compact calendar string, e.g. 2024-01-02, 2024-W05, 2024-01 or 2024."""
        s = self.start
        if self.granularity is Granularity.YEAR:
            return f"{s.year:04d}"
        if self.granularity is Granularity.MONTH:
            return f"{s.year:04d}-{s.month:02d}"
        if self.granularity is Granularity.WEEK:
            iso = s.isocalendar()
            return f"{iso.year:04d}-W{iso.week:02d}"
        day = f"{s.year:04d}-{s.month:02d}-{s.day:02d}"
        if self.granularity is Granularity.DAY:
            return day
        if s.second:
            return f"{day}T{s.hour:02d}:{s.minute:02d}:{s.second:02d}"
        return f"{day}T{s.hour:02d}:{s.minute:02d}"

    @property
    def structured(self) -> str:
        """Full span representation including the period."""
        return (
            f"TimeSpan(start={self.start.isoformat()}, end={self.end.isoformat()}, "
            f"period={_describe_period(self.start, self.granularity)})"
        )

    def __str__(self) -> str:
        return self.structured


def _truncate(moment: datetime, granularity: Granularity) -> datetime:
    moment = moment.replace(microsecond=0)
    if granularity is Granularity.TIME:
        return moment
    midnight = moment.replace(hour=0, minute=0, second=0)
    if granularity is Granularity.DAY:
        return midnight
    if granularity is Granularity.WEEK:
        return midnight - timedelta(days=midnight.weekday())
    if granularity is Granularity.MONTH:
        return midnight.replace(day=1)
    return midnight.replace(month=1, day=1)


def _period(start: datetime, granularity: Granularity) -> relativedelta:
    if granularity is Granularity.TIME:
        return relativedelta(seconds=1) if start.second else relativedelta(minutes=1)
    if granularity is Granularity.DAY:
        return relativedelta(days=1)
    if granularity is Granularity.WEEK:
        return relativedelta(weeks=1)
    if granularity is Granularity.MONTH:
        return relativedelta(months=1)
    return relativedelta(years=1)


def _describe_period(start: datetime, granularity: Granularity) -> str:
    if granularity is Granularity.TIME:
        return "1 second" if start.second else "1 minute"
    return f"1 {granularity.value}"

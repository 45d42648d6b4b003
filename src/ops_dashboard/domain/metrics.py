"""Time-windowed dashboard metrics: periods, growth rates and monthly buckets.

Everything here is pure and synchronous. Callers fetch raw rows/counts first
(see ``ops_dashboard.services.dashboard``) and pass them in.
"""

from __future__ import annotations

from bisect import bisect_right
from dataclasses import dataclass, fields
from datetime import date, datetime, time, timedelta
from enum import Enum
from typing import Any, Iterable, List, Mapping, Optional

# ``datetime.weekday()`` numbering
MONDAY = 0
SUNDAY = 6

WEEK_START_DAYS = {"monday": MONDAY, "sunday": SUNDAY}


def parse_week_start(raw: Optional[str]) -> int:
    """Map a ``WEEK_START`` setting (``sunday`` or ``monday``) to a weekday; Sunday when unset."""
    key = (raw or "sunday").strip().lower()
    if key not in WEEK_START_DAYS:
        raise ValueError(f"WEEK_START must be one of {', '.join(WEEK_START_DAYS)}, got {raw!r}")
    return WEEK_START_DAYS[key]


class Granularity(str, Enum):
    WEEK = "week"
    MONTH = "month"
    YEAR = "year"
    ALL = "all"


@dataclass(frozen=True, slots=True)
class Period:
    """Half-open interval ``[start, end)``. ``None`` leaves that side unbounded."""

    start: Optional[datetime] = None
    end: Optional[datetime] = None

    @property
    def unbounded(self) -> bool:
        return self.start is None and self.end is None

    def contains(self, moment: datetime) -> bool:
        if self.start is not None and moment < self.start:
            return False
        if self.end is not None and moment >= self.end:
            return False
        return True


@dataclass(frozen=True, slots=True)
class MetricWindow:
    """Current and previous periods derived from one anchor time."""

    granularity: Granularity
    current: Period
    previous: Period


@dataclass(frozen=True, slots=True)
class GrowthRates:
    cars_growth: float = 0.0
    deals_growth: float = 0.0
    customers_growth: float = 0.0
    providers_growth: float = 0.0
    revenue_growth: float = 0.0
    inventory_growth: float = 0.0


@dataclass(frozen=True, slots=True)
class MetricSnapshot:
    """Raw counts and sums read for one period."""

    cars: int = 0
    deals: int = 0
    customers: int = 0
    providers: int = 0
    revenue: float = 0.0
    inventory_value: float = 0.0

    def growth_against(
        self, previous: "MetricSnapshot", granularity: Granularity | str
    ) -> GrowthRates:
        granularity = Granularity(granularity)
        rates = {}
        for snapshot_field, growth_field in zip(fields(self), fields(GrowthRates)):
            rates[growth_field.name] = window_growth(
                granularity,
                getattr(self, snapshot_field.name),
                getattr(previous, snapshot_field.name),
            )
        return GrowthRates(**rates)


@dataclass(frozen=True, slots=True)
class MonthlyBucket:
    """One calendar month ``[start, end)`` with a record count and amount sum."""

    start: datetime
    end: datetime
    count: int = 0
    amount: float = 0.0

    @property
    def month(self) -> str:
        return self.start.strftime("%Y-%m")


def _shift_months(moment: datetime, months: int) -> datetime:
    """Move a first-of-month datetime by ``months`` calendar months."""
    index = moment.year * 12 + (moment.month - 1) + months
    return moment.replace(year=index // 12, month=index % 12 + 1, day=1)


def month_start(moment: datetime) -> datetime:
    return moment.replace(day=1, hour=0, minute=0, second=0, microsecond=0)


def trailing_months_start(anchor: datetime, month_count: int) -> datetime:
    """First instant of the oldest month in a ``month_count`` trailing series."""
    return _shift_months(month_start(anchor), -(max(month_count, 1) - 1))


def compute_window(
    granularity: Granularity | str,
    now: Optional[datetime] = None,
    *,
    week_start: int = SUNDAY,
) -> MetricWindow:
    """Derive the current and previous periods for ``granularity``.

    - week: current starts at 00:00 on the latest ``week_start`` day, previous
      is the seven days before that.
    - month / year: current starts on the first day of the calendar month /
      year, previous is the whole prior month / year.
    - all: both periods are unbounded.

    The current period is open-ended (it runs up to "now").
    """
    granularity = Granularity(granularity)
    if granularity is Granularity.ALL:
        return MetricWindow(granularity, Period(), Period())

    now = now or datetime.now()
    midnight = now.replace(hour=0, minute=0, second=0, microsecond=0)

    if granularity is Granularity.WEEK:
        start = midnight - timedelta(days=(now.weekday() - week_start) % 7)
        previous_start = start - timedelta(days=7)
    elif granularity is Granularity.MONTH:
        start = midnight.replace(day=1)
        previous_start = _shift_months(start, -1)
    else:
        start = midnight.replace(month=1, day=1)
        previous_start = start.replace(year=start.year - 1)

    return MetricWindow(
        granularity,
        current=Period(start, None),
        previous=Period(previous_start, start),
    )


def growth_rate(current: float, previous: float) -> float:
    """Percentage change from ``previous`` to ``current``.

    A zero previous value gives 100 when something appeared and 0 otherwise.
    """
    if previous == 0:
        return 100.0 if current > 0 else 0.0
    return (current - previous) / previous * 100


def window_growth(granularity: Granularity | str, current: float, previous: float) -> float:
    """Growth for a dashboard tile. Always 0 for the ``all`` granularity."""
    if Granularity(granularity) is Granularity.ALL:
        return 0.0
    return growth_rate(current, previous)


def parse_timestamp(value: Any, anchor: Optional[datetime] = None) -> Optional[datetime]:
    """Turn a row timestamp into a datetime comparable with ``anchor``.

    Accepts datetimes, dates and ISO-8601 strings as returned by PostgREST.
    Aware values are converted to the anchor's zone (local time for a naive
    anchor); naive values are taken to be in the anchor's zone.
    """
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
    elif isinstance(value, date) and not isinstance(value, datetime):
        value = datetime.combine(value, time.min)
    elif not isinstance(value, datetime):
        raise TypeError(f"Unsupported timestamp value: {value!r}")

    if anchor is None:
        return value
    if anchor.tzinfo is None:
        if value.tzinfo is not None:
            value = value.astimezone().replace(tzinfo=None)
        return value
    if value.tzinfo is None:
        return value.replace(tzinfo=anchor.tzinfo)
    return value.astimezone(anchor.tzinfo)


def bucket_trailing_months(
    records: Iterable[Mapping[str, Any]],
    month_count: int = 6,
    anchor: Optional[datetime] = None,
    *,
    timestamp_key: str = "created_at",
    amount_key: str = "amount",
) -> List[MonthlyBucket]:
    """Group records into ``month_count`` calendar months ending at the anchor's month.

    Buckets are ordered oldest to newest. Records outside every bucket, or
    without a timestamp, are skipped. A missing or null amount counts as 0.
    """
    if month_count < 0:
        raise ValueError("month_count must not be negative")
    if month_count == 0:
        return []

    anchor = anchor or datetime.now()
    first = trailing_months_start(anchor, month_count)
    bounds = [_shift_months(first, offset) for offset in range(month_count + 1)]

    counts = [0] * month_count
    amounts = [0.0] * month_count
    for record in records:
        moment = parse_timestamp(record.get(timestamp_key), anchor)
        if moment is None or moment < bounds[0] or moment >= bounds[-1]:
            continue
        index = bisect_right(bounds, moment) - 1
        counts[index] += 1
        amounts[index] += float(record.get(amount_key) or 0)

    return [
        MonthlyBucket(start=bounds[i], end=bounds[i + 1], count=counts[i], amount=amounts[i])
        for i in range(month_count)
    ]

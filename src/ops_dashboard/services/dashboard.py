"""Dashboard data loading.

Every read needed for one render is issued together; aggregation runs only
once all of them have resolved. A single failed read fails the whole load.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Sequence

from supabase import Client

from ..adapters.supabase_client import count_rows, gather_reads, select_rows
from ..domain.constants import (
    BOOKING_TYPE_COLORS,
    DEFAULT_BOOKING_TYPE_COLOR,
    METRIC_COUNT_TABLES,
    SERVICE_TYPES,
)
from ..domain.metrics import (
    SUNDAY,
    Granularity,
    GrowthRates,
    MetricSnapshot,
    MetricWindow,
    MonthlyBucket,
    Period,
    bucket_trailing_months,
    compute_window,
    parse_timestamp,
    trailing_months_start,
)
from ..logging_config import get_logger

logger = get_logger(__name__)

TOP_RANKING_SIZE = 5
TOP_SERVICES_SIZE = 10
RECENT_BOOKINGS_SIZE = 10


@dataclass(frozen=True, slots=True)
class MonthlyTrend:
    month: str
    deals: int = 0
    cars: int = 0
    revenue: float = 0.0


@dataclass(frozen=True, slots=True)
class DashboardMetrics:
    window: MetricWindow
    current: MetricSnapshot
    previous: MetricSnapshot
    growth: GrowthRates
    monthly: List[MonthlyTrend] = field(default_factory=list)


@dataclass(frozen=True, slots=True)
class BookingTypeCount:
    type: str
    count: int
    color: str


@dataclass(frozen=True, slots=True)
class RankedEntry:
    id: str
    name: str
    bookings_count: int
    total: float


@dataclass(frozen=True, slots=True)
class RecentBooking:
    id: str
    booking_reference: Optional[str]
    booking_type: str
    trip_date: Optional[str]
    total_amount: float
    payment_status: Optional[str]
    status: Optional[str]
    customer_name: Optional[str]
    school_name: Optional[str]
    created_at: Optional[str]


@dataclass(frozen=True, slots=True)
class ServicePerformance:
    service_type: str
    service_id: str
    name: str
    bookings_count: int
    total: float


@dataclass(frozen=True, slots=True)
class EntityCounts:
    """Row counts behind the overview's "system" cards. Providers count active rows only."""

    users: int = 0
    schools: int = 0
    destinations: int = 0
    guides: int = 0
    paramedics: int = 0
    security_companies: int = 0
    external_entertainment_companies: int = 0
    travel_companies: int = 0
    education_programs: int = 0


@dataclass(frozen=True, slots=True)
class BookingOverview:
    total_earnings: float
    monthly_earnings: float
    total_bookings: int
    pending_bookings: int
    total_debt: float
    booking_types: List[BookingTypeCount]
    monthly_revenue: List[MonthlyBucket]
    top_destinations: List[RankedEntry]
    top_schools: List[RankedEntry]
    recent_bookings: List[RecentBooking] = field(default_factory=list)
    top_services: List[ServicePerformance] = field(default_factory=list)
    entity_counts: EntityCounts = field(default_factory=EntityCounts)


def _amount(row: Mapping[str, Any], key: str) -> float:
    return float(row.get(key) or 0)


def _snapshot_calls(supabase: Client, period: Period, scope: Optional[Dict[str, Any]]) -> list:
    calls = [
        (count_rows, (supabase, table), {"period": period, "scope": scope})
        for table in METRIC_COUNT_TABLES.values()
    ]
    calls.append((select_rows, (supabase, "deals", "amount"), {"period": period, "scope": scope}))
    calls.append((select_rows, (supabase, "cars", "sale_price"), {"period": period, "scope": scope}))
    return calls


def _build_snapshot(results: List[Any]) -> MetricSnapshot:
    cars, deals, customers, providers, deal_rows, car_rows = results
    return MetricSnapshot(
        cars=cars,
        deals=deals,
        customers=customers,
        providers=providers,
        revenue=sum(_amount(row, "amount") for row in deal_rows),
        inventory_value=sum(_amount(row, "sale_price") for row in car_rows),
    )


async def load_dashboard_metrics(
    supabase: Client,
    granularity: Granularity | str,
    *,
    now: Optional[datetime] = None,
    tenant_id: Optional[str] = None,
    month_count: int = 6,
    week_start: int = SUNDAY,
) -> DashboardMetrics:
    """Load current/previous snapshots, growth rates and the trailing monthly trend."""
    if month_count < 0:
        raise ValueError("month_count must not be negative")
    granularity = Granularity(granularity)
    now = now or datetime.now()
    window = compute_window(granularity, now, week_start=week_start)
    scope = {"tenant_id": tenant_id} if tenant_id else None

    calls = _snapshot_calls(supabase, window.current, scope)
    per_snapshot = len(calls)
    if granularity is not Granularity.ALL:
        calls += _snapshot_calls(supabase, window.previous, scope)

    trailing = Period(trailing_months_start(now, month_count), None)
    calls.append(
        (select_rows, (supabase, "deals", "created_at, amount"), {"period": trailing, "scope": scope})
    )
    calls.append((select_rows, (supabase, "cars", "created_at"), {"period": trailing, "scope": scope}))

    results = await gather_reads(*calls, action="Dashboard data fetch")

    current = _build_snapshot(results[:per_snapshot])
    if granularity is Granularity.ALL:
        previous = current
    else:
        previous = _build_snapshot(results[per_snapshot : 2 * per_snapshot])
    deal_rows, car_rows = results[-2], results[-1]

    deal_buckets = bucket_trailing_months(deal_rows, month_count, now)
    car_buckets = bucket_trailing_months(car_rows, month_count, now)
    monthly = [
        MonthlyTrend(month=deals.month, deals=deals.count, cars=cars.count, revenue=deals.amount)
        for deals, cars in zip(deal_buckets, car_buckets)
    ]

    logger.info(
        "Dashboard metrics loaded (granularity=%s, deals=%d, cars=%d)",
        granularity.value,
        current.deals,
        current.cars,
    )
    return DashboardMetrics(
        window=window,
        current=current,
        previous=previous,
        growth=current.growth_against(previous, granularity),
        monthly=monthly,
    )


def _rank(
    bookings: List[Mapping[str, Any]],
    key: str,
    names: Mapping[Any, str],
    sort_by: str,
) -> List[RankedEntry]:
    stats: Dict[Any, List[float]] = defaultdict(lambda: [0, 0.0])
    for booking in bookings:
        ref = booking.get(key)
        if ref:
            stats[ref][0] += 1
            stats[ref][1] += _amount(booking, "total_amount")

    entries = [
        RankedEntry(id=str(ref), name=names.get(ref) or "Unknown", bookings_count=int(count), total=total)
        for ref, (count, total) in stats.items()
    ]
    if sort_by == "count":
        entries.sort(key=lambda entry: entry.bookings_count, reverse=True)
    else:
        entries.sort(key=lambda entry: entry.total, reverse=True)
    return entries[:TOP_RANKING_SIZE]


def _recent_bookings(
    bookings: List[Mapping[str, Any]],
    school_names: Mapping[Any, str],
    customer_names: Mapping[Any, str],
    now: datetime,
) -> List[RecentBooking]:
    """Newest bookings first; rows without ``created_at`` sort last."""
    dated = []
    undated = []
    for booking in bookings:
        created = parse_timestamp(booking.get("created_at"), now)
        if created is None:
            undated.append(booking)
        else:
            dated.append((created, booking))
    dated.sort(key=lambda pair: pair[0], reverse=True)
    ordered = [booking for _, booking in dated] + undated

    return [
        RecentBooking(
            id=str(booking["id"]),
            booking_reference=booking.get("booking_reference"),
            booking_type=booking.get("booking_type") or "full_trip",
            trip_date=booking.get("trip_date"),
            total_amount=_amount(booking, "total_amount"),
            payment_status=booking.get("payment_status"),
            status=booking.get("status"),
            customer_name=customer_names.get(booking.get("customer_id")),
            school_name=school_names.get(booking.get("school_id")),
            created_at=booking.get("created_at"),
        )
        for booking in ordered[:RECENT_BOOKINGS_SIZE]
    ]


def _top_services(
    services: List[Mapping[str, Any]],
    providers: Mapping[str, Sequence[Mapping[str, Any]]],
) -> List[ServicePerformance]:
    """Booked services grouped per provider, ranked by booked revenue."""
    names = {
        (service_type, row["id"]): row.get("name")
        for service_type, rows in providers.items()
        for row in rows
    }
    stats: Dict[tuple, List[float]] = defaultdict(lambda: [0, 0.0])
    for service in services:
        if not service.get("service_id"):
            continue
        key = (service.get("service_type"), service["service_id"])
        stats[key][0] += 1
        stats[key][1] += _amount(service, "booked_price")

    entries = [
        ServicePerformance(
            service_type=service_type or "",
            service_id=str(service_id),
            name=names.get((service_type, service_id)) or "Unknown",
            bookings_count=int(count),
            total=total,
        )
        for (service_type, service_id), (count, total) in stats.items()
    ]
    entries.sort(key=lambda entry: entry.total, reverse=True)
    return entries[:TOP_SERVICES_SIZE]


def summarize_bookings(
    bookings: List[Mapping[str, Any]],
    schools: List[Mapping[str, Any]],
    destinations: List[Mapping[str, Any]],
    services: List[Mapping[str, Any]],
    payments: List[Mapping[str, Any]],
    *,
    now: datetime,
    month_count: int = 6,
    users: Sequence[Mapping[str, Any]] = (),
    providers: Optional[Mapping[str, Sequence[Mapping[str, Any]]]] = None,
) -> BookingOverview:
    """Aggregate already-fetched booking rows into the admin overview.

    ``providers`` maps a service type to its active provider rows; it names
    the top services and feeds the provider counts.
    """
    providers = providers or {}
    this_month = compute_window(Granularity.MONTH, now).current
    monthly_earnings = 0.0
    type_counts: Dict[str, int] = defaultdict(int)
    for booking in bookings:
        created = parse_timestamp(booking.get("created_at"), now)
        if created is not None and this_month.contains(created):
            monthly_earnings += _amount(booking, "total_amount")
        type_counts[booking.get("booking_type") or "full_trip"] += 1

    booked = sum(_amount(row, "booked_price") for row in services)
    paid = sum(_amount(row, "amount") for row in payments)
    school_names = {s["id"]: s.get("name") for s in schools}

    return BookingOverview(
        total_earnings=sum(_amount(booking, "total_amount") for booking in bookings),
        monthly_earnings=monthly_earnings,
        total_bookings=len(bookings),
        pending_bookings=sum(1 for booking in bookings if booking.get("status") == "pending"),
        total_debt=booked - paid,
        booking_types=[
            BookingTypeCount(
                type=booking_type,
                count=count,
                color=BOOKING_TYPE_COLORS.get(booking_type, DEFAULT_BOOKING_TYPE_COLOR),
            )
            for booking_type, count in type_counts.items()
        ],
        monthly_revenue=bucket_trailing_months(
            bookings, month_count, now, amount_key="total_amount"
        ),
        top_destinations=_rank(
            bookings, "destination_id", {d["id"]: d.get("name") for d in destinations}, "count"
        ),
        top_schools=_rank(bookings, "school_id", school_names, "total"),
        recent_bookings=_recent_bookings(
            bookings, school_names, {u["id"]: u.get("full_name") for u in users}, now
        ),
        top_services=_top_services(services, providers),
        entity_counts=EntityCounts(
            users=len(users),
            schools=len(schools),
            destinations=len(destinations),
            **{service_type: len(providers.get(service_type) or ()) for service_type in SERVICE_TYPES},
        ),
    )


BOOKING_COLUMNS = (
    "id, booking_reference, booking_type, trip_date, total_amount, payment_status, status, "
    "created_at, destination_id, school_id, customer_id"
)


async def load_booking_overview(
    supabase: Client,
    *,
    now: Optional[datetime] = None,
    month_count: int = 6,
) -> BookingOverview:
    """Admin overview of bookings, earnings and what is still owed to providers."""
    now = now or datetime.now()
    results = await gather_reads(
        (select_rows, (supabase, "bookings", BOOKING_COLUMNS), {}),
        (select_rows, (supabase, "users", "id, full_name"), {}),
        (select_rows, (supabase, "schools", "id, name"), {}),
        (select_rows, (supabase, "destinations", "id, name"), {"scope": {"is_active": True}}),
        (
            select_rows,
            (supabase, "booking_services", "service_type, service_id, booked_price, booking_id"),
            {},
        ),
        (select_rows, (supabase, "payouts", "amount"), {"scope": {"type": "payment"}}),
        *[
            (select_rows, (supabase, service_type, "id, name"), {"scope": {"status": "active"}})
            for service_type in SERVICE_TYPES
        ],
        action="Booking overview fetch",
    )
    bookings, users, schools, destinations, services, payments = results[:6]
    return summarize_bookings(
        bookings,
        schools,
        destinations,
        services,
        payments,
        now=now,
        month_count=month_count,
        users=users,
        providers=dict(zip(SERVICE_TYPES, results[6:])),
    )

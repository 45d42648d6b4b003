"""Dashboard analytics routes."""

from __future__ import annotations

from fastapi import APIRouter, Depends

from ops_dashboard.services.dashboard import load_booking_overview, load_dashboard_metrics

from ..config import Settings, get_settings, get_supabase
from ..schemas.dashboard import (
    BookingOverviewRequest,
    BookingOverviewResponse,
    BookingTypeOut,
    DashboardMetricsRequest,
    DashboardMetricsResponse,
    EntityCountsOut,
    GrowthOut,
    MonthlyRevenueOut,
    MonthlyTrendOut,
    PeriodOut,
    RankedEntryOut,
    RecentBookingOut,
    ServicePerformanceOut,
    SnapshotOut,
)

router = APIRouter(prefix="/dashboard", tags=["dashboard"])


def _snapshot(snapshot) -> SnapshotOut:
    return SnapshotOut(
        cars=snapshot.cars,
        deals=snapshot.deals,
        customers=snapshot.customers,
        providers=snapshot.providers,
        revenue=snapshot.revenue,
        inventoryValue=snapshot.inventory_value,
    )


def _ranked(entries) -> list[RankedEntryOut]:
    return [
        RankedEntryOut(id=entry.id, name=entry.name, bookingsCount=entry.bookings_count, total=entry.total)
        for entry in entries
    ]


@router.post("/metrics", response_model=DashboardMetricsResponse, summary="Get KPI dashboard metrics")
async def get_dashboard_metrics(
    payload: DashboardMetricsRequest,
    supabase=Depends(get_supabase),
    settings: Settings = Depends(get_settings),
):
    """Current vs previous period counts and sums, growth rates and the monthly trend."""
    metrics = await load_dashboard_metrics(
        supabase,
        payload.granularity,
        now=payload.now,
        tenant_id=payload.tenantId,
        month_count=payload.monthCount,
        week_start=settings.week_start,
    )
    growth = metrics.growth
    return DashboardMetricsResponse(
        granularity=metrics.window.granularity,
        currentPeriod=PeriodOut(start=metrics.window.current.start, end=metrics.window.current.end),
        previousPeriod=PeriodOut(start=metrics.window.previous.start, end=metrics.window.previous.end),
        current=_snapshot(metrics.current),
        previous=_snapshot(metrics.previous),
        growth=GrowthOut(
            carsGrowth=growth.cars_growth,
            dealsGrowth=growth.deals_growth,
            customersGrowth=growth.customers_growth,
            providersGrowth=growth.providers_growth,
            revenueGrowth=growth.revenue_growth,
            inventoryGrowth=growth.inventory_growth,
        ),
        monthly=[
            MonthlyTrendOut(month=trend.month, deals=trend.deals, cars=trend.cars, revenue=trend.revenue)
            for trend in metrics.monthly
        ],
    )


@router.post("/bookings", response_model=BookingOverviewResponse, summary="Get booking overview")
async def get_booking_overview(
    payload: BookingOverviewRequest,
    supabase=Depends(get_supabase),
):
    overview = await load_booking_overview(supabase, now=payload.now, month_count=payload.monthCount)
    counts = overview.entity_counts
    return BookingOverviewResponse(
        totalEarnings=overview.total_earnings,
        monthlyEarnings=overview.monthly_earnings,
        totalBookings=overview.total_bookings,
        pendingBookings=overview.pending_bookings,
        totalDebt=overview.total_debt,
        bookingTypes=[
            BookingTypeOut(type=entry.type, count=entry.count, color=entry.color)
            for entry in overview.booking_types
        ],
        monthlyRevenue=[
            MonthlyRevenueOut(month=bucket.month, bookings=bucket.count, revenue=bucket.amount)
            for bucket in overview.monthly_revenue
        ],
        topDestinations=_ranked(overview.top_destinations),
        topSchools=_ranked(overview.top_schools),
        recentBookings=[
            RecentBookingOut(
                id=booking.id,
                bookingReference=booking.booking_reference,
                bookingType=booking.booking_type,
                tripDate=booking.trip_date,
                totalAmount=booking.total_amount,
                paymentStatus=booking.payment_status,
                status=booking.status,
                customerName=booking.customer_name,
                schoolName=booking.school_name,
                createdAt=booking.created_at,
            )
            for booking in overview.recent_bookings
        ],
        topServices=[
            ServicePerformanceOut(
                serviceType=entry.service_type,
                serviceId=entry.service_id,
                name=entry.name,
                bookingsCount=entry.bookings_count,
                total=entry.total,
            )
            for entry in overview.top_services
        ],
        entityCounts=EntityCountsOut(
            users=counts.users,
            schools=counts.schools,
            destinations=counts.destinations,
            guides=counts.guides,
            paramedics=counts.paramedics,
            securityCompanies=counts.security_companies,
            externalEntertainmentCompanies=counts.external_entertainment_companies,
            travelCompanies=counts.travel_companies,
            educationPrograms=counts.education_programs,
        ),
    )

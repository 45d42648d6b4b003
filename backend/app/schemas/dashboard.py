"""Dashboard schema definitions."""

from __future__ import annotations

from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from ops_dashboard.domain.metrics import Granularity


class DashboardMetricsRequest(BaseModel):
    """Request payload for the KPI dashboard."""

    granularity: Granularity = Granularity.MONTH
    tenantId: Optional[str] = None
    monthCount: int = Field(default=6, ge=0, le=36)
    # Anchor time; the server clock when omitted
    now: Optional[datetime] = None


class PeriodOut(BaseModel):
    start: Optional[datetime] = None
    end: Optional[datetime] = None


class SnapshotOut(BaseModel):
    cars: int
    deals: int
    customers: int
    providers: int
    revenue: float
    inventoryValue: float


class GrowthOut(BaseModel):
    """Period-over-period changes (%)."""

    carsGrowth: float
    dealsGrowth: float
    customersGrowth: float
    providersGrowth: float
    revenueGrowth: float
    inventoryGrowth: float


class MonthlyTrendOut(BaseModel):
    month: str
    deals: int
    cars: int
    revenue: float


class DashboardMetricsResponse(BaseModel):
    granularity: Granularity
    currentPeriod: PeriodOut
    previousPeriod: PeriodOut
    current: SnapshotOut
    previous: SnapshotOut
    growth: GrowthOut
    monthly: List[MonthlyTrendOut]


class BookingOverviewRequest(BaseModel):
    monthCount: int = Field(default=6, ge=0, le=36)
    now: Optional[datetime] = None


class BookingTypeOut(BaseModel):
    type: str
    count: int
    color: str


class MonthlyRevenueOut(BaseModel):
    month: str
    bookings: int
    revenue: float


class RankedEntryOut(BaseModel):
    id: str
    name: str
    bookingsCount: int
    total: float


class RecentBookingOut(BaseModel):
    id: str
    bookingReference: Optional[str] = None
    bookingType: str
    tripDate: Optional[str] = None
    totalAmount: float
    paymentStatus: Optional[str] = None
    status: Optional[str] = None
    customerName: Optional[str] = None
    schoolName: Optional[str] = None
    createdAt: Optional[str] = None


class ServicePerformanceOut(BaseModel):
    serviceType: str
    serviceId: str
    name: str
    bookingsCount: int
    total: float


class EntityCountsOut(BaseModel):
    """Active rows only for destinations and providers."""

    users: int = 0
    schools: int = 0
    destinations: int = 0
    guides: int = 0
    paramedics: int = 0
    securityCompanies: int = 0
    externalEntertainmentCompanies: int = 0
    travelCompanies: int = 0
    educationPrograms: int = 0


class BookingOverviewResponse(BaseModel):
    totalEarnings: float
    monthlyEarnings: float
    totalBookings: int
    pendingBookings: int
    totalDebt: float
    bookingTypes: List[BookingTypeOut]
    monthlyRevenue: List[MonthlyRevenueOut]
    topDestinations: List[RankedEntryOut]
    topSchools: List[RankedEntryOut]
    recentBookings: List[RecentBookingOut] = []
    topServices: List[ServicePerformanceOut] = []
    entityCounts: EntityCountsOut = EntityCountsOut()

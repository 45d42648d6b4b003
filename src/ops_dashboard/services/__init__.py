"""Service layer exports."""

from .auth import sign_in, sign_up
from .dashboard import (
    BookingOverview,
    DashboardMetrics,
    EntityCounts,
    MonthlyTrend,
    load_booking_overview,
    load_dashboard_metrics,
)
from .explore import CatalogCriteria, CatalogItem, catalog_facets, category_counts, filter_catalog, load_catalog
from .inventory import (
    UploadedFile,
    create_car,
    create_shop,
    filter_cars,
    list_cars,
    load_activity_logs,
    log_activity,
    update_car,
)
from .payouts import (
    BalanceSummary,
    PayoutEntry,
    ProviderBalance,
    create_booking_payout_records,
    create_manual_payout,
    load_provider_balances,
    load_provider_payouts,
    record_payment,
    service_line_total,
    summarize_balances,
    summarize_owed,
)

__all__ = [
    "sign_in",
    "sign_up",
    "BookingOverview",
    "DashboardMetrics",
    "EntityCounts",
    "MonthlyTrend",
    "load_booking_overview",
    "load_dashboard_metrics",
    "CatalogCriteria",
    "CatalogItem",
    "catalog_facets",
    "category_counts",
    "filter_catalog",
    "load_catalog",
    "UploadedFile",
    "create_car",
    "create_shop",
    "filter_cars",
    "list_cars",
    "load_activity_logs",
    "log_activity",
    "update_car",
    "BalanceSummary",
    "PayoutEntry",
    "ProviderBalance",
    "create_booking_payout_records",
    "create_manual_payout",
    "load_provider_balances",
    "load_provider_payouts",
    "record_payment",
    "service_line_total",
    "summarize_balances",
    "summarize_owed",
]

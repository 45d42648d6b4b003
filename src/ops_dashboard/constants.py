"""
Application Constants

Navigation, labels and column configurations for the Streamlit operator UI.
"""

from typing import Any, Dict, List

import streamlit as st

from ops_dashboard.domain.constants import CAR_STATUSES

PAGE_TITLE = "Ops Dashboard"

# page key -> sidebar label
PAGES: Dict[str, str] = {
    "dashboard": "📊 Dashboard",
    "cars": "🚗 Cars",
    "shops": "🏪 Shops",
    "explore": "🔎 Explore",
    "payouts": "💸 Payouts",
}

ROLE_PAGES: Dict[str, List[str]] = {
    "admin": ["dashboard", "cars", "shops", "explore", "payouts"],
    "employee": ["dashboard", "cars", "shops", "explore"],
    "trip_planner": ["explore"],
    "school_manager": ["explore"],
    "service_provider": ["explore", "payouts"],
}


def pages_for_role(role: str | None) -> List[str]:
    """Pages visible to ``role``; unknown roles only get the catalog."""
    return ROLE_PAGES.get(role or "", ["explore"])


GRANULARITY_LABELS: Dict[str, str] = {
    "week": "This week",
    "month": "This month",
    "year": "This year",
    "all": "All time",
}

SERVICE_TYPE_NAMES: Dict[str, str] = {
    "guides": "Guides",
    "paramedics": "Paramedics",
    "security_companies": "Security",
    "external_entertainment_companies": "Entertainment",
    "travel_companies": "Travel",
    "education_programs": "Education",
}

CHART_COLORS: List[str] = ["#3b82f6", "#10b981", "#f59e0b", "#ef4444", "#a855f7", "#06b6d4"]

# display order of the cells ``documents.logs.log_row`` returns
ACTIVITY_LOG_COLUMNS: List[str] = [
    "date",
    "activity",
    "car",
    "purchase",
    "sale",
    "commission",
    "deal status",
    "deal type",
]

CARS_COLUMNS_CONFIG: Dict[str, Any] = {
    "title": st.column_config.TextColumn("Title"),
    "brand": st.column_config.TextColumn("Brand"),
    "year": st.column_config.NumberColumn("Year", format="%d"),
    "status": st.column_config.SelectboxColumn("Status", options=CAR_STATUSES),
    "kilometers": st.column_config.NumberColumn("Km", format="%d"),
    "sale_price": st.column_config.NumberColumn("Sale price", format="₪%d"),
    "provider": st.column_config.TextColumn("Provider"),
    "created_at": st.column_config.DatetimeColumn("Added", format="YYYY-MM-DD"),
}

BALANCES_COLUMNS_CONFIG: Dict[str, Any] = {
    "provider_name": st.column_config.TextColumn("Provider"),
    "service_type": st.column_config.TextColumn("Type"),
    "total_earned": st.column_config.NumberColumn("Earned", format="₪%.0f"),
    "total_paid_out": st.column_config.NumberColumn("Paid out", format="₪%.0f"),
    "net_balance": st.column_config.NumberColumn("Balance", format="₪%.0f"),
    "booking_count": st.column_config.NumberColumn("Bookings", format="%d"),
    "last_payout_date": st.column_config.TextColumn("Last payout"),
}

"""
Dashboard Page

KPI cards with period-over-period growth, the six-month trend and the
booking overview.
"""

import asyncio

import pandas as pd
import streamlit as st

from ops_dashboard.components.charts import (
    make_bar_fig,
    make_pie_fig,
    make_trend_fig,
    metric_card,
    style,
    trend_frame,
)
from ops_dashboard.constants import CHART_COLORS, GRANULARITY_LABELS
from ops_dashboard.documents.formatting import format_currency
from ops_dashboard.domain.metrics import SUNDAY
from ops_dashboard.errors import DataFetchError
from ops_dashboard.services.dashboard import load_booking_overview, load_dashboard_metrics


def metrics_tab(supabase) -> None:
    granularity = st.segmented_control(
        "Period",
        options=list(GRANULARITY_LABELS),
        format_func=GRANULARITY_LABELS.get,
        default="month",
        key="dashboard_granularity",
    ) or "month"

    try:
        metrics = asyncio.run(
            load_dashboard_metrics(
                supabase, granularity, week_start=st.session_state.get("week_start", SUNDAY)
            )
        )
    except DataFetchError as exc:
        st.error(f"Could not load the dashboard: {exc}")
        return

    current, growth = metrics.current, metrics.growth
    cards = [
        ("Cars", f"{current.cars:,}", growth.cars_growth),
        ("Deals", f"{current.deals:,}", growth.deals_growth),
        ("Customers", f"{current.customers:,}", growth.customers_growth),
        ("Providers", f"{current.providers:,}", growth.providers_growth),
        ("Revenue", format_currency(current.revenue), growth.revenue_growth),
        ("Inventory value", format_currency(current.inventory_value), growth.inventory_growth),
    ]
    show_growth = granularity != "all"
    for row in (cards[:3], cards[3:]):
        for column, (label, value, rate) in zip(st.columns(3, gap="medium"), row):
            with column:
                st.markdown(metric_card(label, value, rate if show_growth else None), unsafe_allow_html=True)

    st.plotly_chart(
        make_trend_fig(trend_frame(metrics.monthly), "Last six months", CHART_COLORS),
        use_container_width=True,
    )


def bookings_tab(supabase) -> None:
    try:
        overview = asyncio.run(load_booking_overview(supabase))
    except DataFetchError as exc:
        st.error(f"Could not load bookings: {exc}")
        return

    cards = [
        ("Total earnings", format_currency(overview.total_earnings)),
        ("This month", format_currency(overview.monthly_earnings)),
        ("Bookings", f"{overview.total_bookings:,} ({overview.pending_bookings} pending)"),
        ("Owed to providers", format_currency(overview.total_debt)),
    ]
    for column, (label, value) in zip(st.columns(4, gap="medium"), cards):
        with column:
            st.markdown(metric_card(label, value), unsafe_allow_html=True)

    col1, col2 = st.columns(2, gap="medium")
    with col1:
        revenue = pd.DataFrame(
            [{"month": bucket.month, "revenue": bucket.amount} for bucket in overview.monthly_revenue],
            columns=["month", "revenue"],
        )
        st.plotly_chart(
            make_bar_fig(revenue, "month", "revenue", "Monthly revenue", CHART_COLORS * 2),
            use_container_width=True,
        )
    with col2:
        types = pd.DataFrame(
            [{"type": entry.type, "count": entry.count} for entry in overview.booking_types],
            columns=["type", "count"],
        )
        st.plotly_chart(
            make_pie_fig(
                types,
                "type",
                "count",
                "Bookings by type",
                [entry.color for entry in overview.booking_types],
            ),
            use_container_width=True,
        )

    col1, col2 = st.columns(2, gap="medium")
    with col1:
        st.markdown("**Top destinations**")
        st.dataframe(
            pd.DataFrame([ranking_row(entry) for entry in overview.top_destinations]),
            hide_index=True,
            use_container_width=True,
        )
    with col2:
        st.markdown("**Top schools**")
        st.dataframe(
            pd.DataFrame([ranking_row(entry) for entry in overview.top_schools]),
            hide_index=True,
            use_container_width=True,
        )

    st.markdown("**Top services**")
    services = pd.DataFrame(
        [{"name": entry.name, "revenue": entry.total} for entry in overview.top_services],
        columns=["name", "revenue"],
    )
    st.plotly_chart(
        make_bar_fig(services, "name", "revenue", "Booked revenue per provider", CHART_COLORS * 2),
        use_container_width=True,
    )

    st.markdown("**Recent bookings**")
    st.dataframe(
        pd.DataFrame([recent_booking_row(booking) for booking in overview.recent_bookings]),
        hide_index=True,
        use_container_width=True,
    )

    st.markdown("**System**")
    counts = entity_count_cards(overview.entity_counts)
    for row in (counts[:5], counts[5:]):
        for column, (label, value) in zip(st.columns(5, gap="small"), row):
            with column:
                st.markdown(metric_card(label, f"{value:,}"), unsafe_allow_html=True)


def recent_booking_row(booking) -> dict:
    return {
        "reference": booking.booking_reference or booking.id[:8],
        "customer": booking.customer_name or "N/A",
        "school": booking.school_name or "N/A",
        "trip date": booking.trip_date,
        "total": format_currency(booking.total_amount),
        "payment": booking.payment_status,
        "status": booking.status,
    }


def entity_count_cards(counts) -> list:
    return [
        ("Users", counts.users),
        ("Schools", counts.schools),
        ("Destinations", counts.destinations),
        ("Guides", counts.guides),
        ("Paramedics", counts.paramedics),
        ("Security", counts.security_companies),
        ("Entertainment", counts.external_entertainment_companies),
        ("Travel", counts.travel_companies),
        ("Education", counts.education_programs),
    ]


def ranking_row(entry) -> dict:
    return {"name": entry.name, "bookings": entry.bookings_count, "total": format_currency(entry.total)}


def run() -> None:
    style()
    supabase = st.session_state["supabase"]
    tab1, tab2 = st.tabs(["Overview", "Bookings"])
    with tab1:
        metrics_tab(supabase)
    with tab2:
        bookings_tab(supabase)

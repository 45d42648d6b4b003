"""
Cars Page

Inventory list with search, filters and sorting, the add-car form and the
activity log with its PDF export.
"""

import asyncio
import datetime

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from ops_dashboard.adapters.pdf_renderer import PlaywrightPdfRenderer, RenderOptions
from ops_dashboard.constants import ACTIVITY_LOG_COLUMNS, CARS_COLUMNS_CONFIG
from ops_dashboard.documents import (
    DEALERSHIP_COMPANY_NAME,
    LANDSCAPE_MARGIN,
    LANGUAGES,
    load_company_info,
    render_logs_html,
)
from ops_dashboard.documents.logs import log_row
from ops_dashboard.domain.constants import CAR_SORT_FIELDS, CAR_STATUSES, MAX_CAR_IMAGES
from ops_dashboard.domain.models import CarInput, collect_errors
from ops_dashboard.errors import OpsDashboardError, ValidationFailed
from ops_dashboard.services.inventory import (
    UploadedFile,
    create_car,
    filter_cars,
    list_cars,
    load_activity_logs,
)


def inventory_tab(supabase) -> None:
    try:
        rows = list_cars(supabase)
    except OpsDashboardError as exc:
        st.error(f"Could not load cars: {exc}")
        return

    col1, col2, col3, col4 = st.columns([3, 2, 2, 2])
    with col1:
        search = st.text_input("Search", placeholder="Title, brand, number, year…")
    with col2:
        status = st.selectbox("Status", ["", *CAR_STATUSES], format_func=lambda s: s or "All")
    with col3:
        brands = sorted({row.get("brand") for row in rows if row.get("brand")})
        brand = st.selectbox("Brand", ["", *brands], format_func=lambda b: b or "All")
    with col4:
        sort_by = st.selectbox("Sort by", CAR_SORT_FIELDS)
        descending = st.toggle("Descending", value=True)

    cars = filter_cars(
        rows, search=search, status=status or None, brand=brand or None, sort_by=sort_by, descending=descending
    )
    st.caption(f"{len(cars)} of {len(rows)} cars")
    st.dataframe(
        pd.DataFrame(cars, columns=list(CARS_COLUMNS_CONFIG)),
        column_config=CARS_COLUMNS_CONFIG,
        hide_index=True,
        use_container_width=True,
    )


def add_car_tab(supabase) -> None:
    with st.form("add_car", clear_on_submit=False):
        col1, col2 = st.columns(2)
        with col1:
            title = st.text_input("Title *")
            brand = st.text_input("Brand *")
            year = st.number_input("Year *", min_value=1900, max_value=2100, value=2020, step=1)
            status = st.selectbox("Status *", CAR_STATUSES)
            provider = st.text_input("Provider")
        with col2:
            kilometers = st.number_input("Kilometers", min_value=0.0, step=1000.0)
            market_price = st.number_input("Market price", min_value=0.0, step=1000.0)
            value_price = st.number_input("Value price", min_value=0.0, step=1000.0)
            sale_price = st.number_input("Sale price", min_value=0.0, step=1000.0)
        images = st.file_uploader(
            f"Images (max {MAX_CAR_IMAGES})", type=["jpg", "jpeg", "png", "webp"], accept_multiple_files=True
        )
        submitted = st.form_submit_button("Add car", type="primary")

    if not submitted:
        return
    try:
        car = CarInput(
            title=title,
            brand=brand,
            year=int(year),
            status=status,
            provider=provider,
            kilometers=kilometers,
            market_price=market_price,
            value_price=value_price,
            sale_price=sale_price,
        )
    except ValidationError as exc:
        for field, message in collect_errors(exc).items():
            st.error(f"{field}: {message}")
        return

    uploads = [UploadedFile(image.name, image.getvalue(), image.type) for image in images or []]
    try:
        create_car(supabase, car, uploads)
    except ValidationFailed as exc:
        for field, message in exc.errors.items():
            st.error(f"{field}: {message}")
    except OpsDashboardError as exc:
        st.error(f"Could not add the car: {exc}")
    else:
        st.success(f"{car.title} added.")


def activity_log_tab(supabase) -> None:
    today = datetime.date.today()
    col1, col2, col3 = st.columns(3)
    with col1:
        start = st.date_input("From", value=today - datetime.timedelta(days=30))
    with col2:
        end = st.date_input("To", value=today)
    with col3:
        language = st.selectbox("PDF language", LANGUAGES)

    try:
        entries = load_activity_logs(supabase, start=start, end=end)
    except OpsDashboardError as exc:
        st.error(f"Could not load the activity log: {exc}")
        return

    st.dataframe(
        pd.DataFrame([log_row(entry, "en") for entry in entries], columns=ACTIVITY_LOG_COLUMNS),
        hide_index=True,
        use_container_width=True,
    )
    if not entries or not st.button("Generate PDF"):
        return

    company = load_company_info(supabase, default_name=DEALERSHIP_COMPANY_NAME)
    html = render_logs_html(entries, language, company, generated_at=datetime.datetime.now())
    options = RenderOptions(landscape=True, margin=dict(LANDSCAPE_MARGIN))
    try:
        content = asyncio.run(PlaywrightPdfRenderer().render(html, options))
    except OpsDashboardError as exc:
        st.error(f"Could not generate the PDF: {exc}")
        return
    st.download_button(
        "Download activity log",
        data=content,
        file_name=f"activity-logs-{today.isoformat()}.pdf",
        mime="application/pdf",
    )


def run() -> None:
    supabase = st.session_state["supabase"]
    tab1, tab2, tab3 = st.tabs(["Inventory", "Add car", "Activity log"])
    with tab1:
        inventory_tab(supabase)
    with tab2:
        add_car_tab(supabase)
    with tab3:
        activity_log_tab(supabase)

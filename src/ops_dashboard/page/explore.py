"""
Explore Page

Browse destinations and service providers with category, text, price,
zone, property and suitability filters.
"""

import asyncio

import streamlit as st

from ops_dashboard.documents.formatting import format_currency
from ops_dashboard.errors import DataFetchError
from ops_dashboard.services.explore import (
    CATALOG_SOURCES,
    CatalogCriteria,
    catalog_facets,
    category_counts,
    filter_catalog,
    load_catalog,
)


def catalog_sidebar(items) -> CatalogCriteria:
    counts = category_counts(items)
    facets = catalog_facets(items)
    prices = [item.effective_price for item in items] or [0]

    with st.sidebar:
        category = st.radio(
            "Category",
            ["all", *CATALOG_SOURCES],
            format_func=lambda key: f"{key.title()} ({counts.get(key, 0)})",
        )
        search = st.text_input("Search")
        top = max(prices)
        low, high = st.slider("Price", 0.0, float(top) or 1.0, (0.0, float(top) or 1.0))
        zones = st.multiselect("Zones", facets["zones"])
        properties = st.multiselect("Properties", [prop.value for prop in facets["properties"]])
        suitable_for = st.multiselect("Suitable for", facets["suitable_for"])

    return CatalogCriteria(
        category=category,
        search=search,
        min_price=low,
        max_price=high,
        zones=zones,
        properties=properties,
        suitable_for=suitable_for,
    )


def run() -> None:
    supabase = st.session_state["supabase"]
    try:
        items = asyncio.run(load_catalog(supabase))
    except DataFetchError as exc:
        st.error(f"Could not load the catalog: {exc}")
        return

    criteria = catalog_sidebar(items)
    results = filter_catalog(items, criteria)
    st.caption(f"{len(results)} results")

    for row_start in range(0, len(results), 3):
        for column, item in zip(st.columns(3, gap="medium"), results[row_start : row_start + 3]):
            with column.container(border=True):
                if item.image:
                    st.image(item.image, use_container_width=True)
                st.markdown(f"**{item.name}**  \n{item.type}")
                if item.zone:
                    st.caption(item.zone)
                if item.description:
                    st.write(item.description[:160])
                if item.effective_price:
                    st.markdown(format_currency(item.effective_price))

"""
Shops Page

Add-shop form with gallery upload.
"""

import streamlit as st
from pydantic import ValidationError

from ops_dashboard.domain.constants import MAX_SHOP_PHONES, SHOP_STATUSES
from ops_dashboard.domain.models import ShopInput, collect_errors
from ops_dashboard.errors import OpsDashboardError
from ops_dashboard.services.inventory import UploadedFile, create_shop


def run() -> None:
    supabase = st.session_state["supabase"]
    st.subheader("Add shop")

    with st.form("add_shop"):
        col1, col2 = st.columns(2)
        with col1:
            shop_name = st.text_input("Shop name *")
            owner = st.text_input("Owner *")
            address = st.text_input("Address")
            status = st.selectbox("Status", SHOP_STATUSES)
            public = st.checkbox("Public", value=True)
        with col2:
            shop_desc = st.text_area("Description")
            phones = [st.text_input(f"Phone {index + 1}") for index in range(MAX_SHOP_PHONES)]
        gallery = st.file_uploader(
            "Gallery", type=["jpg", "jpeg", "png", "webp"], accept_multiple_files=True
        )
        submitted = st.form_submit_button("Add shop", type="primary")

    if not submitted:
        return
    try:
        shop = ShopInput(
            shop_name=shop_name,
            owner=owner,
            address=address or None,
            status=status,
            public=public,
            shop_desc=shop_desc or None,
            phone_numbers=phones,
        )
    except ValidationError as exc:
        for field, message in collect_errors(exc).items():
            st.error(f"{field}: {message}")
        return

    uploads = [UploadedFile(image.name, image.getvalue(), image.type) for image in gallery or []]
    try:
        create_shop(supabase, shop, uploads)
    except OpsDashboardError as exc:
        st.error(f"Could not add the shop: {exc}")
    else:
        st.success(f"{shop.shop_name} added.")

"""
Payouts Page

Provider balances and the manual payout form. Service providers only see
their own balance.
"""

import asyncio
import datetime
from dataclasses import asdict

import pandas as pd
import streamlit as st
from pydantic import ValidationError

from ops_dashboard.constants import BALANCES_COLUMNS_CONFIG, SERVICE_TYPE_NAMES
from ops_dashboard.domain.constants import PAYMENT_METHODS, SERVICE_TYPES
from ops_dashboard.documents.formatting import format_currency
from ops_dashboard.domain.models import ManualPayoutInput, collect_errors
from ops_dashboard.errors import OpsDashboardError
from ops_dashboard.services.payouts import (
    create_manual_payout,
    load_provider_balances,
    load_provider_payouts,
    summarize_owed,
)


def balances_table(balances) -> pd.DataFrame:
    rows = [{**asdict(balance), "net_balance": balance.net_balance} for balance in balances]
    df = pd.DataFrame(rows, columns=[*BALANCES_COLUMNS_CONFIG, "service_id"])
    df["service_type"] = df["service_type"].map(SERVICE_TYPE_NAMES)
    return df


def owed_by_type_table(summary) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "service type": SERVICE_TYPE_NAMES.get(service_type, service_type),
                "owed": format_currency(owed.total_owed),
                "providers owed": owed.provider_count,
            }
            for service_type, owed in summary.by_service_type.items()
        ],
        columns=["service type", "owed", "providers owed"],
    )


def history_table(entries) -> pd.DataFrame:
    return pd.DataFrame(
        [
            {
                "date": entry.payment_date,
                "amount": format_currency(entry.amount),
                "method": entry.payment_method,
                "reference": entry.transaction_number or entry.check_number or entry.reference_number,
                "recorded by": entry.created_by_name or "",
                "notes": entry.notes or entry.description or "",
            }
            for entry in entries
        ],
        columns=["date", "amount", "method", "reference", "recorded by", "notes"],
    )


def payout_history(supabase, balances) -> None:
    providers = {f"{b.provider_name} ({SERVICE_TYPE_NAMES[b.service_type]})": b for b in balances}
    if not providers:
        return
    choice = st.selectbox("Provider", list(providers), key="history_provider")
    provider = providers[choice]
    try:
        entries = load_provider_payouts(supabase, provider.service_type, provider.service_id)
    except OpsDashboardError as exc:
        st.error(f"Could not load the payout history: {exc}")
        return
    if not entries:
        st.info("No payouts recorded for this provider yet.")
        return
    st.dataframe(history_table(entries), hide_index=True, use_container_width=True)


def payout_form(supabase, balances) -> None:
    providers = {f"{b.provider_name} ({SERVICE_TYPE_NAMES[b.service_type]})": b for b in balances}
    if not providers:
        return
    with st.form("manual_payout"):
        choice = st.selectbox("Provider", list(providers))
        amount = st.number_input("Amount", min_value=0.0, step=100.0)
        method = st.selectbox("Payment method", PAYMENT_METHODS)
        payment_date = st.date_input("Payment date", value=datetime.date.today())
        transaction_number = st.text_input("Transaction / reference number")
        check_number = st.text_input("Check number")
        description = st.text_input("Description")
        submitted = st.form_submit_button("Record payout", type="primary")

    if not submitted:
        return
    provider = providers[choice]
    try:
        payout = ManualPayoutInput(
            service_type=provider.service_type,
            service_id=provider.service_id,
            amount=amount,
            payment_method=method,
            payment_date=payment_date,
            transaction_number=transaction_number or None,
            check_number=check_number or None,
            description=description or None,
        )
    except ValidationError as exc:
        for field, message in collect_errors(exc).items():
            st.error(f"{field}: {message}")
        return
    try:
        create_manual_payout(supabase, payout, created_by=st.session_state["user"])
    except OpsDashboardError as exc:
        st.error(f"Could not record the payout: {exc}")
    else:
        st.success("Payout recorded.")


def run() -> None:
    supabase = st.session_state["supabase"]
    service_type = st.selectbox(
        "Service type", ["", *SERVICE_TYPES], format_func=lambda key: SERVICE_TYPE_NAMES.get(key, "All")
    )
    try:
        balances = asyncio.run(load_provider_balances(supabase, service_type or None))
    except OpsDashboardError as exc:
        st.error(f"Could not load balances: {exc}")
        return

    if st.session_state.get("role") == "service_provider":
        balances = [b for b in balances if b.user_id == st.session_state["user"]]

    summary = summarize_owed(balances)
    st.metric("Owed to providers", format_currency(summary.total_owed))
    if st.session_state.get("role") == "admin":
        st.dataframe(owed_by_type_table(summary), hide_index=True, use_container_width=True)
    st.dataframe(
        balances_table(balances),
        column_config={**BALANCES_COLUMNS_CONFIG, "service_id": None},
        hide_index=True,
        use_container_width=True,
    )

    if st.session_state.get("role") == "admin":
        st.subheader("Record a payout")
        payout_form(supabase, balances)

    st.subheader("Payout history")
    payout_history(supabase, balances)

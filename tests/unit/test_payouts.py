"""Unit tests for provider balances and payout records."""

import asyncio
from datetime import date

import pytest

from ops_dashboard.domain.models import ManualPayoutInput, PaymentDetails
from ops_dashboard.errors import Conflict, DataFetchError, NotFound, ValidationFailed
from ops_dashboard.services.payouts import (
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
from tests.conftest import (
    FakeSupabase,
    make_booking,
    make_booking_service,
    make_payout,
    make_provider,
)


def test_service_line_total_defaults():
    assert service_line_total({"booked_price": 100, "quantity": 2, "days": 3}) == 600
    assert service_line_total({"booked_price": 100, "quantity": None, "days": 0}) == 100
    assert service_line_total({}) == 0


def test_summarize_balances():
    dana = make_provider(id="g1", name="Dana", service_type="guides")
    omer = make_provider(id="g2", name="Omer", service_type="guides")
    confirmed = make_booking(id="b1", status="confirmed", trip_date="2024-03-20")
    pending = make_booking(id="b2", status="pending", trip_date="2024-04-01")
    completed = make_booking(id="b3", status="completed", trip_date="2024-02-01")
    services = [
        make_booking_service("b1", "g1", booked_price=500, quantity=2),
        make_booking_service("b2", "g1", booked_price=9999),
        make_booking_service("b3", "g2", booked_price=300),
    ]
    payouts = [
        make_payout("g1", amount=400, payment_date="2024-03-25"),
        make_payout("g1", amount=100, payment_date="2024-03-01"),
        make_payout("g1", type="booking", status="pending", amount=1000),
        make_payout("g2", amount=500),
    ]
    balances = summarize_balances(services, [confirmed, pending, completed], payouts, [dana, omer])

    assert [balance.provider_name for balance in balances] == ["Dana", "Omer"]
    dana_balance, omer_balance = balances
    assert dana_balance.total_earned == 1000
    assert dana_balance.total_paid_out == 500
    assert dana_balance.net_balance == 500
    assert dana_balance.booking_count == 1
    assert dana_balance.payout_count == 2
    assert dana_balance.last_booking_date == "2024-03-20"
    assert dana_balance.last_payout_date == "2024-03-25"
    assert omer_balance.net_balance == -200


@pytest.fixture
def payout_client() -> FakeSupabase:
    return FakeSupabase(
        {
            "guides": [make_provider(id="g1", name="Dana", user_id="u1")],
            "paramedics": [make_provider(id="m1", name="Medic", status="inactive")],
            "security_companies": [],
            "external_entertainment_companies": [],
            "travel_companies": [],
            "education_programs": [],
            "bookings": [make_booking(id="b1", status="confirmed")],
            "booking_services": [
                make_booking_service("b1", "g1", id="bs1", booked_price=500, quantity=2),
                make_booking_service("b1", "m1", id="bs2", service_type="paramedics", booked_price=300),
                make_booking_service("b1", "ghost", id="bs3", booked_price=100),
            ],
            "payouts": [],
        }
    )


def test_load_provider_balances_only_active(payout_client):
    balances = asyncio.run(load_provider_balances(payout_client))
    assert [(b.service_type, b.service_id) for b in balances] == [("guides", "g1")]
    assert balances[0].total_earned == 1000


def test_load_provider_balances_by_type(payout_client):
    assert asyncio.run(load_provider_balances(payout_client, "paramedics")) == []
    with pytest.raises(ValidationFailed):
        asyncio.run(load_provider_balances(payout_client, "plumbers"))


def test_load_provider_balances_fails_as_one(payout_client):
    payout_client.failing_tables.add("bookings")
    with pytest.raises(DataFetchError):
        asyncio.run(load_provider_balances(payout_client))


def test_summarize_owed_by_service_type():
    balances = [
        ProviderBalance("guides", "g1", "Dana", total_earned=1000, total_paid_out=400),
        ProviderBalance("guides", "g2", "Omer", total_earned=300),
        ProviderBalance("guides", "g3", "Lior", total_earned=100, total_paid_out=500),
        ProviderBalance("paramedics", "m1", "Medic", total_earned=250),
    ]
    summary = summarize_owed(balances)
    assert summary.total_owed == 1150
    assert summary.by_service_type["guides"].total_owed == 900
    assert summary.by_service_type["guides"].provider_count == 2
    assert summary.by_service_type["paramedics"].provider_count == 1
    assert summary.by_service_type["education_programs"].total_owed == 0


def test_load_provider_payouts(payout_client):
    payout_client.tables["users"] = [{"id": "admin-1", "full_name": "Yael Admin"}]
    payout_client.tables["payouts"] = [
        make_payout("g1", id="p1", amount=200, payment_date="2024-03-01", created_by="admin-1"),
        make_payout("g1", id="p2", amount=300, payment_date="2024-03-20", created_by="gone"),
        make_payout("g1", id="p3", type="booking", status="pending", amount=1000),
        make_payout("g2", id="p4", amount=50),
    ]
    history = load_provider_payouts(payout_client, "guides", "g1")
    assert [entry.id for entry in history] == ["p2", "p1"]
    assert history[1].created_by_name == "Yael Admin"
    assert history[0].created_by_name is None
    assert history[0].amount == 300


def test_load_provider_payouts_errors(payout_client):
    with pytest.raises(ValidationFailed):
        load_provider_payouts(payout_client, "plumbers", "x")
    payout_client.failing_tables.add("payouts")
    with pytest.raises(DataFetchError):
        load_provider_payouts(payout_client, "guides", "g1")


def test_create_booking_payout_records(payout_client):
    records = create_booking_payout_records(
        payout_client, "b1", confirmed_by="admin-1", booking_reference="BK-7"
    )
    # the ghost provider is skipped; the inactive medic still gets its record
    assert {record["booking_service_id"] for record in records} == {"bs1", "bs2"}
    dana = next(record for record in records if record["service_id"] == "g1")
    assert dana["type"] == "booking"
    assert dana["status"] == "pending"
    assert dana["amount"] == 1000
    assert dana["user_id"] == "u1"
    assert dana["description"] == "Booking BK-7 - guides service"

    again = create_booking_payout_records(payout_client, "b1", confirmed_by="admin-1")
    assert again == []
    assert len(payout_client.rows("payouts")) == 2


def test_create_booking_payout_records_without_services(payout_client):
    assert create_booking_payout_records(payout_client, "missing", confirmed_by="admin-1") == []


def test_record_payment(payout_client):
    record = create_booking_payout_records(payout_client, "b1", confirmed_by="admin-1")[0]
    details = PaymentDetails(
        payment_method="cash",
        payment_date=date(2024, 3, 25),
        check_number="should be cleared",
    )
    payment = record_payment(payout_client, record["id"], details, created_by="admin-2")

    assert payment["type"] == "payment"
    assert payment["status"] == "paid"
    assert payment["amount"] == record["amount"]
    assert payment["booking_record_id"] == record["id"]
    assert payment["check_number"] is None
    assert payment["payment_date"] == "2024-03-25"
    stored = next(row for row in payout_client.rows("payouts") if row["id"] == record["id"])
    assert stored["status"] == "paid"

    with pytest.raises(Conflict):
        record_payment(payout_client, record["id"], details, created_by="admin-2")


def test_record_payment_unknown_record(payout_client):
    details = PaymentDetails(payment_method="cash", payment_date=date(2024, 3, 25))
    with pytest.raises(NotFound):
        record_payment(payout_client, "nope", details, created_by="admin")


def test_manual_payout(payout_client):
    payout = ManualPayoutInput(
        service_type="guides",
        service_id="g1",
        amount=250,
        payment_method="bank_transfer",
        payment_date=date(2024, 3, 25),
        transaction_number="TX-1",
    )
    row = create_manual_payout(payout_client, payout, created_by="admin")
    assert row["type"] == "payment"
    assert row["status"] == "paid"
    assert row["service_provider_name"] == "Dana"
    assert row["transaction_number"] == "TX-1"

    balances = asyncio.run(load_provider_balances(payout_client, "guides"))
    assert balances[0].total_paid_out == 250
    assert balances[0].net_balance == 750


def test_manual_payout_unknown_provider(payout_client):
    payout = ManualPayoutInput(
        service_type="guides",
        service_id="nobody",
        amount=10,
        payment_method="cash",
        payment_date=date(2024, 3, 25),
    )
    with pytest.raises(NotFound):
        create_manual_payout(payout_client, payout, created_by="admin")

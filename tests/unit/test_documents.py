"""Unit tests for the localized booking and contract documents."""

import logging
from datetime import date, datetime

import pytest
from pydantic import ValidationError

from ops_dashboard.documents import (
    BookingDocument,
    CarContract,
    CompanyInfo,
    format_currency,
    format_date,
    load_company_info,
    normalize_language,
    render_booking_html,
    render_contract_html,
)
from ops_dashboard.documents.i18n import (
    ACTIVITY_TYPE_LABELS,
    BOOKING_TYPE_LABELS,
    CONTRACT_TERMS,
    ERROR_MESSAGES,
    LABELS,
    LANGUAGES,
    MONTH_NAMES,
    PAYMENT_METHOD_LABELS,
    PAYMENT_STATUS_LABELS,
    SERVICE_TYPE_LABELS,
    STATUS_LABELS,
    error_message,
)
from ops_dashboard.documents.logs import log_row, render_logs_html

COMPANY = CompanyInfo(name="Trips & Co", phone="03-1234567", address="1 Herzl St")


def make_booking_document(**overrides) -> BookingDocument:
    data = dict(
        booking_reference="BK-1001",
        booking_type="guides_only",
        trip_date=date(2024, 3, 15),
        status="confirmed",
        payment_status="deposit_paid",
        payment_method="bank_transfer",
        customer={"full_name": "Noa Levi", "email": "noa@example.com", "phone": "050-1"},
        school={"name": "Herzliya High"},
        destination={"name": "Masada", "address": "Dead Sea"},
        number_of_students=40,
        number_of_crew=4,
        number_of_buses=1,
        services=[
            {"name": "Dana", "type": "guides", "quantity": 2, "days": 1, "unit_price": 1500},
            {"name": "Medic", "type": "paramedics", "unit_price": 800},
        ],
        payments=[{"amount": 2000, "payment_method": "cash", "payment_date": date(2024, 3, 1)}],
        notes="Bring water <lots>",
    )
    data.update(overrides)
    return BookingDocument(**data)


def make_contract(**overrides) -> CarContract:
    data = dict(
        deal_date=date(2024, 3, 15),
        seller={"name": "Avi Cohen", "id_number": "123456789", "phone": "052-2"},
        vehicle={
            "make": "Mazda",
            "model": "3",
            "year": 2019,
            "plate_number": "12-345-67",
            "kilometers": 85000,
        },
        deal_amount=62000,
        payment_method="check",
        ownership_transfer_days=14,
    )
    data.update(overrides)
    return CarContract(**data)


# =============================================================================
# label tables
# =============================================================================


@pytest.mark.parametrize(
    "table",
    [
        ACTIVITY_TYPE_LABELS,
        LABELS,
        BOOKING_TYPE_LABELS,
        STATUS_LABELS,
        PAYMENT_STATUS_LABELS,
        SERVICE_TYPE_LABELS,
        PAYMENT_METHOD_LABELS,
        ERROR_MESSAGES,
    ],
)
def test_label_tables_keyed_identically(table):
    keys = set(table["en"])
    for language in LANGUAGES:
        assert set(table[language]) == keys


def test_months_and_terms_per_language():
    for language in LANGUAGES:
        assert len(MONTH_NAMES[language]) == 12
        assert len(CONTRACT_TERMS[language]) == len(CONTRACT_TERMS["en"])
        assert any("{days}" in term for term in CONTRACT_TERMS[language])


@pytest.mark.parametrize(
    "tag, expected",
    [("he-IL", "he"), ("ar", "ae"), ("AE", "ae"), ("en_US", "en"), ("fr", "en"), (None, "en"), ("", "en")],
)
def test_normalize_language(tag, expected):
    assert normalize_language(tag) == expected


def test_error_message_fallbacks():
    assert error_message("he", "not_found") == ERROR_MESSAGES["he"]["not_found"]
    assert error_message("en", "something_else") == ERROR_MESSAGES["en"]["error"]


# =============================================================================
# formatting
# =============================================================================


def test_format_currency():
    assert format_currency(1234567) == "₪1,234,567"
    assert format_currency(99.6) == "₪100"
    assert format_currency(None) == "₪0"
    assert format_currency(-80) == "-₪80"
    assert format_currency(10, symbol="$") == "$10"


def test_format_date_languages():
    assert format_date(date(2024, 3, 15), "en") == "15 March 2024"
    assert format_date("2024-03-15T10:00:00Z", "he") == "15 מרץ 2024"
    assert format_date(datetime(2024, 3, 15), "ae") == "15 مارس 2024"
    assert format_date(None) == ""
    assert format_date("soon") == "soon"


# =============================================================================
# booking summary
# =============================================================================


def test_booking_totals():
    booking = make_booking_document()
    assert [line.line_total for line in booking.services] == [3000, 800]
    assert booking.total == 3800
    assert booking.paid == 2000
    assert booking.balance_due == 1800
    assert make_booking_document(total_amount=5000).balance_due == 3000


def test_booking_line_needs_quantity_and_days():
    line = {"name": "Guide", "quantity": 3, "days": 2, "unit_price": 100}
    assert make_booking_document(services=[line]).services[0].line_total == 600
    with pytest.raises(ValidationError):
        make_booking_document(services=[{**line, "quantity": 0}])
    with pytest.raises(ValidationError):
        make_booking_document(services=[{**line, "days": 0}])


def test_booking_html_english():
    html = render_booking_html(make_booking_document(), "en", COMPANY, generated_at=datetime(2024, 3, 16))
    assert '<html lang="en" dir="ltr">' in html
    assert "Booking Summary" in html
    assert "Reference # BK-1001" in html
    assert "Guides Only" in html
    assert "Deposit Paid" in html
    assert "15 March 2024" in html
    assert "₪3,000" in html
    assert "₪1,800" in html
    assert "Generated on 16 March 2024" in html
    assert "Trips &amp; Co" in html
    assert "Bring water &lt;lots&gt;" in html
    assert "<lots>" not in html


@pytest.mark.parametrize("language, lang_attr", [("he", "he"), ("ae", "ar")])
def test_booking_html_rtl(language, lang_attr):
    html = render_booking_html(make_booking_document(), language, COMPANY)
    assert f'<html lang="{lang_attr}" dir="rtl">' in html
    assert LABELS[language]["booking_summary"] in html
    assert BOOKING_TYPE_LABELS[language]["guides_only"] in html
    assert "fonts.googleapis.com" in html


def test_booking_html_skips_empty_sections():
    html = render_booking_html(
        make_booking_document(destination=None, services=[], payments=[], notes=None),
        "en",
        COMPANY,
    )
    assert "Booked Services" not in html
    assert "Additional Information" not in html
    assert "<h2>Destination</h2>" not in html
    assert "Generated on" not in html


# =============================================================================
# car contract
# =============================================================================


def test_contract_html_defaults_buyer_to_company():
    html = render_contract_html(make_contract(), "en", COMPANY)
    assert "Car Purchase Agreement" in html
    assert "Contract Date: 15 March 2024" in html
    assert "Avi Cohen" in html
    assert "Trips &amp; Co" in html
    assert "85,000" in html
    assert "₪62,000" in html
    assert "Check" in html
    assert "The seller agrees to transfer ownership within 14 days." in html
    assert "Seller&#x27;s Signature" in html


def test_contract_html_trade_in_and_hebrew():
    contract = make_contract(
        buyer={"name": "Yossi", "id_number": "987"},
        trade_in={"make": "Kia", "model": "Rio", "year": 2015, "estimated_value": 20000},
    )
    html = render_contract_html(contract, "he", COMPANY)
    assert 'dir="rtl"' in html
    assert "הסכם רכישת רכב" in html
    assert "Yossi" in html
    assert "₪20,000" in html
    assert "המוכר מתחייב להעביר את הבעלות תוך 14 ימים." in html


def test_contract_rejects_negative_amount():
    with pytest.raises(ValueError):
        make_contract(deal_amount=-1)


# =============================================================================
# company settings
# =============================================================================


def test_company_info_from_settings_row(fake_supabase):
    fake_supabase.tables["company_settings"] = [{"id": 1, "name": "Real Co", "tax_number": "5150"}]
    company = load_company_info(fake_supabase)
    assert company.name == "Real Co"
    assert company.tax_number == "5150"


def test_company_info_falls_back(fake_supabase, caplog):
    assert load_company_info(fake_supabase, default_name="Car Dealership").name == "Car Dealership"
    fake_supabase.failing_tables.add("company_settings")
    with caplog.at_level(logging.WARNING, logger="ops_dashboard"):
        assert load_company_info(fake_supabase).name == "School Trips Company"
    assert [record.levelname for record in caplog.records] == ["WARNING"]


# =============================================================================
# activity log report
# =============================================================================

LOG_ENTRY = {
    "type": "deal_created",
    "created_at": "2024-03-05T10:00:00",
    "car": {
        "brand": "Toyota",
        "title": "Corolla",
        "year": 2018,
        "car_number": None,
        "purchase_date": "2024-01-10",
        "buy_price": 40000,
        "providers": {"name": "Auto Import"},
    },
    "deal": {
        "sale_date": "2024-03-04",
        "customer_name": "Avi",
        "selling_price": 52000,
        "amount": 3000,
        "status": "completed",
        "deal_type": "normal",
    },
}


def test_log_row_with_car_and_deal():
    row = log_row(LOG_ENTRY, "en")
    assert row == [
        "5 March 2024",
        "Deal created",
        "Toyota Corolla / 2018 / No plate",
        "10 January 2024 / Auto Import / ₪40,000",
        "4 March 2024 / Avi / ₪52,000",
        "₪3,000",
        "Completed",
        "normal",
    ]


def test_log_row_without_car_or_deal():
    row = log_row({"type": "shop_added", "created_at": None}, "he")
    assert row[0] == "לא זמין"
    assert row[1] == "חנות נוספה"
    assert set(row[2:]) == {"לא זמין"}


def test_render_logs_html():
    html = render_logs_html(
        [LOG_ENTRY, {"type": "car_added", "car": {"brand": "<VW>", "title": "Golf"}}],
        "ae",
        COMPANY,
        generated_at=datetime(2024, 3, 15),
    )
    assert 'dir="rtl"' in html
    assert "سجل النشاطات" in html
    assert "إجمالي السجلات: 2" in html
    assert "&lt;VW&gt; Golf" in html
    assert html.count("<tr>") == 3


def test_render_empty_logs():
    html = render_logs_html([], "en", COMPANY)
    assert "No activity recorded for this period" in html
    assert "<table>" not in html

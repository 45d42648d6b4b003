"""Localized HTML documents rendered to PDF."""

from .booking import BookingDocument, BookingPayment, BookingServiceLine, Party, render_booking_html
from .company import (
    BOOKING_COMPANY_NAME,
    DEALERSHIP_COMPANY_NAME,
    CompanyInfo,
    load_company_info,
)
from .contract import CarContract, ContractParty, TradeInVehicle, VehicleDetails, render_contract_html
from .formatting import format_currency, format_date, format_number
from .i18n import LANGUAGES, RTL_LANGUAGES, error_message, normalize_language
from .logs import LANDSCAPE_MARGIN, render_logs_html

__all__ = [
    "BookingDocument",
    "BookingPayment",
    "BookingServiceLine",
    "Party",
    "render_booking_html",
    "BOOKING_COMPANY_NAME",
    "DEALERSHIP_COMPANY_NAME",
    "CompanyInfo",
    "load_company_info",
    "CarContract",
    "ContractParty",
    "TradeInVehicle",
    "VehicleDetails",
    "render_contract_html",
    "format_currency",
    "format_date",
    "format_number",
    "LANGUAGES",
    "RTL_LANGUAGES",
    "error_message",
    "normalize_language",
    "LANDSCAPE_MARGIN",
    "render_logs_html",
]

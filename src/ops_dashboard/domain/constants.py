"""Domain-level constants for the Ops Dashboard application."""

from __future__ import annotations

from typing import Dict, List

# Service provider tables, keyed by the ``service_type`` stored on
# booking_services and payouts rows.
SERVICE_TYPES: List[str] = [
    "guides",
    "paramedics",
    "security_companies",
    "external_entertainment_companies",
    "travel_companies",
    "education_programs",
]

SUB_SERVICE_TYPES = {"external_entertainment_companies", "education_programs"}

BOOKING_TYPES: List[str] = [
    "full_trip",
    "guides_only",
    "paramedics_only",
    "security_only",
    "entertainment_only",
    "transportation_only",
    "education_only",
]

BOOKING_TYPE_COLORS: Dict[str, str] = {
    "full_trip": "#3b82f6",
    "guides_only": "#10b981",
    "paramedics_only": "#ef4444",
    "security_only": "#f59e0b",
    "entertainment_only": "#a855f7",
    "transportation_only": "#06b6d4",
    "education_only": "#10b981",
}
DEFAULT_BOOKING_TYPE_COLOR = "#6b7280"

# Bookings whose services count towards a provider's earnings
EARNING_BOOKING_STATUSES = {"confirmed", "completed"}

PAYMENT_METHODS: List[str] = ["bank_transfer", "cash", "credit_card", "check"]

PAYOUT_TYPES = ("booking", "payment")
PAYOUT_STATUSES = ("pending", "paid", "cancelled")

CAR_STATUSES: List[str] = ["new", "used", "sold", "reserved", "received_from_client"]
CAR_SORT_FIELDS: List[str] = ["created_at", "title", "year", "brand", "kilometers", "sale_price"]
MAX_CAR_IMAGES = 10

SHOP_STATUSES: List[str] = ["active", "inactive", "pending"]
MAX_SHOP_PHONES = 3

ACTIVITY_TYPES: List[str] = [
    "car_added",
    "car_updated",
    "car_deleted",
    "car_received_from_client",
    "deal_created",
    "deal_updated",
    "deal_deleted",
    "customer_added",
    "customer_updated",
    "provider_added",
    "provider_updated",
    "shop_added",
]

USER_ROLES: List[str] = ["admin", "employee", "trip_planner", "service_provider", "school_manager"]
SIGNUP_ROLES: List[str] = ["employee", "school_manager", "trip_planner"]

# Dashboard tables
METRIC_COUNT_TABLES: Dict[str, str] = {
    "cars": "cars",
    "deals": "deals",
    "customers": "customers",
    "providers": "providers",
}

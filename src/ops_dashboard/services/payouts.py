"""Service-provider balances and payout records.

Balance = earned from confirmed/completed bookings - payments received.
A positive balance means the platform owes the provider.

Payout rows come in two types:
- ``booking``: what a provider is owed for one booking service, created
  ``pending`` when the booking is confirmed.
- ``payment``: money actually paid out, either against a booking record or
  entered manually.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple

from supabase import Client

from ..adapters.supabase_client import first_row, gather_reads, select_rows, supabase_errors
from ..domain.constants import EARNING_BOOKING_STATUSES, SERVICE_TYPES
from ..domain.models import ManualPayoutInput, PaymentDetails
from ..errors import Conflict, NotFound, ValidationFailed
from ..logging_config import get_logger

logger = get_logger(__name__)

ProviderKey = Tuple[str, str]

BANK_TRANSFER_FIELDS = ("account_number", "account_holder_name", "bank_name", "transaction_number")
CHECK_FIELDS = ("check_number", "check_bank_name")


@dataclass(slots=True)
class ProviderBalance:
    service_type: str
    service_id: str
    provider_name: str
    user_id: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    total_earned: float = 0.0
    total_paid_out: float = 0.0
    booking_count: int = 0
    payout_count: int = 0
    last_booking_date: Optional[str] = None
    last_payout_date: Optional[str] = None

    @property
    def net_balance(self) -> float:
        return self.total_earned - self.total_paid_out


@dataclass(slots=True)
class ServiceTypeOwed:
    total_owed: float = 0.0
    provider_count: int = 0


@dataclass(slots=True)
class BalanceSummary:
    """What is owed overall and per service type. Only positive balances count."""

    total_owed: float
    by_service_type: Dict[str, ServiceTypeOwed]


@dataclass(frozen=True, slots=True)
class PayoutEntry:
    id: str
    amount: float
    payment_method: Optional[str]
    payment_date: Optional[str]
    reference_number: Optional[str]
    transaction_number: Optional[str]
    check_number: Optional[str]
    description: Optional[str]
    notes: Optional[str]
    created_by: Optional[str]
    created_by_name: Optional[str]


def service_line_total(row: Mapping[str, Any]) -> float:
    """``booked_price x quantity x days``; missing quantity/days count as 1."""
    price = float(row.get("booked_price") or 0)
    return price * (row.get("quantity") or 1) * (row.get("days") or 1)


def _latest(current: Optional[str], candidate: Optional[str]) -> Optional[str]:
    # ISO dates compare correctly as strings
    if not candidate:
        return current
    return candidate if current is None or str(candidate) > str(current) else current


def summarize_balances(
    service_rows: Iterable[Mapping[str, Any]],
    booking_rows: Iterable[Mapping[str, Any]],
    payout_rows: Iterable[Mapping[str, Any]],
    providers: Iterable[Mapping[str, Any]],
) -> List[ProviderBalance]:
    """Build one balance per provider from already-fetched rows.

    ``providers`` rows must carry ``service_type`` next to their own columns.
    Only services of confirmed/completed bookings count as earned, and only
    ``payment`` payouts count as paid out. Sorted by net balance, highest first.
    """
    bookings = {row["id"]: row for row in booking_rows}
    balances: Dict[ProviderKey, ProviderBalance] = {}
    for provider in providers:
        key = (provider["service_type"], str(provider["id"]))
        balances[key] = ProviderBalance(
            service_type=key[0],
            service_id=key[1],
            provider_name=provider.get("name") or "Unknown",
            user_id=provider.get("user_id"),
            email=provider.get("email"),
            phone=provider.get("phone"),
        )

    for row in service_rows:
        balance = balances.get((row.get("service_type"), str(row.get("service_id"))))
        booking = bookings.get(row.get("booking_id"))
        if balance is None or booking is None:
            continue
        if booking.get("status") not in EARNING_BOOKING_STATUSES:
            continue
        balance.total_earned += service_line_total(row)
        balance.booking_count += 1
        balance.last_booking_date = _latest(balance.last_booking_date, booking.get("trip_date"))

    for payout in payout_rows:
        if payout.get("type", "payment") != "payment":
            continue
        balance = balances.get((payout.get("service_type"), str(payout.get("service_id"))))
        if balance is None:
            continue
        balance.total_paid_out += float(payout.get("amount") or 0)
        balance.payout_count += 1
        balance.last_payout_date = _latest(balance.last_payout_date, payout.get("payment_date"))

    return sorted(balances.values(), key=lambda balance: balance.net_balance, reverse=True)


async def load_provider_balances(
    supabase: Client, service_type: Optional[str] = None
) -> List[ProviderBalance]:
    """Balances for every active provider, optionally of one service type."""
    if service_type is not None and service_type not in SERVICE_TYPES:
        raise ValidationFailed({"service_type": f"Unknown service type {service_type!r}"})
    service_types = [service_type] if service_type else list(SERVICE_TYPES)
    type_scope = {"service_type": service_type} if service_type else None

    results = await gather_reads(
        *[
            (
                select_rows,
                (supabase, table, "id, name, email, phone, user_id"),
                {"scope": {"status": "active"}},
            )
            for table in service_types
        ],
        (
            select_rows,
            (supabase, "booking_services", "id, booking_id, service_type, service_id, quantity, days, booked_price"),
            {"scope": type_scope},
        ),
        (select_rows, (supabase, "bookings", "id, status, trip_date"), {}),
        (
            select_rows,
            (supabase, "payouts", "service_type, service_id, amount, payment_date, type"),
            {"scope": {"type": "payment", **(type_scope or {})}},
        ),
        action="Provider balance fetch",
    )
    provider_rows = [
        {**row, "service_type": table}
        for table, rows in zip(service_types, results[: len(service_types)])
        for row in rows
    ]
    service_rows, booking_rows, payout_rows = results[len(service_types) :]
    return summarize_balances(service_rows, booking_rows, payout_rows, provider_rows)


def summarize_owed(balances: Iterable[ProviderBalance]) -> BalanceSummary:
    """Roll balances up per service type; every service type gets an entry."""
    by_type = {service_type: ServiceTypeOwed() for service_type in SERVICE_TYPES}
    for balance in balances:
        if balance.net_balance <= 0:
            continue
        owed = by_type.setdefault(balance.service_type, ServiceTypeOwed())
        owed.total_owed += balance.net_balance
        owed.provider_count += 1
    return BalanceSummary(
        total_owed=sum(owed.total_owed for owed in by_type.values()),
        by_service_type=by_type,
    )


PAYOUT_HISTORY_COLUMNS = (
    "id, amount, payment_method, payment_date, reference_number, transaction_number, "
    "check_number, description, notes, created_by"
)


def load_provider_payouts(supabase: Client, service_type: str, service_id: str) -> List[PayoutEntry]:
    """Payments made to one provider, newest payment date first, with the recording user's name."""
    if service_type not in SERVICE_TYPES:
        raise ValidationFailed({"service_type": f"Unknown service type {service_type!r}"})

    with supabase_errors("Payout history fetch"):
        rows = (
            supabase.table("payouts")
            .select(PAYOUT_HISTORY_COLUMNS)
            .eq("service_type", service_type)
            .eq("service_id", service_id)
            .eq("type", "payment")
            .order("payment_date", desc=True)
            .execute()
        ).data or []
        creators = sorted({row["created_by"] for row in rows if row.get("created_by")})
        users = (
            supabase.table("users").select("id, full_name").in_("id", creators).execute().data or []
            if creators
            else []
        )

    names = {user["id"]: user.get("full_name") for user in users}
    return [
        PayoutEntry(
            id=str(row["id"]),
            amount=float(row.get("amount") or 0),
            payment_method=row.get("payment_method"),
            payment_date=row.get("payment_date"),
            reference_number=row.get("reference_number"),
            transaction_number=row.get("transaction_number"),
            check_number=row.get("check_number"),
            description=row.get("description"),
            notes=row.get("notes"),
            created_by=row.get("created_by"),
            created_by_name=names.get(row.get("created_by")),
        )
        for row in rows
    ]


def _provider_details(supabase: Client, service_type: str, service_id: str) -> Optional[Dict[str, Any]]:
    result = (
        supabase.table(service_type)
        .select("id, name, user_id")
        .eq("id", service_id)
        .limit(1)
        .execute()
    )
    return first_row(result)


def create_booking_payout_records(
    supabase: Client,
    booking_id: str,
    *,
    confirmed_by: str,
    booking_reference: Optional[str] = None,
) -> List[Dict[str, Any]]:
    """Create one pending ``booking`` payout per service of a confirmed booking.

    Services that already have a booking record, or whose provider row is
    gone, are skipped. Returns the inserted rows.
    """
    with supabase_errors("Booking payout creation"):
        services = (
            supabase.table("booking_services").select("*").eq("booking_id", booking_id).execute()
        ).data or []
        if not services:
            return []

        existing = (
            supabase.table("payouts")
            .select("booking_service_id")
            .eq("type", "booking")
            .in_("booking_service_id", [service["id"] for service in services])
            .execute()
        ).data or []
        existing_ids = {row.get("booking_service_id") for row in existing}

        reference = booking_reference or booking_id
        records = []
        for service in services:
            if service["id"] in existing_ids:
                logger.info("Payout record already exists for booking service %s", service["id"])
                continue
            provider = _provider_details(supabase, service["service_type"], service["service_id"])
            if provider is None:
                logger.warning(
                    "No provider %s/%s for booking service %s",
                    service["service_type"],
                    service["service_id"],
                    service["id"],
                )
                continue
            records.append(
                {
                    "type": "booking",
                    "service_type": service["service_type"],
                    "service_id": service["service_id"],
                    "user_id": provider.get("user_id"),
                    "service_provider_name": provider.get("name"),
                    "amount": service_line_total(service),
                    "booking_service_id": service["id"],
                    "status": "pending",
                    "description": f"Booking {reference} - {service['service_type']} service",
                    "notes": (
                        f"Quantity: {service.get('quantity') or 1}, Days: {service.get('days') or 1}, "
                        f"Rate: ₪{service.get('booked_price') or 0}"
                    ),
                    "created_by": confirmed_by,
                    "payment_method": "bank_transfer",
                    "payment_date": date.today().isoformat(),
                }
            )

        if not records:
            return []
        inserted = supabase.table("payouts").insert(records).execute().data or []

    logger.info("Created %d booking payout records for booking %s", len(inserted), reference)
    return inserted


def _method_fields(details: PaymentDetails) -> Dict[str, Any]:
    """Payment fields, with bank/check columns cleared unless the method uses them."""
    data = details.model_dump(mode="json")
    if details.payment_method != "bank_transfer":
        data.update({name: None for name in BANK_TRANSFER_FIELDS})
    if details.payment_method != "check":
        data.update({name: None for name in CHECK_FIELDS})
    return data


def record_payment(
    supabase: Client,
    record_id: str,
    details: PaymentDetails,
    *,
    created_by: str,
) -> Dict[str, Any]:
    """Pay a ``booking`` payout record: insert a ``payment`` row and mark the record paid."""
    with supabase_errors("Payment recording"):
        record = first_row(
            supabase.table("payouts")
            .select("*")
            .eq("id", record_id)
            .eq("type", "booking")
            .limit(1)
            .execute()
        )
        if record is None:
            raise NotFound("Booking record not found")

        existing = (
            supabase.table("payouts")
            .select("id")
            .eq("booking_record_id", record_id)
            .eq("type", "payment")
            .limit(1)
            .execute()
        ).data
        if existing or record.get("status") == "paid":
            raise Conflict("Payment already exists for this booking record")

        payment = {
            **_method_fields(details),
            "type": "payment",
            "service_type": record["service_type"],
            "service_id": record["service_id"],
            "user_id": record.get("user_id"),
            "service_provider_name": record.get("service_provider_name"),
            "amount": record["amount"],
            "booking_service_id": record.get("booking_service_id"),
            "booking_record_id": record_id,
            "status": "paid",
            "description": record.get("description"),
            "notes": details.notes or record.get("notes"),
            "created_by": created_by,
        }
        inserted = first_row(supabase.table("payouts").insert(payment).execute())
        supabase.table("payouts").update({"status": "paid"}).eq("id", record_id).execute()

    logger.info("Recorded payment for booking payout %s", record_id)
    return inserted or payment


def create_manual_payout(
    supabase: Client, payout: ManualPayoutInput, *, created_by: str
) -> Dict[str, Any]:
    """Record a payment made to a provider outside any booking record."""
    with supabase_errors("Manual payout creation"):
        provider = _provider_details(supabase, payout.service_type, payout.service_id)
        if provider is None:
            raise NotFound(f"Service provider {payout.service_type}/{payout.service_id} not found")

        row = {
            **_method_fields(payout),
            "type": "payment",
            "status": "paid",
            "service_type": payout.service_type,
            "service_id": payout.service_id,
            "user_id": provider.get("user_id"),
            "service_provider_name": provider.get("name"),
            "amount": payout.amount,
            "description": payout.description or None,
            "created_by": created_by,
        }
        inserted = first_row(supabase.table("payouts").insert(row).execute())

    logger.info("Manual payout of %.2f to %s/%s", payout.amount, payout.service_type, payout.service_id)
    return inserted or row

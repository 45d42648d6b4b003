"""Booking summary document."""

from __future__ import annotations

from datetime import date, datetime
from functools import partial
from typing import List, Optional

from pydantic import BaseModel, Field

from .company import CompanyInfo
from .formatting import format_currency, format_date
from .i18n import (
    BOOKING_TYPE_LABELS,
    PAYMENT_METHOD_LABELS,
    PAYMENT_STATUS_LABELS,
    SERVICE_TYPE_LABELS,
    STATUS_LABELS,
    lookup,
    translate,
)
from .layout import fields, letterhead, page, section, table


class Party(BaseModel):
    full_name: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None

    @property
    def display_name(self) -> Optional[str]:
        return self.full_name or self.name


class BookingServiceLine(BaseModel):
    name: str
    type: Optional[str] = None
    quantity: int = Field(default=1, ge=1)
    days: int = Field(default=1, ge=1)
    unit_price: float = Field(default=0, ge=0)

    @property
    def line_total(self) -> float:
        return self.unit_price * self.quantity * self.days


class BookingPayment(BaseModel):
    amount: float
    payment_method: Optional[str] = None
    payment_date: Optional[date] = None


class BookingDocument(BaseModel):
    """Everything printed on a booking summary."""

    booking_reference: str
    booking_type: str = "full_trip"
    trip_date: Optional[date] = None
    status: Optional[str] = None
    payment_status: Optional[str] = None
    payment_method: Optional[str] = None
    customer: Party = Field(default_factory=Party)
    school: Optional[Party] = None
    destination: Optional[Party] = None
    number_of_students: int = Field(default=0, ge=0)
    number_of_crew: int = Field(default=0, ge=0)
    number_of_buses: int = Field(default=0, ge=0)
    services: List[BookingServiceLine] = Field(default_factory=list)
    payments: List[BookingPayment] = Field(default_factory=list)
    total_amount: Optional[float] = None
    notes: Optional[str] = None
    special_requests: Optional[str] = None

    @property
    def total(self) -> float:
        if self.total_amount is not None:
            return self.total_amount
        return sum(line.line_total for line in self.services)

    @property
    def paid(self) -> float:
        return sum(payment.amount for payment in self.payments)

    @property
    def balance_due(self) -> float:
        return self.total - self.paid


def render_booking_html(
    booking: BookingDocument,
    language: str,
    company: CompanyInfo,
    *,
    generated_at: Optional[datetime] = None,
) -> str:
    t = partial(translate, language)
    na = t("not_available")

    body = [
        letterhead(company, t("booking_summary"), f"{t('reference')} {booking.booking_reference}"),
        section(
            t("booking_information"),
            fields(
                [
                    (t("type"), lookup(BOOKING_TYPE_LABELS, language, booking.booking_type)),
                    (t("trip_date"), format_date(booking.trip_date, language) or na),
                    (t("status"), lookup(STATUS_LABELS, language, booking.status) or na),
                    (
                        t("payment_status"),
                        lookup(PAYMENT_STATUS_LABELS, language, booking.payment_status) or na,
                    ),
                ]
            ),
        ),
        section(
            t("customer_information"),
            fields(
                [
                    (t("name"), booking.customer.display_name or na),
                    (t("email"), booking.customer.email or na),
                    (t("phone"), booking.customer.phone or na),
                    (t("school"), (booking.school.display_name if booking.school else None) or na),
                ]
            ),
        ),
    ]

    if booking.destination is not None:
        body.append(
            section(
                t("destination"),
                fields(
                    [
                        (t("name"), booking.destination.display_name or na),
                        (t("address"), booking.destination.address or na),
                    ]
                ),
            )
        )

    body.append(
        section(
            t("trip_details"),
            fields(
                [
                    (t("students"), booking.number_of_students),
                    (t("crew"), booking.number_of_crew),
                    (t("buses"), booking.number_of_buses),
                ]
            ),
        )
    )

    if booking.services:
        body.append(
            section(
                t("booked_services"),
                table(
                    [
                        (t("service"), False),
                        (t("type"), False),
                        (t("qty"), True),
                        (t("days"), True),
                        (t("price"), True),
                        (t("total_amount"), True),
                    ],
                    (
                        (
                            line.name,
                            lookup(SERVICE_TYPE_LABELS, language, line.type),
                            line.quantity,
                            line.days,
                            format_currency(line.unit_price),
                            format_currency(line.line_total),
                        )
                        for line in booking.services
                    ),
                ),
            )
        )

    if booking.payments:
        body.append(
            section(
                t("payments"),
                table(
                    [(t("date"), False), (t("payment_method"), False), (t("amount"), True)],
                    (
                        (
                            format_date(payment.payment_date, language) or na,
                            lookup(PAYMENT_METHOD_LABELS, language, payment.payment_method) or na,
                            format_currency(payment.amount),
                        )
                        for payment in booking.payments
                    ),
                ),
            )
        )

    body.append(
        section(
            t("financial_summary"),
            fields(
                [
                    (t("total_amount"), format_currency(booking.total)),
                    (t("paid_amount"), format_currency(booking.paid)),
                    (t("balance_due"), format_currency(booking.balance_due)),
                    (
                        t("payment_method"),
                        lookup(PAYMENT_METHOD_LABELS, language, booking.payment_method) or na,
                    ),
                ]
            ),
        )
    )

    if booking.notes or booking.special_requests:
        body.append(
            section(
                t("additional_information"),
                fields(
                    [(t("notes"), booking.notes), (t("special_requests"), booking.special_requests)],
                    skip_empty=True,
                ),
            )
        )

    return page(
        f"{t('booking_summary')} {booking.booking_reference}",
        "".join(body),
        language,
        generated_at=generated_at,
    )

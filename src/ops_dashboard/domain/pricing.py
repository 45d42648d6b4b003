"""Booking price calculation.

A booking costs the destination base (per-student and per-crew prices) plus
one line per selected service: ``unit price x quantity x days`` plus any
sub-services (entertainment and education programs carry those).
"""

from __future__ import annotations

from typing import Any, List, Literal, Mapping, Optional

from pydantic import BaseModel, Field

from .constants import SERVICE_TYPES, SUB_SERVICE_TYPES

RateType = Literal["hourly", "daily", "regional", "overnight", "fixed"]

RATE_COLUMNS = {
    "hourly": "hourly_rate",
    "daily": "daily_rate",
    "regional": "regional_rate",
    "overnight": "overnight_rate",
}


class DestinationPricing(BaseModel):
    student: float = 0
    crew: float = 0


class SubService(BaseModel):
    id: str
    label: str = ""
    price: float = 0


class ServiceSelection(BaseModel):
    id: str
    name: str
    type: str
    quantity: int = 1
    days: int = 1
    unit_price: float = Field(default=0, alias="unitPrice")
    rate_type: RateType = Field(default="daily", alias="rateType")
    sub_services: List[SubService] = Field(default_factory=list, alias="subServices")

    class Config:
        populate_by_name = True


class ServiceCost(BaseModel):
    service_id: str
    service_name: str
    service_type: str
    quantity: int
    days: int
    unit_price: float
    rate_type: RateType
    base_service_cost: float
    sub_services_cost: float
    total_cost: float


class BookingPriceCalculation(BaseModel):
    destination_base: float
    students_cost: float
    crew_cost: float
    services_total: float
    total_price: float
    services: List[ServiceCost]


def calculate_booking_price(
    destination_pricing: Optional[DestinationPricing],
    number_of_students: int,
    number_of_crew: int,
    selected_services: List[ServiceSelection],
) -> BookingPriceCalculation:
    """Price a booking from its destination and selected services."""
    students_cost = 0.0
    crew_cost = 0.0
    if destination_pricing is not None:
        students_cost = (destination_pricing.student or 0) * (number_of_students or 0)
        crew_cost = (destination_pricing.crew or 0) * (number_of_crew or 0)

    costs = []
    for service in selected_services:
        base = (service.unit_price or 0) * (service.quantity or 0) * (service.days or 1)
        subs = sum(sub.price or 0 for sub in service.sub_services)
        costs.append(
            ServiceCost(
                service_id=service.id,
                service_name=service.name,
                service_type=service.type,
                quantity=service.quantity,
                days=service.days,
                unit_price=service.unit_price,
                rate_type=service.rate_type,
                base_service_cost=base,
                sub_services_cost=subs,
                total_cost=base + subs,
            )
        )

    services_total = sum(cost.total_cost for cost in costs)
    destination_base = students_cost + crew_cost
    return BookingPriceCalculation(
        destination_base=destination_base,
        students_cost=students_cost,
        crew_cost=crew_cost,
        services_total=services_total,
        total_price=destination_base + services_total,
        services=costs,
    )


def validate_pricing_inputs(
    number_of_students: int,
    number_of_crew: int,
    selected_services: List[ServiceSelection],
) -> List[str]:
    """Return human-readable problems; an empty list means the inputs are usable."""
    errors: List[str] = []
    if number_of_students < 0:
        errors.append("Number of students cannot be negative")
    if number_of_crew < 0:
        errors.append("Number of crew cannot be negative")
    for service in selected_services:
        if service.type not in SERVICE_TYPES:
            errors.append(f'Service "{service.name}" has unknown type {service.type!r}')
        if service.quantity <= 0:
            errors.append(f'Service "{service.name}" must have quantity greater than 0')
        if service.days <= 0:
            errors.append(f'Service "{service.name}" must have days greater than 0')
        if service.unit_price < 0:
            errors.append(f'Service "{service.name}" has invalid unit price')
        if service.sub_services and service.type not in SUB_SERVICE_TYPES:
            errors.append(f'Service "{service.name}" does not support sub-services')
    return errors


def service_rate(service: Mapping[str, Any], rate_type: RateType) -> float:
    """Pick the rate column matching ``rate_type`` from a provider row."""
    if rate_type == "fixed":
        pricing = service.get("pricing_data") or {}
        return float(service.get("price") or pricing.get("default_price") or 0)
    column = RATE_COLUMNS.get(rate_type, "daily_rate")
    return float(service.get(column) or 0)

"""Car purchase contract document."""

from __future__ import annotations

from datetime import date, datetime
from functools import partial
from typing import Literal, Optional

from pydantic import BaseModel, Field

from .company import CompanyInfo
from .formatting import format_currency, format_date, format_number
from .i18n import CONTRACT_TERMS, DEFAULT_LANGUAGE, PAYMENT_METHOD_LABELS, lookup, translate
from .layout import esc, fields, letterhead, page, section

DealType = Literal["normal", "trade-in", "intermediary", "financing_assistance_intermediary"]


class ContractParty(BaseModel):
    name: str
    id_number: Optional[str] = None
    tax_number: Optional[str] = None
    phone: Optional[str] = None
    address: Optional[str] = None


class VehicleDetails(BaseModel):
    type: Optional[str] = None
    make: str
    model: str
    year: int = Field(ge=1900, le=2100)
    plate_number: Optional[str] = None
    vin: Optional[str] = None
    engine_number: Optional[str] = None
    kilometers: float = Field(default=0, ge=0)


class TradeInVehicle(VehicleDetails):
    estimated_value: float = Field(default=0, ge=0)


class CarContract(BaseModel):
    deal_type: DealType = "normal"
    deal_date: date
    seller: ContractParty
    # None prints the company itself as the buyer
    buyer: Optional[ContractParty] = None
    vehicle: VehicleDetails
    trade_in: Optional[TradeInVehicle] = None
    deal_amount: float = Field(ge=0)
    payment_method: Optional[str] = None
    paid_amount: Optional[float] = Field(default=None, ge=0)
    remaining_amount: Optional[float] = Field(default=None, ge=0)
    remaining_payment_date: Optional[date] = None
    payment_notes: Optional[str] = None
    ownership_transfer_days: int = Field(default=30, ge=0)


def contract_terms(language: str, ownership_transfer_days: int):
    terms = CONTRACT_TERMS.get(language, CONTRACT_TERMS[DEFAULT_LANGUAGE])
    return [term.format(days=ownership_transfer_days) for term in terms]


def render_contract_html(
    contract: CarContract,
    language: str,
    company: CompanyInfo,
    *,
    generated_at: Optional[datetime] = None,
) -> str:
    t = partial(translate, language)
    na = t("not_available")
    vehicle = contract.vehicle

    buyer_pairs = (
        [
            (t("name"), contract.buyer.name),
            (t("id_number"), contract.buyer.id_number or na),
            (t("phone"), contract.buyer.phone or na),
            (t("address"), contract.buyer.address or na),
        ]
        if contract.buyer is not None
        else [
            (t("company"), company.name),
            (t("tax_number"), company.tax_number or na),
            (t("phone"), company.phone or na),
            (t("address"), company.address or na),
        ]
    )

    body = [
        letterhead(
            company,
            t("car_purchase_agreement"),
            f"{t('contract_date')}: {format_date(contract.deal_date, language)}",
        ),
        section(
            t("seller"),
            fields(
                [
                    (t("name"), contract.seller.name),
                    (t("id_number"), contract.seller.id_number or contract.seller.tax_number or na),
                    (t("phone"), contract.seller.phone or na),
                    (t("address"), contract.seller.address or na),
                ]
            ),
        ),
        section(t("buyer"), fields(buyer_pairs)),
        section(
            t("vehicle_information"),
            fields(
                [
                    (t("make"), vehicle.make),
                    (t("model"), vehicle.model),
                    (t("year"), vehicle.year),
                    (t("type"), vehicle.type or na),
                    (t("plate_number"), vehicle.plate_number or na),
                    (t("kilometers"), format_number(vehicle.kilometers)),
                    (t("vin"), vehicle.vin or na),
                    (t("engine_number"), vehicle.engine_number or na),
                ]
            ),
        ),
    ]

    if contract.trade_in is not None:
        trade_in = contract.trade_in
        body.append(
            section(
                t("trade_in_vehicle"),
                fields(
                    [
                        (t("make"), trade_in.make),
                        (t("model"), trade_in.model),
                        (t("year"), trade_in.year),
                        (t("plate_number"), trade_in.plate_number or na),
                        (t("kilometers"), format_number(trade_in.kilometers)),
                        (t("estimated_value"), format_currency(trade_in.estimated_value)),
                    ]
                ),
            )
        )

    purchase = [
        (t("purchase_amount"), format_currency(contract.deal_amount)),
        (t("payment_method"), lookup(PAYMENT_METHOD_LABELS, language, contract.payment_method)),
        (t("paid_amount"), None if contract.paid_amount is None else format_currency(contract.paid_amount)),
        (
            t("remaining_amount"),
            None if contract.remaining_amount is None else format_currency(contract.remaining_amount),
        ),
        (t("remaining_payment_date"), format_date(contract.remaining_payment_date, language)),
        (t("notes"), contract.payment_notes),
    ]
    body.append(section(t("purchase_details"), fields(purchase, skip_empty=True)))

    terms = "".join(
        f"<li>{esc(term)}</li>" for term in contract_terms(language, contract.ownership_transfer_days)
    )
    body.append(section(t("terms_and_conditions"), f'<ul class="terms">{terms}</ul>'))

    body.append(
        '<div class="signatures">'
        f"<div>{esc(t('sellers_signature'))}<br>{esc(t('signature_date'))}</div>"
        f"<div>{esc(t('buyers_signature'))}<br>{esc(t('signature_date'))}</div>"
        "</div>"
    )

    return page(t("car_purchase_agreement"), "".join(body), language, generated_at=generated_at)

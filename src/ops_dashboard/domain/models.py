"""Validated input models for the back-office forms."""

from __future__ import annotations

import re
from datetime import date
from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, ValidationError, field_validator, model_validator

from .constants import (
    CAR_STATUSES,
    MAX_SHOP_PHONES,
    PAYMENT_METHODS,
    SERVICE_TYPES,
    SHOP_STATUSES,
    SIGNUP_ROLES,
)

EMAIL_PATTERN = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def collect_errors(exc: ValidationError) -> Dict[str, str]:
    """Flatten a pydantic ``ValidationError`` into ``{field: message}``.

    Only the first message per field is kept, matching how the forms show a
    single inline error next to each input.
    """
    errors: Dict[str, str] = {}
    for error in exc.errors():
        location = ".".join(str(part) for part in error.get("loc", ()) if part != "body")
        field = location or "form"
        message = error.get("msg", "Invalid value")
        if message.startswith("Value error, "):
            message = message[len("Value error, ") :]
        errors.setdefault(field, message)
    return errors


def _strip_required(value: Optional[str], label: str) -> str:
    text = (value or "").strip()
    if not text:
        raise ValueError(f"{label} is required")
    return text


class CarInput(BaseModel):
    """Add-car form."""

    title: str
    year: int = Field(ge=1900, le=2100)
    brand: str
    status: str
    provider: Optional[str] = None
    kilometers: float = Field(default=0, ge=0)
    market_price: float = Field(default=0, ge=0)
    value_price: float = Field(default=0, ge=0)
    sale_price: float = Field(default=0, ge=0)

    @field_validator("title", "brand", "status", mode="before")
    @classmethod
    def required_text(cls, value, info):
        return _strip_required(value, info.field_name)

    @field_validator("status")
    @classmethod
    def known_status(cls, value: str) -> str:
        if value not in CAR_STATUSES:
            raise ValueError(f"status must be one of {', '.join(CAR_STATUSES)}")
        return value

    @field_validator("provider", mode="before")
    @classmethod
    def blank_provider(cls, value):
        if value is None:
            return None
        return str(value).strip() or None


class CarUpdate(BaseModel):
    """Edit-car form. Only provided fields are written."""

    title: Optional[str] = None
    year: Optional[int] = Field(default=None, ge=1900, le=2100)
    brand: Optional[str] = None
    status: Optional[str] = None
    provider: Optional[str] = None
    kilometers: Optional[float] = Field(default=None, ge=0)
    market_price: Optional[float] = Field(default=None, ge=0)
    value_price: Optional[float] = Field(default=None, ge=0)
    sale_price: Optional[float] = Field(default=None, ge=0)
    images: Optional[List[str]] = None

    @field_validator("title", "brand", mode="before")
    @classmethod
    def not_blank(cls, value, info):
        if value is None:
            return None
        return _strip_required(value, info.field_name)

    @field_validator("status")
    @classmethod
    def known_status(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and value not in CAR_STATUSES:
            raise ValueError(f"status must be one of {', '.join(CAR_STATUSES)}")
        return value


class ShopInput(BaseModel):
    """Add-shop form."""

    shop_name: str
    owner: str
    shop_desc: Optional[str] = None
    logo_url: Optional[str] = None
    cover_image_url: Optional[str] = None
    public: bool = True
    status: str = "active"
    address: Optional[str] = None
    work_hours: Optional[List[Dict[str, Any]]] = None
    phone_numbers: List[str] = Field(default_factory=list)
    category_id: Optional[int] = None

    @field_validator("shop_name", "owner", mode="before")
    @classmethod
    def required_text(cls, value, info):
        return _strip_required(value, info.field_name)

    @field_validator("phone_numbers")
    @classmethod
    def drop_blank_phones(cls, value: List[str]) -> List[str]:
        phones = [phone.strip() for phone in value if phone and phone.strip()]
        if len(phones) > MAX_SHOP_PHONES:
            raise ValueError(f"at most {MAX_SHOP_PHONES} phone numbers")
        return phones

    @field_validator("status")
    @classmethod
    def known_status(cls, value: str) -> str:
        if value not in SHOP_STATUSES:
            raise ValueError(f"status must be one of {', '.join(SHOP_STATUSES)}")
        return value


class PaymentDetails(BaseModel):
    """Details entered when paying out a booking record."""

    payment_method: str
    payment_date: date
    account_number: Optional[str] = None
    account_holder_name: Optional[str] = None
    bank_name: Optional[str] = None
    transaction_number: Optional[str] = None
    reference_number: Optional[str] = None
    check_number: Optional[str] = None
    check_bank_name: Optional[str] = None
    notes: Optional[str] = None

    @field_validator("payment_method")
    @classmethod
    def known_method(cls, value: str) -> str:
        if value not in PAYMENT_METHODS:
            raise ValueError(f"payment_method must be one of {', '.join(PAYMENT_METHODS)}")
        return value


class ManualPayoutInput(PaymentDetails):
    """Add-payout form: a payment to a provider outside any booking record."""

    service_type: str
    service_id: str
    amount: float = Field(gt=0)
    description: Optional[str] = None

    @field_validator("service_type")
    @classmethod
    def known_service(cls, value: str) -> str:
        if value not in SERVICE_TYPES:
            raise ValueError(f"service_type must be one of {', '.join(SERVICE_TYPES)}")
        return value


class SignupInput(BaseModel):
    email: str
    password: str = Field(min_length=6)
    confirm_password: str
    full_name: str
    phone: Optional[str] = None
    role: str = "trip_planner"
    school_id: Optional[str] = None

    @field_validator("email")
    @classmethod
    def valid_email(cls, value: str) -> str:
        value = value.strip().lower()
        if not EMAIL_PATTERN.match(value):
            raise ValueError("Invalid email address")
        return value

    @field_validator("full_name", mode="before")
    @classmethod
    def required_name(cls, value):
        return _strip_required(value, "full_name")

    @field_validator("role")
    @classmethod
    def known_role(cls, value: str) -> str:
        if value not in SIGNUP_ROLES:
            raise ValueError(f"role must be one of {', '.join(SIGNUP_ROLES)}")
        return value

    @field_validator("confirm_password")
    @classmethod
    def passwords_match(cls, value: str, info) -> str:
        password = info.data.get("password")
        if password is not None and value != password:
            raise ValueError("Passwords do not match")
        return value

    @model_validator(mode="after")
    def school_for_managers(self) -> "SignupInput":
        if self.role == "school_manager" and not self.school_id:
            raise ValueError("school_id is required for school managers")
        return self

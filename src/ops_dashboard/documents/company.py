"""Company letterhead read from ``company_settings``."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Mapping, Optional

from supabase import Client

from ..adapters.supabase_client import first_row
from ..logging_config import get_logger

logger = get_logger(__name__)

BOOKING_COMPANY_NAME = "School Trips Company"
DEALERSHIP_COMPANY_NAME = "Car Dealership"


@dataclass(slots=True)
class CompanyInfo:
    name: str
    phone: Optional[str] = None
    address: Optional[str] = None
    tax_number: Optional[str] = None
    logo_url: Optional[str] = None

    @classmethod
    def from_row(cls, row: Mapping[str, Any], default_name: str) -> "CompanyInfo":
        return cls(
            name=row.get("name") or default_name,
            phone=row.get("phone"),
            address=row.get("address"),
            tax_number=row.get("tax_number"),
            logo_url=row.get("logo_url"),
        )


def load_company_info(supabase: Client, default_name: str = BOOKING_COMPANY_NAME) -> CompanyInfo:
    """Read the first ``company_settings`` row.

    A missing row or failed read prints the document under ``default_name``;
    the failure is logged and rendering continues.
    """
    try:
        row = first_row(supabase.table("company_settings").select("*").limit(1).execute())
    except Exception as exc:  # postgrest APIError and transport errors
        logger.warning("Company settings fetch failed, using default company details: %s", exc)
        row = None
    return CompanyInfo.from_row(row or {}, default_name)

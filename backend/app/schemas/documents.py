"""API schemas for PDF documents."""

from __future__ import annotations

from datetime import date
from typing import Optional

from pydantic import BaseModel

from ops_dashboard.documents import BookingDocument, CarContract


class BookingPdfRequest(BaseModel):
    booking: BookingDocument
    # Accept-Language and then the configured default apply when omitted
    language: Optional[str] = None


class ContractPdfRequest(BaseModel):
    contract: CarContract
    language: Optional[str] = None


class ActivityLogPdfRequest(BaseModel):
    # inclusive days; no bound when omitted
    startDate: Optional[date] = None
    endDate: Optional[date] = None
    type: Optional[str] = None
    language: Optional[str] = None

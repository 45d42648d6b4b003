"""API schemas for provider payouts."""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel

from ops_dashboard.domain.models import ManualPayoutInput, PaymentDetails


class ProviderBalanceOut(BaseModel):
    serviceType: str
    serviceId: str
    providerName: str
    userId: Optional[str] = None
    email: Optional[str] = None
    phone: Optional[str] = None
    totalEarned: float
    totalPaidOut: float
    netBalance: float
    bookingCount: int
    payoutCount: int
    lastBookingDate: Optional[str] = None
    lastPayoutDate: Optional[str] = None


class ServiceTypeOwedOut(BaseModel):
    totalOwed: float
    providerCount: int


class ProviderBalancesResponse(BaseModel):
    balances: List[ProviderBalanceOut]
    totalOwed: float
    byServiceType: Dict[str, ServiceTypeOwedOut]


class PayoutEntryOut(BaseModel):
    id: str
    amount: float
    paymentMethod: Optional[str] = None
    paymentDate: Optional[str] = None
    referenceNumber: Optional[str] = None
    transactionNumber: Optional[str] = None
    checkNumber: Optional[str] = None
    description: Optional[str] = None
    notes: Optional[str] = None
    createdBy: Optional[str] = None
    createdByName: Optional[str] = None


class PayoutHistoryResponse(BaseModel):
    serviceType: str
    serviceId: str
    payouts: List[PayoutEntryOut]
    totalPaid: float


class ManualPayoutRequest(BaseModel):
    userId: str
    payout: ManualPayoutInput


class BookingPayoutRequest(BaseModel):
    userId: str
    bookingReference: Optional[str] = None


class RecordPaymentRequest(BaseModel):
    userId: str
    details: PaymentDetails


class PayoutResponse(BaseModel):
    payout: Dict[str, Any]


class PayoutRecordsResponse(BaseModel):
    records: List[Dict[str, Any]]
    created: int

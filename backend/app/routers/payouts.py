"""Service-provider payout routes."""

from __future__ import annotations

from typing import Optional

from fastapi import APIRouter, Depends

from ops_dashboard.services.payouts import (
    create_booking_payout_records,
    create_manual_payout,
    load_provider_balances,
    load_provider_payouts,
    record_payment,
    summarize_owed,
)

from ..config import get_supabase
from ..schemas.payouts import (
    BookingPayoutRequest,
    ManualPayoutRequest,
    PayoutEntryOut,
    PayoutHistoryResponse,
    PayoutRecordsResponse,
    PayoutResponse,
    ProviderBalanceOut,
    ProviderBalancesResponse,
    RecordPaymentRequest,
    ServiceTypeOwedOut,
)

router = APIRouter(prefix="/payouts", tags=["payouts"])


@router.get("/balances", response_model=ProviderBalancesResponse, summary="Provider balances")
async def get_balances(serviceType: Optional[str] = None, supabase=Depends(get_supabase)):
    balances = await load_provider_balances(supabase, serviceType)
    summary = summarize_owed(balances)
    return ProviderBalancesResponse(
        balances=[
            ProviderBalanceOut(
                serviceType=balance.service_type,
                serviceId=balance.service_id,
                providerName=balance.provider_name,
                userId=balance.user_id,
                email=balance.email,
                phone=balance.phone,
                totalEarned=balance.total_earned,
                totalPaidOut=balance.total_paid_out,
                netBalance=balance.net_balance,
                bookingCount=balance.booking_count,
                payoutCount=balance.payout_count,
                lastBookingDate=balance.last_booking_date,
                lastPayoutDate=balance.last_payout_date,
            )
            for balance in balances
        ],
        totalOwed=summary.total_owed,
        byServiceType={
            service_type: ServiceTypeOwedOut(totalOwed=owed.total_owed, providerCount=owed.provider_count)
            for service_type, owed in summary.by_service_type.items()
        },
    )


@router.post("", response_model=PayoutResponse, status_code=201, summary="Record a manual payout")
async def add_payout(payload: ManualPayoutRequest, supabase=Depends(get_supabase)):
    row = create_manual_payout(supabase, payload.payout, created_by=payload.userId)
    return PayoutResponse(payout=row)


@router.post(
    "/bookings/{booking_id}",
    response_model=PayoutRecordsResponse,
    summary="Create payout records for a confirmed booking",
)
async def add_booking_records(
    booking_id: str, payload: BookingPayoutRequest, supabase=Depends(get_supabase)
):
    records = create_booking_payout_records(
        supabase,
        booking_id,
        confirmed_by=payload.userId,
        booking_reference=payload.bookingReference,
    )
    return PayoutRecordsResponse(records=records, created=len(records))


@router.post("/{record_id}/pay", response_model=PayoutResponse, summary="Pay a booking record")
async def pay_record(record_id: str, payload: RecordPaymentRequest, supabase=Depends(get_supabase)):
    row = record_payment(supabase, record_id, payload.details, created_by=payload.userId)
    return PayoutResponse(payout=row)


@router.get(
    "/{service_type}/{service_id}/history",
    response_model=PayoutHistoryResponse,
    summary="Payments made to one provider",
)
async def get_payout_history(service_type: str, service_id: str, supabase=Depends(get_supabase)):
    entries = load_provider_payouts(supabase, service_type, service_id)
    return PayoutHistoryResponse(
        serviceType=service_type,
        serviceId=service_id,
        payouts=[
            PayoutEntryOut(
                id=entry.id,
                amount=entry.amount,
                paymentMethod=entry.payment_method,
                paymentDate=entry.payment_date,
                referenceNumber=entry.reference_number,
                transactionNumber=entry.transaction_number,
                checkNumber=entry.check_number,
                description=entry.description,
                notes=entry.notes,
                createdBy=entry.created_by,
                createdByName=entry.created_by_name,
            )
            for entry in entries
        ],
        totalPaid=sum(entry.amount for entry in entries),
    )

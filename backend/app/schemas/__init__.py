"""API schema exports."""

from .auth import LoginRequest, LoginResponse, SignupResponse
from .bookings import QuoteRequest
from .dashboard import (
    BookingOverviewRequest,
    BookingOverviewResponse,
    DashboardMetricsRequest,
    DashboardMetricsResponse,
)
from .documents import BookingPdfRequest, ContractPdfRequest
from .explore import ExploreResponse
from .inventory import CarListResponse, CarResponse, ShopResponse
from .payouts import (
    BookingPayoutRequest,
    ManualPayoutRequest,
    PayoutRecordsResponse,
    PayoutResponse,
    ProviderBalancesResponse,
    RecordPaymentRequest,
)

__all__ = [
    "LoginRequest",
    "LoginResponse",
    "SignupResponse",
    "QuoteRequest",
    "BookingOverviewRequest",
    "BookingOverviewResponse",
    "DashboardMetricsRequest",
    "DashboardMetricsResponse",
    "BookingPdfRequest",
    "ContractPdfRequest",
    "ExploreResponse",
    "CarListResponse",
    "CarResponse",
    "ShopResponse",
    "BookingPayoutRequest",
    "ManualPayoutRequest",
    "PayoutRecordsResponse",
    "PayoutResponse",
    "ProviderBalancesResponse",
    "RecordPaymentRequest",
]

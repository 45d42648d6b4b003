"""Domain exports."""

from .constants import SERVICE_TYPES
from .metrics import (
    Granularity,
    GrowthRates,
    MetricSnapshot,
    MetricWindow,
    MonthlyBucket,
    Period,
    bucket_trailing_months,
    compute_window,
    growth_rate,
    window_growth,
)
from .models import (
    CarInput,
    CarUpdate,
    ManualPayoutInput,
    PaymentDetails,
    ShopInput,
    SignupInput,
    collect_errors,
)
from .pricing import (
    BookingPriceCalculation,
    DestinationPricing,
    ServiceSelection,
    calculate_booking_price,
    validate_pricing_inputs,
)

__all__ = [
    "SERVICE_TYPES",
    "Granularity",
    "GrowthRates",
    "MetricSnapshot",
    "MetricWindow",
    "MonthlyBucket",
    "Period",
    "bucket_trailing_months",
    "compute_window",
    "growth_rate",
    "window_growth",
    "CarInput",
    "CarUpdate",
    "ManualPayoutInput",
    "PaymentDetails",
    "ShopInput",
    "SignupInput",
    "collect_errors",
    "BookingPriceCalculation",
    "DestinationPricing",
    "ServiceSelection",
    "calculate_booking_price",
    "validate_pricing_inputs",
]

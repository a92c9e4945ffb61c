"""Domain value objects and transport contracts."""

from npv_calculator.models.values import CashFlow, DiscountRate, Money, NPVCalculation
from npv_calculator.models.transport import (
    ApiError,
    ApiResponse,
    NPVCalculationMetadata,
    NPVCalculationRequest,
    NPVCalculationResult,
    NPVResultItem,
)

__all__ = [
    "CashFlow",
    "DiscountRate",
    "Money",
    "NPVCalculation",
    "ApiError",
    "ApiResponse",
    "NPVCalculationMetadata",
    "NPVCalculationRequest",
    "NPVCalculationResult",
    "NPVResultItem",
]

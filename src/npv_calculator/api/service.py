"""Mapping layer — turns flat request numbers into value objects and back.

``NPVCalculationService`` is what the HTTP handlers call.  It owns no
state beyond its collaborators, so one instance can serve every request.
"""

from __future__ import annotations

import logging
from typing import Callable, Sequence

from npv_calculator.config.logging import get_logger
from npv_calculator.finance.npv import compute_npv_range
from npv_calculator.models.transport import (
    NPVCalculationMetadata,
    NPVCalculationRequest,
    NPVCalculationResult,
    NPVResultItem,
)
from npv_calculator.models.values import (
    CashFlow,
    DiscountRate,
    Money,
    NPVCalculation,
)

RangeCalculator = Callable[..., Sequence[NPVCalculation]]


def build_cash_flows(amounts: Sequence | None, currency: str | None) -> list[CashFlow]:
    """One ``CashFlow`` per amount; the list position is the period."""
    if amounts is None:
        return []
    return [CashFlow(period, Money(amount, currency)) for period, amount in enumerate(amounts)]


def to_result_item(calc: NPVCalculation) -> NPVResultItem:
    return NPVResultItem(
        discount_rate=calc.discount_rate.value,
        npv=calc.net_present_value.amount,
        formatted_rate=str(calc.discount_rate),
        currency=calc.net_present_value.currency,
    )


class NPVCalculationService:
    """Runs a rate sweep for an ``NPVCalculationRequest``.

    Parameters
    ----------
    range_calculator : callable
        ``(cash_flows, lower, upper, increment) -> list[NPVCalculation]``.
        Defaults to :func:`compute_npv_range`.
    logger : logging.Logger, optional
    """

    def __init__(
        self,
        range_calculator: RangeCalculator = compute_npv_range,
        logger: logging.Logger | None = None,
    ):
        self._calculate_range = range_calculator
        self._logger = logger or get_logger(__name__)

    def calculate_npv_range(self, request: NPVCalculationRequest) -> NPVCalculationResult:
        """Evaluate NPV across the request's rate range.

        Every exception is logged and re-raised for the caller to classify.
        """
        try:
            cash_flow_count = len(request.cash_flows or [])
            self._logger.info("Starting NPV calculation for %d cash flows", cash_flow_count)

            cash_flows = build_cash_flows(request.cash_flows, request.currency)
            lower_bound = DiscountRate.from_percentage(request.lower_bound)
            upper_bound = DiscountRate.from_percentage(request.upper_bound)

            calculations = self._calculate_range(
                cash_flows, lower_bound, upper_bound, request.increment,
            )
            results = [to_result_item(calc) for calc in calculations]

            self._logger.info(
                "Completed %d NPV calculations between %s and %s",
                len(results), lower_bound, upper_bound,
            )
            return NPVCalculationResult(
                results=results,
                metadata=NPVCalculationMetadata(
                    cash_flow_count=len(cash_flows),
                    calculation_count=len(results),
                ),
            )
        except Exception:
            self._logger.exception("Error calculating NPV range")
            raise

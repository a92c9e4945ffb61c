"""Narrative generator — plain-English reading of an NPV sweep.

Produces headline metrics (best/worst NPV, where NPV turns negative) and a
short text block, the same information the results table and chart show
visually with their positive/negative colouring and break-even line.
"""

from __future__ import annotations

from decimal import Decimal

from npv_calculator.errors import InvalidArgumentError
from npv_calculator.models.transport import (
    CamelModel,
    JsonDecimal,
    NPVCalculationResult,
    NPVResultItem,
)
from npv_calculator.models.values import DiscountRate


class BreakEvenBracket(CamelModel):
    """Two adjacent sweep points between which NPV changes sign."""

    lower_rate: JsonDecimal
    upper_rate: JsonDecimal
    estimated_rate: JsonDecimal
    """Linear interpolation of the zero crossing, rounded to 4 decimals."""

    formatted_estimate: str


class SweepSummary(CamelModel):
    currency: str
    max_npv: JsonDecimal
    max_npv_rate: str
    min_npv: JsonDecimal
    min_npv_rate: str
    positive_count: int
    negative_count: int
    break_even: BreakEvenBracket | None = None


class NPVSummaryResult(CamelModel):
    """Response body of ``POST /api/NPVCalculation/summary``."""

    summary: SweepSummary
    narrative: str
    calculation: NPVCalculationResult


def _format_rate(value: Decimal) -> str:
    return str(DiscountRate(value))


def find_break_even(items: list[NPVResultItem]) -> BreakEvenBracket | None:
    """First pair of neighbouring rates where NPV crosses zero."""
    for prev, cur in zip(items, items[1:]):
        if (prev.npv >= 0) == (cur.npv >= 0):
            continue
        span = cur.npv - prev.npv
        fraction = -prev.npv / span if span != 0 else Decimal(0)
        estimate = prev.discount_rate + fraction * (cur.discount_rate - prev.discount_rate)
        estimate = estimate.quantize(Decimal("0.0001"))
        return BreakEvenBracket(
            lower_rate=prev.discount_rate,
            upper_rate=cur.discount_rate,
            estimated_rate=estimate,
            formatted_estimate=_format_rate(estimate),
        )
    return None


def summarize_results(result: NPVCalculationResult) -> SweepSummary:
    items = result.results
    if not items:
        raise InvalidArgumentError("No results to summarize")

    best = max(items, key=lambda r: r.npv)
    worst = min(items, key=lambda r: r.npv)
    positive = sum(1 for r in items if r.npv >= 0)

    return SweepSummary(
        currency=items[0].currency,
        max_npv=best.npv,
        max_npv_rate=best.formatted_rate,
        min_npv=worst.npv,
        min_npv_rate=worst.formatted_rate,
        positive_count=positive,
        negative_count=len(items) - positive,
        break_even=find_break_even(items),
    )


def generate_narrative(result: NPVCalculationResult, summary: SweepSummary | None = None) -> str:
    """Plain-English summary of a sweep.

    Covers the evaluated range, best and worst NPV, and whether (and where)
    the project stops creating value.
    """
    summary = summary or summarize_results(result)
    items = result.results
    meta = result.metadata
    ccy = summary.currency

    lines = [
        "=" * 60,
        "NPV SWEEP SUMMARY",
        "=" * 60,
        f"Cash flows: {meta.cash_flow_count} periods",
        f"Rates evaluated: {meta.calculation_count} "
        f"({items[0].formatted_rate} to {items[-1].formatted_rate})",
        f"Highest NPV: {ccy} {summary.max_npv:.2f} at {summary.max_npv_rate}",
        f"Lowest NPV: {ccy} {summary.min_npv:.2f} at {summary.min_npv_rate}",
        "",
    ]

    if summary.negative_count == 0:
        lines.append(
            f"NPV is positive at every rate evaluated: the project adds value "
            f"even at {items[-1].formatted_rate}."
        )
    elif summary.positive_count == 0:
        lines.append(
            f"NPV is negative at every rate evaluated: the project destroys value "
            f"even at {items[0].formatted_rate}."
        )
    elif summary.break_even is not None:
        be = summary.break_even
        lines.append(
            f"NPV crosses zero between {_format_rate(be.lower_rate)} and "
            f"{_format_rate(be.upper_rate)} (break-even ≈ {be.formatted_estimate}). "
            f"NPV is positive at {summary.positive_count} of {meta.calculation_count} rates."
        )

    return "\n".join(lines)

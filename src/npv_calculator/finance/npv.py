"""NPV engine — single-rate NPV and ranged discount-rate sweeps.

Key formulas:
  PV_t = CF_t / (1 + r)^t            (annual compounding, t = period index)
  NPV  = Σ PV_t                      (each PV_t rounded to cents first)

The sweep evaluates NPV at lower, lower + Δ, lower + 2Δ, ... up to and
including the upper bound, where Δ is given in percentage points.
Both functions are pure: no shared state, safe to call concurrently.
"""

from __future__ import annotations

from decimal import Decimal
from functools import reduce
from typing import Iterable

from npv_calculator.errors import InvalidArgumentError, MissingArgumentError
from npv_calculator.models.values import CashFlow, DiscountRate, NPVCalculation, to_decimal

RATE_QUANTUM = Decimal("0.0001")
"""Sweep rates are rounded to 4 decimal places (0.01 percentage points)."""

UPPER_BOUND_TOLERANCE = Decimal("0.0001")
"""Slack added to the upper bound so it is always part of the sweep."""


def compute_npv(cash_flows: Iterable[CashFlow] | None, discount_rate: DiscountRate | None) -> NPVCalculation:
    """Compute the NPV of ``cash_flows`` at a single discount rate.

    Parameters
    ----------
    cash_flows : Iterable[CashFlow]
        Non-empty; all flows must share one currency.
    discount_rate : DiscountRate
        Rate applied to every period.

    Raises
    ------
    InvalidArgumentError
        Cash flows are ``None`` or empty.
    MissingArgumentError
        ``discount_rate`` is ``None``.
    IncompatibleCurrencyError
        Cash flows are in more than one currency.
    """
    flows = list(cash_flows) if cash_flows is not None else []
    if not flows:
        raise InvalidArgumentError("Cash flows cannot be null or empty", "cash_flows")
    if discount_rate is None:
        raise MissingArgumentError("discount_rate")

    total = reduce(
        lambda a, b: a + b,
        (cf.present_value(discount_rate) for cf in flows),
    )
    return NPVCalculation(discount_rate, total)


def compute_npv_range(
    cash_flows: Iterable[CashFlow] | None,
    lower_bound: DiscountRate | None,
    upper_bound: DiscountRate | None,
    increment: Decimal | float | int | None,
) -> list[NPVCalculation]:
    """Sweep NPV across ``[lower_bound, upper_bound]`` in ``increment`` steps.

    ``increment`` is in percentage points: ``1`` advances the rate by 0.01.
    Rate point ``i`` is ``lower + i × increment/100`` rounded to 4 decimals;
    the sweep stops once the unrounded point exceeds ``upper + 0.0001``.

    Returns results in strictly ascending rate order; points that round
    to an already evaluated rate are skipped.  Cash-flow validation is left
    to ``compute_npv`` and fires on the first rate point.
    """
    if lower_bound is None or upper_bound is None:
        raise MissingArgumentError("bounds", "Bounds cannot be null")
    if lower_bound.value > upper_bound.value:
        raise InvalidArgumentError("Lower bound must be less than or equal to upper bound")
    if increment is None:
        raise MissingArgumentError("increment")
    step_pct = to_decimal(increment)
    if step_pct <= 0:
        raise InvalidArgumentError("Increment must be positive", "increment")

    flows = list(cash_flows) if cash_flows is not None else None
    step = step_pct / 100
    stop = upper_bound.value + UPPER_BOUND_TOLERANCE

    results: list[NPVCalculation] = []
    previous: Decimal | None = None
    i = 0
    current = lower_bound.value
    while current <= stop:
        rounded = current.quantize(RATE_QUANTUM)
        # steps finer than RATE_QUANTUM collapse onto the same rate
        if rounded != previous:
            results.append(compute_npv(flows, DiscountRate(rounded)))
            previous = rounded
        i += 1
        current = lower_bound.value + i * step
    return results

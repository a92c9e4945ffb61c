"""Value objects — the immutable building blocks of every NPV computation.

``Money`` and ``DiscountRate`` hold ``Decimal`` values so that monetary
rounding follows the documented two-decimal convention regardless of how
the input numbers arrived (JSON floats, strings or ints).
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime, timezone
from decimal import ROUND_HALF_UP, Context, Decimal, localcontext

from npv_calculator.errors import (
    IncompatibleCurrencyError,
    InvalidArgumentError,
    MissingArgumentError,
)

DEFAULT_CURRENCY = "USD"

_CENTS = Decimal("0.01")

MAX_AMOUNT = Decimal("79228162514264337593543950335")
"""Largest absolute amount accepted (2**96 - 1, the range of a 96-bit decimal)."""

# Wide enough that MAX_AMOUNT quantized to cents is exact.
_ARITHMETIC = Context(prec=60)


def to_decimal(value: Decimal | float | int | str) -> Decimal:
    """Coerce a number to ``Decimal``; floats go through ``str`` to avoid binary noise."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(str(value))
    return Decimal(value)


@dataclass(frozen=True)
class Money:
    """A signed amount in a single currency."""

    amount: Decimal
    currency: str = DEFAULT_CURRENCY

    def __post_init__(self) -> None:
        if self.amount is None:
            raise MissingArgumentError("amount")
        if not self.currency:
            raise InvalidArgumentError("Currency is required", "currency")
        amount = to_decimal(self.amount)
        if not amount.is_finite() or abs(amount) > MAX_AMOUNT:
            raise InvalidArgumentError("Amount is outside the supported range", "amount")
        object.__setattr__(self, "amount", amount)

    def add(self, other: Money) -> Money:
        if self.currency != other.currency:
            raise IncompatibleCurrencyError(
                f"Cannot add money with different currencies "
                f"({self.currency} and {other.currency})"
            )
        with localcontext(_ARITHMETIC):
            return Money(self.amount + other.amount, self.currency)

    def __add__(self, other: object) -> Money:
        if not isinstance(other, Money):
            return NotImplemented
        return self.add(other)

    def __str__(self) -> str:
        return f"{self.currency} {self.amount:.2f}"


@dataclass(frozen=True)
class DiscountRate:
    """Periodic discount rate stored as a fraction (0.05 = 5%)."""

    value: Decimal

    def __post_init__(self) -> None:
        if self.value is None:
            raise MissingArgumentError("value")
        value = to_decimal(self.value)
        if value < -1:
            raise InvalidArgumentError("Discount rate cannot be less than -100%", "value")
        object.__setattr__(self, "value", value)

    @classmethod
    def from_percentage(cls, percentage: Decimal | float | int | str) -> DiscountRate:
        if percentage is None:
            raise MissingArgumentError("percentage")
        return cls(to_decimal(percentage) / 100)

    @property
    def percentage(self) -> Decimal:
        return self.value * 100

    def __str__(self) -> str:
        # UI tables and log lines key on this exact format, e.g. "5.00%"
        return f"{self.percentage.quantize(_CENTS, rounding=ROUND_HALF_UP):f}%"


@dataclass(frozen=True)
class CashFlow:
    """A monetary amount received (positive) or paid (negative) at ``period``."""

    period: int
    amount: Money

    def __post_init__(self) -> None:
        if isinstance(self.period, bool) or not isinstance(self.period, int):
            raise InvalidArgumentError("Period must be an integer", "period")
        if self.period < 0:
            raise InvalidArgumentError("Period cannot be negative", "period")
        if self.amount is None:
            raise MissingArgumentError("amount")

    def present_value(self, rate: DiscountRate) -> Money:
        """Discount this flow to period 0.

        PV = amount / (1 + r)^period, rounded to cents in the flow's currency.
        The discount factor is evaluated in binary floating point.
        """
        discount_factor = (1.0 + float(rate.value)) ** self.period
        with localcontext(_ARITHMETIC):
            present_value = self.amount.amount / Decimal(discount_factor)
            if abs(present_value) > MAX_AMOUNT:
                raise InvalidArgumentError("Present value is outside the supported range", "amount")
            return Money(present_value.quantize(_CENTS), self.amount.currency)


@dataclass(frozen=True)
class NPVCalculation:
    """NPV evaluated at one discount rate."""

    discount_rate: DiscountRate
    net_present_value: Money
    calculated_at: datetime = field(default_factory=lambda: datetime.now(timezone.utc))

    def __post_init__(self) -> None:
        if self.discount_rate is None:
            raise MissingArgumentError("discount_rate")
        if self.net_present_value is None:
            raise MissingArgumentError("net_present_value")

"""Exception hierarchy shared by the value objects, engine and API layer.

``InvalidArgumentError`` is the caller's fault and surfaces as a 400.
``IncompatibleCurrencyError`` signals inconsistent internal data and is
treated as an unexpected failure by the API.
"""

from __future__ import annotations


class NPVCalculatorError(Exception):
    """Base class for all calculator errors."""


class InvalidArgumentError(NPVCalculatorError, ValueError):
    """Malformed input: bad bounds, non-positive increment, empty cash flows, etc."""

    def __init__(self, message: str, param_name: str | None = None):
        super().__init__(message)
        self.param_name = param_name


class MissingArgumentError(InvalidArgumentError):
    """A required value was ``None``."""

    def __init__(self, param_name: str, message: str | None = None):
        super().__init__(message or f"Value cannot be null: {param_name}", param_name)


class IncompatibleCurrencyError(NPVCalculatorError):
    """Arithmetic attempted across two different currencies."""

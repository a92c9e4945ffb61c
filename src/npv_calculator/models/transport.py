"""Transport models — the JSON contract between the API and the browser UI.

Every model serializes with camelCase keys (``cashFlows``, ``formattedRate``)
and accepts either camelCase or snake_case on input.  Decimal fields are
carried as ``Decimal`` in Python and emitted as JSON numbers.
"""

from __future__ import annotations

from datetime import datetime, timezone
from decimal import Decimal
from typing import Annotated, Generic, TypeVar

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer
from pydantic.alias_generators import to_camel


JsonDecimal = Annotated[Decimal, PlainSerializer(float, return_type=float, when_used="json")]

DataT = TypeVar("DataT")


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ═══════════════════════════════════════════════════════════════════════════
# Request
# ═══════════════════════════════════════════════════════════════════════════

class NPVCalculationRequest(CamelModel):
    """Body of ``POST /api/NPVCalculation/calculate``.

    Bounds and increment are in percentage units: ``5`` means 5%.
    ``None`` values are accepted here and rejected by the engine, so the
    client gets the engine's own validation message.
    """

    cash_flows: list[JsonDecimal] | None = Field(
        default_factory=list,
        description="Cash flow amounts; list index = period (0 = today).",
    )
    lower_bound: JsonDecimal | None = Field(
        default=Decimal("1"),
        description="Lowest discount rate to evaluate, in percent.",
    )
    upper_bound: JsonDecimal | None = Field(
        default=Decimal("15"),
        description="Highest discount rate to evaluate, in percent (inclusive).",
    )
    increment: JsonDecimal | None = Field(
        default=Decimal("0.25"),
        description="Step between evaluated rates, in percentage points.",
    )
    currency: str | None = Field(
        default="USD",
        description="Currency code applied to every cash flow.",
    )


# ═══════════════════════════════════════════════════════════════════════════
# Results
# ═══════════════════════════════════════════════════════════════════════════

class NPVResultItem(CamelModel):
    """NPV at one discount rate, flattened for the results table and chart."""

    discount_rate: JsonDecimal
    """Rate as a fraction (0.05 = 5%)."""

    npv: JsonDecimal
    formatted_rate: str
    """Display form of the rate, e.g. ``"5.00%"``."""

    currency: str


class NPVCalculationMetadata(CamelModel):
    cash_flow_count: int
    calculation_count: int
    calculated_at: datetime = Field(default_factory=_utc_now)


class NPVCalculationResult(CamelModel):
    results: list[NPVResultItem] = Field(default_factory=list)
    metadata: NPVCalculationMetadata


# ═══════════════════════════════════════════════════════════════════════════
# Response envelope
# ═══════════════════════════════════════════════════════════════════════════

class ApiError(CamelModel):
    code: str
    message: str


class ApiResponse(CamelModel, Generic[DataT]):
    """Uniform envelope for every calculation endpoint."""

    success: bool
    data: DataT | None = None
    error: ApiError | None = None
    message: str | None = None
    timestamp: datetime = Field(default_factory=_utc_now)

"""Request context — defaults, schema, and form-level validation rules.

The browser form starts from ``get_default_request()`` and checks its input
with the same rules as ``validate_request()``.  Those rules are stricter
than the engine's (bounds limited to 0–100%) and are advisory only: the
``/calculate`` endpoint relies on the engine's own validation.
"""

from __future__ import annotations

from decimal import Decimal
from typing import Any

from pydantic import BaseModel, Field

from npv_calculator.config.settings import get_settings
from npv_calculator.models.transport import NPVCalculationRequest


DEFAULT_CASH_FLOWS: list[Decimal] = [Decimal(v) for v in (-1000, 300, 300, 300, 300, 300)]

MIN_RATE_PCT = Decimal("0")
MAX_RATE_PCT = Decimal("100")


# ═══════════════════════════════════════════════════════════════════════════
# Public response models
# ═══════════════════════════════════════════════════════════════════════════

class ValidationReport(BaseModel):
    """Outcome of form-level validation."""
    valid: bool
    errors: list[str] = Field(default_factory=list)


class EndpointInfo(BaseModel):
    """Description of one API endpoint."""
    method: str
    path: str
    description: str


class ServiceContext(BaseModel):
    """Self-describing manifest returned by ``GET /``."""
    name: str
    version: str
    description: str
    formulas: list[dict[str, str]]
    endpoints: list[EndpointInfo]
    docs: str = "GET /docs (interactive Swagger UI)"


# ═══════════════════════════════════════════════════════════════════════════
# Builders
# ═══════════════════════════════════════════════════════════════════════════

def get_default_request() -> NPVCalculationRequest:
    """Form defaults: a 1,000 outlay repaid by five 300 inflows, swept 1%–15% by 0.25."""
    return NPVCalculationRequest(cash_flows=list(DEFAULT_CASH_FLOWS))


def get_request_schema() -> dict[str, Any]:
    """JSON Schema for the calculate request body (camelCase keys)."""
    return NPVCalculationRequest.model_json_schema(by_alias=True)


def validate_request(request: NPVCalculationRequest) -> ValidationReport:
    """Apply the UI's form rules and collect every violation."""
    errors: list[str] = []

    if not request.cash_flows:
        errors.append("At least one cash flow is required")

    lower, upper, increment = request.lower_bound, request.upper_bound, request.increment

    if lower is None or not MIN_RATE_PCT <= lower <= MAX_RATE_PCT:
        errors.append("Lower bound must be between 0 and 100")
    if upper is None or not MIN_RATE_PCT <= upper <= MAX_RATE_PCT:
        errors.append("Upper bound must be between 0 and 100")
    if lower is not None and upper is not None and upper < lower:
        errors.append("Upper bound must be greater than or equal to lower bound")
    if increment is None or increment <= 0 or increment > MAX_RATE_PCT:
        errors.append("Increment must be positive and less than or equal to 100")
    if not request.currency:
        errors.append("Currency is required")

    return ValidationReport(valid=not errors, errors=errors)


def build_context() -> ServiceContext:
    settings = get_settings()
    base = "/api/NPVCalculation"
    return ServiceContext(
        name=settings.APP_NAME,
        version=settings.APP_VERSION,
        description=(
            "Net Present Value of a series of annual cash flows, evaluated "
            "across a range of discount rates. Bounds and increment are "
            "given in percent; cash flow index = period."
        ),
        formulas=[
            {"name": "Present value", "formula": "PV_t = CF_t / (1 + r)^t"},
            {"name": "NPV", "formula": "NPV = Σ PV_t"},
            {"name": "Sweep", "formula": "r_i = lower + i × increment / 100, while r_i ≤ upper"},
        ],
        endpoints=[
            EndpointInfo(method="POST", path=f"{base}/calculate",
                         description="NPV at every rate between lowerBound and upperBound"),
            EndpointInfo(method="POST", path=f"{base}/summary",
                         description="Sweep plus plain-English summary and headline metrics"),
            EndpointInfo(method="POST", path=f"{base}/validate",
                         description="Check a request against the form rules without calculating"),
            EndpointInfo(method="GET", path=f"{base}/defaults",
                         description="Default request the UI starts from"),
            EndpointInfo(method="GET", path=f"{base}/schema",
                         description="JSON Schema of the request body"),
            EndpointInfo(method="GET", path="/health", description="Liveness check"),
        ],
    )

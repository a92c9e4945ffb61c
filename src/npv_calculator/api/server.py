"""FastAPI server — HTTP boundary for the NPV calculator.

Run with:
    uvicorn npv_calculator.api.server:app --reload --port 8000

Or:
    npv-calculator-api

Endpoints:
    GET  /                              — service manifest
    GET  /health                        — liveness check
    POST /api/NPVCalculation/calculate  — NPV sweep across a rate range
    POST /api/NPVCalculation/summary    — sweep + plain-English narrative
    POST /api/NPVCalculation/validate   — form-rule check, no calculation
    GET  /api/NPVCalculation/defaults   — default request for the UI form
    GET  /api/NPVCalculation/schema     — JSON Schema of the request body

Calculation endpoints answer with the ``ApiResponse`` envelope:
400 ``INVALID_REQUEST`` for bad input, 500 ``INTERNAL_ERROR`` for anything
else (details stay in the server log).
"""

from __future__ import annotations

from typing import Any, Callable

from fastapi import APIRouter, Depends, FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from npv_calculator.api.context import (
    ServiceContext,
    ValidationReport,
    build_context,
    get_default_request,
    get_request_schema,
    validate_request,
)
from npv_calculator.api.narrative import NPVSummaryResult, generate_narrative, summarize_results
from npv_calculator.api.service import NPVCalculationService
from npv_calculator.config.logging import get_logger, setup_logging
from npv_calculator.config.settings import get_settings
from npv_calculator.errors import InvalidArgumentError
from npv_calculator.models.transport import (
    ApiError,
    ApiResponse,
    NPVCalculationRequest,
    NPVCalculationResult,
)


INVALID_REQUEST = "INVALID_REQUEST"
INTERNAL_ERROR = "INTERNAL_ERROR"
INTERNAL_ERROR_MESSAGE = "An unexpected error occurred while processing your request"
SUCCESS_MESSAGE = "NPV calculations completed successfully"


# ═══════════════════════════════════════════════════════════════════════════
# App setup
# ═══════════════════════════════════════════════════════════════════════════

settings = get_settings()
setup_logging(settings.LOG_LEVEL, settings.ACCESS_LOG_LEVEL)
logger = get_logger(__name__)

app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description=(
        "Net Present Value calculator. Submit a list of annual cash flows "
        "and a discount-rate range; receive the NPV at every rate in the range."
    ),
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ALLOW_ORIGINS,
    allow_methods=["*"],
    allow_headers=["*"],
)

router = APIRouter(prefix="/api/NPVCalculation", tags=["NPVCalculation"])

_service = NPVCalculationService(logger=get_logger("npv_calculator.api.service"))


def get_calculation_service() -> NPVCalculationService:
    return _service


# ═══════════════════════════════════════════════════════════════════════════
# Helpers
# ═══════════════════════════════════════════════════════════════════════════

def _envelope(response: ApiResponse, status_code: int = 200) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=response.model_dump(mode="json", by_alias=True, exclude_none=True),
    )


def _error(code: str, message: str, status_code: int) -> JSONResponse:
    return _envelope(
        ApiResponse(success=False, error=ApiError(code=code, message=message)),
        status_code,
    )


def _guarded(action: Callable[[], Any]) -> JSONResponse:
    """Run ``action`` and wrap its result (or failure) in the response envelope."""
    try:
        data = action()
    except InvalidArgumentError as exc:
        logger.warning("Invalid argument in NPV calculation request: %s", exc)
        return _error(INVALID_REQUEST, str(exc), 400)
    except Exception:
        logger.exception("Unexpected error during NPV calculation")
        return _error(INTERNAL_ERROR, INTERNAL_ERROR_MESSAGE, 500)
    return _envelope(ApiResponse(success=True, data=data, message=SUCCESS_MESSAGE))


def _describe_validation_errors(exc: RequestValidationError) -> str:
    parts = []
    for err in exc.errors():
        loc = ".".join(str(p) for p in err.get("loc", ()) if p != "body")
        parts.append(f"{loc}: {err.get('msg')}" if loc else str(err.get("msg")))
    return "; ".join(parts) or "Invalid request body"


@app.exception_handler(RequestValidationError)
async def request_validation_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Malformed bodies get the same 400 envelope as engine validation failures."""
    message = _describe_validation_errors(exc)
    logger.warning("Rejected malformed request to %s: %s", request.url.path, message)
    return _error(INVALID_REQUEST, message, 400)


# ═══════════════════════════════════════════════════════════════════════════
# Endpoints
# ═══════════════════════════════════════════════════════════════════════════

@app.get("/health")
def health_check():
    """Health check for deployment platforms."""
    return {"status": "ok"}


@app.get("/", response_model=ServiceContext)
def root():
    """Service manifest — name, formulas and available endpoints."""
    return build_context()


@router.post("/calculate", response_model=ApiResponse[NPVCalculationResult])
def calculate_npv_range(
    request: NPVCalculationRequest,
    service: NPVCalculationService = Depends(get_calculation_service),
):
    """Compute NPV at every rate from ``lowerBound`` to ``upperBound``.

    Bounds and increment are percentages. Example:
    ```json
    {"cashFlows": [-1000, 300, 300, 300, 300, 300],
     "lowerBound": 1, "upperBound": 15, "increment": 0.25, "currency": "USD"}
    ```
    """
    logger.info(
        "Received NPV calculation request with %d cash flows",
        len(request.cash_flows or []),
    )
    return _guarded(lambda: service.calculate_npv_range(request))


@router.post("/summary", response_model=ApiResponse[NPVSummaryResult])
def calculate_npv_summary(
    request: NPVCalculationRequest,
    service: NPVCalculationService = Depends(get_calculation_service),
):
    """Run the sweep and return headline metrics plus a narrative."""
    logger.info(
        "Received NPV summary request with %d cash flows",
        len(request.cash_flows or []),
    )

    def _summarize() -> NPVSummaryResult:
        result = service.calculate_npv_range(request)
        summary = summarize_results(result)
        return NPVSummaryResult(
            summary=summary,
            narrative=generate_narrative(result, summary),
            calculation=result,
        )

    return _guarded(_summarize)


@router.post("/validate", response_model=ValidationReport)
def validate(request: NPVCalculationRequest):
    """Check a request against the UI form rules without calculating."""
    return validate_request(request)


@router.get("/defaults")
def get_defaults():
    """Default request the UI form starts from."""
    return get_default_request().model_dump(mode="json", by_alias=True)


@router.get("/schema")
def get_schema():
    """JSON Schema of the calculate request body."""
    return get_request_schema()


app.include_router(router)


# ═══════════════════════════════════════════════════════════════════════════
# CLI entry point
# ═══════════════════════════════════════════════════════════════════════════

def main():
    """Run the API server."""
    import uvicorn
    uvicorn.run(
        "npv_calculator.api.server:app",
        host=settings.API_HOST,
        port=settings.API_PORT,
        reload=settings.API_RELOAD,
    )


if __name__ == "__main__":
    main()

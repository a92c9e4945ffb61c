"""Shared test fixtures — cash flow sets used across engine, service and API tests."""

from __future__ import annotations

from decimal import Decimal

import pytest

from npv_calculator.models import CashFlow, Money, NPVCalculationRequest


def make_cash_flows(amounts: list, currency: str = "USD") -> list[CashFlow]:
    return [CashFlow(period, Money(Decimal(str(a)), currency)) for period, a in enumerate(amounts)]


@pytest.fixture
def annuity_flows() -> list[CashFlow]:
    """1,000 outlay followed by five 300 inflows (NPV ≈ 137.24 at 10%)."""
    return make_cash_flows([-1000, 300, 300, 300, 300, 300])


@pytest.fixture
def three_year_flows() -> list[CashFlow]:
    """1,000 outlay followed by three 500 inflows (NPV = 500 at 0%)."""
    return make_cash_flows([-1000, 500, 500, 500])


@pytest.fixture
def default_request() -> NPVCalculationRequest:
    return NPVCalculationRequest(
        cash_flows=[Decimal(v) for v in (-1000, 300, 300, 300, 300, 300)],
        lower_bound=Decimal("1"),
        upper_bound=Decimal("15"),
        increment=Decimal("0.25"),
        currency="USD",
    )

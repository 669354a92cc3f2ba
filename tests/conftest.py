"""Canonical loan terms used across engine and schema tests.

Standard EMI: ₹1,00,000 at 12% reducing, 12 monthly installments from 2025-01-01.
"""

from datetime import date
from decimal import Decimal

import pytest

from loan_engine.engine.calculator import calculate_repayment_schedule
from loan_engine.models.loan import LoanTerms


@pytest.fixture
def standard_emi_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("100000"),
        interest_rate=Decimal("12"),
        interest_type="reducing",
        tenure_value=12,
        tenure_unit="months",
        repayment_type="emi",
        repayment_frequency="monthly",
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def zero_rate_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("120000"),
        interest_rate=Decimal("0"),
        interest_type="reducing",
        tenure_value=12,
        tenure_unit="months",
        repayment_type="emi",
        repayment_frequency="monthly",
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def bullet_fixed_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("50000"),
        interest_rate=Decimal("10"),
        interest_type="fixed",
        tenure_value=1,
        tenure_unit="years",
        repayment_type="full-payment",
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def interest_only_terms() -> LoanTerms:
    return LoanTerms(
        principal=Decimal("100000"),
        interest_rate=Decimal("12"),
        interest_type="fixed",
        tenure_value=12,
        tenure_unit="months",
        repayment_type="interest-only",
        repayment_frequency="monthly",
        start_date=date(2025, 1, 1),
    )


@pytest.fixture
def standard_schedule(standard_emi_terms):
    return calculate_repayment_schedule(standard_emi_terms)


@pytest.fixture
def standard_offer() -> dict:
    """Offer record as stored by the offer service (camelCase, string amounts)."""
    return {
        "id": "offer-123",
        "amount": "100000",
        "interestRate": "12",
        "interestType": "reducing",
        "tenureValue": 12,
        "tenureUnit": "months",
        "repaymentType": "emi",
        "repaymentFrequency": "monthly",
        "startDate": "2025-01-01",
    }

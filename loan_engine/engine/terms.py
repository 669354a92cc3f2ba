"""Tenure and repayment frequency normalization.

Pure functions. No I/O.
"""

from decimal import Decimal, ROUND_CEILING
from enum import Enum
from typing import TypeVar

from loan_engine.exceptions import LoanTermsError
from loan_engine.models.loan import RepaymentFrequency, TenureUnit

E = TypeVar("E", bound=Enum)

# Banking-standard day counts. Approximations, kept as-is so APR is reproducible.
DAYS_PER_MONTH = Decimal("30.44")
DAYS_PER_YEAR = Decimal("365.25")

PAYMENTS_PER_YEAR = {
    RepaymentFrequency.WEEKLY: 52,
    RepaymentFrequency.BI_WEEKLY: 26,
    RepaymentFrequency.MONTHLY: 12,
    RepaymentFrequency.QUARTERLY: 4,
    RepaymentFrequency.SEMI_ANNUAL: 2,
    RepaymentFrequency.YEARLY: 1,
}

# Sub-monthly frequencies are counted in payments per month (4.33 weeks a month)
_PAYMENTS_PER_MONTH = {
    RepaymentFrequency.WEEKLY: Decimal("4.33"),
    RepaymentFrequency.BI_WEEKLY: Decimal("2.17"),
}

_MONTHS_PER_PAYMENT = {
    RepaymentFrequency.MONTHLY: Decimal("1"),
    RepaymentFrequency.QUARTERLY: Decimal("3"),
    RepaymentFrequency.SEMI_ANNUAL: Decimal("6"),
    RepaymentFrequency.YEARLY: Decimal("12"),
}


def coerce_enum(enum_cls: type[E], value: E | str, label: str) -> E:
    """Accept an enum member or its string value; reject anything else."""
    if isinstance(value, enum_cls):
        return value
    try:
        return enum_cls(value)
    except ValueError:
        supported = ", ".join(m.value for m in enum_cls)
        raise LoanTermsError(
            f"Invalid {label}: {value}. Supported values: {supported}."
        ) from None


def months_for(tenure_value: int, tenure_unit: TenureUnit | str) -> int:
    """Tenure in whole months."""
    unit = coerce_enum(TenureUnit, tenure_unit, "tenure unit")
    if unit is TenureUnit.YEARS:
        return tenure_value * 12
    return tenure_value


def days_for(tenure_value: int, tenure_unit: TenureUnit | str) -> Decimal:
    """Tenure in days: 30.44 per month, 365.25 per year (leap years amortized)."""
    unit = coerce_enum(TenureUnit, tenure_unit, "tenure unit")
    if unit is TenureUnit.YEARS:
        return tenure_value * DAYS_PER_YEAR
    return tenure_value * DAYS_PER_MONTH


def payments_per_year(frequency: RepaymentFrequency | str) -> int:
    freq = coerce_enum(RepaymentFrequency, frequency, "repayment frequency")
    return PAYMENTS_PER_YEAR[freq]


def months_per_payment(frequency: RepaymentFrequency | str) -> Decimal:
    """Length of one repayment period in months (weekly is 1/4.33 of a month)."""
    freq = coerce_enum(RepaymentFrequency, frequency, "repayment frequency")
    if freq in _PAYMENTS_PER_MONTH:
        return 1 / _PAYMENTS_PER_MONTH[freq]
    return _MONTHS_PER_PAYMENT[freq]


def payment_count(tenure_months: int, frequency: RepaymentFrequency | str) -> int:
    """Number of installments: ceil(tenure months / months per payment).

    Sub-monthly frequencies multiply by payments per month instead of dividing
    by an inexact 1/4.33, so 100 months weekly is exactly 433 payments.
    """
    freq = coerce_enum(RepaymentFrequency, frequency, "repayment frequency")
    if freq in _PAYMENTS_PER_MONTH:
        periods = tenure_months * _PAYMENTS_PER_MONTH[freq]
    else:
        periods = Decimal(tenure_months) / _MONTHS_PER_PAYMENT[freq]
    return int(periods.to_integral_value(rounding=ROUND_CEILING))

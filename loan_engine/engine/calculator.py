"""Repayment schedule calculation: normalize terms → due dates → schedule → costs.

Pure function of the supplied LoanTerms. No clock, no I/O.
"""

import logging
from dataclasses import replace
from datetime import date, datetime
from decimal import Decimal, InvalidOperation

from loan_engine.engine.costs import (
    amortization_summary,
    annual_percentage_rate,
    effective_annual_rate,
    rbi_compliance,
)
from loan_engine.engine.due_dates import add_tenure, generate_due_dates
from loan_engine.engine.schedule import (
    build_bullet_schedule,
    build_emi_schedule,
    build_interest_only_schedule,
)
from loan_engine.engine.terms import (
    coerce_enum,
    days_for,
    months_for,
    payment_count,
    payments_per_year,
)
from loan_engine.exceptions import LoanTermsError
from loan_engine.models.loan import (
    InterestType,
    LoanTerms,
    RepaymentFrequency,
    RepaymentType,
    TenureUnit,
)
from loan_engine.models.schedule import RepaymentSchedule, ScheduleResult

logger = logging.getLogger(__name__)


AMOUNT_FIELDS = (
    "principal",
    "interest_rate",
    "late_payment_penalty",
    "prepayment_penalty",
    "processing_fee",
    "other_charges",
)


def _as_decimal(name: str, value: object) -> Decimal:
    """Plain ints, floats and numeric strings become Decimal via their text form."""
    label = name.replace("_", " ").capitalize()
    if isinstance(value, Decimal):
        amount = value
    elif isinstance(value, bool) or not isinstance(value, (int, float, str)):
        raise LoanTermsError(f"{label} must be a number, got {value!r}")
    else:
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            raise LoanTermsError(f"{label} must be a number, got {value!r}") from None
    if not amount.is_finite():
        raise LoanTermsError(f"{label} must be a finite number, got {value!r}")
    return amount


def _normalize(terms: LoanTerms) -> LoanTerms:
    """Copy of the terms with every amount as a Decimal; the caller's value is untouched."""
    amounts = {name: _as_decimal(name, getattr(terms, name)) for name in AMOUNT_FIELDS}
    return replace(terms, **amounts)


def _validate(terms: LoanTerms) -> None:
    if terms.principal <= 0:
        raise LoanTermsError("Principal amount must be positive")
    if terms.interest_rate < 0:
        raise LoanTermsError("Interest rate cannot be negative")
    if (
        isinstance(terms.tenure_value, bool)
        or not isinstance(terms.tenure_value, int)
        or terms.tenure_value <= 0
    ):
        raise LoanTermsError("Tenure must be a positive whole number")
    # datetime is a date subclass but carries a time of day; reject it too
    if not isinstance(terms.start_date, date) or isinstance(terms.start_date, datetime):
        raise LoanTermsError("Valid start date is required")
    if terms.grace_period_days < 0:
        raise LoanTermsError("Grace period cannot be negative")
    for name in ("late_payment_penalty", "prepayment_penalty", "processing_fee", "other_charges"):
        if getattr(terms, name) < 0:
            raise LoanTermsError(f"{name.replace('_', ' ').capitalize()} cannot be negative")


def _build(
    terms: LoanTerms,
    repayment_type: RepaymentType,
    interest_type: InterestType,
    tenure_unit: TenureUnit,
    annual_rate: Decimal,
    tenure_days: Decimal,
) -> ScheduleResult:
    tenure_months = months_for(terms.tenure_value, tenure_unit)

    if repayment_type is RepaymentType.FULL_PAYMENT:
        # Frequency is informational for a bullet loan; it only scales the period rate
        frequency = coerce_enum(
            RepaymentFrequency,
            terms.repayment_frequency or RepaymentFrequency.MONTHLY,
            "repayment frequency",
        )
        periodic_rate = annual_rate / payments_per_year(frequency)
        return build_bullet_schedule(
            principal=terms.principal,
            annual_rate=annual_rate,
            interest_type=interest_type,
            start_date=terms.start_date,
            maturity_date=add_tenure(terms.start_date, terms.tenure_value, tenure_unit),
            tenure_days=tenure_days,
            period_rate=periodic_rate * payment_count(tenure_months, frequency),
            grace_period_days=terms.grace_period_days,
            late_payment_penalty=terms.late_payment_penalty,
        )

    if terms.repayment_frequency is None:
        raise LoanTermsError(
            f"Repayment frequency is required for {repayment_type.value} repayment"
        )
    frequency = coerce_enum(RepaymentFrequency, terms.repayment_frequency, "repayment frequency")
    periodic_rate = annual_rate / payments_per_year(frequency)
    due_dates = generate_due_dates(
        terms.start_date, frequency, payment_count(tenure_months, frequency)
    )

    builder = (
        build_emi_schedule if repayment_type is RepaymentType.EMI
        else build_interest_only_schedule
    )
    return builder(
        principal=terms.principal,
        periodic_rate=periodic_rate,
        due_dates=due_dates,
        grace_period_days=terms.grace_period_days,
        late_payment_penalty=terms.late_payment_penalty,
    )


def calculate_repayment_schedule(terms: LoanTerms) -> RepaymentSchedule:
    """Build the full amortization schedule and cost-of-credit disclosures.

    Raises LoanTermsError for any invalid or incomplete terms; there is no
    partial result.
    """
    terms = _normalize(terms)
    _validate(terms)
    repayment_type = coerce_enum(RepaymentType, terms.repayment_type, "repayment type")
    interest_type = coerce_enum(InterestType, terms.interest_type, "interest type")
    tenure_unit = coerce_enum(TenureUnit, terms.tenure_unit, "tenure unit")

    annual_rate = terms.interest_rate / 100
    tenure_days = days_for(terms.tenure_value, tenure_unit)

    result = _build(terms, repayment_type, interest_type, tenure_unit, annual_rate, tenure_days)

    total_charges = terms.total_charges
    total_amount = terms.principal + result.total_interest + total_charges
    number_of_payments = len(result.rows)
    apr = annual_percentage_rate(
        terms.principal,
        result.total_interest,
        terms.processing_fee,
        terms.other_charges,
        tenure_days,
    )

    logger.debug(
        "Calculated %s schedule: %d payments, interest %s, APR %s%%",
        repayment_type.value, number_of_payments, result.total_interest, apr,
    )

    return RepaymentSchedule(
        repayment_type=repayment_type,
        total_amount=total_amount,
        total_interest=result.total_interest,
        emi_amount=result.emi_amount,
        number_of_payments=number_of_payments,
        annual_percentage_rate=apr,
        effective_interest_rate=effective_annual_rate(annual_rate),
        total_cost_of_credit=total_amount,
        processing_fee=terms.processing_fee,
        total_charges=total_charges,
        schedule=result.rows,
        amortization_summary=amortization_summary(
            terms.principal,
            result.total_interest,
            total_charges,
            total_amount,
            number_of_payments,
        ),
        rbi_compliance=rbi_compliance(apr, terms.principal),
    )

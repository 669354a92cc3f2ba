"""Installment due-date generation.

Every date is offset from the start date directly (start + i periods), never
by stepping from the previous due date, so month-end clamping does not drift.
Calendar arithmetic is dateutil's: Jan 31 + 1 month is Feb 28 (or 29).
"""

from datetime import date, timedelta

from dateutil.relativedelta import relativedelta

from loan_engine.engine.terms import coerce_enum
from loan_engine.models.loan import RepaymentFrequency, TenureUnit

_PERIOD = {
    RepaymentFrequency.WEEKLY: relativedelta(days=7),
    RepaymentFrequency.BI_WEEKLY: relativedelta(days=14),
    RepaymentFrequency.MONTHLY: relativedelta(months=1),
    RepaymentFrequency.QUARTERLY: relativedelta(months=3),
    RepaymentFrequency.SEMI_ANNUAL: relativedelta(months=6),
    RepaymentFrequency.YEARLY: relativedelta(years=1),
}


def generate_due_dates(
    start_date: date,
    frequency: RepaymentFrequency | str,
    count: int,
) -> tuple[date, ...]:
    """Due dates for `count` installments. The start date itself is never due."""
    freq = coerce_enum(RepaymentFrequency, frequency, "repayment frequency")
    period = _PERIOD[freq]
    return tuple(start_date + period * i for i in range(1, count + 1))


def add_tenure(start_date: date, tenure_value: int, tenure_unit: TenureUnit | str) -> date:
    """Maturity date: start plus the full tenure in calendar months or years."""
    unit = coerce_enum(TenureUnit, tenure_unit, "tenure unit")
    if unit is TenureUnit.YEARS:
        return start_date + relativedelta(years=tenure_value)
    return start_date + relativedelta(months=tenure_value)


def grace_period_end(due_date: date, grace_period_days: int) -> date | None:
    if grace_period_days <= 0:
        return None
    return due_date + timedelta(days=grace_period_days)

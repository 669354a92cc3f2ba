"""Amortization schedule builders: EMI, interest-only and bullet (full payment).

Pure functions: Decimal in, dataclass out. No I/O.
"""

import logging
from datetime import date
from decimal import Decimal, ROUND_HALF_UP

from loan_engine.engine.due_dates import grace_period_end
from loan_engine.models.loan import InterestType, RepaymentType
from loan_engine.models.schedule import PaymentScheduleItem, ScheduleResult

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
ZERO = Decimal("0")

# No prior due date for the first installment; assume a month
FIRST_PERIOD_DAYS = 30


def _round(value: Decimal) -> Decimal:
    return value.quantize(TWO_PLACES, ROUND_HALF_UP)


def emi_amount(principal: Decimal, periodic_rate: Decimal, n_payments: int) -> Decimal:
    """Level installment, rounded to the paisa.

    EMI = P * r * (1+r)^n / ((1+r)^n - 1); an interest-free loan is P / n.
    """
    if periodic_rate == 0:
        return _round(principal / n_payments)
    factor = (1 + periodic_rate) ** n_payments
    return _round(principal * periodic_rate * factor / (factor - 1))


def late_payment_fee(amount: Decimal, late_payment_penalty: Decimal) -> Decimal:
    """Penalty percent of the installment amount."""
    if not late_payment_penalty:
        return ZERO
    return _round(amount * late_payment_penalty / 100)


def _split_pct(part: Decimal, total: Decimal) -> float:
    if total <= 0:
        return 0.0
    return float(part / total * 100)


def _days_between(due_dates: tuple[date, ...], index: int) -> int:
    if index == 0:
        return FIRST_PERIOD_DAYS
    return (due_dates[index] - due_dates[index - 1]).days


def _row(
    number: int,
    due_date: date,
    principal_amount: Decimal,
    interest_amount: Decimal,
    remaining_balance: Decimal,
    cumulative_principal: Decimal,
    cumulative_interest: Decimal,
    days_between: int,
    period_rate: Decimal,
    grace_period_days: int,
    late_payment_penalty: Decimal,
) -> PaymentScheduleItem:
    total = principal_amount + interest_amount
    return PaymentScheduleItem(
        installment_number=number,
        due_date=due_date,
        principal_amount=principal_amount,
        interest_amount=interest_amount,
        total_amount=total,
        remaining_balance=remaining_balance,
        cumulative_principal=cumulative_principal,
        cumulative_interest=cumulative_interest,
        principal_percentage=_split_pct(principal_amount, total),
        interest_percentage=_split_pct(interest_amount, total),
        days_between_payments=days_between,
        effective_period_rate=period_rate,
        late_payment_fee=late_payment_fee(total, late_payment_penalty),
        grace_period_end_date=grace_period_end(due_date, grace_period_days),
    )


def build_emi_schedule(
    principal: Decimal,
    periodic_rate: Decimal,
    due_dates: tuple[date, ...],
    grace_period_days: int = 0,
    late_payment_penalty: Decimal = ZERO,
) -> ScheduleResult:
    """Reducing-balance schedule with a level EMI.

    Interest accrues on the outstanding balance each period. The last
    installment absorbs any paisa residue left by EMI rounding so the balance
    closes at exactly zero.
    """
    n_payments = len(due_dates)
    emi = emi_amount(principal, periodic_rate, n_payments)

    rows: list[PaymentScheduleItem] = []
    balance = principal
    cumulative_principal = ZERO
    cumulative_interest = ZERO

    for i, due in enumerate(due_dates):
        interest = _round(balance * periodic_rate)
        if i == n_payments - 1:
            principal_paid = balance
        else:
            principal_paid = min(_round(emi - interest), balance)

        balance = max(ZERO, balance - principal_paid)
        cumulative_principal += principal_paid
        cumulative_interest += interest

        rows.append(_row(
            number=i + 1,
            due_date=due,
            principal_amount=principal_paid,
            interest_amount=interest,
            remaining_balance=balance,
            cumulative_principal=cumulative_principal,
            cumulative_interest=cumulative_interest,
            days_between=_days_between(due_dates, i),
            period_rate=periodic_rate,
            grace_period_days=grace_period_days,
            late_payment_penalty=late_payment_penalty,
        ))

    logger.debug("EMI schedule: %d payments of %s, interest %s", n_payments, emi, cumulative_interest)
    return ScheduleResult(
        repayment_type=RepaymentType.EMI,
        rows=tuple(rows),
        total_interest=cumulative_interest,
        emi_amount=emi,
    )


def build_interest_only_schedule(
    principal: Decimal,
    periodic_rate: Decimal,
    due_dates: tuple[date, ...],
    grace_period_days: int = 0,
    late_payment_penalty: Decimal = ZERO,
) -> ScheduleResult:
    """Constant interest every period; the full principal is repaid with the last one."""
    n_payments = len(due_dates)
    interest = _round(principal * periodic_rate)

    rows: list[PaymentScheduleItem] = []
    for i, due in enumerate(due_dates):
        is_last = i == n_payments - 1
        rows.append(_row(
            number=i + 1,
            due_date=due,
            principal_amount=principal if is_last else ZERO,
            interest_amount=interest,
            remaining_balance=ZERO if is_last else principal,
            cumulative_principal=principal if is_last else ZERO,
            cumulative_interest=interest * (i + 1),
            days_between=_days_between(due_dates, i),
            period_rate=periodic_rate,
            grace_period_days=grace_period_days,
            late_payment_penalty=late_payment_penalty,
        ))

    return ScheduleResult(
        repayment_type=RepaymentType.INTEREST_ONLY,
        rows=tuple(rows),
        total_interest=interest * n_payments,
    )


def bullet_interest(
    principal: Decimal,
    annual_rate: Decimal,
    tenure_days: Decimal,
    interest_type: InterestType,
) -> Decimal:
    """Interest over the whole tenure for a single payment at maturity.

    fixed:    simple interest, P * rate * days / 365
    reducing: monthly compounding, P * ((1 + rate/12)^(12 * days/365) - 1)
    """
    years = tenure_days / 365
    if interest_type is InterestType.FIXED:
        return _round(principal * annual_rate * years)
    growth = (1 + annual_rate / 12) ** (12 * years)
    return _round(principal * (growth - 1))


def build_bullet_schedule(
    principal: Decimal,
    annual_rate: Decimal,
    interest_type: InterestType,
    start_date: date,
    maturity_date: date,
    tenure_days: Decimal,
    period_rate: Decimal,
    grace_period_days: int = 0,
    late_payment_penalty: Decimal = ZERO,
) -> ScheduleResult:
    """One terminal installment of principal plus all interest."""
    interest = bullet_interest(principal, annual_rate, tenure_days, interest_type)
    row = _row(
        number=1,
        due_date=maturity_date,
        principal_amount=principal,
        interest_amount=interest,
        remaining_balance=ZERO,
        cumulative_principal=principal,
        cumulative_interest=interest,
        days_between=(maturity_date - start_date).days,
        period_rate=period_rate,
        grace_period_days=grace_period_days,
        late_payment_penalty=late_payment_penalty,
    )
    return ScheduleResult(
        repayment_type=RepaymentType.FULL_PAYMENT,
        rows=(row,),
        total_interest=interest,
    )

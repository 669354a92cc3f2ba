"""Installment progress over an immutable schedule.

Outstanding amounts are re-derived from the schedule rows and the caller's
payment records; rows are never mutated. The caller supplies "today".
"""

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from loan_engine.engine.payments import find_installment
from loan_engine.models.checks import InstallmentProgress
from loan_engine.models.schedule import PaymentScheduleItem


def installment_progress(
    schedule: Sequence[PaymentScheduleItem],
    current_installment: int = 1,
    as_of: date | None = None,
) -> InstallmentProgress:
    """Where a borrower stands when `current_installment` is the next one owed.

    Overdue only when `as_of` is given and falls after that installment's due date.
    Past the last row the loan is completed.
    """
    row = find_installment(schedule, current_installment)
    if row is None:
        return InstallmentProgress(
            current_installment=current_installment,
            total_installments=len(schedule),
            next_due_date=None,
            expected_amount=Decimal("0"),
            is_completed=current_installment > len(schedule),
        )
    return InstallmentProgress(
        current_installment=current_installment,
        total_installments=len(schedule),
        next_due_date=row.due_date,
        expected_amount=row.total_amount,
        is_overdue=as_of is not None and as_of > row.due_date,
    )


def advance_installment(
    schedule: Sequence[PaymentScheduleItem],
    paid_installment: int,
    as_of: date | None = None,
) -> InstallmentProgress:
    """Progress after `paid_installment` has been settled."""
    return installment_progress(schedule, paid_installment + 1, as_of)


def outstanding_balance(
    schedule: Sequence[PaymentScheduleItem],
    paid_installments: Iterable[int],
) -> Decimal:
    """Principal still owed: scheduled principal of every unpaid row."""
    paid = set(paid_installments)
    return sum(
        (row.principal_amount for row in schedule if row.installment_number not in paid),
        Decimal("0"),
    )


def overdue_installments(
    schedule: Sequence[PaymentScheduleItem],
    paid_installments: Iterable[int],
    as_of: date,
) -> list[PaymentScheduleItem]:
    """Unpaid rows whose due date is before `as_of`."""
    paid = set(paid_installments)
    return [
        row for row in schedule
        if row.installment_number not in paid and row.due_date < as_of
    ]

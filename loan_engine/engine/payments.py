"""Incoming payment checks against a generated schedule.

Pure predicates: the caller decides what to do with a mismatch.
"""

import logging
from collections.abc import Iterable, Sequence
from decimal import Decimal

from loan_engine.config import settings
from loan_engine.models.checks import PaymentValidation
from loan_engine.models.schedule import PaymentScheduleItem

logger = logging.getLogger(__name__)


def find_installment(
    schedule: Sequence[PaymentScheduleItem], installment_number: int
) -> PaymentScheduleItem | None:
    return next((row for row in schedule if row.installment_number == installment_number), None)


def validate_payment(
    payment_amount: Decimal,
    installment_number: int,
    schedule: Sequence[PaymentScheduleItem],
) -> PaymentValidation:
    """Compare a payment with the scheduled installment, allowing one paisa of drift."""
    row = find_installment(schedule, installment_number)
    if row is None:
        return PaymentValidation(is_valid=False, message="Invalid installment number")

    expected = row.total_amount
    if abs(payment_amount - expected) <= settings.payment_tolerance:
        return PaymentValidation(is_valid=True, message="Payment amount is correct")

    logger.warning(
        "Payment %s for installment %d does not match expected %s",
        payment_amount, installment_number, expected,
    )
    if payment_amount > expected:
        message = f"Payment amount ₹{payment_amount} exceeds expected amount ₹{expected}"
    else:
        message = f"Payment amount ₹{payment_amount} is less than expected amount ₹{expected}"
    return PaymentValidation(is_valid=False, message=message, expected_amount=expected)


def next_payment_due(
    schedule: Sequence[PaymentScheduleItem],
    paid_installments: Iterable[int],
) -> PaymentScheduleItem | None:
    """First row, in schedule order, that has not been paid yet."""
    paid = set(paid_installments)
    return next((row for row in schedule if row.installment_number not in paid), None)

"""Offer-record entry points for collaborators that hold raw JSON.

Parse the stored offer, run the engine, and hand back camelCase responses.
Persistence stays with the caller.
"""

import logging
from collections.abc import Iterable
from datetime import date
from typing import Any

from loan_engine.api.schemas import (
    OfferTermsRequest,
    PaymentCheckRequest,
    PaymentScheduleItemResponse,
    PaymentValidationResponse,
    RepaymentScheduleResponse,
)
from loan_engine.engine.calculator import calculate_repayment_schedule
from loan_engine.engine.payments import next_payment_due, validate_payment
from loan_engine.engine.tracking import installment_progress
from loan_engine.models.checks import InstallmentProgress
from loan_engine.models.schedule import RepaymentSchedule

logger = logging.getLogger(__name__)


def schedule_for_offer(offer: dict[str, Any]) -> RepaymentSchedule:
    """Validate an offer record and calculate its repayment schedule."""
    terms = OfferTermsRequest.model_validate(offer).to_loan_terms()
    result = calculate_repayment_schedule(terms)
    logger.info(
        "Repayment schedule for offer %s: %d payments, first due %s",
        offer.get("id", "<unsaved>"), result.number_of_payments, result.schedule[0].due_date,
    )
    return result


def offer_schedule_response(offer: dict[str, Any]) -> RepaymentScheduleResponse:
    return RepaymentScheduleResponse.from_schedule(schedule_for_offer(offer))


def check_offer_payment(
    offer: dict[str, Any], payment: dict[str, Any]
) -> PaymentValidationResponse:
    """Validate an incoming payment against the offer's schedule."""
    req = PaymentCheckRequest.model_validate(payment)
    result = schedule_for_offer(offer)
    validation = validate_payment(req.payment_amount, req.installment_number, result.schedule)
    return PaymentValidationResponse.from_validation(validation)


def next_due_for_offer(
    offer: dict[str, Any], paid_installments: Iterable[int]
) -> PaymentScheduleItemResponse | None:
    row = next_payment_due(schedule_for_offer(offer).schedule, paid_installments)
    if row is None:
        return None
    return PaymentScheduleItemResponse.from_item(row)


def offer_progress(
    offer: dict[str, Any],
    current_installment: int = 1,
    as_of: date | None = None,
) -> InstallmentProgress:
    """Current installment, next due date and overdue flag for an accepted offer."""
    return installment_progress(schedule_for_offer(offer).schedule, current_installment, as_of)

"""Pydantic schemas for the offer-record boundary.

Collaborators (offer store, PDF renderer, payment tracker) speak camelCase
JSON; the engine works on frozen dataclasses. These models translate between
the two and carry no calculation logic.
"""

from datetime import date, datetime
from decimal import Decimal
from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic.alias_generators import to_camel

from loan_engine.models.checks import PaymentValidation
from loan_engine.models.loan import (
    InterestType,
    LoanTerms,
    RepaymentFrequency,
    RepaymentType,
    TenureUnit,
)
from loan_engine.models.schedule import PaymentScheduleItem, RepaymentSchedule


class CamelModel(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    def to_payload(self) -> dict[str, Any]:
        """JSON-ready camelCase dict; unset optional fields are omitted."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


# ---- Request schemas ----

class OfferTermsRequest(CamelModel):
    """Loan terms as stored on an accepted offer record."""
    amount: Decimal = Field(..., gt=0, description="Principal in rupees")
    interest_rate: Decimal = Field(..., ge=0, description="Annual rate in percent")
    interest_type: InterestType
    tenure_value: int = Field(..., gt=0)
    tenure_unit: TenureUnit
    repayment_type: RepaymentType
    repayment_frequency: RepaymentFrequency | None = None
    start_date: date

    grace_period_days: int = Field(0, ge=0)
    prepayment_penalty: Decimal = Field(Decimal("0"), ge=0)
    late_payment_penalty: Decimal = Field(Decimal("0"), ge=0)
    processing_fee: Decimal = Field(Decimal("0"), ge=0)
    other_charges: Decimal = Field(Decimal("0"), ge=0)

    @field_validator("repayment_type", mode="before")
    @classmethod
    def normalize_repayment_type(cls, v: Any) -> Any:
        # Older offer records store "interest_only" / "full_payment"
        if isinstance(v, str):
            return v.strip().lower().replace("_", "-")
        return v

    @field_validator("repayment_frequency", mode="before")
    @classmethod
    def blank_frequency_is_none(cls, v: Any) -> Any:
        if v == "":
            return None
        return v

    @field_validator("start_date", mode="before")
    @classmethod
    def datetime_to_date(cls, v: Any) -> Any:
        if isinstance(v, datetime):
            return v.date()
        if isinstance(v, str) and "T" in v:
            return datetime.fromisoformat(v.replace("Z", "+00:00")).date()
        return v

    def to_loan_terms(self) -> LoanTerms:
        return LoanTerms(
            principal=self.amount,
            interest_rate=self.interest_rate,
            interest_type=self.interest_type,
            tenure_value=self.tenure_value,
            tenure_unit=self.tenure_unit,
            repayment_type=self.repayment_type,
            repayment_frequency=self.repayment_frequency,
            start_date=self.start_date,
            grace_period_days=self.grace_period_days,
            prepayment_penalty=self.prepayment_penalty,
            late_payment_penalty=self.late_payment_penalty,
            processing_fee=self.processing_fee,
            other_charges=self.other_charges,
        )


class PaymentCheckRequest(CamelModel):
    payment_amount: Decimal = Field(..., gt=0)
    installment_number: int = Field(..., ge=1)


# ---- Response schemas ----

class PaymentScheduleItemResponse(CamelModel):
    installment_number: int
    due_date: date
    principal_amount: Decimal
    interest_amount: Decimal
    total_amount: Decimal
    remaining_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal
    principal_percentage: float
    interest_percentage: float
    grace_period_end_date: date | None = None
    late_payment_fee: Decimal
    days_between_payments: int
    effective_period_rate: Decimal

    @classmethod
    def from_item(cls, item: PaymentScheduleItem) -> "PaymentScheduleItemResponse":
        return cls(
            installment_number=item.installment_number,
            due_date=item.due_date,
            principal_amount=item.principal_amount,
            interest_amount=item.interest_amount,
            total_amount=item.total_amount,
            remaining_balance=item.remaining_balance,
            cumulative_principal=item.cumulative_principal,
            cumulative_interest=item.cumulative_interest,
            principal_percentage=item.principal_percentage,
            interest_percentage=item.interest_percentage,
            grace_period_end_date=item.grace_period_end_date,
            late_payment_fee=item.late_payment_fee,
            days_between_payments=item.days_between_payments,
            effective_period_rate=item.effective_period_rate,
        )


class AmortizationSummaryResponse(CamelModel):
    total_principal: Decimal
    total_interest: Decimal
    total_charges: Decimal
    average_payment: Decimal
    principal_to_interest_ratio: Decimal


class RbiComplianceResponse(CamelModel):
    is_compliant: bool
    fair_practices_code: bool
    transparent_pricing: bool


class RepaymentScheduleResponse(CamelModel):
    total_amount: Decimal
    total_interest: Decimal
    emi_amount: Decimal | None = None  # Absent for interest-only and bullet loans
    number_of_payments: int
    annual_percentage_rate: Decimal
    effective_interest_rate: Decimal
    total_cost_of_credit: Decimal
    processing_fee: Decimal
    total_charges: Decimal
    schedule: list[PaymentScheduleItemResponse]
    amortization_summary: AmortizationSummaryResponse
    rbi_compliance: RbiComplianceResponse

    @classmethod
    def from_schedule(cls, result: RepaymentSchedule) -> "RepaymentScheduleResponse":
        summary = result.amortization_summary
        compliance = result.rbi_compliance
        return cls(
            total_amount=result.total_amount,
            total_interest=result.total_interest,
            emi_amount=result.emi_amount if result.is_emi else None,
            number_of_payments=result.number_of_payments,
            annual_percentage_rate=result.annual_percentage_rate,
            effective_interest_rate=result.effective_interest_rate,
            total_cost_of_credit=result.total_cost_of_credit,
            processing_fee=result.processing_fee,
            total_charges=result.total_charges,
            schedule=[PaymentScheduleItemResponse.from_item(row) for row in result.schedule],
            amortization_summary=AmortizationSummaryResponse(
                total_principal=summary.total_principal,
                total_interest=summary.total_interest,
                total_charges=summary.total_charges,
                average_payment=summary.average_payment,
                principal_to_interest_ratio=summary.principal_to_interest_ratio,
            ),
            rbi_compliance=RbiComplianceResponse(
                is_compliant=compliance.is_compliant,
                fair_practices_code=compliance.fair_practices_code,
                transparent_pricing=compliance.transparent_pricing,
            ),
        )


class PaymentValidationResponse(CamelModel):
    is_valid: bool
    message: str
    expected_amount: Decimal | None = None

    @classmethod
    def from_validation(cls, validation: PaymentValidation) -> "PaymentValidationResponse":
        return cls(
            is_valid=validation.is_valid,
            message=validation.message,
            expected_amount=validation.expected_amount,
        )

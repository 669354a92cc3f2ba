from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from loan_engine.exceptions import LoanTermsError
from loan_engine.models.loan import RepaymentType


@dataclass(frozen=True)
class PaymentScheduleItem:
    installment_number: int  # 1-based, contiguous
    due_date: date
    principal_amount: Decimal
    interest_amount: Decimal
    total_amount: Decimal  # principal + interest
    remaining_balance: Decimal
    cumulative_principal: Decimal
    cumulative_interest: Decimal
    principal_percentage: float
    interest_percentage: float
    days_between_payments: int
    effective_period_rate: Decimal
    late_payment_fee: Decimal = Decimal("0")
    grace_period_end_date: date | None = None  # Only when a grace period applies


@dataclass(frozen=True)
class ScheduleResult:
    """Output of a single schedule builder, before cost aggregation."""
    repayment_type: RepaymentType
    rows: tuple[PaymentScheduleItem, ...]
    total_interest: Decimal
    emi_amount: Decimal | None = None  # EMI builder only


@dataclass(frozen=True)
class AmortizationSummary:
    total_principal: Decimal
    total_interest: Decimal
    total_charges: Decimal
    average_payment: Decimal
    # principal / interest, or the principal itself for interest-free loans
    principal_to_interest_ratio: Decimal


@dataclass(frozen=True)
class RbiCompliance:
    is_compliant: bool
    # Static policy flags, not derived from the loan
    fair_practices_code: bool = True
    transparent_pricing: bool = True


@dataclass(frozen=True)
class RepaymentSchedule:
    repayment_type: RepaymentType
    total_amount: Decimal  # principal + interest + charges
    total_interest: Decimal
    number_of_payments: int
    annual_percentage_rate: Decimal
    effective_interest_rate: Decimal
    total_cost_of_credit: Decimal
    processing_fee: Decimal
    total_charges: Decimal
    schedule: tuple[PaymentScheduleItem, ...]
    amortization_summary: AmortizationSummary
    rbi_compliance: RbiCompliance
    emi_amount: Decimal | None = None  # Set only for EMI schedules

    @property
    def is_emi(self) -> bool:
        return self.repayment_type is RepaymentType.EMI

    def require_emi_amount(self) -> Decimal:
        """EMI for an EMI schedule; raises for interest-only and bullet schedules."""
        if not self.is_emi or self.emi_amount is None:
            raise LoanTermsError(
                f"No EMI amount on a {self.repayment_type.value} schedule"
            )
        return self.emi_amount

    @property
    def final_due_date(self) -> date:
        return self.schedule[-1].due_date

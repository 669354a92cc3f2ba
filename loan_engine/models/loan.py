from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum


class InterestType(Enum):
    FIXED = "fixed"
    REDUCING = "reducing"


class TenureUnit(Enum):
    MONTHS = "months"
    YEARS = "years"


class RepaymentType(Enum):
    EMI = "emi"
    INTEREST_ONLY = "interest-only"
    FULL_PAYMENT = "full-payment"  # Bullet at maturity


class RepaymentFrequency(Enum):
    WEEKLY = "weekly"
    BI_WEEKLY = "bi_weekly"
    MONTHLY = "monthly"
    QUARTERLY = "quarterly"
    SEMI_ANNUAL = "semi_annual"
    YEARLY = "yearly"


@dataclass(frozen=True)
class LoanTerms:
    """Agreed terms of a P2P loan offer.

    Enum fields also accept their string values ("emi", "bi_weekly", ...);
    unknown strings are rejected when the schedule is calculated.
    """
    principal: Decimal
    interest_rate: Decimal  # Annual percent, e.g. Decimal("12") for 12%
    interest_type: InterestType | str
    tenure_value: int
    tenure_unit: TenureUnit | str
    repayment_type: RepaymentType | str
    start_date: date
    # Required for EMI and interest-only; ignored for full-payment
    repayment_frequency: RepaymentFrequency | str | None = None
    grace_period_days: int = 0
    prepayment_penalty: Decimal = Decimal("0")  # Percent; carried for disclosure only
    late_payment_penalty: Decimal = Decimal("0")  # Percent of the installment
    processing_fee: Decimal = Decimal("0")
    other_charges: Decimal = Decimal("0")

    @property
    def total_charges(self) -> Decimal:
        return self.processing_fee + self.other_charges

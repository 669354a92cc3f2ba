from dataclasses import dataclass
from datetime import date
from decimal import Decimal


@dataclass(frozen=True)
class PaymentValidation:
    is_valid: bool
    message: str
    expected_amount: Decimal | None = None  # Reported only for mismatched amounts


@dataclass(frozen=True)
class InstallmentProgress:
    current_installment: int
    total_installments: int
    next_due_date: date | None
    expected_amount: Decimal
    is_overdue: bool = False
    is_completed: bool = False


@dataclass(frozen=True)
class ComplianceResult:
    violations: tuple[str, ...] = ()
    warnings: tuple[str, ...] = ()

    @property
    def is_compliant(self) -> bool:
        return not self.violations

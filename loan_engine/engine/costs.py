"""Cost-of-credit disclosures: APR, effective annual rate, RBI verdict.

Pure functions: Decimal in, Decimal out. No I/O.

The APR annualizes total cost on a simple day-count basis while the effective
rate always assumes monthly compounding, whatever the repayment frequency.
The two are reported side by side and are not expected to reconcile.
"""

import logging
from decimal import Decimal, ROUND_HALF_UP

from loan_engine.config import settings
from loan_engine.models.schedule import AmortizationSummary, RbiCompliance

logger = logging.getLogger(__name__)

TWO_PLACES = Decimal("0.01")
FOUR_PLACES = Decimal("0.0001")

COMPOUNDING_PER_YEAR = 12


def annual_percentage_rate(
    principal: Decimal,
    total_interest: Decimal,
    processing_fee: Decimal,
    other_charges: Decimal,
    tenure_days: Decimal,
) -> Decimal:
    """RBI APR = ((interest + fees + charges) / principal) / tenure days * 365 * 100."""
    total_cost = total_interest + processing_fee + other_charges
    apr = total_cost / principal / tenure_days * 365 * 100
    return apr.quantize(TWO_PLACES, ROUND_HALF_UP)


def effective_annual_rate(annual_rate: Decimal) -> Decimal:
    """EAR = (1 + r/12)^12 - 1, as a percentage."""
    ear = (1 + annual_rate / COMPOUNDING_PER_YEAR) ** COMPOUNDING_PER_YEAR - 1
    return (ear * 100).quantize(TWO_PLACES, ROUND_HALF_UP)


def rbi_compliance(apr: Decimal, principal: Decimal) -> RbiCompliance:
    """APR within the cap and principal within the unsecured lending limit."""
    is_compliant = apr <= settings.max_apr_percent and principal <= settings.max_principal
    if not is_compliant:
        logger.warning(
            "Loan outside RBI limits: APR %s%% (cap %s%%), principal %s (cap %s)",
            apr, settings.max_apr_percent, principal, settings.max_principal,
        )
    return RbiCompliance(is_compliant=is_compliant)


def amortization_summary(
    principal: Decimal,
    total_interest: Decimal,
    total_charges: Decimal,
    total_amount: Decimal,
    number_of_payments: int,
) -> AmortizationSummary:
    if total_interest > 0:
        ratio = (principal / total_interest).quantize(FOUR_PLACES, ROUND_HALF_UP)
    else:
        # Interest-free: no meaningful ratio, report the principal
        ratio = principal
    return AmortizationSummary(
        total_principal=principal,
        total_interest=total_interest,
        total_charges=total_charges,
        average_payment=(total_amount / number_of_payments).quantize(TWO_PLACES, ROUND_HALF_UP),
        principal_to_interest_ratio=ratio,
    )

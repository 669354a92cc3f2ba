"""Regulatory limit checks on offer terms, before a schedule is generated.

Pure functions. No I/O.
"""

import logging

from loan_engine.config import settings
from loan_engine.models.checks import ComplianceResult
from loan_engine.models.loan import LoanTerms

logger = logging.getLogger(__name__)


def check_loan_amount(terms: LoanTerms) -> ComplianceResult:
    """Unsecured personal loan limits (₹1 to ₹10,00,000)."""
    violations: list[str] = []
    warnings: list[str] = []

    if terms.principal > settings.max_principal:
        violations.append(f"Loan amount exceeds ₹{settings.max_principal:,} maximum limit")
    if terms.principal < settings.min_principal:
        violations.append(f"Loan amount must be at least ₹{settings.min_principal}")
    if terms.principal > settings.large_loan_warning:
        warnings.append("Large loan amounts require additional documentation")

    return ComplianceResult(violations=tuple(violations), warnings=tuple(warnings))


def check_interest_rate(terms: LoanTerms) -> ComplianceResult:
    """Usury ceiling on the annual rate, with a disclosure warning for high rates."""
    violations: list[str] = []
    warnings: list[str] = []

    if terms.interest_rate > settings.max_interest_rate:
        violations.append(f"Interest rate exceeds {settings.max_interest_rate}% annual maximum")
    if terms.interest_rate < 0:
        violations.append("Interest rate cannot be negative")
    if terms.interest_rate > settings.high_rate_warning:
        warnings.append("High interest rate may require additional disclosures")

    return ComplianceResult(violations=tuple(violations), warnings=tuple(warnings))


def check_offer_terms(terms: LoanTerms) -> ComplianceResult:
    """Run every offer rule and merge the findings."""
    violations: list[str] = []
    warnings: list[str] = []
    for check in (check_loan_amount, check_interest_rate):
        result = check(terms)
        violations.extend(result.violations)
        warnings.extend(result.warnings)

    if violations:
        logger.info("Offer terms failed compliance: %s", "; ".join(violations))
    return ComplianceResult(violations=tuple(violations), warnings=tuple(warnings))

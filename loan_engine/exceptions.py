"""Exceptions raised by the loan engine."""


class LoanTermsError(ValueError):
    """Raised when loan terms are missing, malformed, or out of range.

    Always a caller bug or unvalidated upstream data; never retried internally.
    """

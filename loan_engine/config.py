from decimal import Decimal

from pydantic_settings import BaseSettings


class Settings(BaseSettings):
    model_config = {"env_file": ".env", "env_file_encoding": "utf-8", "env_prefix": "LOAN_ENGINE_"}

    # RBI disclosure verdict
    max_apr_percent: Decimal = Decimal("50")
    max_principal: Decimal = Decimal("1000000")  # ₹10L unsecured limit

    # Offer rule checks
    min_principal: Decimal = Decimal("1")
    large_loan_warning: Decimal = Decimal("500000")
    max_interest_rate: Decimal = Decimal("50")
    high_rate_warning: Decimal = Decimal("36")

    # One paisa of rounding drift is accepted on incoming payments
    payment_tolerance: Decimal = Decimal("0.01")


settings = Settings()

from datetime import date
from decimal import Decimal

from loan_engine.engine.due_dates import generate_due_dates
from loan_engine.engine.schedule import (
    build_bullet_schedule,
    build_emi_schedule,
    build_interest_only_schedule,
    bullet_interest,
    emi_amount,
    late_payment_fee,
)
from loan_engine.models.loan import InterestType, RepaymentType

MONTHLY_2025 = generate_due_dates(date(2025, 1, 1), "monthly", 12)


class TestEmiAmount:
    def test_standard(self):
        """₹1L at 1% a month for 12 months."""
        assert emi_amount(Decimal("100000"), Decimal("0.01"), 12) == Decimal("8884.88")

    def test_zero_rate_is_equal_principal(self):
        assert emi_amount(Decimal("120000"), Decimal("0"), 12) == Decimal("10000.00")

    def test_rounded_to_paisa(self):
        emi = emi_amount(Decimal("75000"), Decimal("0.015"), 18)
        assert emi == emi.quantize(Decimal("0.01"))


class TestLatePaymentFee:
    def test_percent_of_installment(self):
        # 2% of 8884.88 = 177.6976
        assert late_payment_fee(Decimal("8884.88"), Decimal("2")) == Decimal("177.70")

    def test_no_penalty(self):
        assert late_payment_fee(Decimal("8884.88"), Decimal("0")) == Decimal("0")


class TestEmiSchedule:
    def test_first_rows(self):
        result = build_emi_schedule(Decimal("100000"), Decimal("0.01"), MONTHLY_2025)
        first, second = result.rows[0], result.rows[1]
        assert first.interest_amount == Decimal("1000.00")
        assert first.principal_amount == Decimal("7884.88")
        assert first.remaining_balance == Decimal("92115.12")
        # 92115.12 * 1% = 921.1512
        assert second.interest_amount == Decimal("921.15")
        assert second.principal_amount == Decimal("7963.73")

    def test_closes_at_zero(self):
        result = build_emi_schedule(Decimal("100000"), Decimal("0.01"), MONTHLY_2025)
        assert result.rows[-1].remaining_balance == Decimal("0")
        assert sum(r.principal_amount for r in result.rows) == Decimal("100000")

    def test_total_interest_is_row_sum(self):
        result = build_emi_schedule(Decimal("100000"), Decimal("0.01"), MONTHLY_2025)
        assert result.total_interest == sum(r.interest_amount for r in result.rows)
        assert result.rows[-1].cumulative_interest == result.total_interest
        assert result.emi_amount == Decimal("8884.88")
        assert result.repayment_type is RepaymentType.EMI

    def test_days_between_payments(self):
        result = build_emi_schedule(Decimal("100000"), Decimal("0.01"), MONTHLY_2025)
        assert result.rows[0].days_between_payments == 30  # No prior due date
        assert result.rows[1].days_between_payments == 28  # Feb 1 -> Mar 1
        assert result.rows[2].days_between_payments == 31  # Mar 1 -> Apr 1

    def test_residue_swept_into_last_row(self):
        """EMI rounded down must not leave paise outstanding."""
        dates = generate_due_dates(date(2025, 1, 1), "monthly", 7)
        result = build_emi_schedule(Decimal("10000"), Decimal("0"), dates)
        # 10000 / 7 = 1428.571... -> 1428.57, short 0.01 over six rows
        assert result.emi_amount == Decimal("1428.57")
        assert result.rows[-1].principal_amount == Decimal("1428.58")
        assert result.rows[-1].remaining_balance == Decimal("0")

    def test_grace_and_late_fee_attached(self):
        result = build_emi_schedule(
            Decimal("100000"), Decimal("0.01"), MONTHLY_2025,
            grace_period_days=5, late_payment_penalty=Decimal("2"),
        )
        first = result.rows[0]
        assert first.grace_period_end_date == date(2025, 2, 6)
        assert first.late_payment_fee == Decimal("177.70")

    def test_no_grace_period(self):
        result = build_emi_schedule(Decimal("100000"), Decimal("0.01"), MONTHLY_2025)
        assert all(r.grace_period_end_date is None for r in result.rows)
        assert all(r.late_payment_fee == 0 for r in result.rows)


class TestInterestOnlySchedule:
    def test_constant_interest_then_principal(self):
        result = build_interest_only_schedule(Decimal("100000"), Decimal("0.01"), MONTHLY_2025)
        assert all(r.interest_amount == Decimal("1000.00") for r in result.rows)
        assert all(r.principal_amount == 0 for r in result.rows[:-1])
        assert result.rows[-1].principal_amount == Decimal("100000")
        assert result.rows[-1].total_amount == Decimal("101000.00")
        assert result.total_interest == Decimal("12000.00")
        assert result.emi_amount is None

    def test_balance_held_until_maturity(self):
        result = build_interest_only_schedule(Decimal("100000"), Decimal("0.01"), MONTHLY_2025)
        assert all(r.remaining_balance == Decimal("100000") for r in result.rows[:-1])
        assert result.rows[-1].remaining_balance == 0
        assert result.rows[2].cumulative_interest == Decimal("3000.00")

    def test_interest_percentage(self):
        result = build_interest_only_schedule(Decimal("100000"), Decimal("0.01"), MONTHLY_2025)
        assert result.rows[0].interest_percentage == 100.0
        assert result.rows[0].principal_percentage == 0.0

    def test_zero_rate_rows_are_zero_percent(self):
        result = build_interest_only_schedule(Decimal("100000"), Decimal("0"), MONTHLY_2025)
        first = result.rows[0]
        assert first.total_amount == 0
        assert first.principal_percentage == 0.0
        assert first.interest_percentage == 0.0


class TestBulletSchedule:
    def test_fixed_is_simple_interest(self):
        # 50000 * 10% * 365.25/365
        interest = bullet_interest(
            Decimal("50000"), Decimal("0.10"), Decimal("365.25"), InterestType.FIXED
        )
        assert interest == Decimal("5003.42")

    def test_reducing_compounds_monthly(self):
        interest = bullet_interest(
            Decimal("50000"), Decimal("0.10"), Decimal("365.25"), InterestType.REDUCING
        )
        assert Decimal("5230") < interest < Decimal("5250")

    def test_single_row_at_maturity(self):
        result = build_bullet_schedule(
            principal=Decimal("50000"),
            annual_rate=Decimal("0.10"),
            interest_type=InterestType.FIXED,
            start_date=date(2025, 1, 1),
            maturity_date=date(2026, 1, 1),
            tenure_days=Decimal("365.25"),
            period_rate=Decimal("0.10"),
        )
        assert len(result.rows) == 1
        row = result.rows[0]
        assert row.installment_number == 1
        assert row.due_date == date(2026, 1, 1)
        assert row.total_amount == Decimal("55003.42")
        assert row.remaining_balance == 0
        assert row.days_between_payments == 365
        assert result.repayment_type is RepaymentType.FULL_PAYMENT

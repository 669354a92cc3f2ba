from datetime import date
from decimal import Decimal

import pytest
from pydantic import ValidationError

from loan_engine.api.schemas import OfferTermsRequest, RepaymentScheduleResponse
from loan_engine.engine.calculator import calculate_repayment_schedule
from loan_engine.models.loan import RepaymentFrequency, RepaymentType, TenureUnit


class TestOfferTermsRequest:
    def test_parses_offer_record(self, standard_offer):
        terms = OfferTermsRequest.model_validate(standard_offer).to_loan_terms()
        assert terms.principal == Decimal("100000")
        assert terms.interest_rate == Decimal("12")
        assert terms.tenure_unit is TenureUnit.MONTHS
        assert terms.repayment_type is RepaymentType.EMI
        assert terms.repayment_frequency is RepaymentFrequency.MONTHLY
        assert terms.start_date == date(2025, 1, 1)
        assert terms.processing_fee == 0

    @pytest.mark.parametrize("raw,expected", [
        ("interest_only", RepaymentType.INTEREST_ONLY),
        ("full_payment", RepaymentType.FULL_PAYMENT),
        ("full-payment", RepaymentType.FULL_PAYMENT),
        ("EMI", RepaymentType.EMI),
    ])
    def test_repayment_type_spellings(self, standard_offer, raw, expected):
        req = OfferTermsRequest.model_validate({**standard_offer, "repaymentType": raw})
        assert req.repayment_type is expected

    def test_iso_timestamp_start_date(self, standard_offer):
        req = OfferTermsRequest.model_validate(
            {**standard_offer, "startDate": "2025-03-15T00:00:00.000Z"}
        )
        assert req.start_date == date(2025, 3, 15)

    def test_blank_frequency(self, standard_offer):
        req = OfferTermsRequest.model_validate({**standard_offer, "repaymentFrequency": ""})
        assert req.repayment_frequency is None

    def test_snake_case_accepted(self):
        req = OfferTermsRequest(
            amount=Decimal("5000"),
            interest_rate=Decimal("10"),
            interest_type="fixed",
            tenure_value=6,
            tenure_unit="months",
            repayment_type="full-payment",
            start_date=date(2025, 1, 1),
        )
        assert req.amount == Decimal("5000")

    @pytest.mark.parametrize("field,value", [
        ("amount", "0"),
        ("interestRate", "-1"),
        ("tenureValue", 0),
        ("tenureUnit", "days"),
        ("repaymentFrequency", "daily"),
    ])
    def test_rejects_bad_fields(self, standard_offer, field, value):
        with pytest.raises(ValidationError):
            OfferTermsRequest.model_validate({**standard_offer, field: value})

    def test_interest_type_required(self, standard_offer):
        offer = {k: v for k, v in standard_offer.items() if k != "interestType"}
        with pytest.raises(ValidationError, match="interestType"):
            OfferTermsRequest.model_validate(offer)


class TestRepaymentScheduleResponse:
    def test_emi_payload(self, standard_schedule):
        payload = RepaymentScheduleResponse.from_schedule(standard_schedule).to_payload()
        assert payload["emiAmount"] == "8884.88"
        assert payload["numberOfPayments"] == 12
        assert payload["rbiCompliance"] == {
            "isCompliant": True,
            "fairPracticesCode": True,
            "transparentPricing": True,
        }
        first = payload["schedule"][0]
        assert first["installmentNumber"] == 1
        assert first["dueDate"] == "2025-02-01"
        assert first["daysBetweenPayments"] == 30
        assert "gracePeriodEndDate" not in first

    def test_bullet_omits_emi(self, bullet_fixed_terms):
        result = calculate_repayment_schedule(bullet_fixed_terms)
        payload = RepaymentScheduleResponse.from_schedule(result).to_payload()
        assert "emiAmount" not in payload
        assert len(payload["schedule"]) == 1
        assert "principalToInterestRatio" in payload["amortizationSummary"]

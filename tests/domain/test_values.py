"""Tests for domain value types."""

from decimal import Decimal

import pytest

from admission_kernel.domain.values import (
    AdmissionStatus,
    ChargeField,
    DiscountKind,
    DiscountSpec,
    coerce_amount,
)
from admission_kernel.exceptions import (
    UnknownChargeFieldError,
    UnknownDiscountKindError,
    UnknownStatusError,
)


class TestCoerceAmount:

    def test_sign_preserved(self):
        assert coerce_amount("-12.5") == Decimal("-12.5")

    def test_float_goes_through_str(self):
        assert coerce_amount(0.1) == Decimal("0.1")

    def test_thousands_separator(self):
        assert coerce_amount("1,000") == Decimal("1000")

    @pytest.mark.parametrize("raw, expected", [
        ("1.005", "1.01"),
        ("12.345", "12.35"),
        ("0.004", "0.00"),
        ("-2.675", "-2.68"),
    ])
    def test_rounded_half_up_to_cents(self, raw, expected):
        assert coerce_amount(raw) == Decimal(expected)

    def test_always_two_places(self):
        assert coerce_amount(7).as_tuple().exponent == -2
        assert coerce_amount("3.1").as_tuple().exponent == -2

    def test_no_negative_zero(self):
        assert str(coerce_amount("-0.004")) == "0.00"

    def test_too_large_for_cents_becomes_zero(self):
        assert coerce_amount("1e40") == Decimal("0")


class TestAdmissionStatus:

    def test_labels(self):
        assert [s.value for s in AdmissionStatus] == [
            "Admitted", "Under Treatment", "Awaiting Discharge", "Discharged", "Canceled",
        ]

    @pytest.mark.parametrize("raw", ["Under Treatment", "UNDER_TREATMENT", "under treatment"])
    def test_parse(self, raw):
        assert AdmissionStatus.parse(raw) is AdmissionStatus.UNDER_TREATMENT

    def test_parse_unknown(self):
        with pytest.raises(UnknownStatusError) as exc_info:
            AdmissionStatus.parse("Transferred")
        assert exc_info.value.status == "Transferred"


class TestChargeField:

    def test_ten_fields(self):
        assert len(ChargeField) == 10

    @pytest.mark.parametrize("raw, expected", [
        ("assistantDoctorFee", ChargeField.ASSISTANT_DOCTOR_FEE),
        ("seatRent", ChargeField.SEAT_RENT),
        ("ot_charge", ChargeField.OT_CHARGE),
    ])
    def test_parse_form_names(self, raw, expected):
        assert ChargeField.parse(raw) is expected

    def test_parse_unknown(self):
        with pytest.raises(UnknownChargeFieldError):
            ChargeField.parse("parkingFee")


class TestDiscountKind:

    @pytest.mark.parametrize("raw, expected", [
        (None, DiscountKind.NONE),
        ("", DiscountKind.NONE),
        ("none", DiscountKind.NONE),
        ("Percentage", DiscountKind.PERCENTAGE),
        ("fixed", DiscountKind.FIXED),
        ("value", DiscountKind.FIXED),
    ])
    def test_parse(self, raw, expected):
        assert DiscountKind.parse(raw) is expected

    def test_parse_unknown(self):
        with pytest.raises(UnknownDiscountKindError):
            DiscountKind.parse("voucher")


class TestDiscountSpec:

    def test_default_is_none(self):
        spec = DiscountSpec()
        assert spec.kind is DiscountKind.NONE
        assert spec.value is None
        assert not spec.is_active

    def test_constructors_coerce(self):
        assert DiscountSpec.percentage("10").value == Decimal("10")
        assert DiscountSpec.fixed("").value is None

    def test_zero_value_inactive(self):
        assert not DiscountSpec.fixed(0).is_active

    def test_with_kind_keeps_value(self):
        assert DiscountSpec.fixed(25).with_kind(DiscountKind.PERCENTAGE).value == Decimal("25")

    def test_immutable(self):
        spec = DiscountSpec.fixed(5)
        with pytest.raises(AttributeError):
            spec.value = Decimal("6")

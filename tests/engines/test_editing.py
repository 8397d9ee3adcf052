"""
Tests for admission editing and the single-owner editing session.

The billing scenarios use fee 300 and service charge 500 with every other
field left at 0.
"""

from decimal import Decimal

import pytest

from admission_engines.editing import AdmissionSession, open_admission
from admission_kernel.domain.values import AdmissionStatus, DiscountKind


class TestOpenAdmission:

    def test_initial_state(self, new_admission, deterministic_clock):
        assert new_admission.status is AdmissionStatus.ADMITTED
        assert new_admission.date_admitted == deterministic_clock.now()
        assert new_admission.date_discharged is None
        assert new_admission.charges.admission_fee == Decimal("300")
        assert new_admission.discount.kind is DiscountKind.NONE
        assert new_admission.paid_amount == Decimal("0")
        assert new_admission.total_amount == Decimal("300")
        assert new_admission.due_amount == Decimal("300")

    def test_carries_intake_references(self, new_admission):
        assert new_admission.patient_id == 42
        assert new_admission.department_id == 3
        assert new_admission.doctor_id == 7
        assert new_admission.admission_number == "ADM-20240315-0001"

    def test_opening_logged(self, valid_intake, deterministic_clock, captured_logs):
        open_admission(valid_intake, admission_fee=Decimal("300"), clock=deterministic_clock)
        opened = [r for r in captured_logs() if r["message"] == "admission_opened"]
        assert opened[0]["admission_fee"] == "300"


class TestBillingScenarios:

    @pytest.fixture
    def billed(self, editing_session):
        editing_session.set_charge("service_charge", 500)
        return editing_session

    def test_no_discount_fully_paid(self, billed):
        admission = billed.set_paid_amount(800)
        assert admission.total_amount == Decimal("800")
        assert admission.grand_total == Decimal("800")
        assert admission.due_amount == Decimal("0")

    def test_percentage_discount(self, billed):
        billed.set_discount_kind("percentage")
        admission = billed.set_discount_value(10)
        assert admission.discount_amount == Decimal("80")
        assert admission.grand_total == Decimal("720")

    def test_fixed_discount_clamped(self, billed):
        billed.set_discount_kind(DiscountKind.FIXED)
        admission = billed.set_discount_value(1000)
        assert admission.discount_amount == Decimal("800")
        assert admission.grand_total == Decimal("0")

    def test_switching_kind_reinterprets_value(self, billed):
        billed.set_discount_kind("percentage")
        billed.set_discount_value(10)
        admission = billed.set_discount_kind("fixed")
        assert admission.discount.value == Decimal("10")
        assert admission.discount_amount == Decimal("10")
        assert admission.grand_total == Decimal("790")


class TestAdmissionSession:

    def test_every_mutation_recomputes(self, editing_session):
        admission = editing_session.set_charge("medicine_charge", "250.50")
        assert admission.total_amount == Decimal("550.50")
        assert editing_session.admission is admission

    def test_non_numeric_charge_is_zero(self, editing_session):
        editing_session.set_charge("seat_rent", 100)
        admission = editing_session.set_charge("seat_rent", "abc")
        assert admission.charges.seat_rent == Decimal("0")
        assert admission.total_amount == Decimal("300")

    def test_negative_paid_amount_is_zero(self, editing_session):
        assert editing_session.set_paid_amount(-100).paid_amount == Decimal("0")

    def test_set_info(self, editing_session):
        admission = editing_session.set_info(ward="Surgery", seat_number="S-3")
        assert admission.ward == "Surgery"
        assert admission.seat_number == "S-3"

    def test_set_info_rejects_unknown_field(self, editing_session):
        with pytest.raises(TypeError):
            editing_session.set_info(grand_total="0")

    def test_status_change_keeps_advisories(self, editing_session):
        editing_session.set_paid_amount(300)
        outcome = editing_session.cancel()
        assert editing_session.admission is outcome.admission
        assert editing_session.advisories == outcome.advisories
        assert outcome.refund_required

        editing_session.request_status(AdmissionStatus.ADMITTED)
        assert editing_session.advisories == ()
        assert editing_session.admission.total_amount == Decimal("300")

    def test_validate_uses_current_value(self, editing_session):
        editing_session.set_charge("seat_rent", 200)
        assert not editing_session.validate().is_valid
        editing_session.set_info(seat_number="12")
        assert editing_session.validate().is_valid

    def test_session_from_constructor(self, new_admission, transitions):
        session = AdmissionSession(new_admission, transitions)
        assert session.admission is new_admission
        assert session.advisories == ()

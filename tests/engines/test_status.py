"""Tests for the status transition engine."""

from datetime import datetime, timezone
from decimal import Decimal

import pytest

from admission_engines.editing import (
    apply_charge,
    apply_discount_kind,
    apply_discount_value,
    apply_paid_amount,
)
from admission_engines.status import StatusTransitionEngine, selectable_statuses
from admission_kernel.domain.dtos import MANUAL_REFUND_REQUIRED
from admission_kernel.domain.values import AdmissionStatus, DiscountKind
from admission_kernel.exceptions import UnknownStatusError


@pytest.fixture
def billed_admission(new_admission):
    """Fee 300 + service 500, 10% discount, 500 paid: grand total 720."""
    admission = apply_charge(new_admission, "service_charge", 500)
    admission = apply_discount_kind(admission, DiscountKind.PERCENTAGE)
    admission = apply_discount_value(admission, 10)
    return apply_paid_amount(admission, 500)


class TestCancellation:

    def test_cancel_with_paid_balance(self, transitions, billed_admission):
        assert billed_admission.grand_total == Decimal("720.00")

        outcome = transitions.request_status(billed_admission, AdmissionStatus.CANCELED)
        canceled = outcome.admission

        assert canceled.status is AdmissionStatus.CANCELED
        assert canceled.total_amount == Decimal("0")
        assert canceled.grand_total == Decimal("0")
        assert canceled.due_amount == Decimal("-500")
        assert canceled.paid_amount == Decimal("500")
        assert outcome.refund_required
        assert outcome.advisories[0].code == MANUAL_REFUND_REQUIRED
        assert outcome.previous_status is AdmissionStatus.ADMITTED

    def test_cancel_zeroes_every_field_and_discount(self, transitions, billed_admission):
        canceled = transitions.request_status(billed_admission, "Canceled").admission
        assert all(amount == 0 for _, amount in canceled.charges.items())
        assert canceled.discount.kind is DiscountKind.NONE
        assert canceled.discount_amount == Decimal("0")

    def test_cancel_without_payment_has_no_advisory(self, transitions, new_admission):
        outcome = transitions.request_status(new_admission, AdmissionStatus.CANCELED)
        assert outcome.advisories == ()
        assert not outcome.refund_required

    def test_repeated_cancellation_is_safe(self, transitions, billed_admission):
        first = transitions.request_status(billed_admission, AdmissionStatus.CANCELED)
        second = transitions.request_status(first.admission, AdmissionStatus.CANCELED)
        assert second.admission.totals == first.admission.totals
        assert second.admission.status is AdmissionStatus.CANCELED
        assert second.refund_required

    def test_input_value_untouched(self, transitions, billed_admission):
        transitions.request_status(billed_admission, AdmissionStatus.CANCELED)
        assert billed_admission.status is AdmissionStatus.ADMITTED
        assert billed_admission.charges.service_charge == Decimal("500")

    def test_cancel_logs_refund_warning(self, transitions, billed_admission, captured_logs):
        transitions.request_status(billed_admission, AdmissionStatus.CANCELED)
        warnings = [r for r in captured_logs() if r["message"] == "manual_refund_required"]
        assert warnings[0]["level"] == "WARNING"
        assert warnings[0]["paid_amount"] == "500.00"


class TestCancelAction:

    def test_remarks_annotated(self, transitions, new_admission):
        admission = new_admission.with_info(remarks="Bed 4 requested")
        canceled = transitions.cancel(admission).admission
        assert canceled.remarks == "[CANCELED] Bed 4 requested - Previous charges refunded"

    def test_empty_remarks_annotated(self, transitions, new_admission):
        canceled = transitions.cancel(new_admission).admission
        assert canceled.remarks == "[CANCELED] - Previous charges refunded"

    def test_second_cancel_does_not_reannotate(self, transitions, new_admission):
        once = transitions.cancel(new_admission).admission
        twice = transitions.cancel(once).admission
        assert twice.remarks == once.remarks

    def test_status_request_annotates_like_cancel(self, transitions, new_admission):
        admission = new_admission.with_info(remarks="Bed 4 requested")
        via_status = transitions.request_status(admission, "Canceled").admission
        assert via_status.remarks == transitions.cancel(admission).admission.remarks

    def test_restore_keeps_annotation(self, transitions, new_admission):
        canceled = transitions.cancel(new_admission).admission
        restored = transitions.request_status(canceled, AdmissionStatus.ADMITTED).admission
        assert restored.remarks == canceled.remarks


class TestRestoration:

    def test_restore_applies_default_fee(self, transitions, billed_admission):
        canceled = transitions.request_status(billed_admission, AdmissionStatus.CANCELED).admission
        outcome = transitions.request_status(canceled, AdmissionStatus.UNDER_TREATMENT)
        restored = outcome.admission

        assert restored.status is AdmissionStatus.UNDER_TREATMENT
        assert restored.charges.admission_fee == Decimal("300")
        assert restored.charges.service_charge == Decimal("0")
        assert restored.total_amount == Decimal("300")
        assert restored.grand_total == Decimal("300")
        assert restored.due_amount == Decimal("-200")
        assert outcome.advisories == ()

    def test_restore_uses_configured_fee(self, deterministic_clock, new_admission):
        engine = StatusTransitionEngine(default_fee=Decimal("450"), clock=deterministic_clock)
        canceled = engine.request_status(new_admission, AdmissionStatus.CANCELED).admission
        restored = engine.request_status(canceled, AdmissionStatus.ADMITTED).admission
        assert restored.total_amount == Decimal("450")


class TestPlainTransitions:

    @pytest.mark.parametrize("target", [
        AdmissionStatus.UNDER_TREATMENT,
        AdmissionStatus.AWAITING_DISCHARGE,
        AdmissionStatus.ADMITTED,
    ])
    def test_no_charge_side_effects(self, transitions, billed_admission, target):
        outcome = transitions.request_status(billed_admission, target)
        assert outcome.admission.status is target
        assert outcome.admission.charges == billed_admission.charges
        assert outcome.admission.totals == billed_admission.totals

    def test_accepts_labels_and_member_names(self, transitions, new_admission):
        assert transitions.request_status(
            new_admission, "Awaiting Discharge"
        ).admission.status is AdmissionStatus.AWAITING_DISCHARGE
        assert transitions.request_status(
            new_admission, "UNDER_TREATMENT"
        ).admission.status is AdmissionStatus.UNDER_TREATMENT

    def test_unknown_status_raises(self, transitions, new_admission):
        with pytest.raises(UnknownStatusError):
            transitions.request_status(new_admission, "Transferred")


class TestDischargeStamp:

    def test_stamped_on_entry(self, transitions, deterministic_clock, new_admission):
        discharged = transitions.request_status(new_admission, AdmissionStatus.DISCHARGED).admission
        assert discharged.date_discharged == deterministic_clock.now()
        assert discharged.is_discharged

    def test_not_restamped_when_already_discharged(
        self, transitions, deterministic_clock, new_admission,
    ):
        first = transitions.request_status(new_admission, AdmissionStatus.DISCHARGED).admission
        deterministic_clock.advance(3600)
        again = transitions.request_status(first, AdmissionStatus.DISCHARGED).admission
        assert again.date_discharged == datetime(2024, 3, 15, 9, 30, tzinfo=timezone.utc)

    def test_cleared_when_leaving_discharged(self, transitions, new_admission):
        discharged = transitions.request_status(new_admission, AdmissionStatus.DISCHARGED).admission
        readmitted = transitions.request_status(discharged, AdmissionStatus.ADMITTED).admission
        assert readmitted.date_discharged is None


class TestDescribeTransition:

    def test_cancel_warning(self, transitions):
        text = transitions.describe_transition("Admitted", "Canceled", "Rahim Uddin")
        assert text == (
            "Canceling admission for Rahim Uddin will set all charges to BDT 0. "
            "You must refund any paid amount to the patient."
        )

    def test_restore_notice(self, transitions):
        text = transitions.describe_transition("Canceled", "Admitted", "Rahim Uddin")
        assert text == (
            "Restoring Rahim Uddin's admission will set the admission fee to BDT 300. "
            "Other charges will remain at BDT 0."
        )

    def test_generic_confirmation(self, transitions):
        text = transitions.describe_transition(
            AdmissionStatus.ADMITTED, AdmissionStatus.DISCHARGED, "Rahim Uddin",
        )
        assert text == (
            'Are you sure you want to change Rahim Uddin\'s status from '
            '"Admitted" to "Discharged"?'
        )


class TestSelectableStatuses:

    def test_canceled_excluded(self):
        statuses = selectable_statuses()
        assert AdmissionStatus.CANCELED not in statuses
        assert statuses == (
            AdmissionStatus.ADMITTED,
            AdmissionStatus.UNDER_TREATMENT,
            AdmissionStatus.AWAITING_DISCHARGE,
            AdmissionStatus.DISCHARGED,
        )

"""Tests for derived totals."""

from dataclasses import replace
from decimal import Decimal

from admission_engines.ledger import set_charge
from admission_engines.totals import compute_totals, recompute
from admission_kernel.domain.admission import ChargeSet
from admission_kernel.domain.values import DiscountSpec


class TestComputeTotals:

    def test_basic_totals(self):
        charges = set_charge(ChargeSet.initial(Decimal("300")), "service_charge", 500)
        totals = compute_totals(charges, DiscountSpec.percentage(10), Decimal("0"))

        assert totals.total_amount == Decimal("800")
        assert totals.discount_amount == Decimal("80.00")
        assert totals.grand_total == Decimal("720.00")
        assert totals.due_amount == Decimal("720.00")
        assert not totals.refund_owed

    def test_overpayment_gives_negative_due(self):
        totals = compute_totals(ChargeSet(), DiscountSpec.none(), Decimal("300"))
        assert totals.due_amount == Decimal("-300")
        assert totals.refund_owed

    def test_engine_trace_emitted(self, captured_logs):
        compute_totals(ChargeSet.initial(Decimal("300")), DiscountSpec(), Decimal("0"))
        traces = [r for r in captured_logs() if r["message"] == "ADMISSION_ENGINE_TRACE"]
        names = {r["engine_name"] for r in traces}
        assert {"totals", "ledger", "discount"} <= names


class TestRecompute:

    def test_recompute_idempotent(self, new_admission):
        once = recompute(replace(new_admission, paid_amount=Decimal("100")))
        twice = recompute(once)
        assert once == twice
        assert once.due_amount == Decimal("200")

    def test_stale_totals_replaced(self, new_admission):
        stale = replace(new_admission, grand_total=Decimal("9999"))
        assert recompute(stale).grand_total == Decimal("300")

"""
Values -- Immutable domain value types for admission billing.

Responsibility:
    Provides the enumerations and small value objects every other layer
    builds on: AdmissionStatus, ChargeField, DiscountKind, DiscountSpec,
    plus the single sanctioned coercion from raw form input to Decimal.

Architecture position:
    Kernel > Domain -- pure functional core, zero I/O.

Invariants enforced:
    - Monetary amounts are Decimal, never float, at 2 decimal places.
    - coerce_amount() never raises: anything that is not a finite number
      becomes Decimal("0").
    - DiscountSpec keeps its raw value across kind switches.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, replace
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from enum import Enum
from typing import Any

from admission_kernel.exceptions import (
    UnknownChargeFieldError,
    UnknownDiscountKindError,
    UnknownStatusError,
)

ZERO = Decimal("0")
HUNDRED = Decimal("100")
TWO_PLACES = Decimal("0.01")


def coerce_amount(raw: Any) -> Decimal:
    """Convert raw numeric or string input into a Decimal.

    Empty strings, None, booleans, unparseable text, NaN, infinities and
    magnitudes too large to hold in cents all coerce to zero. Sign is
    preserved; callers decide on clamping. The result is quantized half-up
    to 2 places, the stored precision.
    """
    if raw is None or isinstance(raw, bool):
        return ZERO
    if isinstance(raw, Decimal):
        value = raw
    elif isinstance(raw, int):
        value = Decimal(raw)
    elif isinstance(raw, float):
        value = Decimal(str(raw))
    elif isinstance(raw, str):
        text = raw.strip().replace(",", "")
        if not text:
            return ZERO
        try:
            value = Decimal(text)
        except InvalidOperation:
            return ZERO
    else:
        return ZERO
    if not value.is_finite():
        return ZERO
    try:
        cents = value.quantize(TWO_PLACES, rounding=ROUND_HALF_UP)
    except InvalidOperation:
        return ZERO
    # No negative zero: -0.004 reads back as 0.00
    return abs(cents) if cents.is_zero() else cents


class AdmissionStatus(str, Enum):
    """Lifecycle status of an admission.

    Any status may move to any other. CANCELED is the only state whose
    entry and exit edges carry charge side effects.
    """

    ADMITTED = "Admitted"
    UNDER_TREATMENT = "Under Treatment"
    AWAITING_DISCHARGE = "Awaiting Discharge"
    DISCHARGED = "Discharged"
    CANCELED = "Canceled"

    @classmethod
    def parse(cls, raw: AdmissionStatus | str) -> AdmissionStatus:
        """Resolve an enum member from its label or member name."""
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip()
        for member in cls:
            if text == member.value or text.upper().replace(" ", "_") == member.name:
                return member
        raise UnknownStatusError(str(raw))


class ChargeField(str, Enum):
    """The ten itemized charge fields of a ChargeSet."""

    ADMISSION_FEE = "admission_fee"
    SERVICE_CHARGE = "service_charge"
    SEAT_RENT = "seat_rent"
    OT_CHARGE = "ot_charge"
    DOCTOR_CHARGE = "doctor_charge"
    SURGEON_CHARGE = "surgeon_charge"
    ANESTHESIA_FEE = "anesthesia_fee"
    ASSISTANT_DOCTOR_FEE = "assistant_doctor_fee"
    MEDICINE_CHARGE = "medicine_charge"
    OTHER_CHARGES = "other_charges"

    @classmethod
    def parse(cls, raw: ChargeField | str) -> ChargeField:
        """Resolve a field from its snake_case or camelCase name."""
        if isinstance(raw, cls):
            return raw
        text = str(raw).strip()
        snake = re.sub(r"(?<!^)(?=[A-Z])", "_", text).lower()
        try:
            return cls(snake)
        except ValueError:
            raise UnknownChargeFieldError(str(raw)) from None


class DiscountKind(str, Enum):
    """Tag of a DiscountSpec."""

    NONE = "none"
    PERCENTAGE = "percentage"
    FIXED = "fixed"

    @classmethod
    def parse(cls, raw: DiscountKind | str | None) -> DiscountKind:
        """Resolve a kind; ``None``/empty means no discount, ``value`` is FIXED."""
        if isinstance(raw, cls):
            return raw
        if raw is None or not str(raw).strip():
            return cls.NONE
        text = str(raw).strip().lower()
        if text == "value":
            return cls.FIXED
        try:
            return cls(text)
        except ValueError:
            raise UnknownDiscountKindError(str(raw)) from None


@dataclass(frozen=True, slots=True)
class DiscountSpec:
    """
    Tagged discount rule: None | Percentage(value) | Fixed(value).

    ``value`` may be None while a kind is selected; such a spec yields a
    zero discount. The value survives kind switches so that the same
    number can be re-read under a different rule.
    """

    kind: DiscountKind = DiscountKind.NONE
    value: Decimal | None = None

    @classmethod
    def none(cls) -> DiscountSpec:
        return cls()

    @classmethod
    def percentage(cls, value: Any) -> DiscountSpec:
        return cls(DiscountKind.PERCENTAGE, _optional_amount(value))

    @classmethod
    def fixed(cls, value: Any) -> DiscountSpec:
        return cls(DiscountKind.FIXED, _optional_amount(value))

    @property
    def is_active(self) -> bool:
        """True when the spec can produce a non-zero discount."""
        return self.kind is not DiscountKind.NONE and bool(self.value)

    def with_kind(self, kind: DiscountKind) -> DiscountSpec:
        return replace(self, kind=kind)

    def with_value(self, value: Decimal | None) -> DiscountSpec:
        return replace(self, value=value)


def _optional_amount(raw: Any) -> Decimal | None:
    if raw is None or (isinstance(raw, str) and not raw.strip()):
        return None
    return coerce_amount(raw)

"""
Typed Exception Hierarchy for the Admission Kernel.

===============================================================================
WHEN THIS KERNEL RAISES
===============================================================================

Recoverable conditions are returned as data, never raised:
  - non-numeric charge input is coerced to zero
  - blocking validation failures come back as a ValidationResult
  - "manual refund required" comes back as an Advisory

Exceptions are reserved for programming errors (unknown charge field,
unknown status name) and for the persistence boundary (record not found,
attempt to rewrite an admission number). Storage failures from SQLAlchemy
are not wrapped; they propagate unchanged.

===============================================================================
EXCEPTION HIERARCHY
===============================================================================

    AdmissionKernelError (base)
    |
    +-- ChargeError
    |   +-- UnknownChargeFieldError
    |
    +-- DiscountError
    |   +-- UnknownDiscountKindError
    |
    +-- StatusError
    |   +-- UnknownStatusError
    |
    +-- PersistenceError
    |   +-- AdmissionNotFoundError
    |   +-- AdmissionNumberImmutableError
    |
    +-- ConfigError
        +-- InvalidPricingConfigError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category     | Code                        | When Raised
-------------|-----------------------------|-----------------------------------
Charge       | UNKNOWN_CHARGE_FIELD        | set_charge() with a bad field name
Discount     | UNKNOWN_DISCOUNT_KIND       | Discount tag not none/percentage/fixed
Status       | UNKNOWN_STATUS              | Status label not in AdmissionStatus
Persistence  | ADMISSION_NOT_FOUND         | No stored admission for the id/number
             | ADMISSION_NUMBER_IMMUTABLE  | Update tries to change the number
Config       | INVALID_PRICING_CONFIG      | Pricing YAML missing/invalid values

Usage:

    try:
        admission = repository.get(admission_id)
    except AdmissionNotFoundError as e:
        return {"error": e.code, "admission_id": str(e.admission_id)}
"""


class AdmissionKernelError(Exception):
    """
    Base exception for all admission kernel errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "ADMISSION_KERNEL_ERROR"


# Charge-related exceptions


class ChargeError(AdmissionKernelError):
    """Base exception for charge ledger errors."""

    code: str = "CHARGE_ERROR"


class UnknownChargeFieldError(ChargeError):
    """Charge field name is not part of the ChargeSet."""

    code: str = "UNKNOWN_CHARGE_FIELD"

    def __init__(self, field_name: str):
        self.field_name = field_name
        super().__init__(f"Unknown charge field: {field_name}")


# Discount-related exceptions


class DiscountError(AdmissionKernelError):
    """Base exception for discount policy errors."""

    code: str = "DISCOUNT_ERROR"


class UnknownDiscountKindError(DiscountError):
    """Discount tag is not one of none/percentage/fixed."""

    code: str = "UNKNOWN_DISCOUNT_KIND"

    def __init__(self, kind: str):
        self.kind = kind
        super().__init__(f"Unknown discount kind: {kind}")


# Status-related exceptions


class StatusError(AdmissionKernelError):
    """Base exception for status transition errors."""

    code: str = "STATUS_ERROR"


class UnknownStatusError(StatusError):
    """Status label does not name an AdmissionStatus."""

    code: str = "UNKNOWN_STATUS"

    def __init__(self, status: str):
        self.status = status
        super().__init__(f"Unknown admission status: {status}")


# Persistence-related exceptions


class PersistenceError(AdmissionKernelError):
    """Base exception for admission store errors."""

    code: str = "PERSISTENCE_ERROR"


class AdmissionNotFoundError(PersistenceError):
    """No stored admission matches the requested identity."""

    code: str = "ADMISSION_NOT_FOUND"

    def __init__(self, admission_id: str):
        self.admission_id = admission_id
        super().__init__(f"Admission not found: {admission_id}")


class AdmissionNumberImmutableError(PersistenceError):
    """An update attempted to change an assigned admission number."""

    code: str = "ADMISSION_NUMBER_IMMUTABLE"

    def __init__(self, admission_id: str, stored_number: str, new_number: str):
        self.admission_id = admission_id
        self.stored_number = stored_number
        self.new_number = new_number
        super().__init__(
            f"Admission {admission_id} already numbered {stored_number}; "
            f"refusing to change it to {new_number}"
        )


# Configuration-related exceptions


class ConfigError(AdmissionKernelError):
    """Base exception for configuration errors."""

    code: str = "CONFIG_ERROR"


class InvalidPricingConfigError(ConfigError):
    """Pricing configuration is missing a value or holds an invalid one."""

    code: str = "INVALID_PRICING_CONFIG"

    def __init__(self, field_name: str, reason: str):
        self.field_name = field_name
        self.reason = reason
        super().__init__(f"Invalid pricing config field {field_name}: {reason}")

"""
Admission Kernel

Billing and status core for hospital admissions:
- Itemized charge ledger with a configured admission fee
- Tagged discount rules clamped to the subtotal
- Cancellation / restoration side effects on status change
- Submission gates returned as data, never raised
"""

__version__ = "0.1.0"

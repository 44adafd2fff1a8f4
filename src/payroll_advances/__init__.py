"""Salary advance ledger with FIFO payroll recovery."""

from payroll_advances.ledger import (
    AdvanceDeduction,
    AdvanceLedger,
    AdvancePayment,
    AdvanceStatus,
    LedgerStorage,
)

__version__ = "0.1.0"

__all__ = [
    "AdvanceDeduction",
    "AdvanceLedger",
    "AdvancePayment",
    "AdvanceStatus",
    "LedgerStorage",
    "__version__",
]

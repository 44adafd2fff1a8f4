"""Advance ledger: records, storage backends and the ledger itself."""

from payroll_advances.ledger.advance_ledger import AdvanceLedger
from payroll_advances.ledger.storage import (
    ADVANCES_KEY,
    DEDUCTIONS_KEY,
    InMemoryKeyValueStore,
    JsonFileKeyValueStore,
    KeyValueStore,
    LedgerStorage,
    SqlKeyValueStore,
    create_key_value_store,
)
from payroll_advances.ledger.types import (
    AdvanceDeduction,
    AdvancePayment,
    AdvanceReason,
    AdvanceStatus,
)

__all__ = [
    "ADVANCES_KEY",
    "DEDUCTIONS_KEY",
    "AdvanceDeduction",
    "AdvanceLedger",
    "AdvancePayment",
    "AdvanceReason",
    "AdvanceStatus",
    "InMemoryKeyValueStore",
    "JsonFileKeyValueStore",
    "KeyValueStore",
    "LedgerStorage",
    "SqlKeyValueStore",
    "create_key_value_store",
]

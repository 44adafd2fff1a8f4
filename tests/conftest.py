"""Pytest fixtures for advance ledger tests."""

from __future__ import annotations

from datetime import date, timedelta
from decimal import Decimal

import pytest

from payroll_advances.ledger import AdvanceLedger, InMemoryKeyValueStore, LedgerStorage
from payroll_advances.services import PayrollRecord, PayrollService, PayrollStatus


class FakeClock:
    """Controllable ``today`` source for the ledger."""

    def __init__(self, current: date) -> None:
        self.current = current

    def __call__(self) -> date:
        return self.current

    def set(self, current: date) -> None:
        self.current = current

    def advance(self, days: int) -> None:
        self.current += timedelta(days=days)


@pytest.fixture
def clock() -> FakeClock:
    """Clock starting on 2024-01-10."""
    return FakeClock(date(2024, 1, 10))


@pytest.fixture
def store() -> InMemoryKeyValueStore:
    """Empty in-memory key-value store."""
    return InMemoryKeyValueStore()


@pytest.fixture
def storage(store: InMemoryKeyValueStore) -> LedgerStorage:
    """Ledger storage over the in-memory store."""
    return LedgerStorage(store)


@pytest.fixture
def ledger(storage: LedgerStorage, clock: FakeClock) -> AdvanceLedger:
    """Ledger over in-memory storage with a controllable clock."""
    return AdvanceLedger(storage, today=clock)


@pytest.fixture
def payroll_service(ledger: AdvanceLedger) -> PayrollService:
    """Payroll service over the test ledger."""
    return PayrollService(ledger)


def make_payroll_record(**overrides) -> PayrollRecord:
    """Build a pending payroll record for EMP002 (base 3000, bonus 500, deductions 300)."""
    fields = {
        "id": "PR002",
        "employee_id": "EMP002",
        "employee_name": "Sarah Johnson",
        "position": "Cashier",
        "base_salary": Decimal("3000"),
        "bonus": Decimal("500"),
        "deductions": Decimal("300"),
        "net_pay": Decimal("3200"),
        "payment_date": date(2024, 1, 31),
        "status": PayrollStatus.PENDING,
        "payment_method": "Bank Transfer",
        "bonus_reason": "Holiday Bonus",
    }
    fields.update(overrides)
    return PayrollRecord(**fields)


@pytest.fixture
def payroll_record() -> PayrollRecord:
    """A pending payroll record."""
    return make_payroll_record()


@pytest.fixture
def make_record():
    """Factory for payroll records with field overrides."""
    return make_payroll_record

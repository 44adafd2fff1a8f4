"""Advance ledger - salary advances recovered oldest-first through payroll.

Every operation is a synchronous read-modify-write of the full collections
held by LedgerStorage. Operations never raise for bad input, malformed
storage or over-deduction:
- amounts and identifiers are stored as given (validate at the boundary)
- unreadable collections load as empty
- deductions larger than the outstanding balance apply what they can
"""

from __future__ import annotations

import logging
import time
from datetime import date, datetime, timezone
from decimal import Decimal
from typing import Any, Callable

from payroll_advances.ledger.storage import LedgerStorage
from payroll_advances.ledger.types import (
    AdvanceDeduction,
    AdvancePayment,
    AdvanceStatus,
    to_decimal,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


def _utc_today() -> date:
    return datetime.now(timezone.utc).date()


def _coerce_amount(value: Any) -> Decimal:
    """Read a caller amount, storing zero for anything that is not a finite number."""
    try:
        return to_decimal(value)
    except (TypeError, ValueError, ArithmeticError):
        return ZERO


class AdvanceLedger:
    """Owns the advance and deduction collections for all employees.

    Readers always get freshly decoded records; mutating them has no effect
    on the ledger.
    """

    def __init__(
        self,
        storage: LedgerStorage,
        today: Callable[[], date] = _utc_today,
        clock_ms: Callable[[], int] = lambda: time.time_ns() // 1_000_000,
    ) -> None:
        self.storage = storage
        self._today = today
        self._clock_ms = clock_ms
        self._last_id_ms = 0

    def _next_advance_id(self) -> str:
        """Return an ``ADV-<epoch ms>`` id, strictly increasing per ledger."""
        stamp = max(self._clock_ms(), self._last_id_ms + 1)
        self._last_id_ms = stamp
        return f"ADV-{stamp}"

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def grant_advance(self, employee_id: str, amount: Any, reason: str) -> AdvancePayment:
        """Record an approved advance with its full amount outstanding."""
        value = _coerce_amount(amount)
        advances = self.storage.load_advances()
        advance = AdvancePayment(
            id=self._next_advance_id(),
            employee_id=employee_id,
            amount=value,
            date=self._today(),
            reason=reason,
            status=AdvanceStatus.APPROVED,
            remaining_balance=value,
        )
        advances.append(advance)
        self.storage.save_advances(advances)

        logger.info(
            "Granted advance %s of %s to employee %s (%s)",
            advance.id, value, employee_id, reason,
        )
        return advance

    def apply_deduction(
        self, employee_id: str, deduction_amount: Any, payroll_id: str
    ) -> AdvanceDeduction:
        """Recover up to deduction_amount from the employee's advances.

        Balances are consumed oldest advance first. The appended deduction
        record keeps the requested amount in ``deduction_amount`` and what
        was actually drawn in ``applied_amount``.
        """
        requested = _coerce_amount(deduction_amount)
        advances = self.storage.load_advances()

        # sorted() is stable: same-day advances keep insertion order
        open_advances = sorted(
            (a for a in advances if a.employee_id == employee_id and a.remaining_balance > 0),
            key=lambda a: a.date,
        )

        remaining = requested
        for advance in open_advances:
            if remaining <= 0:
                break
            take = min(advance.remaining_balance, remaining)
            advance.remaining_balance -= take
            remaining -= take

        applied = requested - remaining
        self.storage.save_advances(advances)

        deduction = AdvanceDeduction(
            employee_id=employee_id,
            payroll_id=payroll_id,
            deduction_amount=requested,
            deduction_date=self._today(),
            applied_amount=applied,
        )
        deductions = self.storage.load_deductions()
        deductions.append(deduction)
        self.storage.save_deductions(deductions)

        if applied < requested:
            logger.warning(
                "Deduction for payroll %s requested %s from employee %s but only %s "
                "was outstanding",
                payroll_id, requested, employee_id, applied,
            )
        else:
            logger.info(
                "Recovered %s from employee %s advances for payroll %s",
                applied, employee_id, payroll_id,
            )
        return deduction

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def get_outstanding_balance(self, employee_id: str) -> Decimal:
        """Sum of remaining balances over the employee's approved advances."""
        return sum(
            (
                a.remaining_balance
                for a in self.storage.load_advances()
                if a.employee_id == employee_id and a.status == AdvanceStatus.APPROVED
            ),
            ZERO,
        )

    def get_history(self, employee_id: str) -> list[AdvancePayment]:
        """All advances for the employee, any status, in insertion order."""
        return [a for a in self.storage.load_advances() if a.employee_id == employee_id]

    def get_deductions(self, employee_id: str | None = None) -> list[AdvanceDeduction]:
        """Deduction records in insertion order, optionally for one employee."""
        deductions = self.storage.load_deductions()
        if employee_id is None:
            return deductions
        return [d for d in deductions if d.employee_id == employee_id]

    def get_total_advances_given(self) -> Decimal:
        """Sum of granted amounts over all approved advances."""
        return sum(
            (a.amount for a in self.storage.load_advances() if a.status == AdvanceStatus.APPROVED),
            ZERO,
        )

    def get_total_outstanding_advances(self) -> Decimal:
        """Sum of remaining balances over all approved advances."""
        return sum(
            (
                a.remaining_balance
                for a in self.storage.load_advances()
                if a.status == AdvanceStatus.APPROVED
            ),
            ZERO,
        )

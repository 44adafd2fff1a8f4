"""Payroll reconciliation against the advance ledger.

Payroll records are supplied by the caller; this service only computes net
pay, applies manual deductions and, when a record is finalized, recovers
outstanding advances through the ledger.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, replace
from datetime import date
from decimal import Decimal

from payroll_advances.ledger import AdvanceDeduction, AdvanceLedger
from payroll_advances.services.state_machine import (
    PayrollStateMachine,
    PayrollStatus,
)

logger = logging.getLogger(__name__)

ZERO = Decimal("0")


class PayrollLockedError(Exception):
    """Raised when amounts are changed on a record that can no longer change."""

    def __init__(self, payroll_id: str, status: str):
        self.payroll_id = payroll_id
        self.status = getattr(status, "value", status)
        super().__init__(f"Payroll {payroll_id} is {self.status} and can no longer be modified")


@dataclass(frozen=True)
class PayrollRecord:
    """One employee's pay for one payment date."""

    id: str
    employee_id: str
    employee_name: str
    position: str
    base_salary: Decimal
    bonus: Decimal
    deductions: Decimal
    net_pay: Decimal
    payment_date: date
    status: PayrollStatus
    payment_method: str = "Bank Transfer"
    bonus_reason: str | None = None

    @property
    def gross(self) -> Decimal:
        return self.base_salary + self.bonus

    @property
    def computed_net_pay(self) -> Decimal:
        """Net pay derived from salary, bonus and deductions."""
        return self.gross - self.deductions

    def with_deductions(self, deductions: Decimal) -> PayrollRecord:
        """Return a copy with new total deductions and recomputed net pay."""
        return replace(self, deductions=deductions, net_pay=self.gross - deductions)


@dataclass(frozen=True)
class FinalizedPayroll:
    """Result of finalizing a payroll record.

    ``advance_deduction`` is None when nothing was recovered from advances.
    """

    record: PayrollRecord
    advance_deduction: AdvanceDeduction | None


@dataclass(frozen=True)
class PayrollSummary:
    """Payroll figures for one period."""

    period: str
    total_paid: Decimal
    total_bonus: Decimal
    pending_count: int
    employees_paid: int


class PayrollService:
    """Applies deductions to payroll records and recovers advances."""

    def __init__(self, ledger: AdvanceLedger):
        self.ledger = ledger

    def add_deduction(self, record: PayrollRecord, amount: Decimal, reason: str) -> PayrollRecord:
        """Add a manual deduction (tax, adjustment, ...) to an unpaid record."""
        if amount < 0:
            raise ValueError("Deduction amount cannot be negative")
        if not PayrollStateMachine.can_modify_amounts(record.status):
            raise PayrollLockedError(record.id, record.status)

        updated = record.with_deductions(record.deductions + amount)
        logger.info(
            "Added %s deduction to payroll %s (%s), net pay now %s",
            amount, record.id, reason, updated.net_pay,
        )
        return updated

    def suggested_advance_recovery(self, record: PayrollRecord) -> Decimal:
        """Outstanding advance balance, capped so recomputed net pay stays non-negative."""
        outstanding = self.ledger.get_outstanding_balance(record.employee_id)
        return max(min(outstanding, record.computed_net_pay), ZERO)

    def finalize(
        self,
        record: PayrollRecord,
        advance_deduction: Decimal | None = None,
    ) -> FinalizedPayroll:
        """Mark a record paid, recovering advances first.

        Recovers ``advance_deduction`` when given, otherwise the suggested
        recovery. Only the amount the ledger actually applied is added to the
        record's deductions.
        """
        PayrollStateMachine.validate_transition(record.status, PayrollStatus.PAID)

        amount = (
            advance_deduction
            if advance_deduction is not None
            else self.suggested_advance_recovery(record)
        )

        deduction: AdvanceDeduction | None = None
        updated = record
        if amount > 0:
            deduction = self.ledger.apply_deduction(record.employee_id, amount, record.id)
            applied = deduction.applied_amount or ZERO
            updated = record.with_deductions(record.deductions + applied)

        updated = replace(updated, status=PayrollStatus.PAID)
        logger.info(
            "Finalized payroll %s for employee %s: net pay %s",
            record.id, record.employee_id, updated.net_pay,
        )
        return FinalizedPayroll(record=updated, advance_deduction=deduction)

    def summarize(self, records: list[PayrollRecord], period: str) -> PayrollSummary:
        """Summarize records for a ``YYYY-MM`` period.

        Totals cover paid records dated in the period; pending and paid counts
        cover all records given.
        """
        paid_in_period = [
            r
            for r in records
            if r.status == PayrollStatus.PAID and r.payment_date.isoformat().startswith(period)
        ]
        return PayrollSummary(
            period=period,
            total_paid=sum((r.net_pay for r in paid_in_period), ZERO),
            total_bonus=sum((r.bonus for r in paid_in_period), ZERO),
            pending_count=sum(1 for r in records if r.status == PayrollStatus.PENDING),
            employees_paid=sum(1 for r in records if r.status == PayrollStatus.PAID),
        )

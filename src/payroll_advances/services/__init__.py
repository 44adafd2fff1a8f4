"""Payroll services built on the advance ledger."""

from payroll_advances.services.payroll_service import (
    FinalizedPayroll,
    PayrollLockedError,
    PayrollRecord,
    PayrollService,
    PayrollSummary,
)
from payroll_advances.services.state_machine import (
    InvalidTransitionError,
    PayrollStateMachine,
    PayrollStatus,
)

__all__ = [
    "FinalizedPayroll",
    "InvalidTransitionError",
    "PayrollLockedError",
    "PayrollRecord",
    "PayrollService",
    "PayrollStateMachine",
    "PayrollStatus",
    "PayrollSummary",
]

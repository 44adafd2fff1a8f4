"""Payroll record state machine with transition validation."""

from __future__ import annotations

from enum import Enum


class PayrollStatus(str, Enum):
    """Payroll record status values."""

    PENDING = "pending"
    PROCESSING = "processing"
    PAID = "paid"


class InvalidTransitionError(Exception):
    """Raised when an invalid state transition is attempted."""

    def __init__(self, from_status: str, to_status: str, reason: str | None = None):
        from_status = getattr(from_status, "value", from_status)
        to_status = getattr(to_status, "value", to_status)
        self.from_status = from_status
        self.to_status = to_status
        self.reason = reason
        msg = f"Invalid transition from '{from_status}' to '{to_status}'"
        if reason:
            msg += f": {reason}"
        super().__init__(msg)


class PayrollStateMachine:
    """State machine for payroll record status transitions.

    Allowed transitions:
    - pending → processing
    - pending → paid
    - processing → paid
    - processing → pending (hold)
    """

    # Define valid transitions: {from_status: [allowed_to_statuses]}
    VALID_TRANSITIONS: dict[str, list[str]] = {
        PayrollStatus.PENDING: [PayrollStatus.PROCESSING, PayrollStatus.PAID],
        PayrollStatus.PROCESSING: [PayrollStatus.PAID, PayrollStatus.PENDING],
        PayrollStatus.PAID: [],  # Terminal state
    }

    # Statuses where deductions and bonuses can still change
    AMOUNTS_MUTABLE = {
        PayrollStatus.PENDING,
        PayrollStatus.PROCESSING,
    }

    @classmethod
    def can_transition(cls, from_status: str, to_status: str) -> bool:
        """Check if a transition is valid."""
        allowed = cls.VALID_TRANSITIONS.get(from_status, [])
        return to_status in allowed

    @classmethod
    def validate_transition(cls, from_status: str, to_status: str) -> None:
        """Validate a transition, raising InvalidTransitionError if invalid."""
        if not cls.can_transition(from_status, to_status):
            allowed = cls.get_next_statuses(from_status)
            if allowed:
                reason = "allowed: " + ", ".join(getattr(s, "value", s) for s in allowed)
            else:
                reason = "no further transitions allowed"
            raise InvalidTransitionError(from_status, to_status, reason)

    @classmethod
    def can_modify_amounts(cls, status: str) -> bool:
        """Check if deductions can still be added in this status."""
        return status in cls.AMOUNTS_MUTABLE

    @classmethod
    def get_next_statuses(cls, current_status: str) -> list[str]:
        """Get list of valid next statuses from current status."""
        return cls.VALID_TRANSITIONS.get(current_status, [])

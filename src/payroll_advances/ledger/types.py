"""Record types for the advance ledger.

Records serialize to the camelCase layout used by the persisted
``employee_advances`` and ``advance_deductions`` collections. Amounts are
written as decimal strings and accepted back as strings or numbers.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any


class AdvanceStatus(str, Enum):
    """Advance status values.

    Only APPROVED is produced by the ledger; PENDING and PAID are kept so
    persisted records carrying them still load.
    """

    PENDING = "pending"
    APPROVED = "approved"
    PAID = "paid"


class AdvanceReason(str, Enum):
    """Reasons offered when requesting an advance."""

    EMERGENCY = "emergency"
    PERSONAL = "personal"
    FAMILY = "family"
    EDUCATION = "education"
    HOUSING = "housing"
    OTHER = "other"

    @property
    def label(self) -> str:
        return _REASON_LABELS[self]


_REASON_LABELS = {
    AdvanceReason.EMERGENCY: "Medical Emergency",
    AdvanceReason.PERSONAL: "Personal Emergency",
    AdvanceReason.FAMILY: "Family Event",
    AdvanceReason.EDUCATION: "Education Fees",
    AdvanceReason.HOUSING: "Housing/Rent",
    AdvanceReason.OTHER: "Other",
}


def to_decimal(value: Any) -> Decimal:
    """Coerce a stored or caller-supplied amount to Decimal."""
    if isinstance(value, bool) or value is None:
        raise TypeError(f"Not an amount: {value!r}")
    amount = value if isinstance(value, Decimal) else Decimal(str(value))
    if not amount.is_finite():
        raise ValueError(f"Not a finite amount: {value!r}")
    return amount


@dataclass
class AdvancePayment:
    """A salary advance granted to an employee."""

    id: str
    employee_id: str
    amount: Decimal
    date: date
    reason: str
    status: AdvanceStatus
    remaining_balance: Decimal

    @property
    def recovered_amount(self) -> Decimal:
        """Portion of the advance already recovered through deductions."""
        return self.amount - self.remaining_balance

    @property
    def is_settled(self) -> bool:
        return self.remaining_balance <= 0

    def to_dict(self) -> dict[str, Any]:
        return {
            "id": self.id,
            "employeeId": self.employee_id,
            "amount": str(self.amount),
            "date": self.date.isoformat(),
            "reason": self.reason,
            "status": self.status.value,
            "remainingBalance": str(self.remaining_balance),
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdvancePayment:
        """Build from a stored record. Raises on missing or malformed fields."""
        return cls(
            id=str(data["id"]),
            employee_id=str(data["employeeId"]),
            amount=to_decimal(data["amount"]),
            date=date.fromisoformat(str(data["date"])[:10]),
            reason=str(data["reason"]),
            status=AdvanceStatus(data["status"]),
            remaining_balance=to_decimal(data["remainingBalance"]),
        )


@dataclass(frozen=True)
class AdvanceDeduction:
    """A payroll-triggered reduction of an employee's outstanding advances.

    ``deduction_amount`` is the amount the payroll run asked to recover.
    ``applied_amount`` is what was actually drawn from balances; it is None
    for records written before it was tracked.
    """

    employee_id: str
    payroll_id: str
    deduction_amount: Decimal
    deduction_date: date
    applied_amount: Decimal | None = None

    @property
    def unapplied_amount(self) -> Decimal:
        """Requested amount that found no outstanding balance to draw from."""
        if self.applied_amount is None:
            return Decimal("0")
        return max(self.deduction_amount - self.applied_amount, Decimal("0"))

    def to_dict(self) -> dict[str, Any]:
        data: dict[str, Any] = {
            "employeeId": self.employee_id,
            "payrollId": self.payroll_id,
            "deductionAmount": str(self.deduction_amount),
            "deductionDate": self.deduction_date.isoformat(),
        }
        if self.applied_amount is not None:
            data["appliedAmount"] = str(self.applied_amount)
        return data

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> AdvanceDeduction:
        applied = data.get("appliedAmount")
        return cls(
            employee_id=str(data["employeeId"]),
            payroll_id=str(data["payrollId"]),
            deduction_amount=to_decimal(data["deductionAmount"]),
            deduction_date=date.fromisoformat(str(data["deductionDate"])[:10]),
            applied_amount=to_decimal(applied) if applied is not None else None,
        )

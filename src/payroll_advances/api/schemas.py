"""Pydantic schemas for API request/response models.

Request models are the validation boundary in front of the ledger: the
ledger stores whatever it is given, so identifiers must be non-empty and
amounts positive with at most two decimal places before they reach it.
"""

import datetime as dt
from decimal import Decimal
from typing import Annotated

from pydantic import BaseModel, ConfigDict, Field, StringConstraints, model_validator

from payroll_advances.ledger import AdvanceStatus
from payroll_advances.services import PayrollRecord, PayrollStatus

NonEmptyStr = Annotated[str, StringConstraints(strip_whitespace=True, min_length=1, max_length=200)]
PositiveAmount = Annotated[Decimal, Field(gt=0, max_digits=14, decimal_places=2)]
NonNegativeAmount = Annotated[Decimal, Field(ge=0, max_digits=14, decimal_places=2)]


# ============================================================================
# Advance schemas
# ============================================================================


class GrantAdvanceRequest(BaseModel):
    """Schema for granting an advance."""

    employee_id: NonEmptyStr
    amount: PositiveAmount
    reason: NonEmptyStr


class ApplyDeductionRequest(BaseModel):
    """Schema for recovering advances through a payroll deduction."""

    employee_id: NonEmptyStr
    payroll_id: NonEmptyStr
    deduction_amount: PositiveAmount


class AdvanceResponse(BaseModel):
    """Schema for an advance."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    employee_id: str
    amount: Decimal
    date: dt.date
    reason: str
    status: AdvanceStatus
    remaining_balance: Decimal


class AdvanceListResponse(BaseModel):
    """Schema for listing advances."""

    items: list[AdvanceResponse]
    total: int


class DeductionResponse(BaseModel):
    """Schema for an advance deduction record."""

    model_config = ConfigDict(from_attributes=True)

    employee_id: str
    payroll_id: str
    deduction_amount: Decimal
    applied_amount: Decimal | None = None
    unapplied_amount: Decimal
    deduction_date: dt.date


class DeductionListResponse(BaseModel):
    """Schema for listing deduction records."""

    items: list[DeductionResponse]
    total: int


class BalanceResponse(BaseModel):
    """Schema for an employee's outstanding advance balance."""

    employee_id: str
    outstanding_balance: Decimal


class AdvanceSummaryResponse(BaseModel):
    """Schema for ledger-wide advance totals."""

    total_advances_given: Decimal
    total_outstanding_advances: Decimal


class AdvanceReasonResponse(BaseModel):
    """Schema for an advance reason option."""

    value: str
    label: str


# ============================================================================
# Payroll schemas
# ============================================================================


class PayrollRecordSchema(BaseModel):
    """Schema for a payroll record supplied by the caller."""

    model_config = ConfigDict(from_attributes=True)

    id: NonEmptyStr
    employee_id: NonEmptyStr
    employee_name: str
    position: str = ""
    base_salary: NonNegativeAmount
    bonus: NonNegativeAmount = Decimal("0")
    deductions: NonNegativeAmount = Decimal("0")
    net_pay: Decimal | None = None
    payment_date: dt.date
    status: PayrollStatus = PayrollStatus.PENDING
    payment_method: str = "Bank Transfer"
    bonus_reason: str | None = None

    @model_validator(mode="after")
    def check_net_pay(self) -> "PayrollRecordSchema":
        expected = self.base_salary + self.bonus - self.deductions
        if self.net_pay is not None and self.net_pay != expected:
            raise ValueError(
                f"net_pay {self.net_pay} does not equal base_salary + bonus - deductions ({expected})"
            )
        return self

    def to_record(self) -> PayrollRecord:
        """Convert to a domain record, computing net pay when omitted."""
        net_pay = self.net_pay
        if net_pay is None:
            net_pay = self.base_salary + self.bonus - self.deductions
        return PayrollRecord(
            id=self.id,
            employee_id=self.employee_id,
            employee_name=self.employee_name,
            position=self.position,
            base_salary=self.base_salary,
            bonus=self.bonus,
            deductions=self.deductions,
            net_pay=net_pay,
            payment_date=self.payment_date,
            status=self.status,
            payment_method=self.payment_method,
            bonus_reason=self.bonus_reason,
        )


class AddPayrollDeductionRequest(BaseModel):
    """Schema for adding a manual deduction to a payroll record."""

    record: PayrollRecordSchema
    amount: PositiveAmount
    reason: NonEmptyStr


class FinalizePayrollRequest(BaseModel):
    """Schema for finalizing a payroll record.

    Omit ``advance_deduction`` to recover the suggested amount.
    """

    record: PayrollRecordSchema
    advance_deduction: NonNegativeAmount | None = None


class FinalizePayrollResponse(BaseModel):
    """Schema for a finalized payroll record."""

    record: PayrollRecordSchema
    advance_deduction: DeductionResponse | None = None


class PayrollSummaryRequest(BaseModel):
    """Schema for summarizing payroll records."""

    records: list[PayrollRecordSchema]
    period: Annotated[str, Field(pattern=r"^\d{4}-(0[1-9]|1[0-2])$")]


class PayrollSummaryResponse(BaseModel):
    """Schema for payroll summary figures."""

    model_config = ConfigDict(from_attributes=True)

    period: str
    total_paid: Decimal
    total_bonus: Decimal
    pending_count: int
    employees_paid: int


# ============================================================================
# Error schemas
# ============================================================================


class ErrorResponse(BaseModel):
    """Schema for error responses."""

    detail: str
    code: str | None = None

"""Payroll reconciliation API endpoints."""

from fastapi import APIRouter, status

from payroll_advances.api.dependencies import Payroll
from payroll_advances.api.schemas import (
    AddPayrollDeductionRequest,
    DeductionResponse,
    ErrorResponse,
    FinalizePayrollRequest,
    FinalizePayrollResponse,
    PayrollRecordSchema,
    PayrollSummaryRequest,
    PayrollSummaryResponse,
)

router = APIRouter(prefix="/payroll", tags=["payroll"])


@router.post(
    "/deductions",
    response_model=PayrollRecordSchema,
    responses={409: {"model": ErrorResponse}},
)
async def add_payroll_deduction(
    service: Payroll, payload: AddPayrollDeductionRequest
) -> PayrollRecordSchema:
    """Add a manual deduction to a payroll record and recompute net pay."""
    record = service.add_deduction(payload.record.to_record(), payload.amount, payload.reason)
    return PayrollRecordSchema.model_validate(record)


@router.post(
    "/finalize",
    response_model=FinalizePayrollResponse,
    responses={409: {"model": ErrorResponse}},
)
async def finalize_payroll(
    service: Payroll, payload: FinalizePayrollRequest
) -> FinalizePayrollResponse:
    """Recover advances from a payroll record and mark it paid."""
    result = service.finalize(payload.record.to_record(), payload.advance_deduction)
    return FinalizePayrollResponse(
        record=PayrollRecordSchema.model_validate(result.record),
        advance_deduction=(
            DeductionResponse.model_validate(result.advance_deduction)
            if result.advance_deduction is not None
            else None
        ),
    )


@router.post(
    "/summary",
    response_model=PayrollSummaryResponse,
    status_code=status.HTTP_200_OK,
)
async def summarize_payroll(
    service: Payroll, payload: PayrollSummaryRequest
) -> PayrollSummaryResponse:
    """Summarize payroll records for a period."""
    records = [r.to_record() for r in payload.records]
    return PayrollSummaryResponse.model_validate(service.summarize(records, payload.period))

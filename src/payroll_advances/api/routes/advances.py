"""Advance ledger API endpoints.

Handlers are ``async def`` and call the ledger directly, so ledger
operations run one at a time on the event loop and never interleave.
"""

from typing import Annotated

from fastapi import APIRouter, Path, Query, status

from payroll_advances.api.dependencies import Ledger
from payroll_advances.api.schemas import (
    AdvanceListResponse,
    AdvanceReasonResponse,
    AdvanceResponse,
    AdvanceSummaryResponse,
    ApplyDeductionRequest,
    BalanceResponse,
    DeductionListResponse,
    DeductionResponse,
    ErrorResponse,
    GrantAdvanceRequest,
)
from payroll_advances.ledger import AdvanceReason

router = APIRouter(tags=["advances"])


# ============================================================================
# Advances
# ============================================================================


@router.post(
    "/advances",
    response_model=AdvanceResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def grant_advance(ledger: Ledger, payload: GrantAdvanceRequest) -> AdvanceResponse:
    """Grant an approved advance to an employee."""
    advance = ledger.grant_advance(payload.employee_id, payload.amount, payload.reason)
    return AdvanceResponse.model_validate(advance)


@router.get("/advances/summary", response_model=AdvanceSummaryResponse)
async def get_advance_summary(ledger: Ledger) -> AdvanceSummaryResponse:
    """Totals across all employees' approved advances."""
    return AdvanceSummaryResponse(
        total_advances_given=ledger.get_total_advances_given(),
        total_outstanding_advances=ledger.get_total_outstanding_advances(),
    )


@router.get("/advances/reasons", response_model=list[AdvanceReasonResponse])
async def list_advance_reasons() -> list[AdvanceReasonResponse]:
    """Reason options offered when requesting an advance."""
    return [AdvanceReasonResponse(value=r.value, label=r.label) for r in AdvanceReason]


# ============================================================================
# Deductions
# ============================================================================


@router.post(
    "/advances/deductions",
    response_model=DeductionResponse,
    status_code=status.HTTP_201_CREATED,
    responses={422: {"model": ErrorResponse}},
)
async def apply_deduction(ledger: Ledger, payload: ApplyDeductionRequest) -> DeductionResponse:
    """Recover outstanding advances, oldest first, for a payroll run."""
    deduction = ledger.apply_deduction(
        payload.employee_id, payload.deduction_amount, payload.payroll_id
    )
    return DeductionResponse.model_validate(deduction)


@router.get("/advances/deductions", response_model=DeductionListResponse)
async def list_deductions(
    ledger: Ledger,
    employee_id: Annotated[str | None, Query(min_length=1)] = None,
) -> DeductionListResponse:
    """List deduction records, optionally for one employee."""
    deductions = ledger.get_deductions(employee_id)
    return DeductionListResponse(
        items=[DeductionResponse.model_validate(d) for d in deductions],
        total=len(deductions),
    )


# ============================================================================
# Per-employee views
# ============================================================================


@router.get("/employees/{employee_id}/advances", response_model=AdvanceListResponse)
async def get_advance_history(
    ledger: Ledger,
    employee_id: Annotated[str, Path(min_length=1)],
) -> AdvanceListResponse:
    """All advances for an employee in the order they were granted."""
    advances = ledger.get_history(employee_id)
    return AdvanceListResponse(
        items=[AdvanceResponse.model_validate(a) for a in advances],
        total=len(advances),
    )


@router.get("/employees/{employee_id}/advances/balance", response_model=BalanceResponse)
async def get_outstanding_balance(
    ledger: Ledger,
    employee_id: Annotated[str, Path(min_length=1)],
) -> BalanceResponse:
    """Outstanding advance balance for an employee."""
    return BalanceResponse(
        employee_id=employee_id,
        outstanding_balance=ledger.get_outstanding_balance(employee_id),
    )

"""
Expense allocation routes.
"""
from fastapi import APIRouter, HTTPException, status
from splitledger.core.config import settings
from splitledger.schemas.expense import AllocateRequest, Expense, ExpenseAllocation, ReallocateRequest
from splitledger.services.allocation_service import allocate_expense, reallocate_without_participant

router = APIRouter(prefix="/expenses", tags=["expenses"])


@router.post("/allocate", response_model=ExpenseAllocation)
async def allocate(request: AllocateRequest):
    """Validate an expense form and compute its payer and share allocations."""
    result = allocate_expense(
        request.expense,
        request.valid_participant_ids,
        request.fallback_currency or settings.DEFAULT_CURRENCY
    )
    if not result.is_ok:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.reason
        )
    return result.value


@router.post("/reallocate", response_model=Expense)
async def reallocate(request: ReallocateRequest):
    """Remove a participant from an expense and rebalance the remaining allocations."""
    result = reallocate_without_participant(request.expense, request.membership_id)
    if not result.is_ok:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=result.reason
        )
    return result.value

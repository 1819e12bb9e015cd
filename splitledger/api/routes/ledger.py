"""
Group ledger routes.
"""
from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from splitledger.core.config import settings
from splitledger.db.session import get_db
from splitledger.schemas.settlement import LedgerRequest, LedgerResponse, SettlementStatusResponse
from splitledger.services.balance_service import is_settled
from splitledger.services.ledger_service import build_ledger_summary, build_settlement_ledger, merge_settlement_status
from splitledger.services.settlement_status_service import list_settlement_statuses

router = APIRouter(prefix="/ledger", tags=["ledger"])


@router.post("/{group_id}", response_model=LedgerResponse)
async def compute_ledger(
    group_id: str,
    request: LedgerRequest,
    db: Session = Depends(get_db)
):
    """Compute balances and suggested transfers, merged with tracked statuses."""
    ledger = build_settlement_ledger(
        request.expenses,
        request.members,
        epsilon_cents=settings.SETTLEMENT_EPSILON_CENTS
    )
    
    tracked = [
        SettlementStatusResponse.model_validate(record)
        for record in list_settlement_statuses(group_id, db)
    ]
    currency = (request.currency or settings.DEFAULT_CURRENCY).upper()
    
    return LedgerResponse(
        balances=ledger.balances,
        settlements=merge_settlement_status(ledger.settlements, tracked),
        tracked_settlements=tracked,
        summary=build_ledger_summary(ledger, currency),
        is_settled=is_settled(ledger.balances, tolerance_cents=settings.SETTLEMENT_EPSILON_CENTS)
    )

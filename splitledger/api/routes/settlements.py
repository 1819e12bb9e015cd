"""
Settlement status routes.
"""
from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.orm import Session
from typing import List
from splitledger.db.session import get_db
from splitledger.schemas.settlement import SettlementStatusResponse, SettlementStatusUpdate
from splitledger.services.settlement_status_service import list_settlement_statuses, upsert_settlement_status

router = APIRouter(prefix="/settlements", tags=["settlements"])


@router.get("/{group_id}", response_model=List[SettlementStatusResponse])
async def get_settlement_statuses(
    group_id: str,
    db: Session = Depends(get_db)
):
    """Get tracked settlement statuses for a group."""
    return list_settlement_statuses(group_id, db)


@router.put("/{group_id}", response_model=SettlementStatusResponse)
async def update_settlement_status(
    group_id: str,
    update: SettlementStatusUpdate,
    db: Session = Depends(get_db)
):
    """Create or update the status of a suggested transfer."""
    if update.from_membership_id == update.to_membership_id:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="A member cannot settle with themselves"
        )
    
    try:
        return upsert_settlement_status(
            group_id,
            update.from_membership_id,
            update.to_membership_id,
            update.status,
            amount_cents=update.amount_cents,
            db=db
        )
    except ValueError as e:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(e)
        )

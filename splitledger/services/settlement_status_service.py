"""
Settlement status service persisting human-confirmed transfer statuses.
"""
import logging
from datetime import datetime, timezone
from typing import List, Optional
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session
from splitledger.models.settlement import SettlementRecord, SettlementStatus

logger = logging.getLogger(__name__)


def list_settlement_statuses(group_id: str, db: Session) -> List[SettlementRecord]:
    """Get all tracked settlement statuses for a group."""
    return db.query(SettlementRecord).filter(
        SettlementRecord.group_id == group_id
    ).order_by(SettlementRecord.id).all()


def _find_record(group_id: str, from_membership_id: str, to_membership_id: str, db: Session) -> Optional[SettlementRecord]:
    return db.query(SettlementRecord).filter(
        SettlementRecord.group_id == group_id,
        SettlementRecord.from_membership_id == from_membership_id,
        SettlementRecord.to_membership_id == to_membership_id
    ).first()


def upsert_settlement_status(
    group_id: str,
    from_membership_id: str,
    to_membership_id: str,
    status: SettlementStatus,
    db: Session,
    amount_cents: Optional[int] = None
) -> SettlementRecord:
    """
    Create or update the status of the (from, to) transfer in a group.

    A new record needs an amount. Moving to REQUESTED stamps requested_at and
    moving to PAID stamps paid_at; the amount of an existing record is only
    replaced when a new one is given. If another request created the same
    pair in the meantime, that record is updated instead.
    """
    record = _find_record(group_id, from_membership_id, to_membership_id, db)

    if record is None:
        if amount_cents is None:
            raise ValueError("Amount is required when tracking a new settlement")
        record = SettlementRecord(
            group_id=group_id,
            from_membership_id=from_membership_id,
            to_membership_id=to_membership_id,
            amount_cents=amount_cents
        )
        db.add(record)
        try:
            db.flush()
        except IntegrityError:
            db.rollback()
            logger.info(
                f"Settlement {from_membership_id} -> {to_membership_id} in group {group_id} "
                f"was created concurrently; updating it"
            )
            record = _find_record(group_id, from_membership_id, to_membership_id, db)
            if record is None:
                raise
            record.amount_cents = amount_cents
    elif amount_cents is not None:
        record.amount_cents = amount_cents

    now = datetime.now(timezone.utc)
    record.status = status
    if status == SettlementStatus.REQUESTED:
        record.requested_at = now
    if status == SettlementStatus.PAID:
        record.paid_at = now

    db.commit()
    db.refresh(record)

    logger.info(
        f"Settlement {from_membership_id} -> {to_membership_id} in group {group_id} marked {status.value}"
    )
    return record

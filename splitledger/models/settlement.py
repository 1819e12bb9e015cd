"""
Settlement status model tracking human-confirmed transfers.
"""
from sqlalchemy import Column, String, Integer, DateTime, Enum as SQLEnum, UniqueConstraint
from splitledger.db.base import BaseModel
import enum


class SettlementStatus(str, enum.Enum):
    """Settlement status enumeration."""
    PENDING = "PENDING"
    REQUESTED = "REQUESTED"
    PAID = "PAID"
    CANCELLED = "CANCELLED"


class SettlementRecord(BaseModel):
    """Status of a suggested transfer, keyed by the (from, to) membership pair."""
    __tablename__ = "settlement_records"
    __table_args__ = (
        UniqueConstraint("group_id", "from_membership_id", "to_membership_id", name="uq_settlement_pair"),
    )
    
    group_id = Column(String(64), nullable=False, index=True)
    from_membership_id = Column(String(64), nullable=False, index=True)
    to_membership_id = Column(String(64), nullable=False, index=True)
    amount_cents = Column(Integer, nullable=False)  # Amount at the time the record was created
    status = Column(SQLEnum(SettlementStatus), default=SettlementStatus.PENDING, nullable=False)
    requested_at = Column(DateTime, nullable=True)
    paid_at = Column(DateTime, nullable=True)

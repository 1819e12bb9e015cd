"""
Pydantic schemas for balances and settlement suggestions.
"""
from pydantic import BaseModel, Field
from typing import List, Optional
from datetime import datetime
from splitledger.models.settlement import SettlementStatus
from splitledger.schemas.expense import Expense
from splitledger.schemas.member import Participant


class BalanceEntry(BaseModel):
    """Net position of one participant across a group's expenses."""
    membership_id: str
    paid_cents: int
    owed_cents: int
    net_cents: int  # paid - owed; positive = should receive
    member: Participant


class SettlementSuggestion(BaseModel):
    """A proposed transfer from a debtor to a creditor."""
    from_membership_id: str
    to_membership_id: str
    amount_cents: int
    from_member: Participant
    to_member: Participant
    status: Optional[SettlementStatus] = None  # Filled in from the status store only


class SettlementLedger(BaseModel):
    """Balances and the transfers that settle them."""
    balances: List[BalanceEntry]
    settlements: List[SettlementSuggestion]


class LedgerRequest(BaseModel):
    """Schema for ledger computation."""
    expenses: List[Expense] = []
    members: List[Participant]
    currency: Optional[str] = None


class SettlementStatusUpdate(BaseModel):
    """Schema for updating the status of a suggested transfer."""
    from_membership_id: str
    to_membership_id: str
    amount_cents: Optional[int] = Field(default=None, gt=0)  # Required when the pair is new
    status: SettlementStatus


class SettlementStatusResponse(BaseModel):
    """Schema for a tracked settlement status."""
    id: int
    group_id: str
    from_membership_id: str
    to_membership_id: str
    amount_cents: int
    status: SettlementStatus
    requested_at: Optional[datetime] = None
    paid_at: Optional[datetime] = None
    created_at: datetime
    updated_at: datetime
    
    class Config:
        from_attributes = True


class LedgerResponse(SettlementLedger):
    """Schema for ledger response merged with tracked statuses."""
    tracked_settlements: List[SettlementStatusResponse] = []
    summary: str
    is_settled: bool

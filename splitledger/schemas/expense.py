"""
Pydantic schemas for Expense entity.
"""
from pydantic import BaseModel, Field
from typing import Any, List, Optional
from datetime import datetime


class PayerAllocation(BaseModel):
    """Money actually paid by one participant for an expense."""
    membership_id: str
    amount_cents: int = Field(gt=0)


class ShareAllocation(BaseModel):
    """Portion of an expense a participant is responsible for."""
    membership_id: str
    weight: float = Field(gt=0)
    amount_cents: int


class ExpenseAllocation(BaseModel):
    """Cent-exact allocation of an expense, ready to persist."""
    description: str
    currency: str
    total_amount_cents: int
    occurred_at: datetime
    payers: List[PayerAllocation]
    shares: List[ShareAllocation]


class Expense(ExpenseAllocation):
    """Stored expense with resolved payer and share allocations."""
    id: str
    description: str = ""


class ExpensePayload(BaseModel):
    """
    Raw expense form.
    
    Fields are deliberately untyped: the allocation engine parses amounts and
    dates, coerces ids to strings and drops malformed payer/share entries.
    """
    description: Any = None
    total_amount: Any = None
    currency: Any = None
    occurred_at: Any = None
    payers: List[Any] = []
    shares: List[Any] = []


class AllocateRequest(BaseModel):
    """Schema for expense allocation."""
    expense: ExpensePayload
    valid_participant_ids: List[Any]  # Compared as strings by the allocation engine
    fallback_currency: Optional[str] = None  # Group currency; settings default when omitted


class ReallocateRequest(BaseModel):
    """Schema for removing a participant from an existing expense."""
    expense: Expense
    membership_id: str

"""
Pydantic schemas for group participants.
"""
from pydantic import BaseModel
from typing import Literal, Optional


class Participant(BaseModel):
    """A group membership as seen by the ledger. Owned by the membership system."""
    membership_id: str
    user_id: Optional[str] = None
    name: Optional[str] = None
    email: Optional[str] = None
    role: Literal["OWNER", "MEMBER"] = "MEMBER"
    
    @property
    def display_name(self) -> str:
        return self.name or self.email or self.membership_id

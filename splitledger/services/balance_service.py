"""
Balance service folding a group's expenses into one net position per member.
"""
import logging
from typing import Dict, List, Sequence
from splitledger.schemas.expense import Expense
from splitledger.schemas.member import Participant
from splitledger.schemas.settlement import BalanceEntry

logger = logging.getLogger(__name__)


def compute_balances(expenses: Sequence[Expense], members: Sequence[Participant]) -> List[BalanceEntry]:
    """
    Calculate paid, owed and net cents for every member of the roster.
    
    Members without activity are reported at zero. Allocations naming a
    membership that is not on the roster are ignored.
    """
    roster: Dict[str, Participant] = {}
    for member in members or []:
        roster.setdefault(member.membership_id, member)
    
    paid: Dict[str, int] = {membership_id: 0 for membership_id in roster}
    owed: Dict[str, int] = {membership_id: 0 for membership_id in roster}
    
    for expense in expenses or []:
        for payer in expense.payers:
            if payer.membership_id in paid:
                paid[payer.membership_id] += payer.amount_cents
            else:
                logger.debug(f"Expense {expense.id}: payer {payer.membership_id} is not on the roster")
        for share in expense.shares:
            if share.membership_id in owed:
                owed[share.membership_id] += share.amount_cents
            else:
                logger.debug(f"Expense {expense.id}: participant {share.membership_id} is not on the roster")
    
    balances = [
        BalanceEntry(
            membership_id=membership_id,
            paid_cents=paid[membership_id],
            owed_cents=owed[membership_id],
            net_cents=paid[membership_id] - owed[membership_id],
            member=member
        )
        for membership_id, member in roster.items()
    ]
    
    drift = sum(entry.net_cents for entry in balances)
    if drift != 0:
        logger.warning(f"Net balances do not sum to zero (off by {drift} cents); expense data is inconsistent")
    
    return balances


def is_settled(balances: Sequence[BalanceEntry], tolerance_cents: int = 0) -> bool:
    """A group is settled when every net balance is within the tolerance."""
    return all(abs(entry.net_cents) <= tolerance_cents for entry in balances)

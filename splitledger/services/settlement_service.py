"""
Settlement service reducing net balances to a short list of transfers.
"""
import logging
from typing import List, Sequence
from splitledger.schemas.settlement import BalanceEntry, SettlementSuggestion

logger = logging.getLogger(__name__)


def simplify_settlements(balances: Sequence[BalanceEntry], epsilon_cents: int = 1) -> List[SettlementSuggestion]:
    """
    Suggest transfers that bring every balance to zero.
    
    Greedy: the most indebted member pays the member owed the most, as much as
    either can absorb, until one side runs out. Ties keep the order of
    `balances`. A party whose residual is within `epsilon_cents` counts as
    settled, which swallows one-cent rounding leftovers. The result is small
    (at most n - 1 transfers) but not guaranteed minimal.
    """
    # Working copies: (entry, remaining net cents)
    debtors = [(entry, entry.net_cents) for entry in balances if entry.net_cents < 0]
    creditors = [(entry, entry.net_cents) for entry in balances if entry.net_cents > 0]
    
    debtors.sort(key=lambda x: x[1])  # most negative first
    creditors.sort(key=lambda x: x[1], reverse=True)  # most positive first
    
    settlements = []
    debt_idx = 0
    cred_idx = 0
    
    while debt_idx < len(debtors) and cred_idx < len(creditors):
        debtor, debt_net = debtors[debt_idx]
        creditor, cred_net = creditors[cred_idx]
        
        amount = min(cred_net, -debt_net)
        if amount <= 0:
            if debt_net >= 0:
                debt_idx += 1
            if cred_net <= 0:
                cred_idx += 1
            continue
        
        settlements.append(SettlementSuggestion(
            from_membership_id=debtor.membership_id,
            to_membership_id=creditor.membership_id,
            amount_cents=amount,
            from_member=debtor.member,
            to_member=creditor.member
        ))
        
        debt_net += amount
        cred_net -= amount
        
        if abs(debt_net) <= epsilon_cents:
            debt_net = 0
        if abs(cred_net) <= epsilon_cents:
            cred_net = 0
        debtors[debt_idx] = (debtor, debt_net)
        creditors[cred_idx] = (creditor, cred_net)
        
        if debt_net == 0:
            debt_idx += 1
        if cred_net == 0:
            cred_idx += 1
    
    logger.debug(f"Reduced {len(debtors) + len(creditors)} open balances to {len(settlements)} transfer(s)")
    return settlements

"""
Ledger service assembling balances and settlement suggestions for a group.
"""
import logging
from typing import Iterable, List, Sequence
from splitledger.core.utils import format_cents
from splitledger.models.settlement import SettlementStatus
from splitledger.schemas.expense import Expense
from splitledger.schemas.member import Participant
from splitledger.schemas.settlement import SettlementLedger, SettlementSuggestion
from splitledger.services.balance_service import compute_balances
from splitledger.services.settlement_service import simplify_settlements

logger = logging.getLogger(__name__)


def build_settlement_ledger(
    expenses: Sequence[Expense],
    members: Sequence[Participant],
    epsilon_cents: int = 1
) -> SettlementLedger:
    """Compute balances from the expenses, then the transfers that settle them."""
    balances = compute_balances(expenses, members)
    settlements = simplify_settlements(balances, epsilon_cents=epsilon_cents)
    logger.debug(f"Ledger built from {len(expenses)} expense(s) for {len(balances)} member(s)")
    return SettlementLedger(balances=balances, settlements=settlements)


def merge_settlement_status(
    settlements: Sequence[SettlementSuggestion],
    records: Iterable
) -> List[SettlementSuggestion]:
    """
    Attach tracked statuses to suggested transfers.

    `records` are objects with from_membership_id, to_membership_id and status
    attributes (e.g. SettlementRecord rows). A suggestion takes the status of
    the record for the exact same (from, to) pair; unmatched suggestions are
    PENDING. The suggestions themselves are not modified.
    """
    status_by_pair = {}
    for record in records:
        status_by_pair.setdefault((record.from_membership_id, record.to_membership_id), record.status)

    return [
        settlement.model_copy(update={
            "status": status_by_pair.get(
                (settlement.from_membership_id, settlement.to_membership_id),
                SettlementStatus.PENDING
            )
        })
        for settlement in settlements
    ]


def build_ledger_summary(ledger: SettlementLedger, currency: str) -> str:
    """Render a ledger as human-readable text."""
    total_paid = sum(entry.paid_cents for entry in ledger.balances)

    summary_lines = []
    summary_lines.append(f"Total expenses: {format_cents(total_paid, currency)}")
    summary_lines.append(f"Participants: {len(ledger.balances)}")
    summary_lines.append("\nNet balances:")
    for entry in ledger.balances:
        sign = "+" if entry.net_cents > 0 else ""
        summary_lines.append(f"  {entry.member.display_name}: {sign}{format_cents(entry.net_cents, currency)}")
    summary_lines.append("\nTransfers:")
    if not ledger.settlements:
        summary_lines.append("  Everyone is settled up")
    for settlement in ledger.settlements:
        summary_lines.append(
            f"  {settlement.from_member.display_name} -> {settlement.to_member.display_name}: "
            f"{format_cents(settlement.amount_cents, currency)}"
        )
    return "\n".join(summary_lines)

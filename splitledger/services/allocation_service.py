"""
Allocation service turning a submitted expense into cent-exact payer and share allocations.
"""
import logging
import math
from decimal import Decimal, ROUND_HALF_UP
from typing import Any, Iterable, List, Mapping, Optional, Sequence, Union
from datetime import datetime
from pydantic import BaseModel
from splitledger.core.exceptions import ValidationError
from splitledger.core.result import Err, Ok, Result
from splitledger.core.utils import normalize_datetime, parse_currency_to_cents
from splitledger.schemas.expense import Expense, ExpenseAllocation, PayerAllocation, ShareAllocation

logger = logging.getLogger(__name__)


def split_by_weight(total_cents: int, weights: Sequence[Union[int, float, Decimal]]) -> List[int]:
    """
    Split `total_cents` proportionally to `weights`.

    Every part but the last is rounded half-up to the nearest cent. The last
    part receives whatever is left, so the parts always add up to
    `total_cents` and the remainder lands on the last weight in the order given.
    Because the other parts are rounded independently, the last part can end
    up smaller than its proportional amount, or even negative when the total
    is tiny next to the number of weights (2 cents over four equal weights
    gives [1, 1, 1, -1]).
    """
    decimal_weights = [Decimal(str(weight)) for weight in weights]
    total_weight = sum(decimal_weights, Decimal(0))
    if total_weight <= 0:
        raise ValidationError("Participant weights must total more than zero")

    total = Decimal(total_cents)
    parts = []
    distributed = 0
    for index, weight in enumerate(decimal_weights):
        if index == len(decimal_weights) - 1:
            part = total_cents - distributed
        else:
            part = int((weight / total_weight * total).quantize(Decimal("1"), rounding=ROUND_HALF_UP))
        distributed += part
        parts.append(part)
    return parts


def _sanitize_weight(value: Any) -> Optional[float]:
    """Return a usable positive weight, or None."""
    if isinstance(value, bool):
        return None
    if isinstance(value, str):
        try:
            value = float(value.strip())
        except ValueError:
            return None
    if not isinstance(value, (int, float, Decimal)):
        return None
    parsed = float(value)
    if not math.isfinite(parsed) or parsed <= 0:
        return None
    return parsed


def _parse_payers(raw_payers: Any, valid_ids: set) -> List[PayerAllocation]:
    payers = []
    for entry in raw_payers if isinstance(raw_payers, list) else []:
        if not isinstance(entry, Mapping) or "membership_id" not in entry or "amount" not in entry:
            continue
        membership_id = str(entry["membership_id"])
        amount_cents = parse_currency_to_cents(entry["amount"])
        if membership_id not in valid_ids or not amount_cents or amount_cents <= 0:
            logger.debug(f"Dropping payer entry {entry!r}")
            continue
        payers.append(PayerAllocation(membership_id=membership_id, amount_cents=amount_cents))
    return payers


def _parse_share_weights(raw_shares: Any, valid_ids: set) -> List[tuple]:
    weights = []
    for entry in raw_shares if isinstance(raw_shares, list) else []:
        if not isinstance(entry, Mapping) or "membership_id" not in entry or "weight" not in entry:
            continue
        membership_id = str(entry["membership_id"])
        weight = _sanitize_weight(entry["weight"])
        if membership_id not in valid_ids or weight is None:
            logger.debug(f"Dropping share entry {entry!r}")
            continue
        weights.append((membership_id, weight))
    return weights


def _ensure_unique(membership_ids: Iterable[str], message: str) -> None:
    seen = set()
    for membership_id in membership_ids:
        if membership_id in seen:
            raise ValidationError(message)
        seen.add(membership_id)


def parse_expense_payload(
    body: Union[Mapping[str, Any], BaseModel, None],
    valid_participant_ids: Iterable[str],
    fallback_currency: str,
    now: Optional[datetime] = None
) -> ExpenseAllocation:
    """
    Validate a submitted expense and compute its allocations.

    Payer and share entries naming unknown participants (or carrying unusable
    amounts/weights) are dropped; everything else that is wrong raises
    ValidationError. Payer amounts are taken as given and must add up to the
    total exactly. Share amounts are derived from the weights with
    `split_by_weight`, in submission order.
    """
    if isinstance(body, BaseModel):
        body = body.model_dump()
    payload = body if isinstance(body, Mapping) else {}

    description_raw = payload.get("description")
    currency_raw = payload.get("currency")

    description = description_raw.strip() if isinstance(description_raw, str) else ""
    if isinstance(currency_raw, str) and currency_raw.strip():
        currency = currency_raw.strip().upper()
    else:
        currency = fallback_currency
    total_amount_cents = parse_currency_to_cents(payload.get("total_amount"))
    occurred_at = normalize_datetime(payload.get("occurred_at"), now=now)

    if not description:
        raise ValidationError("Description is required")

    if not total_amount_cents or total_amount_cents <= 0:
        raise ValidationError("Total amount must be greater than zero")

    valid_ids = {str(membership_id) for membership_id in valid_participant_ids}

    payers = _parse_payers(payload.get("payers"), valid_ids)
    if not payers:
        raise ValidationError("At least one payer with an amount is required")
    _ensure_unique((p.membership_id for p in payers), "Duplicate payer entries detected")

    total_paid_cents = sum(p.amount_cents for p in payers)
    if total_paid_cents != total_amount_cents:
        raise ValidationError("Payer amounts must add up to the total")

    share_weights = _parse_share_weights(payload.get("shares"), valid_ids)
    if not share_weights:
        raise ValidationError("Include at least one participant with a weight")
    _ensure_unique((membership_id for membership_id, _ in share_weights), "Duplicate participant entries detected")

    amounts = split_by_weight(total_amount_cents, [weight for _, weight in share_weights])
    shares = [
        ShareAllocation(membership_id=membership_id, weight=weight, amount_cents=amount)
        for (membership_id, weight), amount in zip(share_weights, amounts)
    ]

    return ExpenseAllocation(
        description=description,
        currency=currency,
        total_amount_cents=total_amount_cents,
        occurred_at=occurred_at,
        payers=payers,
        shares=shares
    )


def allocate_expense(
    body: Union[Mapping[str, Any], BaseModel, None],
    valid_participant_ids: Iterable[str],
    fallback_currency: str,
    now: Optional[datetime] = None
) -> Result[ExpenseAllocation]:
    """Allocate an expense, returning Ok(allocation) or Err(validation error)."""
    try:
        allocation = parse_expense_payload(body, valid_participant_ids, fallback_currency, now=now)
    except ValidationError as e:
        logger.info(f"Rejected expense payload: {e.reason}")
        return Err(e)

    logger.debug(
        f"Allocated {allocation.total_amount_cents} {allocation.currency} across "
        f"{len(allocation.payers)} payer(s) and {len(allocation.shares)} share(s)"
    )
    return Ok(allocation)


def reallocate_without_participant(expense: Expense, membership_id: str) -> Result[Expense]:
    """
    Remove a participant from an expense and rebalance what is left.

    Remaining shares keep their weights and are re-split over the full total.
    Whatever the removed participant paid is spread over the remaining payers
    in proportion to what they paid. Both use `split_by_weight`, so the usual
    last-entry-absorbs-the-remainder rule applies.
    """
    involved = {p.membership_id for p in expense.payers} | {s.membership_id for s in expense.shares}
    if membership_id not in involved:
        return Ok(expense)

    remaining_shares = [s for s in expense.shares if s.membership_id != membership_id]
    remaining_payers = [p for p in expense.payers if p.membership_id != membership_id]

    if not remaining_shares:
        return Err(ValidationError("Expense would have no participants left"))
    if not remaining_payers:
        return Err(ValidationError("Expense would have no payers left"))

    removed_paid = sum(p.amount_cents for p in expense.payers if p.membership_id == membership_id)
    payer_amounts = [p.amount_cents for p in remaining_payers]
    if removed_paid:
        extra = split_by_weight(removed_paid, payer_amounts)
        payer_amounts = [amount + added for amount, added in zip(payer_amounts, extra)]

    share_amounts = split_by_weight(expense.total_amount_cents, [s.weight for s in remaining_shares])

    logger.info(f"Rebalanced expense {expense.id} without participant {membership_id}")
    return Ok(expense.model_copy(update={
        "payers": [
            PayerAllocation(membership_id=p.membership_id, amount_cents=amount)
            for p, amount in zip(remaining_payers, payer_amounts)
        ],
        "shares": [
            ShareAllocation(membership_id=s.membership_id, weight=s.weight, amount_cents=amount)
            for s, amount in zip(remaining_shares, share_amounts)
        ],
    }))

"""Bill-splitting allocation engine.

Every call recomputes from the receipt, the participant names and the
assignment map; nothing is cached between calls.

Item cost is divided among claimants in proportion to their claimed share
of the total claimed quantity, not of the item's nominal quantity: a single
claimant pays the whole line even if they claimed one of three units. An
item nobody claimed is charged to nobody. Tax follows each participant's
share of the receipt subtotal.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from decimal import Decimal

from splitbill.domain.assignment import AssignmentMap
from splitbill.domain.participants import active_participants
from splitbill.domain.receipt import Receipt
from splitbill.domain.settlement import (
    ItemShare,
    ParticipantSettlement,
    ParticipantTotal,
    SettlementResult,
    round_currency,
)

ZERO = Decimal("0")


class SplitRefused(ValueError):
    """Raised when a settlement cannot be produced from the current state."""


class NoParticipantsError(SplitRefused):
    def __init__(self) -> None:
        super().__init__("Need at least one participant")


class NoItemsError(SplitRefused):
    def __init__(self) -> None:
        super().__init__("Need at least one item")


def distribute_item(line_total: Decimal, shares: Mapping[int, Decimal]) -> dict[int, Decimal]:
    """Split one line total among claimants proportionally to their shares.

    Returns an empty dict when nothing is claimed.
    """
    claimed = {participant: share for participant, share in shares.items() if share > 0}
    total_claimed = sum(claimed.values(), ZERO)
    if total_claimed == 0:
        return {}
    return {participant: share * line_total / total_claimed for participant, share in claimed.items()}


def tax_portion(items_total: Decimal, subtotal: Decimal, tax: Decimal) -> Decimal:
    if subtotal <= 0:
        return ZERO
    return items_total * tax / subtotal


def item_label(receipt: Receipt, index: int) -> str:
    name = receipt.items[index].name.strip()
    return name or f"Item {index + 1}"


def _active_claims(assignments: AssignmentMap, item: int, active: set[int]) -> dict[int, Decimal]:
    return {p: share for p, share in assignments.shares_for(item).items() if p in active}


def _item_costs(
    receipt: Receipt,
    assignments: AssignmentMap,
    active: set[int],
) -> list[dict[int, Decimal]]:
    """Per item, the cost owed by each active claimant."""
    return [
        distribute_item(item.line_total, _active_claims(assignments, index, active))
        for index, item in enumerate(receipt.items)
    ]


def participant_totals(
    receipt: Receipt,
    names: Sequence[str],
    assignments: AssignmentMap,
) -> list[ParticipantTotal]:
    """Live, unrounded running totals for every named participant."""
    roster = list(active_participants(names))
    costs = _item_costs(receipt, assignments, {index for index, _ in roster})
    subtotal = receipt.subtotal

    totals: list[ParticipantTotal] = []
    for index, name in roster:
        items_total = sum((item_costs.get(index, ZERO) for item_costs in costs), ZERO)
        tax = tax_portion(items_total, subtotal, receipt.tax)
        totals.append(
            ParticipantTotal(
                index=index,
                name=name,
                items_total=items_total,
                tax_portion=tax,
                total=items_total + tax,
            )
        )
    return totals


def compute_split(
    receipt: Receipt,
    names: Sequence[str],
    assignments: AssignmentMap,
) -> SettlementResult:
    """Produce the final settlement, rounding each participant field to cents.

    Raises:
        NoItemsError: The receipt has no line items.
        NoParticipantsError: No participant has a non-blank name.
    """
    if not receipt.items:
        raise NoItemsError()
    roster = list(active_participants(names))
    if not roster:
        raise NoParticipantsError()

    costs = _item_costs(receipt, assignments, {index for index, _ in roster})
    subtotal = receipt.subtotal

    settlements: list[ParticipantSettlement] = []
    for index, name in roster:
        audit: list[ItemShare] = []
        items_total = ZERO
        for item_index, item_costs in enumerate(costs):
            if index not in item_costs:
                continue
            cost = item_costs[index]
            items_total += cost
            audit.append(
                ItemShare(
                    label=item_label(receipt, item_index),
                    cost=round_currency(cost),
                    shared_with_count=len(item_costs),
                )
            )
        tax = tax_portion(items_total, subtotal, receipt.tax)
        settlements.append(
            ParticipantSettlement(
                name=name,
                items_total=round_currency(items_total),
                tax_portion=round_currency(tax),
                total=round_currency(items_total + tax),
                items=tuple(audit),
            )
        )

    return SettlementResult(
        participants=tuple(settlements),
        subtotal=round_currency(subtotal),
        tax=round_currency(receipt.tax),
        original_total=round_currency(receipt.total),
    )

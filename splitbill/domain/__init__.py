"""Core domain models and the allocation engine.

This package is pure: no I/O, no logging, no clock.
- Receipt, LineItem: editable receipt model
- ParticipantRoster: positional participant names
- AssignmentMap: sparse item -> participant -> share claims
- compute_split, participant_totals: allocation engine

Usage:
    from splitbill.domain import Receipt, AssignmentMap, compute_split
"""

from splitbill.domain.allocation import (
    NoItemsError,
    NoParticipantsError,
    SplitRefused,
    compute_split,
    distribute_item,
    participant_totals,
)
from splitbill.domain.assignment import AssignmentMap
from splitbill.domain.participants import ParticipantRoster, active_participants
from splitbill.domain.receipt import LineItem, Receipt, parse_amount
from splitbill.domain.settlement import (
    ItemShare,
    ParticipantSettlement,
    ParticipantTotal,
    SettlementResult,
    round_currency,
)

__all__ = [
    # Receipt model
    "LineItem",
    "Receipt",
    "parse_amount",
    # Participants and assignments
    "ParticipantRoster",
    "active_participants",
    "AssignmentMap",
    # Engine
    "compute_split",
    "participant_totals",
    "distribute_item",
    "SplitRefused",
    "NoItemsError",
    "NoParticipantsError",
    # Results
    "ItemShare",
    "ParticipantSettlement",
    "ParticipantTotal",
    "SettlementResult",
    "round_currency",
]

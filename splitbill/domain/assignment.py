"""Sparse item -> participant -> claimed quantity storage.

Storage is one dict per receipt item, kept in the same order as the items,
so removing an item is a plain list deletion. A participant that has no
claim on an item is simply absent from that item's dict; a stored share is
always positive.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from decimal import Decimal

ONE = Decimal("1")


@dataclass
class AssignmentMap:
    per_item: list[dict[int, Decimal]] = field(default_factory=list)

    @classmethod
    def empty(cls, item_count: int) -> AssignmentMap:
        return cls([{} for _ in range(item_count)])

    @classmethod
    def from_shares(cls, item_count: int, shares: Iterable[tuple[int, int, Decimal]]) -> AssignmentMap:
        """Build a map from ``(item, participant, share)`` triples.

        Triples with an item index outside ``item_count`` or a non-positive
        share are skipped.
        """
        assignments = cls.empty(item_count)
        for item, participant, share in shares:
            if 0 <= item < item_count and participant >= 0:
                assignments.set_share(item, participant, share)
        return assignments

    def __len__(self) -> int:
        return len(self.per_item)

    def reset(self, item_count: int) -> None:
        self.per_item = [{} for _ in range(item_count)]

    def _item(self, item: int) -> dict[int, Decimal] | None:
        if 0 <= item < len(self.per_item):
            return self.per_item[item]
        return None

    def shares_for(self, item: int) -> dict[int, Decimal]:
        """Return a copy of the claims on one item."""
        claims = self._item(item)
        return dict(claims) if claims is not None else {}

    def share(self, item: int, participant: int) -> Decimal | None:
        claims = self._item(item)
        if claims is None:
            return None
        return claims.get(participant)

    def is_assigned(self, item: int, participant: int) -> bool:
        return self.share(item, participant) is not None

    def assign(self, item: int, participant: int) -> None:
        """Claim one unit; an existing claim is left untouched."""
        claims = self._item(item)
        if claims is None or participant in claims:
            return
        claims[participant] = ONE

    def increase(self, item: int, participant: int) -> None:
        claims = self._item(item)
        if claims is None:
            return
        claims[participant] = claims.get(participant, Decimal("0")) + ONE

    def decrease(self, item: int, participant: int) -> None:
        claims = self._item(item)
        if claims is None or participant not in claims:
            return
        remaining = claims[participant] - ONE
        if remaining <= 0:
            del claims[participant]
        else:
            claims[participant] = remaining

    def unassign(self, item: int, participant: int) -> None:
        claims = self._item(item)
        if claims is not None:
            claims.pop(participant, None)

    def set_share(self, item: int, participant: int, share: Decimal) -> None:
        """Set a claim directly; zero or negative removes it."""
        claims = self._item(item)
        if claims is None:
            return
        if share <= 0:
            claims.pop(participant, None)
        else:
            claims[participant] = share

    def add_item(self) -> None:
        self.per_item.append({})

    def remove_item(self, item: int) -> None:
        if 0 <= item < len(self.per_item):
            del self.per_item[item]

    def remove_participant(self, participant: int) -> None:
        """Drop claims of a removed participant and shift higher indexes down."""
        for index, claims in enumerate(self.per_item):
            self.per_item[index] = {
                (p if p < participant else p - 1): share for p, share in claims.items() if p != participant
            }

"""Settlement data models produced by the allocation engine."""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import ROUND_HALF_UP, Decimal, localcontext
from typing import Any

CENT = Decimal("0.01")


def round_currency(value: Decimal) -> Decimal:
    """Round half-up to cents; precision grows with the magnitude of ``value``."""
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, value.adjusted() + 4)
        return value.quantize(CENT, rounding=ROUND_HALF_UP)


def _money(value: Decimal) -> str:
    return f"{value:.2f}"


@dataclass(frozen=True)
class ItemShare:
    """One item's contribution to a participant's bill."""

    label: str
    cost: Decimal
    shared_with_count: int


@dataclass(frozen=True)
class ParticipantTotal:
    """Unrounded running total used while assignments are being made."""

    index: int
    name: str
    items_total: Decimal
    tax_portion: Decimal
    total: Decimal


@dataclass(frozen=True)
class ParticipantSettlement:
    name: str
    items_total: Decimal
    tax_portion: Decimal
    total: Decimal
    items: tuple[ItemShare, ...] = ()

    def to_dict(self) -> dict[str, Any]:
        return {
            "name": self.name,
            "items_total": _money(self.items_total),
            "tax_portion": _money(self.tax_portion),
            "total": _money(self.total),
            "items": [
                {
                    "label": item.label,
                    "cost": _money(item.cost),
                    "shared_with_count": item.shared_with_count,
                }
                for item in self.items
            ],
        }


@dataclass(frozen=True)
class SettlementResult:
    """Final per-participant breakdown.

    ``split_total`` is the sum of the individually rounded participant
    totals and may differ from ``original_total`` by a few cents, or by a
    whole item when nobody claimed it. The difference is reported, never
    corrected.
    """

    participants: tuple[ParticipantSettlement, ...]
    subtotal: Decimal
    tax: Decimal
    original_total: Decimal
    split_total: Decimal = field(init=False)

    def __post_init__(self) -> None:
        split_total = sum((p.total for p in self.participants), Decimal("0"))
        object.__setattr__(self, "split_total", split_total)

    @property
    def difference(self) -> Decimal:
        return self.split_total - self.original_total

    @property
    def is_accurate(self) -> bool:
        return abs(self.difference) < CENT

    def to_dict(self) -> dict[str, Any]:
        return {
            "participants": [p.to_dict() for p in self.participants],
            "subtotal": _money(self.subtotal),
            "tax": _money(self.tax),
            "original_total": _money(self.original_total),
            "split_total": _money(self.split_total),
            "difference": _money(self.difference),
            "is_accurate": self.is_accurate,
        }

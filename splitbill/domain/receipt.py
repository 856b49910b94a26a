"""Editable receipt model.

The receipt arrives from the parsing service and is then corrected by the
user. Every money-affecting edit re-derives ``total``; an externally
supplied ``total`` is kept as-is until such an edit happens.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal, InvalidOperation

ZERO = Decimal("0")

# Largest accepted exponent: amounts and quantities stay below 10**16.
MAX_AMOUNT_EXPONENT = 15


def parse_amount(value: object) -> Decimal | None:
    """Parse a user-entered number, returning None unless it is a finite number below 10**16."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        number = value
    else:
        text = str(value).strip()
        if not text:
            return None
        try:
            number = Decimal(text)
        except InvalidOperation:
            return None
    if not number.is_finite() or (number and number.adjusted() > MAX_AMOUNT_EXPONENT):
        return None
    return number


@dataclass
class LineItem:
    """A single priced, quantified entry on a receipt."""

    name: str
    quantity: Decimal = Decimal("1")
    unit_price: Decimal = ZERO

    @property
    def line_total(self) -> Decimal:
        return self.quantity * self.unit_price


@dataclass
class Receipt:
    """Receipt being split: ordered items, tax and the stated total."""

    items: list[LineItem] = field(default_factory=list)
    tax: Decimal = ZERO
    total: Decimal = ZERO

    @property
    def subtotal(self) -> Decimal:
        return sum((item.line_total for item in self.items), ZERO)

    def recompute_total(self) -> Decimal:
        self.total = self.subtotal + self.tax
        return self.total

    def _has_index(self, index: int) -> bool:
        return 0 <= index < len(self.items)

    def set_item_name(self, index: int, name: str) -> bool:
        if not self._has_index(index):
            return False
        self.items[index].name = name
        return True

    def set_item_quantity(self, index: int, value: object) -> bool:
        """Set an item's quantity; non-numeric or non-positive input is ignored."""
        quantity = parse_amount(value)
        if quantity is None or quantity <= 0 or not self._has_index(index):
            return False
        self.items[index].quantity = quantity
        self.recompute_total()
        return True

    def set_item_price(self, index: int, value: object) -> bool:
        """Set an item's unit price; non-numeric or negative input is ignored."""
        price = parse_amount(value)
        if price is None or price < 0 or not self._has_index(index):
            return False
        self.items[index].unit_price = price
        self.recompute_total()
        return True

    def set_tax(self, value: object) -> bool:
        tax = parse_amount(value)
        if tax is None or tax < 0:
            return False
        self.tax = tax
        self.recompute_total()
        return True

    def add_item(self) -> int:
        """Append a blank item and return its index.

        The caller owns the assignment map and must extend it as well.
        """
        self.items.append(LineItem(name=""))
        return len(self.items) - 1

    def remove_item(self, index: int) -> bool:
        """Remove an item, keeping at least one on the receipt.

        The caller must re-index its assignment map after a successful removal.
        """
        if not self._has_index(index) or len(self.items) <= 1:
            return False
        del self.items[index]
        self.recompute_total()
        return True

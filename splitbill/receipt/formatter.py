"""Format receipts and settlements as plain text reports."""

from __future__ import annotations

from decimal import Decimal

from splitbill.domain.currency import DEFAULT_CURRENCY, format_amount
from splitbill.domain.receipt import Receipt
from splitbill.domain.settlement import ItemShare, SettlementResult

RULE = "=" * 60


def _format_rows_aligned(rows: list[tuple[str, str]], indent: str = "  ") -> list[str]:
    """
    Format label/amount rows with right-aligned amounts.

    Args:
        rows: List of (label, amount_text) tuples
        indent: Indentation prefix for each line

    Returns:
        List of formatted lines
    """
    if not rows:
        return []
    max_label_len = max(len(label) for label, _ in rows)
    max_amount_len = max(len(amount) for _, amount in rows)
    return [f"{indent}{label.ljust(max_label_len)}  {amount.rjust(max_amount_len)}" for label, amount in rows]


def _shared_note(share: ItemShare) -> str:
    others = share.shared_with_count - 1
    if others <= 0:
        return ""
    return f" (shared with {others} other{'s' if others > 1 else ''})"


def format_receipt(receipt: Receipt, currency: str = DEFAULT_CURRENCY) -> str:
    """Numbered listing of receipt items followed by tax and total."""
    lines = [RULE, "RECEIPT", RULE]
    rows: list[tuple[str, str]] = []
    for i, item in enumerate(receipt.items, 1):
        name = item.name.strip() or f"Item {i}"
        qty_str = f" x{item.quantity.normalize():f}" if item.quantity != 1 else ""
        rows.append((f"{i}. {name}{qty_str}", format_amount(item.line_total, currency)))
    rows.append(("Tax", format_amount(receipt.tax, currency)))
    rows.append(("Total", format_amount(receipt.total, currency)))
    lines.extend(_format_rows_aligned(rows))
    lines.append(RULE)
    return "\n".join(lines) + "\n"


def format_settlement(result: SettlementResult, currency: str = DEFAULT_CURRENCY) -> str:
    """
    Render a settlement as a per-participant report.

    The footer compares the split total with the receipt total; a mismatch is
    reported as-is.
    """
    lines = [RULE, "SPLIT RESULT", RULE]

    for participant in result.participants:
        lines.append(f"{participant.name}: {format_amount(participant.total, currency)}")
        rows = [
            (f"{share.label}{_shared_note(share)}", format_amount(share.cost, currency))
            for share in participant.items
        ]
        if not rows:
            rows.append(("(no items)", format_amount(Decimal("0"), currency)))
        rows.append(("Items", format_amount(participant.items_total, currency)))
        rows.append(("Tax", format_amount(participant.tax_portion, currency)))
        lines.extend(_format_rows_aligned(rows))
        lines.append("")

    lines.append(RULE)
    lines.extend(
        _format_rows_aligned(
            [
                ("Subtotal", format_amount(result.subtotal, currency)),
                ("Tax", format_amount(result.tax, currency)),
                ("Receipt total", format_amount(result.original_total, currency)),
                ("Split total", format_amount(result.split_total, currency)),
            ],
            indent="",
        )
    )
    if result.is_accurate:
        lines.append("Accuracy: split matches the receipt total")
    else:
        lines.append(f"Accuracy: off by {format_amount(result.difference, currency)}")
    lines.append(RULE)
    return "\n".join(lines) + "\n"

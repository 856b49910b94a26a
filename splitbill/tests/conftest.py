"""Shared pytest fixtures for splitbill tests."""

from __future__ import annotations

from collections.abc import Iterator
from decimal import Decimal

import pytest

from splitbill.domain.receipt import LineItem, Receipt
from splitbill.runtime.settings import reset_settings

# Tolerance for sums of Decimal divisions at default precision.
EPSILON = Decimal("1e-20")


def make_receipt(*items: tuple[str, str, str], tax: str = "0", total: str | None = None) -> Receipt:
    """Build a receipt from (name, quantity, unit_price) string triples."""
    receipt = Receipt(
        items=[LineItem(name=name, quantity=Decimal(qty), unit_price=Decimal(price)) for name, qty, price in items],
        tax=Decimal(tax),
    )
    if total is None:
        receipt.recompute_total()
    else:
        receipt.total = Decimal(total)
    return receipt


@pytest.fixture(autouse=True)
def _isolated_settings(monkeypatch: pytest.MonkeyPatch, tmp_path) -> Iterator[None]:
    """Keep tests independent of the developer's environment and config files."""
    for var in (
        "OPENROUTER_API_KEY",
        "COMPLETION_MODEL",
        "SPLITBILL_API_URL",
        "SPLITBILL_TIMEOUT",
        "SPLITBILL_LOCALE",
        "SPLITBILL_CURRENCY",
        "LANG",
    ):
        monkeypatch.delenv(var, raising=False)
    monkeypatch.setenv("SPLITBILL_CONFIG", str(tmp_path / "absent.toml"))
    reset_settings()
    yield
    reset_settings()

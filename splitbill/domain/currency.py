"""Locale to currency detection and display formatting.

Display only: amounts are never converted between currencies.
"""

from __future__ import annotations

import re
from decimal import ROUND_HALF_UP, Decimal, localcontext

DEFAULT_LOCALE = "en-US"
DEFAULT_CURRENCY = "USD"

EUR_REGIONS = frozenset(
    {
        "AT", "BE", "HR", "CY", "EE", "FI", "FR", "DE", "GR", "IE",
        "IT", "LV", "LT", "LU", "MT", "NL", "PT", "SK", "SI", "ES",
    }
)  # fmt: skip

REGION_TO_CURRENCY = {
    # North America
    "US": "USD",
    "CA": "CAD",
    "MX": "MXN",
    # South America
    "BR": "BRL",
    "AR": "ARS",
    "CL": "CLP",
    "CO": "COP",
    "PE": "PEN",
    "UY": "UYU",
    "PY": "PYG",
    "BO": "BOB",
    "VE": "VES",
    # Europe (non-euro)
    "GB": "GBP",
    "CH": "CHF",
    "NO": "NOK",
    "SE": "SEK",
    "DK": "DKK",
    "CZ": "CZK",
    "PL": "PLN",
    "HU": "HUF",
    "RO": "RON",
    "BG": "BGN",
    "IS": "ISK",
    "RU": "RUB",
    "UA": "UAH",
    "BY": "BYN",
    "TR": "TRY",
    # Middle East
    "IL": "ILS",
    "AE": "AED",
    "SA": "SAR",
    "QA": "QAR",
    "KW": "KWD",
    "OM": "OMR",
    "BH": "BHD",
    "IR": "IRR",
    "IQ": "IQD",
    # Africa
    "ZA": "ZAR",
    "EG": "EGP",
    "MA": "MAD",
    "DZ": "DZD",
    "TN": "TND",
    "NG": "NGN",
    "KE": "KES",
    "TZ": "TZS",
    "UG": "UGX",
    "GH": "GHS",
    "ET": "ETB",
    # Asia
    "JP": "JPY",
    "CN": "CNY",
    "HK": "HKD",
    "TW": "TWD",
    "KR": "KRW",
    "SG": "SGD",
    "MY": "MYR",
    "ID": "IDR",
    "TH": "THB",
    "PH": "PHP",
    "VN": "VND",
    "IN": "INR",
    "PK": "PKR",
    "BD": "BDT",
    "LK": "LKR",
    "NP": "NPR",
    "MM": "MMK",
    "KH": "KHR",
    "LA": "LAK",
    # Oceania
    "AU": "AUD",
    "NZ": "NZD",
}

# Narrow symbols; currencies missing here are shown by ISO code.
CURRENCY_SYMBOLS = {
    "USD": "$",
    "CAD": "$",
    "AUD": "$",
    "NZD": "$",
    "MXN": "$",
    "SGD": "$",
    "HKD": "$",
    "TWD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "¥",
    "KRW": "₩",
    "INR": "₹",
    "IDR": "Rp",
    "PHP": "₱",
    "THB": "฿",
    "VND": "₫",
    "ILS": "₪",
    "TRY": "₺",
    "UAH": "₴",
    "RUB": "₽",
    "PLN": "zł",
    "NGN": "₦",
    "BRL": "R$",
    "ZAR": "R",
    "CHF": "CHF",
    "SEK": "kr",
    "NOK": "kr",
    "DKK": "kr",
    "MYR": "RM",
}

ZERO_DECIMAL_CURRENCIES = frozenset(
    {"JPY", "KRW", "VND", "IDR", "CLP", "PYG", "ISK", "UGX", "HUF", "TWD"}
)

_REGION_RE = re.compile(r"[-_]([A-Za-z]{2}|\d{3})(?![A-Za-z0-9])")


def region_from_locale(locale: str) -> str | None:
    """Return the region subtag of a BCP-47 or POSIX locale, if any."""
    tag = locale.split(".", 1)[0].split("@", 1)[0]
    match = _REGION_RE.search(tag)
    if match:
        return match.group(1).upper()
    return None


def currency_for_region(region: str | None) -> str:
    if not region:
        return DEFAULT_CURRENCY
    if region in EUR_REGIONS:
        return "EUR"
    return REGION_TO_CURRENCY.get(region, DEFAULT_CURRENCY)


def detect_currency(locale: str | None) -> tuple[str, str]:
    """Return ``(locale, currency)``, falling back to en-US / USD."""
    resolved = locale or DEFAULT_LOCALE
    return resolved, currency_for_region(region_from_locale(resolved))


def format_amount(amount: Decimal, currency: str = DEFAULT_CURRENCY) -> str:
    """Format an amount with the currency's symbol and minor units."""
    code = currency.upper()
    places = 0 if code in ZERO_DECIMAL_CURRENCIES else 2
    amount = amount or Decimal("0")
    with localcontext() as ctx:
        ctx.prec = max(ctx.prec, amount.adjusted() + places + 2)
        value = amount.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    digits = f"{abs(value):,.{places}f}"
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{sign}{code} {digits}"
    return f"{sign}{symbol}{digits}"

from __future__ import annotations

from decimal import Decimal, ROUND_HALF_UP
from typing import Dict, Optional, Union

Number = Union[int, float]

# Symbols as an English locale renders them; anything missing falls back to the code
CURRENCY_SYMBOLS: Dict[str, str] = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "CNY": "CN¥",
    "INR": "₹",
    "AUD": "A$",
    "CAD": "CA$",
    "NZD": "NZ$",
    "HKD": "HK$",
    "MXN": "MX$",
    "BRL": "R$",
    "TWD": "NT$",
    "KRW": "₩",
    "ILS": "₪",
    "VND": "₫",
    "PHP": "₱",
    "XAF": "FCFA",
    "XCD": "EC$",
}


def normalize_currency(currency: Optional[str], default: str = "USD") -> str:
    """
    "usd" => "USD", None / "" => default.
    """
    c = (currency or "").strip().upper()
    return c or default


def get_symbol(currency: Optional[str]) -> str:
    if not currency:
        return ""
    code = currency.strip().upper()
    return CURRENCY_SYMBOLS.get(code, code)


def currency_to_decimal(minor: Number) -> float:
    """
    Minor units (cents) to a decimal amount: 1999 => 19.99
    """
    return minor / 100


def format_amount(minor: Number) -> str:
    """
    Decimal amount with thousands separators and exactly two decimals:
      123456 => "1,234.56"
      2000   => "20.00"
      1012.5 => "10.13"  (exact half-cent ties round up)
    """
    # Decimal(float) is exact, so ties are only ties when the float really is one
    value = Decimal(currency_to_decimal(minor)).quantize(Decimal("0.01"), rounding=ROUND_HALF_UP)
    return f"{value:,.2f}"


def format_price(minor: Number, currency: Optional[str]) -> str:
    return get_symbol(currency) + format_amount(minor)

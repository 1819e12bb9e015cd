"""
Utility functions for money amounts and dates.
"""
import re
from datetime import date, datetime, time, timezone
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

CENTS_PER_UNIT = Decimal(100)

# Display symbols for the currencies groups use most; anything else is shown by code
CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "KRW": "₩",
    "INR": "₹",
    "CNY": "CN¥",
    "CAD": "CA$",
    "AUD": "A$",
    "NZD": "NZ$",
    "HKD": "HK$",
    "MXN": "MX$",
    "BRL": "R$",
    "ILS": "₪",
    "VND": "₫",
    "PHP": "₱",
}

_NON_NUMERIC = re.compile(r"[^0-9.,-]")
_PLAIN_NUMBER = re.compile(r"^-?(\d+\.?\d*|\.\d+)$")


def _to_cents(amount: Decimal) -> int:
    return int((amount * CENTS_PER_UNIT).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def parse_currency_to_cents(value: Any) -> Optional[int]:
    """
    Parse a user supplied amount into integer cents.
    
    Numbers are taken as currency units. Strings may carry symbols, spaces and
    thousands separators ("$1,250.50"); commas are always treated as
    thousands separators. Returns None when the value is not a usable amount.
    """
    if isinstance(value, bool):
        return None
    
    if isinstance(value, (int, float, Decimal)):
        try:
            amount = Decimal(str(value))
        except InvalidOperation:
            return None
        if not amount.is_finite():
            return None
        return _to_cents(amount)
    
    if not isinstance(value, str):
        return None
    
    normalized = _NON_NUMERIC.sub("", value).replace(",", "")
    if not normalized or not _PLAIN_NUMBER.match(normalized):
        return None
    return _to_cents(Decimal(normalized))


def format_cents(amount_cents: int, currency: str) -> str:
    """Format integer cents for display, e.g. 123456 USD -> "$1,234.56"."""
    code = (currency or "").strip().upper()
    sign = "-" if amount_cents < 0 else ""
    units = format(Decimal(abs(amount_cents)) / CENTS_PER_UNIT, ",.2f")
    symbol = CURRENCY_SYMBOLS.get(code)
    if symbol is None:
        return f"{code} {sign}{units}"
    return f"{sign}{symbol}{units}"


def normalize_datetime(value: Any, now: Optional[datetime] = None) -> datetime:
    """
    Coerce an occurred-at value into an aware datetime.
    
    Accepts datetimes, dates and ISO-8601 strings. Anything missing or
    unparsable becomes `now` (current UTC time by default) instead of failing.
    """
    fallback = now or datetime.now(timezone.utc)
    
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, date):
        parsed = datetime.combine(value, time.min)
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return fallback
    else:
        return fallback
    
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=timezone.utc)
    return parsed

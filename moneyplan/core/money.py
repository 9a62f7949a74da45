"""Money helpers: quantization, display formatting and parsing."""

from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

CENT = Decimal("0.01")

CURRENCY_SYMBOLS: dict[str, str] = {
    "RUB": "₽",
    "USD": "$",
    "EUR": "€",
    "GEL": "₾",
    "TRY": "₺",
    "CNY": "¥",
    "AED": "د.إ",
    "USDT": "₮",
    "BTC": "₿",
    "ETH": "Ξ",
    "TON": "💎",
    "OTHER": "¤",
}

# Currencies shown with more precision than cents
CRYPTO_CURRENCIES = frozenset({"BTC", "ETH"})


def to_decimal(value: Any) -> Decimal:
    """Convert int/float/str/Decimal to Decimal without float artifacts."""
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float):
        return Decimal(repr(value))
    return Decimal(str(value))


def to_money(value: Any) -> Decimal:
    """Quantize a value to cents, rounding half up."""
    return to_decimal(value).quantize(CENT, rounding=ROUND_HALF_UP)


def currency_symbol(currency: str) -> str:
    """Display symbol for a currency code (generic sign for unknown codes)."""
    return CURRENCY_SYMBOLS.get(currency, CURRENCY_SYMBOLS["OTHER"])


def format_money(amount: Any, currency: str | None = None) -> str:
    """Format an amount for display.

    Uses comma thousands separators and two decimals; BTC and ETH keep
    between four and six decimals.

    Examples:
        >>> format_money(Decimal("1234.5"))
        '1,234.50'
        >>> format_money(-12000, "RUB")
        '-12,000.00 ₽'
    """
    value = to_decimal(amount)
    if currency in CRYPTO_CURRENCIES:
        text = f"{value.quantize(Decimal('0.000001'), rounding=ROUND_HALF_UP):,f}"
        whole, _, frac = text.partition(".")
        frac = frac.rstrip("0").ljust(4, "0")
        text = f"{whole}.{frac}"
    else:
        text = f"{value.quantize(CENT, rounding=ROUND_HALF_UP):,.2f}"
    if currency:
        return f"{text} {currency_symbol(currency)}"
    return text


def parse_money(text: str) -> Decimal:
    """Parse a string produced by ``format_money`` back into a Decimal.

    Raises:
        ValueError: If the text holds no number.
    """
    # symbols may contain dots (AED), so only look at the numeric token
    token = next((t for t in text.split() if any(ch.isdigit() for ch in t)), "")
    cleaned = "".join(ch for ch in token if ch.isdigit() or ch in ".-")
    try:
        return Decimal(cleaned)
    except InvalidOperation as e:
        raise ValueError(f"Not a money value: {text!r}") from e


def format_percentage(value: Any, decimals: int = 1) -> str:
    """Format a percentage value (already multiplied by 100)."""
    return f"{to_decimal(value):.{decimals}f}%"

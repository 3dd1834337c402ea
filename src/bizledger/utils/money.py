"""Money helpers: Decimal coercion, rounding, formatting and percent change."""

from decimal import Decimal, ROUND_HALF_EVEN

CENT = Decimal("0.01")
HUNDRED = Decimal("100")

CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "BDT": "৳",
    "INR": "₹",
}


def coerce_decimal(value) -> Decimal:
    """Normalize numeric values to Decimal.

    Args:
        value: Raw numeric value (Decimal, int, float, str or None)

    Returns:
        Decimal value; None becomes zero. Floats go through ``str`` so that
        0.1 becomes Decimal("0.1") rather than its binary expansion.
    """
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


def quantize_money(amount: Decimal) -> Decimal:
    """Round an amount to cents using half-even rounding."""
    return coerce_decimal(amount).quantize(CENT, rounding=ROUND_HALF_EVEN)


def format_currency(amount, currency_code: str = "USD") -> str:
    """Format an amount for display.

    Examples:
        format_currency(Decimal("1234.5")) -> "$1,234.50"
        format_currency(Decimal("-20"), "EUR") -> "-€20.00"
        format_currency(Decimal("7"), "CHF") -> "CHF 7.00"

    Args:
        amount: Amount to format
        currency_code: ISO currency code

    Returns:
        Formatted string with two fraction digits
    """
    code = currency_code.upper()
    value = quantize_money(amount)
    symbol = CURRENCY_SYMBOLS.get(code, f"{code} ")
    sign = "-" if value < 0 else ""
    return f"{sign}{symbol}{abs(value):,.2f}"


def percent_change(current, previous) -> Decimal:
    """Percentage change from ``previous`` to ``current``.

    A zero previous value yields 100 when current is positive and 0
    otherwise. This is a reporting convention, not a true percentage.
    """
    current = coerce_decimal(current)
    previous = coerce_decimal(previous)
    if previous == 0:
        return HUNDRED if current > 0 else Decimal("0")
    return (current - previous) / abs(previous) * HUNDRED


def format_percent(value: Decimal, signed: bool = False) -> str:
    """Format a percentage with one fraction digit."""
    text = f"{coerce_decimal(value):.1f}%"
    if signed and value > 0:
        return f"+{text}"
    return text

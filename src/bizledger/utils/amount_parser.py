"""Amount parsing utilities."""

from decimal import Decimal, InvalidOperation
import re

from bizledger.domain.errors import ValidationError, negative_value, rate_out_of_range


def parse_amount(amount_str: str) -> Decimal:
    """Parse an amount string into a Decimal.

    Handles various formats:
    - "123.45"
    - "$123.45"
    - "-123.45"
    - "1,234.56"
    - "(123.45)" (negative in parentheses)

    Args:
        amount_str: Amount string

    Returns:
        Decimal amount

    Raises:
        ValidationError: If amount string cannot be parsed
    """
    if not amount_str or not amount_str.strip():
        raise ValidationError("Empty amount string")

    amount_str = amount_str.strip()

    is_negative = False
    if amount_str.startswith("(") and amount_str.endswith(")"):
        is_negative = True
        amount_str = amount_str[1:-1]

    amount_str = re.sub(r"[$€£¥৳₹]", "", amount_str)
    amount_str = amount_str.replace(",", "").strip()

    try:
        amount = Decimal(amount_str)
    except InvalidOperation:
        raise ValidationError(f"Could not parse amount '{amount_str}'")
    if not amount.is_finite():
        raise ValidationError(f"Could not parse amount '{amount_str}'")
    return -amount if is_negative else amount


def parse_non_negative(amount_str: str, field_name: str = "amount") -> Decimal:
    """Parse an amount that must be zero or positive."""
    amount = parse_amount(amount_str)
    if amount < 0:
        raise ValidationError(negative_value(field_name, amount))
    return amount


def parse_rate(rate_str: str, field_name: str = "rate") -> Decimal:
    """Parse a percentage such as "7.5" or "7.5%" into a Decimal in 0-100."""
    rate = parse_non_negative(rate_str.strip().rstrip("%"), field_name)
    if rate > 100:
        raise ValidationError(rate_out_of_range(field_name, rate))
    return rate

"""Money parsing and display helpers."""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Any, Optional

PAISE = Decimal('0.01')

def to_decimal(value: Any, default: Optional[Decimal] = None) -> Optional[Decimal]:
    """Parse a money value into a Decimal.

    Accepts Decimals, ints, floats and strings with an optional rupee sign
    and thousands separators. Floats go through ``str`` so ``0.1`` stays ``0.1``.

    Args:
        value: Raw value
        default: Returned when the value is empty or unparsable

    Returns:
        Parsed Decimal or ``default``
    """
    if value is None:
        return default
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool):
        return default
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        if value != value:  # NaN
            return default
        return Decimal(str(value))

    cleaned = str(value).strip().replace('₹', '').replace('Rs.', '').replace(',', '').strip()
    if not cleaned:
        return default
    try:
        parsed = Decimal(cleaned)
    except InvalidOperation:
        return default
    if not parsed.is_finite():
        return default
    return parsed

def _group_indian(digits: str) -> str:
    """Group an integer digit string as 12,34,56,789."""
    if len(digits) <= 3:
        return digits
    head, tail = digits[:-3], digits[-3:]
    groups = []
    while len(head) > 2:
        groups.insert(0, head[-2:])
        head = head[:-2]
    if head:
        groups.insert(0, head)
    return ','.join(groups) + ',' + tail

def format_indian_rupees(amount: Any) -> str:
    """Format an amount as Indian rupees with lakh/crore grouping.

    Examples:
        >>> format_indian_rupees(Decimal('123456.789'))
        '₹1,23,456.79'
        >>> format_indian_rupees(-5)
        '-₹5.00'
    """
    value = to_decimal(amount, Decimal('0')).quantize(PAISE, rounding=ROUND_HALF_UP)
    sign = '-' if value < 0 else ''
    integral, fraction = f"{abs(value):.2f}".split('.')
    return f"{sign}₹{_group_indian(integral)}.{fraction}"

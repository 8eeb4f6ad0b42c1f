from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

NOT_AVAILABLE = 'N/A'

_CENTS = Decimal('0.01')


def _to_decimal(value) -> Optional[Decimal]:
    # Round on the decimal text rather than the binary float (1.005 -> 1.01)
    if value is None or isinstance(value, bool):
        return None
    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return None
    if not number.is_finite():
        return None
    return number


def to_number(value) -> Optional[float]:
    number = _to_decimal(value)
    return float(number) if number is not None else None


def format_price(value) -> str:
    number = _to_decimal(value)
    if number is None:
        return NOT_AVAILABLE
    return f"{number.quantize(_CENTS, rounding=ROUND_HALF_UP)}"


def format_currency(value) -> str:
    text = format_price(value)
    return text if text == NOT_AVAILABLE else f"${text}"


def format_percent(value, signed: bool = False) -> str:
    number = _to_decimal(value)
    if number is None:
        return NOT_AVAILABLE
    text = f"{number.quantize(_CENTS, rounding=ROUND_HALF_UP)}%"
    if signed and number > 0:
        text = f"+{text}"
    return text


def format_quantity(value) -> str:
    number = _to_decimal(value)
    if number is None:
        return NOT_AVAILABLE
    if number == number.to_integral_value():
        return f"{int(number):,}"
    return f"{number:,}"


def format_change(change, change_percent) -> str:
    """Signed delta with its percentage, e.g. ``+5 (+12.50%)`` or ``-3 (-4.00%)``."""
    number = _to_decimal(change)
    if number is None:
        return NOT_AVAILABLE
    delta = format_quantity(number)
    if number > 0:
        delta = f"+{delta}"
    return f"{delta} ({format_percent(change_percent, signed=True)})"

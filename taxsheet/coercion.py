import re
from decimal import Decimal, InvalidOperation

ZERO = Decimal(0)

# Optional sign, digits with optional "," thousands groups, optional fraction.
# No exponents, no currency symbols, no locale decimal commas.
_DECIMAL_TEXT = re.compile(r"^[+-]?(?:[0-9]{1,3}(?:,[0-9]{3})+|[0-9]*)(?:\.[0-9]*)?$")


def coerce_decimal(value) -> Decimal:
    """Turn a cell value into a Decimal, falling back to zero.

    Numbers pass through, strings are parsed the invariant way, anything else
    (empty cells, booleans, dates, "12abc") becomes 0.
    """
    if value is None or isinstance(value, bool):
        return ZERO
    if isinstance(value, Decimal):
        return value if value.is_finite() else ZERO
    if isinstance(value, int):
        return Decimal(value)
    if isinstance(value, float):
        # str() keeps the short repr, so 12.5 stays 12.5 rather than a binary expansion
        return Decimal(str(value)) if value == value and abs(value) != float("inf") else ZERO
    if isinstance(value, str):
        text = value.strip()
        if not text or not _DECIMAL_TEXT.match(text) or not any(ch in "0123456789" for ch in text):
            return ZERO
        try:
            return Decimal(text.replace(",", ""))
        except InvalidOperation:
            return ZERO
    return ZERO

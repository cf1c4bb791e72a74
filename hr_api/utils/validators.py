from datetime import datetime, date
from decimal import Decimal, InvalidOperation

# decimal(10,2): at most 8 digits before the point
MAX_DECIMAL = Decimal("99999999.99")


def parse_date(value) -> date:
    """
    Accepts an ISO 8601 date 'YYYY-MM-DD', or a full ISO datetime
    ('YYYY-MM-DDTHH:MM:SSZ', with or without offset) truncated to its date.
    """
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    if not isinstance(value, str) or not value.strip():
        raise ValueError("must be a valid date")

    txt = value.strip()
    try:
        return date.fromisoformat(txt)
    except ValueError:
        pass

    # Normalize Z suffix to +00:00 for fromisoformat
    if txt.endswith("Z"):
        txt = txt[:-1] + "+00:00"
    try:
        return datetime.fromisoformat(txt).date()
    except ValueError:
        raise ValueError("must be in ISO format (YYYY-MM-DD)")


def parse_decimal(s) -> Decimal:
    """
    Converts the value into a Decimal with 2 decimal places.
    Raises ValueError if the input is not numeric.
    """
    if s is None or s == "" or isinstance(s, bool):
        raise ValueError("Empty decimal value.")
    try:
        value = Decimal(str(s))
    except (InvalidOperation, ValueError) as e:
        raise ValueError(f"Invalid decimal: {s}") from e
    if not value.is_finite():
        raise ValueError(f"Invalid decimal: {s}")
    try:
        return value.quantize(Decimal("0.01"))
    except InvalidOperation:
        # Too many digits for the context; callers still range-check it
        return value

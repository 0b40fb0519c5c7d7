import math
import uuid
from typing import Any, Optional


def new_id(prefix: str = "id") -> str:
    """Short random identifier, e.g. 'space_3f9a1c2b'."""
    return f"{prefix}_{uuid.uuid4().hex[:8]}"


def parse_non_negative(value: Any) -> Optional[float]:
    """
    Parse user input into a non-negative finite float.

    Blank text, a cancelled prompt (None), garbage, negatives, NaN and
    infinities all come back as None ("unset"). Commas are accepted as
    decimal separators.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, str):
        text = value.strip().replace(',', '.')
        if not text:
            return None
        try:
            number = float(text)
        except ValueError:
            return None
    else:
        try:
            number = float(value)
        except (TypeError, ValueError):
            return None
    if not math.isfinite(number) or number < 0:
        return None
    return number


def parse_count(value: Any) -> Optional[int]:
    """Like `parse_non_negative` but for whole quantities (door counts)."""
    number = parse_non_negative(value)
    if number is None or number != int(number):
        return None
    return int(number)


def finite_or_zero(value: Optional[float]) -> float:
    if value is None or not math.isfinite(value):
        return 0.0
    return float(value)


def round_to_tenth(value: Optional[float]) -> float:
    """Half-up rounding to one decimal, as shown in panels and exports."""
    return math.floor(finite_or_zero(value) * 10 + 0.5) / 10

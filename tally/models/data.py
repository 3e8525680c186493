import math
from typing import Any, Optional, Union
from ..core.exceptions import InvalidArgument

DEFAULT_AMOUNT = 1

Number = Union[int, float]


def normalize_user_id(user_id: Any) -> Optional[str]:
    """Trim and lower-case a client supplied id; None if it is not a usable string"""
    if not isinstance(user_id, str):
        return None
    normalized = user_id.strip().lower()
    return normalized or None


def coerce_amount(value: Any) -> int:
    """
    Turn a loosely typed amount into an integer delta.

    Missing, non-numeric, non-finite and zero values all become 1. Floats are
    truncated toward zero since the counters are integers.
    """
    if value is None:
        return DEFAULT_AMOUNT

    if isinstance(value, bool):
        number = int(value)
    elif isinstance(value, (int, float)):
        number = value
    elif isinstance(value, str):
        text = value.strip()
        if not text:
            return DEFAULT_AMOUNT
        try:
            number = int(text)
        except ValueError:
            try:
                number = float(text)
            except ValueError:
                return DEFAULT_AMOUNT
    else:
        return DEFAULT_AMOUNT

    if isinstance(number, float):
        if not math.isfinite(number):
            return DEFAULT_AMOUNT
        number = int(number)

    return number or DEFAULT_AMOUNT


def as_number(value: Any) -> Number:
    """Store replies come back as strings or floats; keep integral values as int"""
    if value is None:
        return 0
    number = float(value)
    if number.is_integer():
        return int(number)
    return number


class IncrementRec:
    __slots__ = ('user_id', 'amount')
    def __init__(self, user_id: str, amount: int = DEFAULT_AMOUNT):
        self.user_id = user_id
        self.amount = amount


def build_increment(
    user_id: Any,
    amount: Any = None,
    max_user_id_length: Optional[int] = None,
    reject_negative: bool = False
) -> IncrementRec:
    """Validate raw increment input without touching the store"""
    normalized = normalize_user_id(user_id)
    if normalized is None:
        raise InvalidArgument("userId required")
    if max_user_id_length is not None and len(normalized) > max_user_id_length:
        raise InvalidArgument("userId too long")

    delta = coerce_amount(amount)
    if reject_negative and delta < 0:
        raise InvalidArgument("amount must be positive")
    return IncrementRec(normalized, delta)


class IncrementResult:
    __slots__ = ('total', 'user_total', 'new_score')
    def __init__(self, total: Number, user_total: Number, new_score: Number):
        self.total = total
        self.user_total = user_total
        self.new_score = new_score


class StatsResult:
    __slots__ = ('total', 'user_total')
    def __init__(self, total: Number = 0, user_total: Number = 0):
        self.total = total
        self.user_total = user_total


class Leader:
    __slots__ = ('user_id', 'score')
    def __init__(self, user_id: str, score: Number):
        self.user_id = user_id
        self.score = score

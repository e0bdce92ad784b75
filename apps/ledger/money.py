"""
Integer money helpers.

Amounts are integers in minor currency units everywhere in the ledger.
Shares are computed with exact integer arithmetic and rounded half away
from zero, so ``weighted_share(5, 1, 2)`` is 3 and
``weighted_share(-5, 1, 2)`` is -3.
"""

from .exceptions import InvalidAmountError

# Largest value the PositiveIntegerField amount columns hold on every backend
MAX_AMOUNT = 2147483647


def require_amount(value, *, allow_zero=True, field='amount'):
    """
    Validate an amount in minor units and return it.

    Raises:
        InvalidAmountError: If value is not an int, is negative, is
            zero while ``allow_zero`` is False, or exceeds MAX_AMOUNT.
    """
    # bool is an int subclass; True is not an amount
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidAmountError(f"{field} must be an integer amount in minor units")
    if value < 0:
        raise InvalidAmountError(f"{field} must not be negative")
    if value == 0 and not allow_zero:
        raise InvalidAmountError(f"{field} must be greater than zero")
    if value > MAX_AMOUNT:
        raise InvalidAmountError(f"{field} must not exceed {MAX_AMOUNT}")
    return value


def divide_round_half_away(numerator: int, denominator: int) -> int:
    """
    Divide two integers, rounding the exact quotient half away from zero.

    Args:
        numerator: Any integer.
        denominator: A positive integer.

    Returns:
        The rounded quotient.

    Raises:
        ValueError: If denominator is not positive.

    Example:
        >>> divide_round_half_away(1500, 4)
        375
        >>> divide_round_half_away(10, 4)
        3
        >>> divide_round_half_away(-10, 4)
        -3
    """
    if denominator <= 0:
        raise ValueError("denominator must be positive")

    sign = -1 if numerator < 0 else 1
    quotient, remainder = divmod(abs(numerator), denominator)
    if remainder * 2 >= denominator:
        quotient += 1
    return sign * quotient


def weighted_share(amount: int, weight: int, total_weight: int) -> int:
    """
    Return ``round(amount * weight / total_weight)`` without floats.

    This is one participant's portion of ``amount`` when it is shared
    in proportion to weights. Each share is rounded on its own, so the
    shares of all participants may differ from ``amount`` by up to one
    unit per participant.
    """
    return divide_round_half_away(amount * weight, total_weight)

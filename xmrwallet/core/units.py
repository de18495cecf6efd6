"""
xmrwallet Amount Units
Conversion between XMR display amounts and atomic units.
"""

from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Union

from .. import config

Amount = Union[int, float, str, Decimal]

_ATOMIC = Decimal(config.ATOMIC_UNITS)
_DISPLAY_QUANTUM = Decimal(1).scaleb(-config.DISPLAY_DECIMALS)


class InvalidAmountError(ValueError):
    """Amount cannot be interpreted as a number of XMR."""
    pass


def _to_decimal(amount: Amount) -> Decimal:
    # bool is an int subclass; True XMR is never intended
    if isinstance(amount, bool):
        raise InvalidAmountError(f"Invalid amount: {amount!r}")

    try:
        # str() keeps floats at their shortest repr (1.1 -> '1.1')
        value = amount if isinstance(amount, Decimal) else Decimal(str(amount).strip())
    except (InvalidOperation, ValueError):
        raise InvalidAmountError(f"Invalid amount: {amount!r}")

    if not value.is_finite():
        raise InvalidAmountError(f"Invalid amount: {amount!r}")
    return value


def to_atomic_units(amount: Amount) -> int:
    """
    Convert an XMR amount to atomic units.

    The amount is scaled by 10^12 and rounded half away from zero.

    Args:
        amount: Amount in XMR (int, float, str or Decimal)

    Returns:
        Amount in atomic units
    """
    value = _to_decimal(amount) * _ATOMIC
    try:
        return int(value.quantize(Decimal(1), rounding=ROUND_HALF_UP))
    except InvalidOperation:
        raise InvalidAmountError(f"Amount out of range: {amount!r}")


def from_atomic_units(atomic: int) -> Decimal:
    """Convert atomic units to an exact XMR Decimal."""
    return (Decimal(int(atomic)) / _ATOMIC).quantize(_DISPLAY_QUANTUM)


def format_amount(atomic: int) -> str:
    """Format atomic units for display, e.g. '1.500000000000 XMR'."""
    return f"{from_atomic_units(atomic):f} {config.COIN_TICKER}"

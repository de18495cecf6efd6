"""
xmrwallet Transfer Helpers
Destination handling and option coercion for the transfer family.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Mapping, Sequence, Union

from .units import Amount, to_atomic_units


@dataclass
class Destination:
    """A payment destination with an amount in XMR."""
    address: str
    amount: Amount

    def to_param(self) -> Dict[str, Any]:
        """Destination as sent to the daemon (amount in atomic units)."""
        return {
            'address': self.address,
            'amount': to_atomic_units(self.amount),
        }


DestinationLike = Union[Destination, Mapping[str, Any]]


def _destination_param(dest: DestinationLike) -> Dict[str, Any]:
    if isinstance(dest, Destination):
        return dest.to_param()

    if not isinstance(dest, Mapping) or 'address' not in dest or 'amount' not in dest:
        raise TypeError(f"Destination must have an address and amount: {dest!r}")

    # Copy so the caller's mapping keeps its XMR amount
    param = dict(dest)
    param['amount'] = to_atomic_units(dest['amount'])
    return param


def build_destinations(
    destinations: Union[DestinationLike, Sequence[DestinationLike]],
) -> List[Dict[str, Any]]:
    """
    Normalize one or many destinations for a transfer call.

    A single destination becomes a one-element list. Order is preserved and
    every amount is converted to atomic units on a copy.

    Args:
        destinations: Destination, mapping, or a sequence of them

    Returns:
        List of {'address': ..., 'amount': <atomic units>}
    """
    if isinstance(destinations, (Destination, Mapping)):
        destinations = [destinations]
    return [_destination_param(dest) for dest in destinations]


def coerce_int(value: Any, default: int) -> int:
    """
    Coerce a numeric option to int.

    Strings and floats are truncated toward zero ("3.9" -> 3). None, or any
    value that cannot be read as a finite number, gives the default.
    """
    if value is None or isinstance(value, bool):
        return default
    if isinstance(value, int):
        return value

    try:
        number = Decimal(str(value).strip())
    except (InvalidOperation, ValueError):
        return default

    if not number.is_finite():
        return default
    return int(number)


def coerce_bool(value: Any, default: bool = False) -> bool:
    """Coerce a flag option; None gives the default."""
    if value is None:
        return default
    return bool(value)

"""
xmrwallet Core Module
Amount units and transfer parameter helpers.
"""

from .units import (
    InvalidAmountError,
    to_atomic_units,
    from_atomic_units,
    format_amount,
)
from .transaction import Destination, build_destinations, coerce_int, coerce_bool

__all__ = [
    'InvalidAmountError',
    'to_atomic_units',
    'from_atomic_units',
    'format_amount',
    'Destination',
    'build_destinations',
    'coerce_int',
    'coerce_bool',
]

"""
xmrwallet
Client for the monero-wallet-rpc JSON-RPC interface.
"""

import logging

from . import config
from .config import ClientConfig, ConfigError, load_config
from .core import (
    Destination,
    InvalidAmountError,
    to_atomic_units,
    from_atomic_units,
    format_amount,
)
from .rpc import (
    RPCClient,
    WalletRPC,
    RPCClientError,
    RPCResponseError,
    raise_for_error,
)

__version__ = config.VERSION

# Library code logs but never installs handlers
logging.getLogger(__name__).addHandler(logging.NullHandler())


def setup_logging(level: str = config.LOG_LEVEL):
    """Configure root logging for scripts embedding the client."""
    logging.basicConfig(level=level, format=config.LOG_FORMAT)


__all__ = [
    'ClientConfig',
    'ConfigError',
    'load_config',
    'Destination',
    'InvalidAmountError',
    'to_atomic_units',
    'from_atomic_units',
    'format_amount',
    'RPCClient',
    'WalletRPC',
    'RPCClientError',
    'RPCResponseError',
    'raise_for_error',
    'setup_logging',
]

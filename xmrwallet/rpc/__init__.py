"""
xmrwallet RPC Module
JSON-RPC client for monero-wallet-rpc.
"""

from .client import RPCClient, RPCClientError, RPCResponseError, raise_for_error
from .methods import WalletRPC

__all__ = [
    'RPCClient',
    'WalletRPC',
    'RPCClientError',
    'RPCResponseError',
    'raise_for_error',
]

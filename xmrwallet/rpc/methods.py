"""
xmrwallet RPC Methods
Named monero-wallet-rpc operations built on RPCClient.call.
"""

from typing import Any, Dict, List, Optional, Sequence, Union

from .client import RPCClient
from ..core.transaction import (
    DestinationLike,
    build_destinations,
    coerce_bool,
    coerce_int,
)
from .. import config


def _present(**fields) -> Dict[str, Any]:
    """Drop unset (None) fields so they are absent from the request."""
    return {key: value for key, value in fields.items() if value is not None}


class WalletRPC(RPCClient):
    """
    monero-wallet-rpc methods.

    Each method fixes the daemon method name, shapes its params and
    delegates to call(). Results are whatever call() returns, so daemon
    errors arrive as {'error': {...}} dicts.
    """

    # === Wallet files ===

    def create_wallet(self, filename: str = None, password: str = None,
                      language: str = None) -> Any:
        """Create a new wallet file and open it."""
        return self.call('create_wallet', {
            'filename': filename or config.DEFAULT_WALLET_FILENAME,
            'password': password or config.DEFAULT_WALLET_PASSWORD,
            'language': language or config.DEFAULT_WALLET_LANGUAGE,
        })

    def open_wallet(self, filename: str = None, password: str = None) -> Any:
        """Open an existing wallet file."""
        return self.call('open_wallet', {
            'filename': filename or config.DEFAULT_WALLET_FILENAME,
            'password': password or config.DEFAULT_WALLET_PASSWORD,
        })

    def stop_wallet(self) -> Any:
        """Store the wallet and stop the daemon."""
        return self.call('stop_wallet')

    def store(self) -> Any:
        """Save the open wallet file."""
        return self.call('store')

    # === Accounts & addresses ===

    def get_balance(self, account_index: int = None,
                    address_indices: List[int] = None) -> Any:
        """Return balance and unlocked balance (atomic units)."""
        return self.call('get_balance', _present(
            account_index=account_index,
            address_indices=address_indices,
        ))

    def get_address(self, account_index: int = None) -> Any:
        """Return the account's primary address and subaddresses."""
        return self.call('get_address', _present(account_index=account_index))

    def get_accounts(self) -> Any:
        return self.call('get_accounts')

    def create_account(self) -> Any:
        return self.call('create_account')

    def create_address(self, account_index: int = None, label: str = None,
                       count: int = None) -> Any:
        """Create one or more subaddresses in an account."""
        return self.call('create_address', _present(
            account_index=account_index,
            label=label,
            count=count,
        ))

    def make_integrated_address(self, payment_id: str = None) -> Any:
        return self.call('make_integrated_address', _present(payment_id=payment_id))

    def split_integrated_address(self, integrated_address: str = None) -> Any:
        """Return the standard address and payment id behind an integrated address."""
        return self.call('split_integrated_address', _present(
            integrated_address=integrated_address,
        ))

    def query_key(self, key_type: str = None) -> Any:
        """
        Return a wallet secret.

        Args:
            key_type: 'mnemonic' or 'view_key'
        """
        return self.call('query_key', _present(key_type=key_type))

    # === Transfers ===

    def _transfer_params(
        self,
        destinations: Union[DestinationLike, Sequence[DestinationLike]],
        mixin: Any,
        unlock_time: Any,
        payment_id: Optional[str],
        do_not_relay: Any,
        priority: Any,
        get_tx_hex: Any,
        get_tx_key: Any,
    ) -> Dict[str, Any]:
        return {
            'destinations': build_destinations(destinations),
            'mixin': coerce_int(mixin, config.DEFAULT_MIXIN),
            'unlock_time': coerce_int(unlock_time, config.DEFAULT_UNLOCK_TIME),
            'payment_id': payment_id or None,
            'do_not_relay': coerce_bool(do_not_relay),
            'priority': coerce_int(priority, config.DEFAULT_PRIORITY),
            'get_tx_hex': coerce_bool(get_tx_hex),
            'get_tx_key': coerce_bool(get_tx_key),
        }

    def transfer(
        self,
        destinations: Union[DestinationLike, Sequence[DestinationLike]],
        account_index: int = config.DEFAULT_ACCOUNT_INDEX,
        subaddr_indices: Any = config.DEFAULT_SUBADDR_INDICES,
        mixin: Any = config.DEFAULT_MIXIN,
        unlock_time: Any = config.DEFAULT_UNLOCK_TIME,
        payment_id: Optional[str] = None,
        do_not_relay: bool = False,
        priority: Any = config.DEFAULT_PRIORITY,
        get_tx_hex: bool = False,
        get_tx_key: bool = False,
    ) -> Any:
        """
        Send XMR to one or more recipients.

        Args:
            destinations: One destination or a list of them; amounts are in
                XMR and converted to atomic units (the caller's objects are
                left untouched)
            account_index: Account to spend from
            subaddr_indices: Subaddresses to spend from
            mixin: Ring size minus one; falls back to 4 if not numeric
            unlock_time: Blocks before the outputs can be spent
            payment_id: Optional payment id
            do_not_relay: Build the transaction but don't broadcast it
            priority: Fee priority (0-3)
            get_tx_hex: Return the raw transaction hex
            get_tx_key: Return the transaction key

        Returns:
            Daemon result (tx_hash, fee, ...) or the error body
        """
        params = {
            'account_index': account_index if account_index is not None else config.DEFAULT_ACCOUNT_INDEX,
            'subaddr_indices': subaddr_indices if subaddr_indices is not None else config.DEFAULT_SUBADDR_INDICES,
        }
        params.update(self._transfer_params(
            destinations, mixin, unlock_time, payment_id,
            do_not_relay, priority, get_tx_hex, get_tx_key,
        ))
        return self.call('transfer', params)

    def transfer_split(
        self,
        destinations: Union[DestinationLike, Sequence[DestinationLike]],
        mixin: Any = config.DEFAULT_MIXIN,
        unlock_time: Any = config.DEFAULT_UNLOCK_TIME,
        payment_id: Optional[str] = None,
        do_not_relay: bool = False,
        priority: Any = config.DEFAULT_PRIORITY,
        get_tx_hex: bool = False,
        get_tx_key: bool = False,
        new_algorithm: bool = False,
    ) -> Any:
        """Like transfer(), letting the daemon split it into several transactions."""
        params = self._transfer_params(
            destinations, mixin, unlock_time, payment_id,
            do_not_relay, priority, get_tx_hex, get_tx_key,
        )
        params['new_algorithm'] = coerce_bool(new_algorithm)
        return self.call('transfer_split', params)

    def sweep_dust(self) -> Any:
        """Send all dust outputs back to the wallet with 0 mixin."""
        return self.call('sweep_dust')

    def sweep_all(self, address: str = None, account_index: int = None,
                  subaddr_indices: List[int] = None) -> Any:
        """Send all unlocked balance to an address."""
        return self.call('sweep_all', _present(
            address=address,
            account_index=account_index,
            subaddr_indices=subaddr_indices,
        ))

    # === Incoming payments ===

    def get_payments(self, payment_id: str = None) -> Any:
        return self.call('get_payments', _present(payment_id=payment_id))

    def get_bulk_payments(self, payment_ids: Union[str, List[str]] = None,
                          min_block_height: int = None) -> Any:
        """Return payments for one or more payment ids from a given height."""
        return self.call('get_bulk_payments', _present(
            payment_ids=payment_ids,
            min_block_height=min_block_height,
        ))

    def incoming_transfers(self, transfer_type: str = None) -> Any:
        """
        Return incoming transfers.

        Args:
            transfer_type: 'all', 'available' or 'unavailable'
        """
        return self.call('incoming_transfers', _present(transfer_type=transfer_type))

    # === Chain ===

    def get_height(self) -> Any:
        """Return the wallet's current block height."""
        return self.call('getheight')

    def refresh(self) -> Any:
        return self.call('refresh')

    def get_version(self) -> Any:
        return self.call('get_version')

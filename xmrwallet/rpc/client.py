"""
xmrwallet RPC Client
HTTP JSON-RPC client for connecting to monero-wallet-rpc.
"""

import logging
import threading
from typing import Any, Dict, Optional

import requests
from requests.adapters import HTTPAdapter
from requests.auth import HTTPDigestAuth

from .. import config
from ..config import ClientConfig

logger = logging.getLogger(__name__)


class RPCClientError(Exception):
    """Transport-level RPC failure (connection, HTTP status, bad body)."""

    def __init__(self, message: str, status: Optional[int] = None):
        self.status = status
        super().__init__(message)


class RPCResponseError(Exception):
    """Error object returned by the wallet daemon."""

    def __init__(self, code: int, message: str):
        self.code = code
        self.message = message
        super().__init__(f"[{code}] {message}")


def raise_for_error(response: Any) -> Any:
    """
    Raise RPCResponseError if a call returned the daemon's error object.

    RPCClient.call hands error bodies back unchanged; this is the opt-in way
    to turn them into exceptions.

    Args:
        response: Value returned by RPCClient.call

    Returns:
        The response, unchanged, when it is not error-shaped
    """
    if isinstance(response, dict) and response.get('error') is not None:
        error = response['error']
        if isinstance(error, dict):
            raise RPCResponseError(
                error.get('code', -1),
                error.get('message', 'Unknown error')
            )
        raise RPCResponseError(-1, str(error))
    return response


class RPCClient:
    """
    monero-wallet-rpc client.

    Keeps one keep-alive connection to the daemon and serializes every call
    over it.
    """

    def __init__(
        self,
        host: str = config.DEFAULT_HOST,
        port: int = config.RPC_PORT,
        user: str = "",
        password: str = "",
        timeout: Optional[float] = None,
        prime: bool = True,
    ):
        """
        Initialize RPC client.

        Args:
            host: RPC server host
            port: RPC server port
            user: RPC login user (empty disables authentication)
            password: RPC login password
            timeout: Request timeout in seconds, None to wait indefinitely
            prime: Send the discarded handshake call straight away
        """
        self.config = ClientConfig(
            host=host or config.DEFAULT_HOST,
            port=port or config.RPC_PORT,
            user=user or "",
            password=password or "",
            timeout=timeout,
        )

        self.session = requests.Session()
        # Exactly one pooled socket; a second caller waits for it
        adapter = HTTPAdapter(pool_connections=1, pool_maxsize=1, pool_block=True)
        self.session.mount('http://', adapter)

        self._auth = None
        if self.config.auth_enabled:
            # Digest auth only answers a 401 challenge, credentials are
            # never sent up front
            self._auth = HTTPDigestAuth(self.config.user, self.config.password)

        self._lock = threading.Lock()

        if prime:
            self._prime_connection()

    @classmethod
    def from_config(cls, client_config: ClientConfig, prime: bool = True) -> 'RPCClient':
        """Create client from a ClientConfig."""
        return cls(
            host=client_config.host,
            port=client_config.port,
            user=client_config.user,
            password=client_config.password,
            timeout=client_config.timeout,
            prime=prime,
        )

    @classmethod
    def from_config_file(cls, config_file: str = None, prime: bool = True) -> 'RPCClient':
        """
        Create client from a monero-wallet-rpc config file.

        Args:
            config_file: Path to config file

        Returns:
            RPCClient instance
        """
        return cls.from_config(ClientConfig.from_file(config_file), prime=prime)

    @property
    def host(self) -> str:
        return self.config.host

    @property
    def port(self) -> int:
        return self.config.port

    @property
    def url(self) -> str:
        return self.config.url

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}(url={self.url!r}, auth={self.config.auth_enabled})"

    def _prime_connection(self):
        """
        Send the throwaway handshake request.

        The daemon can reject the first request made over a new keep-alive
        connection, so one call is spent here and its outcome ignored.
        """
        try:
            self.call(config.PRIMING_METHOD)
        except RPCClientError as e:
            logger.warning(f"Priming call to {self.url} failed: {e}")

    def call(self, method: str, params: Optional[Dict[str, Any]] = None) -> Any:
        """
        Call an RPC method.

        Args:
            method: Method name
            params: Parameters; None leaves the field out of the request

        Returns:
            The 'result' member of the response, or the whole decoded body
            when there is none (daemon errors come back this way)

        Raises:
            RPCClientError: Connection, HTTP or decoding failure
        """
        request = {
            'jsonrpc': config.JSONRPC_VERSION,
            'id': config.JSONRPC_ID,
            'method': method,
        }
        if params is not None:
            request['params'] = params

        logger.debug(f"RPC call: {method}")

        with self._lock:
            try:
                response = self.session.post(
                    self.url,
                    json=request,
                    auth=self._auth,
                    timeout=self.config.timeout,
                )
            except requests.Timeout as e:
                logger.error(f"RPC {method} timed out: {e}")
                raise RPCClientError("Request timed out") from e
            except requests.ConnectionError as e:
                logger.error(f"RPC {method} connection failed: {e}")
                raise RPCClientError(
                    f"Cannot connect to RPC server at {self.host}:{self.port}"
                ) from e
            except requests.RequestException as e:
                logger.error(f"RPC {method} request failed: {e}")
                raise RPCClientError(f"Connection error: {e}") from e

            # Check HTTP status
            if response.status_code == 401:
                raise RPCClientError("Authentication failed", status=401)

            if not response.ok:
                raise RPCClientError(
                    f"HTTP error: {response.status_code}",
                    status=response.status_code
                )

            # Parse response
            try:
                result = response.json()
            except ValueError as e:
                logger.error(f"RPC {method} returned invalid JSON")
                raise RPCClientError(f"Invalid JSON response: {e}") from e

        if isinstance(result, dict) and 'result' in result:
            return result['result']
        return result

    def close(self):
        """Release the pooled connection."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        self.close()

"""
xmrwallet Configuration
Constants and client settings for talking to monero-wallet-rpc.
"""

from dataclasses import dataclass
from typing import Dict, Optional
import os

# ============================================================================
# CORE CONSTANTS
# ============================================================================

COIN_NAME = "Monero"
COIN_TICKER = "XMR"

# Atomic units (piconero) per XMR (12 decimal places)
DISPLAY_DECIMALS = 12
ATOMIC_UNITS = 10 ** DISPLAY_DECIMALS

# ============================================================================
# NETWORK PORTS
# ============================================================================

DEFAULT_HOST = "127.0.0.1"

# Mainnet
RPC_PORT = 18082

# Testnet / Stagenet
TESTNET_RPC_PORT = 28082
STAGENET_RPC_PORT = 38082

NETWORK_PORTS = {
    'mainnet': RPC_PORT,
    'testnet': TESTNET_RPC_PORT,
    'stagenet': STAGENET_RPC_PORT,
}

# ============================================================================
# JSON-RPC
# ============================================================================

JSONRPC_VERSION = "2.0"
JSONRPC_ID = "0"
JSONRPC_PATH = "/json_rpc"

# monero-wallet-rpc rejects the first request on a fresh keep-alive socket
# in some setups; this call is sent once at construction and discarded.
PRIMING_METHOD = "get_balance"

# ============================================================================
# WALLET DEFAULTS
# ============================================================================

DEFAULT_WALLET_FILENAME = "monero_wallet"
DEFAULT_WALLET_PASSWORD = ""
DEFAULT_WALLET_LANGUAGE = "English"

# Transfer options
DEFAULT_ACCOUNT_INDEX = 0
DEFAULT_SUBADDR_INDICES = 0
DEFAULT_MIXIN = 4
DEFAULT_UNLOCK_TIME = 0
DEFAULT_PRIORITY = 0

# ============================================================================
# LOGGING
# ============================================================================

LOG_LEVEL = "INFO"
LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"

# ============================================================================
# VERSION INFO
# ============================================================================

VERSION = "1.0.0"
CLIENT_NAME = "xmrwallet"


class ConfigError(ValueError):
    """Invalid client configuration."""
    pass


@dataclass(frozen=True)
class ClientConfig:
    """Connection settings for one wallet RPC client."""
    host: str = DEFAULT_HOST
    port: int = RPC_PORT
    user: str = ""
    password: str = ""
    timeout: Optional[float] = None  # None blocks until the daemon answers

    @property
    def url(self) -> str:
        return f"http://{self.host}:{self.port}{JSONRPC_PATH}"

    @property
    def auth_enabled(self) -> bool:
        return bool(self.user)

    @classmethod
    def from_file(cls, config_file: str = None) -> 'ClientConfig':
        """
        Build settings from a monero-wallet-rpc config file.

        Recognised keys are rpc-bind-ip, rpc-bind-port, rpc-login
        (user:password) and disable-rpc-login. A missing file yields the
        defaults.

        Args:
            config_file: Path to config file

        Returns:
            ClientConfig instance
        """
        if config_file is None:
            config_file = get_config_file()

        settings = read_config_file(config_file)

        port = settings.get('rpc-bind-port', RPC_PORT)
        try:
            port = int(port)
        except (TypeError, ValueError):
            raise ConfigError(f"Invalid rpc-bind-port in {config_file}: {port!r}")

        user, password = "", ""
        login = settings.get('rpc-login')
        if login and 'disable-rpc-login' not in settings:
            user, _, password = login.partition(':')

        return cls(
            host=settings.get('rpc-bind-ip', DEFAULT_HOST),
            port=port,
            user=user,
            password=password,
        )


def read_config_file(config_file: str) -> Dict[str, str]:
    """Parse key=value lines, skipping blanks and # comments."""
    settings = {}
    try:
        with open(config_file, 'r') as f:
            for line in f:
                line = line.strip()
                if not line or line.startswith('#'):
                    continue
                if '=' in line:
                    key, value = line.split('=', 1)
                    settings[key.strip()] = value.strip()
                else:
                    # bare flags such as disable-rpc-login
                    settings[line] = ""
    except FileNotFoundError:
        pass
    return settings


def load_config(config_file: str = None) -> ClientConfig:
    """Load client settings (alias for ClientConfig.from_file)."""
    return ClientConfig.from_file(config_file)


def get_data_dir() -> str:
    """Get default Monero data directory."""
    import platform

    if platform.system() == 'Windows':
        base = os.environ.get('PROGRAMDATA', os.path.expanduser('~'))
        return os.path.join(base, 'bitmonero')
    return os.path.expanduser('~/.bitmonero')


def get_config_file(network: str = 'mainnet') -> str:
    """Get default monero-wallet-rpc config file path."""
    if network not in NETWORK_PORTS:
        raise ConfigError(f"Unknown network: {network}")

    data_dir = get_data_dir()
    if network != 'mainnet':
        data_dir = os.path.join(data_dir, network)
    return os.path.join(data_dir, 'monero-wallet-rpc.conf')

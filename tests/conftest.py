"""
Shared fixtures: an in-process fake monero-wallet-rpc daemon.
"""

import hashlib
import os
import sys
import json
import re
import threading
import time
from http.server import ThreadingHTTPServer, BaseHTTPRequestHandler
from typing import Any, Dict, List, Optional

import pytest

sys.path.insert(0, os.path.dirname(os.path.dirname(os.path.abspath(__file__))))

from xmrwallet.rpc import WalletRPC

REALM = "monero-rpc"
NONCE = "dcd98b7102dd2f0e8b11d0f600bfb0c093"


def _md5(text: str) -> str:
    return hashlib.md5(text.encode('utf-8')).hexdigest()


def _parse_digest(header: str) -> Dict[str, str]:
    """Parse the key=value pairs of a Digest Authorization header."""
    return {
        key: quoted if quoted else bare
        for key, quoted, bare in re.findall(r'(\w+)=(?:"([^"]*)"|([^,\s]*))', header)
    }


class FakeWalletHandler(BaseHTTPRequestHandler):
    """HTTP handler answering JSON-RPC requests from canned responses."""

    protocol_version = "HTTP/1.1"

    def log_message(self, format, *args):
        pass

    def do_POST(self):
        daemon = self.server.fake_wallet
        length = int(self.headers.get('Content-Length', 0))
        raw = self.rfile.read(length)

        try:
            body = json.loads(raw.decode('utf-8'))
        except ValueError:
            body = None

        authorization = self.headers.get('Authorization')
        daemon.record({
            'path': self.path,
            'body': body,
            'raw': raw,
            'authorization': authorization,
            'client_port': self.client_address[1],
        })

        if daemon.credentials and not self._authenticate(authorization):
            self.send_response(401)
            self.send_header(
                'WWW-Authenticate',
                f'Digest realm="{REALM}", qop="auth", algorithm=MD5, nonce="{NONCE}"'
            )
            self.send_header('Content-Length', '0')
            self.end_headers()
            return

        if daemon.delay:
            time.sleep(daemon.delay)

        method = body.get('method') if isinstance(body, dict) else None
        status, payload = daemon.response_for(method)

        self.send_response(status)
        self.send_header('Content-Type', 'application/json')
        self.send_header('Content-Length', str(len(payload)))
        self.end_headers()
        self.wfile.write(payload)

    def _authenticate(self, authorization: Optional[str]) -> bool:
        if not authorization or not authorization.startswith('Digest '):
            return False

        user, password = self.server.fake_wallet.credentials
        fields = _parse_digest(authorization[len('Digest '):])
        if fields.get('username') != user:
            return False

        ha1 = _md5(f"{user}:{REALM}:{password}")
        ha2 = _md5(f"POST:{fields.get('uri', '')}")
        expected = _md5(
            f"{ha1}:{fields.get('nonce')}:{fields.get('nc')}:"
            f"{fields.get('cnonce')}:{fields.get('qop')}:{ha2}"
        )
        return fields.get('response') == expected


class FakeWalletRPC:
    """
    Fake monero-wallet-rpc.

    Records every request it receives and replies with a per-method canned
    body (default: an empty result).
    """

    def __init__(self, credentials=None):
        self.credentials = credentials
        self.delay = 0
        self.requests: List[Dict[str, Any]] = []
        self._responses: Dict[Optional[str], tuple] = {}
        self._lock = threading.Lock()

        self.server = ThreadingHTTPServer(('127.0.0.1', 0), FakeWalletHandler)
        self.server.daemon_threads = True
        self.server.fake_wallet = self
        self.thread = threading.Thread(target=self.server.serve_forever, daemon=True)

    @property
    def port(self) -> int:
        return self.server.server_address[1]

    def start(self):
        self.thread.start()

    def stop(self):
        self.server.shutdown()
        self.server.server_close()

    def record(self, entry: Dict[str, Any]):
        with self._lock:
            self.requests.append(entry)

    def respond(self, method: str, body: Any = None, status: int = 200, raw: bytes = None):
        """Set the reply for a method; raw bytes are sent verbatim."""
        payload = raw if raw is not None else json.dumps(body).encode('utf-8')
        self._responses[method] = (status, payload)

    def response_for(self, method: Optional[str]) -> tuple:
        if method in self._responses:
            return self._responses[method]
        return 200, json.dumps({'jsonrpc': '2.0', 'id': '0', 'result': {}}).encode('utf-8')

    @property
    def bodies(self) -> List[Any]:
        return [r['body'] for r in self.requests]

    @property
    def methods(self) -> List[str]:
        return [r['body'].get('method') for r in self.requests if isinstance(r['body'], dict)]

    def last_body(self) -> Dict[str, Any]:
        return self.requests[-1]['body']


@pytest.fixture
def wallet_daemon():
    daemon = FakeWalletRPC()
    daemon.start()
    yield daemon
    daemon.stop()


@pytest.fixture
def auth_wallet_daemon():
    daemon = FakeWalletRPC(credentials=('monero', 'hunter2'))
    daemon.start()
    yield daemon
    daemon.stop()


@pytest.fixture
def wallet(wallet_daemon):
    """WalletRPC connected to the fake daemon (priming call already made)."""
    client = WalletRPC(port=wallet_daemon.port)
    yield client
    client.close()

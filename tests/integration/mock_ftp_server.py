"""Mock FTP server for integration testing.

Uses pyftpdlib to run a local FTP server backed by a temporary
directory, recording every connection and command it receives.
"""

import socket
import tempfile
import threading
import time
from pathlib import Path
from typing import List, Optional

import pytest

pytest.importorskip("pyftpdlib")

from pyftpdlib.authorizers import DummyAuthorizer  # noqa: E402
from pyftpdlib.handlers import FTPHandler  # noqa: E402
from pyftpdlib.servers import FTPServer  # noqa: E402


class MockFTPServer:
    """
    Local FTP server for upload tests.

    Usage:
        with MockFTPServer() as server:
            # Connect to server.host:server.port
            # server.root_dir contains the server filesystem
            pass
    """

    DEFAULT_USER = "testuser"
    DEFAULT_PASS = "testpass"

    def __init__(
        self,
        port: int = 0,
        username: str = DEFAULT_USER,
        password: str = DEFAULT_PASS,
        allow_anonymous: bool = False,
    ):
        """
        Initialize the mock FTP server.

        Args:
            port: Port to listen on (0 picks a free one)
            username: FTP username
            password: FTP password
            allow_anonymous: Also accept anonymous logins
        """
        self.port = port
        self.username = username
        self.password = password
        self.allow_anonymous = allow_anonymous

        self.connections = 0
        self.commands: List[str] = []

        self._server: Optional[FTPServer] = None
        self._thread: Optional[threading.Thread] = None
        self._temp_dir: Optional[tempfile.TemporaryDirectory] = None
        self._root_dir: Optional[Path] = None

    @property
    def root_dir(self) -> Path:
        """Root directory of the server filesystem."""
        if self._root_dir is None:
            raise RuntimeError("Server not started")
        return self._root_dir

    @property
    def host(self) -> str:
        """Server host address."""
        return "127.0.0.1"

    def command_names(self) -> List[str]:
        """Received command verbs, in order."""
        return [line.split(" ", 1)[0].upper() for line in self.commands]

    def _make_handler(self, authorizer: DummyAuthorizer) -> type:
        server = self

        class RecordingHandler(FTPHandler):
            def on_connect(self):
                server.connections += 1

            def pre_process_command(self, line, cmd, arg):
                server.commands.append(line)
                return super().pre_process_command(line, cmd, arg)

        RecordingHandler.authorizer = authorizer
        return RecordingHandler

    def start(self) -> None:
        """Start the FTP server in a background thread."""
        self._temp_dir = tempfile.TemporaryDirectory(prefix="mock_ftp_")
        self._root_dir = Path(self._temp_dir.name)

        authorizer = DummyAuthorizer()
        authorizer.add_user(
            self.username,
            self.password,
            str(self._root_dir),
            perm="elradfmw"  # Full permissions
        )
        if self.allow_anonymous:
            authorizer.add_anonymous(str(self._root_dir), perm="elradfmw")

        handler = self._make_handler(authorizer)
        self._server = FTPServer((self.host, self.port), handler)
        self.port = self._server.socket.getsockname()[1]

        self._thread = threading.Thread(target=self._server.serve_forever, daemon=True)
        self._thread.start()

        # Give server time to start
        time.sleep(0.2)

    def stop(self) -> None:
        """Stop the FTP server and clean up."""
        if self._server:
            self._server.close_all()

        if self._temp_dir:
            self._temp_dir.cleanup()

        self._server = None
        self._thread = None
        self._temp_dir = None
        self._root_dir = None

    def __enter__(self) -> "MockFTPServer":
        """Context manager entry."""
        self.start()
        return self

    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        """Context manager exit."""
        self.stop()


def free_port() -> int:
    """Port on localhost with nothing listening."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        return s.getsockname()[1]


@pytest.fixture
def mock_ftp_server():
    """Pytest fixture providing a mock FTP server."""
    server = MockFTPServer()
    server.start()
    yield server
    server.stop()


@pytest.fixture
def anonymous_ftp_server():
    """Mock FTP server that also accepts anonymous logins."""
    server = MockFTPServer(allow_anonymous=True)
    server.start()
    yield server
    server.stop()


@pytest.fixture
def silent_server():
    """Listening socket that accepts connections but never greets."""
    with socket.socket(socket.AF_INET, socket.SOCK_STREAM) as s:
        s.bind(("127.0.0.1", 0))
        s.listen(1)
        yield s.getsockname()

"""FTP connection management for FTP File Sender.

Provides ConnectionState enum, ConnectionConfig dataclass,
and FTPConnectionManager class wrapping a single ftplib session.
"""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum
from ftplib import FTP, all_errors, error_perm, error_reply, error_temp
from typing import BinaryIO, Callable, Optional, Tuple
import math
import socket

from ftp_sender.ftp.exceptions import (
    FTPConnectionError,
    FTPAuthenticationError,
    FTPDisconnectError,
    FTPNotConnectedError,
    FTPTimeoutError,
)
from ftp_sender.utils.validators import MAX_TIMEOUT


ANONYMOUS_USER = "anonymous"
ANONYMOUS_PASSWORD = "anonymous"


class ConnectionState(Enum):
    """FTP connection state."""
    DISCONNECTED = "disconnected"
    CONNECTING = "connecting"
    CONNECTED = "connected"
    AUTHENTICATED = "authenticated"
    ERROR = "error"


@dataclass(frozen=True)
class ConnectionConfig:
    """FTP connection configuration."""
    host: str
    port: int = 21
    timeout: float = 30.0
    username: Optional[str] = None
    password: Optional[str] = None

    def __post_init__(self):
        """Validate configuration after initialization."""
        if not self.host or not self.host.strip():
            raise ValueError("Host is required")
        if not 1 <= self.port <= 65535:
            raise ValueError(f"Port must be between 1 and 65535, got {self.port}")
        if not self.timeout > 0:
            raise ValueError(f"Timeout must be greater than 0, got {self.timeout}")
        if not math.isfinite(self.timeout) or self.timeout > MAX_TIMEOUT:
            raise ValueError(
                f"Timeout must be at most {MAX_TIMEOUT:g} seconds, got {self.timeout}"
            )

    @property
    def is_anonymous(self) -> bool:
        """True unless both username and password were supplied."""
        return not (self.username and self.password)

    @property
    def credentials(self) -> Tuple[str, str]:
        """(user, password) pair to log in with."""
        if self.is_anonymous:
            return ANONYMOUS_USER, ANONYMOUS_PASSWORD
        return self.username, self.password


class FTPConnectionManager:
    """Manages the lifecycle of one FTP control connection."""

    def __init__(self):
        """Initialize the connection manager."""
        self._ftp: Optional[FTP] = None
        self._config: Optional[ConnectionConfig] = None
        self._state = ConnectionState.DISCONNECTED
        self._connected_at: Optional[datetime] = None
        self._error_message: Optional[str] = None

    @property
    def state(self) -> ConnectionState:
        """Current connection state."""
        return self._state

    @property
    def is_connected(self) -> bool:
        """True if a control connection is open."""
        return self._state in (ConnectionState.CONNECTED, ConnectionState.AUTHENTICATED)

    @property
    def config(self) -> Optional[ConnectionConfig]:
        """Current connection configuration."""
        return self._config

    @property
    def connected_at(self) -> Optional[datetime]:
        """Timestamp when connection was established."""
        return self._connected_at

    @property
    def error_message(self) -> Optional[str]:
        """Last error message if state is ERROR."""
        return self._error_message

    @property
    def ftp(self) -> FTP:
        """
        Get the underlying FTP object.

        Raises:
            FTPNotConnectedError: If not connected
        """
        if not self.is_connected or self._ftp is None:
            raise FTPNotConnectedError("FTP access")
        return self._ftp

    def connect(self, config: ConnectionConfig) -> str:
        """
        Open the control connection and read the server greeting.

        The configured timeout becomes the socket timeout of the control
        connection and of every data connection ftplib opens later.

        Args:
            config: Connection configuration

        Returns:
            Server welcome message

        Raises:
            FTPConnectionError: If connection fails
            FTPTimeoutError: If connection times out
        """
        self._config = config
        self._state = ConnectionState.CONNECTING
        self._error_message = None

        ftp = FTP()
        ftp.set_debuglevel(0)
        try:
            welcome = ftp.connect(
                host=config.host,
                port=config.port,
                timeout=config.timeout
            )
        except socket.timeout as e:
            self._fail(ftp, e)
            raise FTPTimeoutError("Connection", config.timeout)
        except all_errors as e:
            self._fail(ftp, e)
            raise FTPConnectionError(config.host, config.port, e)

        self._ftp = ftp
        self._state = ConnectionState.CONNECTED
        self._connected_at = datetime.now()
        return welcome

    def login(self) -> str:
        """
        Authenticate with the configured credentials.

        Falls back to anonymous/anonymous unless both username and
        password are configured.

        Returns:
            Server response to the login

        Raises:
            FTPAuthenticationError: If the server rejects the credentials
            FTPTimeoutError: If the server does not answer in time
            FTPConnectionError: If the connection drops during login
        """
        ftp = self.ftp
        user, password = self._config.credentials
        try:
            response = ftp.login(user=user, passwd=password)
        except socket.timeout as e:
            self._error_message = str(e)
            raise FTPTimeoutError("Login", self._config.timeout, stage="authenticate")
        except (error_perm, error_reply, error_temp) as e:
            self._error_message = str(e)
            raise FTPAuthenticationError(user, e)
        except all_errors as e:
            # EOF, reset or garbled reply: the session is gone, not rejected
            self._error_message = str(e)
            raise FTPConnectionError(self._config.host, self._config.port, e,
                                     stage="authenticate")

        self._state = ConnectionState.AUTHENTICATED
        return response

    def change_directory(self, path: str) -> str:
        """
        Change current working directory.

        Args:
            path: Directory path

        Raises:
            FTPNotConnectedError: If not connected
        """
        return self.ftp.cwd(path)

    def make_directory(self, path: str) -> str:
        """
        Create a remote directory.

        Args:
            path: Directory path

        Returns:
            Path of the created directory as reported by the server

        Raises:
            FTPNotConnectedError: If not connected
        """
        return self.ftp.mkd(path)

    def store(
        self,
        remote_path: str,
        fp: BinaryIO,
        blocksize: int = 8192,
        callback: Optional[Callable[[bytes], None]] = None
    ) -> str:
        """
        Upload a binary stream with STOR.

        Args:
            remote_path: Server path (or bare file name) to store to
            fp: Open binary file object
            blocksize: Bytes per data block
            callback: Called with every block sent

        Returns:
            Server response after the transfer completed
        """
        return self.ftp.storbinary(
            f"STOR {remote_path}",
            fp,
            blocksize=blocksize,
            callback=callback
        )

    def quit(self) -> None:
        """
        End the session with QUIT and release the socket.

        The socket is closed whether or not QUIT succeeds.

        Raises:
            FTPDisconnectError: If the server did not acknowledge QUIT
        """
        ftp = self._ftp
        self._ftp = None
        self._state = ConnectionState.DISCONNECTED
        self._connected_at = None
        if ftp is None:
            return

        try:
            ftp.quit()
        except all_errors as e:
            ftp.close()
            host = self._config.host if self._config else "server"
            raise FTPDisconnectError(host, e)

    def _fail(self, ftp: FTP, error: Exception) -> None:
        """Record a failed connect and release the half-open socket."""
        self._state = ConnectionState.ERROR
        self._error_message = str(error)
        self._ftp = None
        ftp.close()

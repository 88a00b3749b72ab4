"""Single-file upload for FTP File Sender.

FileSender drives one FTP session from start to finish:
validate the local file, connect, log in, resolve the remote folder,
store the file and quit.
"""

from dataclasses import dataclass
from enum import Enum
from ftplib import all_errors, error_perm, error_reply, error_temp
from pathlib import Path
from typing import Callable, Optional
import logging
import posixpath
import socket
import time

from ftp_sender.ftp.connection import ConnectionConfig, FTPConnectionManager
from ftp_sender.ftp.exceptions import (
    FTPConnectionError,
    FTPDisconnectError,
    FTPError,
    FTPTimeoutError,
    FTPUploadError,
    InvalidSourceError,
    LocalIOError,
    RemoteDirectoryError,
)
from ftp_sender.utils.logging import get_logger


class FolderPolicy(Enum):
    """How the remote target folder is applied."""
    # CWD into the folder, creating it when CWD fails, then STOR <name>
    ENSURE_CWD = "ensure_cwd"
    # STOR <folder>/<name>, leaving the working directory alone
    PATH_JOIN = "path_join"


class TransferState(Enum):
    """Stage of a single transfer."""
    IDLE = "idle"
    VALIDATING = "validating"
    CONNECTING = "connecting"
    AUTHENTICATING = "authenticating"
    RESOLVING_DESTINATION = "resolving_destination"
    TRANSFERRING = "transferring"
    CLOSING = "closing"
    DONE = "done"
    FAILED = "failed"


@dataclass(frozen=True)
class TransferRequest:
    """What to upload and where."""
    source_path: str
    target_folder: str = "./"
    policy: FolderPolicy = FolderPolicy.ENSURE_CWD


@dataclass
class TransferProgress:
    """Progress information for an upload."""
    file_name: str
    bytes_sent: int
    bytes_total: int

    @property
    def percent(self) -> float:
        """Upload progress as percentage (0-100)."""
        if self.bytes_total == 0:
            return 0.0
        return (self.bytes_sent / self.bytes_total) * 100.0


@dataclass
class TransferResult:
    """Outcome of a completed upload."""
    source_path: str
    remote_path: str
    bytes_transferred: int = 0
    duration_seconds: float = 0.0
    disconnect_error: Optional[str] = None


# Stage names used in error messages, keyed by transfer state
_STAGE_NAMES = {
    TransferState.CONNECTING: "connect",
    TransferState.AUTHENTICATING: "authenticate",
    TransferState.RESOLVING_DESTINATION: "resolve_destination",
    TransferState.TRANSFERRING: "transfer",
}

# Type alias for progress callback
ProgressCallback = Callable[[TransferProgress], None]


class FileSender:
    """Uploads one local file to an FTP server."""

    # Block size for FTP transfers (8KB)
    BLOCK_SIZE = 8192

    def __init__(
        self,
        config: ConnectionConfig,
        logger: Optional[logging.Logger] = None,
        on_progress: Optional[ProgressCallback] = None
    ):
        """
        Initialize the sender.

        Args:
            config: Connection parameters
            logger: Logger to report progress to (defaults to app logger)
            on_progress: Optional callback for per-block progress updates
        """
        self._config = config
        self._logger = logger or get_logger()
        self._on_progress = on_progress
        self._connection = FTPConnectionManager()
        self._state = TransferState.IDLE

    @property
    def state(self) -> TransferState:
        """Current transfer stage."""
        return self._state

    def send_file(self, request: TransferRequest) -> TransferResult:
        """
        Upload request.source_path to the server.

        Args:
            request: Source file, target folder and folder policy

        Returns:
            TransferResult describing the upload

        Raises:
            InvalidSourceError: Source is missing or not a regular file
            FTPConnectionError: Server unreachable or connection lost
            FTPTimeoutError: A network operation exceeded the timeout
            FTPAuthenticationError: Login rejected
            RemoteDirectoryError: Target folder cannot be selected/created
            LocalIOError: Source cannot be opened or read
            FTPUploadError: STOR rejected or interrupted
        """
        if self._state != TransferState.IDLE:
            raise RuntimeError("FileSender performs a single transfer")

        self._logger.info("Attempting to send file via FTP...")
        start_time = time.time()

        try:
            self._set_state(TransferState.VALIDATING)
            source = self._validate_source(request.source_path)
        except InvalidSourceError as e:
            self._fail(e)
            raise

        try:
            self._connect()
            self._authenticate()
            remote_path = self._resolve_destination(request, source.name)
            bytes_sent = self._transfer(source, remote_path)
        except FTPError as e:
            self._fail(e)
            raise
        except all_errors as e:
            error = FTPConnectionError(self._config.host, self._config.port, e,
                                       stage=_STAGE_NAMES.get(self._state, "transfer"))
            self._fail(error)
            raise error from e
        finally:
            if self._state != TransferState.FAILED:
                self._set_state(TransferState.CLOSING)
            disconnect_error = self._close()

        self._set_state(TransferState.DONE)
        return TransferResult(
            source_path=str(source),
            remote_path=remote_path,
            bytes_transferred=bytes_sent,
            duration_seconds=time.time() - start_time,
            disconnect_error=disconnect_error
        )

    def _set_state(self, state: TransferState) -> None:
        self._logger.debug(f"Transfer state: {self._state.value} -> {state.value}")
        self._state = state

    def _fail(self, error: FTPError) -> None:
        self._set_state(TransferState.FAILED)
        self._logger.error(f"[{error.stage}] {error}")

    def _validate_source(self, source_path: str) -> Path:
        """
        Canonicalize the source path and check it names a regular file.

        Runs before any network activity.
        """
        try:
            source = Path(source_path).resolve(strict=True)
        except (OSError, RuntimeError) as e:
            raise InvalidSourceError(source_path, original_error=e)

        if not source.is_file():
            raise InvalidSourceError(source_path)

        self._logger.debug(f"Resolved source '{source_path}' to '{source}'")
        return source

    def _connect(self) -> None:
        config = self._config
        self._set_state(TransferState.CONNECTING)
        welcome = self._connection.connect(config)
        self._logger.info(f"Connected to {config.host} on port {config.port}")

        if welcome and welcome.startswith("220"):
            self._logger.info(f"Server response: {welcome}")
        else:
            self._logger.info(f"Could not get welcome message: {welcome!r}")

    def _authenticate(self) -> None:
        self._set_state(TransferState.AUTHENTICATING)
        self._connection.login()
        if self._config.is_anonymous:
            self._logger.info("Anonymous login successful")
        else:
            self._logger.info("Login successful with provided credentials")

    def _resolve_destination(self, request: TransferRequest, file_name: str) -> str:
        """
        Apply the folder policy.

        Returns:
            Path to pass to STOR
        """
        self._set_state(TransferState.RESOLVING_DESTINATION)
        folder = request.target_folder

        if request.policy == FolderPolicy.PATH_JOIN:
            remote_path = posixpath.join(folder, file_name)
            self._logger.info(f"Remote destination resolved to '{remote_path}'")
            return remote_path

        try:
            self._connection.change_directory(folder)
            self._logger.info(f"Remote folder '{folder}' exists. Switched to it.")
        except socket.timeout:
            raise FTPTimeoutError("Change directory", self._config.timeout,
                                  stage="resolve_destination")
        except error_perm:
            self._logger.info(f"Remote folder '{folder}' does not exist. Creating it...")
            self._ensure_folder(folder)
            self._logger.info(f"Remote folder '{folder}' created and switched to.")
        except (error_temp, error_reply) as e:
            raise RemoteDirectoryError(folder, "change to", e)
        except all_errors as e:
            raise FTPConnectionError(self._config.host, self._config.port, e,
                                     stage="resolve_destination")

        return file_name

    def _ensure_folder(self, folder: str) -> None:
        operation = "create"
        try:
            self._connection.make_directory(folder)
            operation = "change to"
            self._connection.change_directory(folder)
        except socket.timeout:
            raise FTPTimeoutError(f"Remote folder {operation}", self._config.timeout,
                                  stage="resolve_destination")
        except all_errors as e:
            raise RemoteDirectoryError(folder, operation, e)

    def _transfer(self, source: Path, remote_path: str) -> int:
        """
        Stream the source file to remote_path.

        Returns:
            Number of bytes transferred
        """
        self._set_state(TransferState.TRANSFERRING)
        self._logger.info(f"Sending file '{source}' to '{remote_path}' on the server")

        try:
            f = open(source, "rb")
        except OSError as e:
            raise LocalIOError(str(source), e)

        file_size = source.stat().st_size
        bytes_sent = 0

        def callback(block: bytes) -> None:
            nonlocal bytes_sent
            bytes_sent += len(block)
            progress = TransferProgress(
                file_name=source.name,
                bytes_sent=bytes_sent,
                bytes_total=file_size
            )
            self._logger.debug(
                f"Sent {progress.bytes_sent}/{progress.bytes_total} bytes "
                f"({progress.percent:.1f}%)"
            )
            if self._on_progress:
                self._on_progress(progress)

        with f:
            try:
                self._connection.store(
                    remote_path,
                    f,
                    blocksize=self.BLOCK_SIZE,
                    callback=callback
                )
            except socket.timeout:
                raise FTPTimeoutError("Upload", self._config.timeout, stage="transfer")
            except all_errors as e:
                raise FTPUploadError(source.name, remote_path, e)

        self._logger.info(
            f"File '{source.name}' sent successfully to '{remote_path}' "
            f"({bytes_sent} bytes)"
        )
        return bytes_sent

    def _close(self) -> Optional[str]:
        """
        QUIT the session if one is open.

        Returns:
            Disconnect error message, or None on a clean close
        """
        if not self._connection.is_connected:
            return None

        try:
            self._connection.quit()
        except FTPDisconnectError as e:
            self._logger.warning(f"[{e.stage}] {e}")
            return str(e)

        self._logger.info("FTP connection closed")
        return None

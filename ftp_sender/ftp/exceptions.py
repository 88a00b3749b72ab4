"""FTP-specific exceptions for FTP File Sender.

Custom exception hierarchy for the transfer sequence. Every error carries
an ErrorKind tag and the stage it was raised in, so callers can tell
failure causes apart without parsing messages.
"""

from enum import Enum


class ErrorKind(Enum):
    """Classification of transfer failures."""
    INVALID_SOURCE = "invalid_source"
    CONNECTION = "connection"
    TIMEOUT = "timeout"
    AUTH = "auth"
    REMOTE_DIRECTORY = "remote_directory"
    LOCAL_IO = "local_io"
    TRANSFER = "transfer"
    DISCONNECT_WARNING = "disconnect_warning"


class FTPError(Exception):
    """Base exception for all FTP-related errors."""

    kind: ErrorKind = ErrorKind.TRANSFER
    stage: str = "transfer"

    def __init__(self, message: str, original_error: Exception = None):
        super().__init__(message)
        self.message = message
        self.original_error = original_error

    def __str__(self) -> str:
        if self.original_error:
            return f"{self.message}: {self.original_error}"
        return self.message


class InvalidSourceError(FTPError):
    """Local source path is missing or not a regular file."""

    kind = ErrorKind.INVALID_SOURCE
    stage = "validate"

    def __init__(self, path: str, reason: str = "does not exist or is not a file",
                 original_error: Exception = None):
        self.path = path
        message = f"Source file '{path}' {reason}"
        super().__init__(message, original_error)


class FTPConnectionError(FTPError):
    """Failed to establish FTP connection."""

    kind = ErrorKind.CONNECTION
    stage = "connect"

    def __init__(self, host: str, port: int, original_error: Exception = None,
                 stage: str = "connect"):
        self.host = host
        self.port = port
        self.stage = stage
        if stage == "connect":
            message = f"Failed to connect to {host}:{port}"
        else:
            message = f"Connection to {host}:{port} lost during {stage}"
        super().__init__(message, original_error)


class FTPAuthenticationError(FTPError):
    """FTP authentication (login) failed."""

    kind = ErrorKind.AUTH
    stage = "authenticate"

    def __init__(self, username: str, original_error: Exception = None):
        self.username = username
        message = f"Authentication failed for user '{username}'"
        super().__init__(message, original_error)


class FTPNotConnectedError(FTPError):
    """Operation attempted without active FTP connection."""

    kind = ErrorKind.CONNECTION
    stage = "connect"

    def __init__(self, operation: str = "Operation"):
        message = f"{operation} requires an active FTP connection"
        super().__init__(message)


class FTPTimeoutError(FTPError):
    """FTP operation timed out."""

    kind = ErrorKind.TIMEOUT

    def __init__(self, operation: str = "Operation", timeout: float = 30,
                 stage: str = "connect"):
        self.operation = operation
        self.timeout = timeout
        self.stage = stage
        message = f"{operation} timed out after {timeout:g} seconds"
        super().__init__(message)


class RemoteDirectoryError(FTPError):
    """Remote destination folder could not be selected or created."""

    kind = ErrorKind.REMOTE_DIRECTORY
    stage = "resolve_destination"

    def __init__(self, path: str, operation: str, original_error: Exception = None):
        self.path = path
        self.operation = operation
        message = f"Failed to {operation} remote folder '{path}'"
        super().__init__(message, original_error)


class LocalIOError(FTPError):
    """Local source file could not be opened or read."""

    kind = ErrorKind.LOCAL_IO
    stage = "transfer"

    def __init__(self, path: str, original_error: Exception = None):
        self.path = path
        message = f"Cannot read local file '{path}'"
        super().__init__(message, original_error)


class FTPUploadError(FTPError):
    """Failed to upload file via FTP."""

    kind = ErrorKind.TRANSFER
    stage = "transfer"

    def __init__(
        self,
        file_name: str,
        remote_path: str,
        original_error: Exception = None
    ):
        self.file_name = file_name
        self.remote_path = remote_path
        message = f"Failed to upload '{file_name}' to '{remote_path}'"
        super().__init__(message, original_error)


class FTPDisconnectError(FTPError):
    """QUIT failed. Logged as a warning, never fatal to a finished transfer."""

    kind = ErrorKind.DISCONNECT_WARNING
    stage = "close"

    def __init__(self, host: str, original_error: Exception = None):
        self.host = host
        message = f"Failed to close FTP session with {host}"
        super().__init__(message, original_error)

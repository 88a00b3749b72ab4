"""Main application entry point for FTP File Sender.

Parses the command line, wires up settings, credentials and logging,
and runs a single upload.
"""

import argparse
import logging
import sys
from pathlib import Path
from typing import List, Optional

from . import __version__
from .config.credentials import CredentialManager
from .config.paths import get_log_file_path
from .config.settings import AppSettings, SettingsManager
from .ftp.connection import ConnectionConfig
from .ftp.exceptions import FTPError
from .ftp.sender import FileSender, FolderPolicy, TransferRequest
from .utils.logging import setup_logging
from .utils.validators import (
    validate_file_path,
    validate_host,
    validate_port,
    validate_timeout,
)


def build_parser() -> argparse.ArgumentParser:
    """Create the command-line parser.

    Options left unset fall back to the saved settings.
    """
    parser = argparse.ArgumentParser(
        prog="ftp-sender",
        description="Send a file to an FTP server.",
    )
    parser.add_argument("host", help="FTP server host address (e.g. 192.168.1.3)")
    parser.add_argument("path", help="Local file to send (e.g. ./example_file.txt)")
    parser.add_argument("-f", "--folder", help="Destination folder on the server (default: ./)")
    parser.add_argument("-p", "--port", type=int, help="Server port (default: 21)")
    parser.add_argument("-t", "--timeout", type=float,
                        help="Read/write timeout in seconds (default: 30.0)")
    parser.add_argument("-u", "--username", help="FTP login user name")
    parser.add_argument("-w", "--password", help="FTP login password")
    parser.add_argument(
        "--policy",
        choices=[p.value for p in FolderPolicy],
        help="ensure_cwd: change into the folder, creating it if missing; "
             "path_join: store to folder/filename without changing directory",
    )
    parser.add_argument("--config", type=Path, help="Settings file to use")
    parser.add_argument("--log-file", type=Path, help="Write logs to this file")
    parser.add_argument("--no-log-file", action="store_true", help="Log to the console only")
    parser.add_argument("-v", "--verbose", action="store_true", help="Enable debug logging")
    parser.add_argument("--save-password", action="store_true",
                        help="Store the password in the system keyring after a successful upload")
    parser.add_argument("--save-defaults", action="store_true",
                        help="Remember port, timeout, folder, user and policy for later runs")
    parser.add_argument("--version", action="version", version=f"%(prog)s {__version__}")
    return parser


class Application:
    """Runs one upload from parsed command-line arguments."""

    def __init__(self, args: argparse.Namespace):
        self._args = args
        self._settings_manager = SettingsManager(args.config)
        self._settings = self._settings_manager.load()
        self._credential_manager = CredentialManager()

        level = logging.DEBUG if args.verbose else logging.INFO
        self._logger = setup_logging(level=level, log_file=self._resolve_log_file())

    def _resolve_log_file(self) -> Optional[Path]:
        if self._args.no_log_file:
            return None
        if self._args.log_file:
            return self._args.log_file
        if self._settings.log_to_file:
            return get_log_file_path()
        return None

    def _fail(self, message: str) -> int:
        self._logger.error(message)
        print(f"Error: {message}", file=sys.stderr)
        return 1

    def run(self) -> int:
        """
        Validate arguments and send the file.

        Returns:
            Exit code (0 for success, 1 for any failure)
        """
        args = self._args
        settings = self._settings

        port = args.port if args.port is not None else settings.port
        timeout = args.timeout if args.timeout is not None else settings.timeout
        folder = args.folder if args.folder is not None else settings.folder
        username = args.username or settings.username or None
        password = args.password

        for is_valid, error in (
            validate_host(args.host),
            validate_file_path(args.path),
            validate_port(port),
            validate_timeout(timeout),
        ):
            if not is_valid:
                return self._fail(error)

        try:
            policy = FolderPolicy(args.policy or settings.folder_policy)
        except ValueError:
            return self._fail(f"Unknown folder policy: {args.policy or settings.folder_policy}")

        host = args.host.strip()
        if username and not password:
            password = self._credential_manager.get_password(host, username)
            if password:
                self._logger.info(f"Using saved password for '{username}'")

        config = ConnectionConfig(
            host=host,
            port=int(port),
            timeout=float(timeout),
            username=username,
            password=password,
        )
        request = TransferRequest(
            source_path=args.path,
            target_folder=folder,
            policy=policy,
        )

        sender = FileSender(config, logger=self._logger)
        try:
            result = sender.send_file(request)
        except FTPError as e:
            return self._fail(f"FTP error occurred: {e}")

        self._logger.info(
            f"Uploaded {result.bytes_transferred} bytes to '{result.remote_path}' "
            f"in {result.duration_seconds:.2f}s"
        )

        if args.save_password and username and args.password:
            if not self._credential_manager.save_password(host, username, args.password):
                self._logger.warning("Could not save password to the system keyring")

        if args.save_defaults:
            self._settings_manager.save(AppSettings(
                port=config.port,
                timeout=config.timeout,
                username=username or "",
                folder=folder,
                folder_policy=policy.value,
                log_to_file=settings.log_to_file,
            ))
            self._logger.info(f"Saved defaults to {self._settings_manager.config_path}")

        return 0


def main(argv: Optional[List[str]] = None) -> int:
    """
    Application entry point.

    Returns:
        Exit code (0 for success)
    """
    args = build_parser().parse_args(argv)
    try:
        app = Application(args)
    except OSError as e:
        print(f"Fatal error: {e}", file=sys.stderr)
        return 1
    return app.run()


if __name__ == "__main__":
    sys.exit(main())

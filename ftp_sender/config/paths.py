"""Where FTP File Sender keeps its settings and log file.

Windows uses %APPDATA%, macOS ~/Library/Application Support, and
everything else $XDG_CONFIG_HOME (default ~/.config).
"""

import os
import sys
from pathlib import Path


APP_NAME = "ftp-sender"
SETTINGS_FILE_NAME = "settings.json"
LOG_FILE_NAME = "ftp_sender.log"


def _config_base() -> Path:
    if sys.platform == "win32":
        return Path(os.environ.get("APPDATA", Path.home() / "AppData" / "Roaming"))
    if sys.platform == "darwin":
        return Path.home() / "Library" / "Application Support"
    return Path(os.environ.get("XDG_CONFIG_HOME", Path.home() / ".config"))


def get_app_data_dir() -> Path:
    """Per-user directory for this tool, created on first use."""
    app_dir = _config_base() / APP_NAME
    app_dir.mkdir(parents=True, exist_ok=True)
    return app_dir


def get_settings_path() -> Path:
    """Default settings file used when ``--config`` is not given."""
    return get_app_data_dir() / SETTINGS_FILE_NAME


def get_log_file_path() -> Path:
    """Default log file, under a ``logs`` subdirectory of the app directory."""
    log_dir = get_app_data_dir() / "logs"
    log_dir.mkdir(exist_ok=True)
    return log_dir / LOG_FILE_NAME

"""Keyring-backed password lookup for FTP File Sender.

Passwords are stored per server account so ``--username`` alone is
enough on later runs.
"""

from typing import Optional

import keyring
from keyring.errors import KeyringError


def account_key(host: str, username: str) -> str:
    """Keyring user name for an FTP account, e.g. ``192.168.1.3:admin``."""
    return f"{host.strip()}:{username}"


class CredentialManager:
    """Saves and looks up FTP passwords in the system keyring.

    A missing or broken keyring backend is never fatal: lookups return
    None and saves return False, and the upload goes ahead without it.
    """

    SERVICE_NAME = "ftp-sender"

    def save_password(self, host: str, username: str, password: str) -> bool:
        """Store the password for username@host. Returns False on keyring failure."""
        try:
            keyring.set_password(self.SERVICE_NAME, account_key(host, username), password)
        except KeyringError:
            return False
        return True

    def get_password(self, host: str, username: str) -> Optional[str]:
        """Saved password for username@host, or None."""
        try:
            return keyring.get_password(self.SERVICE_NAME, account_key(host, username))
        except KeyringError:
            return None

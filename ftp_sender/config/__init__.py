"""Configuration module for FTP File Sender.

This module handles persistent defaults and credentials:
- SettingsManager: JSON-based settings persistence
- CredentialManager: Secure credential storage via keyring
- Paths: Application data directories
- AppSettings: Settings dataclass
"""

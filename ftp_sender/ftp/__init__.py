"""FTP operations module for FTP File Sender.

This module handles all FTP-related functionality:
- FTPConnectionManager: Control connection wrapper with state tracking
- FileSender: Single-file upload sequence
- Exceptions: FTP-specific error types tagged by ErrorKind
"""

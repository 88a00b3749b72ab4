"""Utility module for FTP File Sender.

This module provides cross-cutting utilities:
- Logging: Configured logging with PII redaction
- Validators: Input validation for host, port, timeout, paths
"""

"""FTP File Sender: upload a single file to an FTP server."""

__version__ = "1.0.0"

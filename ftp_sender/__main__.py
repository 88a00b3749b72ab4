"""Allow running as ``python -m ftp_sender``."""

import sys

from .main import main

sys.exit(main())

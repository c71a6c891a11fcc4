"""Pytest configuration for root."""

import os
import sys

# Settings are read at import time, so keep test runs off the log directory
# and quiet before anything imports `config`.
os.environ.setdefault("LOG_TO_FILE", "false")
os.environ.setdefault("LOG_LEVEL", "ERROR")

sys.path.append(os.getcwd())

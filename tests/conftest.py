"""
Global pytest configuration for Quarterdeck platform tests.
"""

import os

# Console log output and test mode before any settings are loaded
os.environ.setdefault("TESTING", "true")
os.environ.setdefault("OBSERVABILITY__LOG_FORMAT", "text")
os.environ.setdefault("OBSERVABILITY__LOG_LEVEL", "WARNING")

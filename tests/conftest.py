"""Root conftest: shared test configuration."""

import os

# Keep test output quiet and human-readable
os.environ.setdefault("REFINERY_LOG_LEVEL", "WARNING")
os.environ.setdefault("REFINERY_LOG_FORMAT", "text")

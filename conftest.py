"""Global pytest configuration."""

import os

# Keep tests on the in-memory store before any imports
os.environ.setdefault("STORAGE_BACKEND", "memory")

"""Global pytest configuration."""

import os

# Point settings at a fake upstream before any imports
os.environ.setdefault("API_BASE_URL", "https://api.test")
os.environ.setdefault("TENANT_ID", "TENANT#001")
os.environ.setdefault("LOG_LEVEL", "WARNING")

"""Test configuration shared by the whole suite."""

import os
from pathlib import Path

# The application reads its configuration at import time.
_ROOT = Path(__file__).resolve().parent.parent
os.environ["APP_CONFIG_FILE"] = str(_ROOT / "config.yaml")
os.environ["APP_ENVIRONMENT"] = "test"
os.environ["LOG_FILE"] = ""
os.environ["LOG_LEVEL"] = "WARNING"
os.environ["DATABASE_URL"] = "sqlite://"
os.environ["JWT_SECRET"] = "test-access-token-secret"
os.environ["CLOUDINARY_CLOUD_NAME"] = "demo-cloud"
os.environ["CLOUDINARY_API_KEY"] = "123456789"
os.environ["CLOUDINARY_API_SECRET"] = "cloudinary-test-secret"

from tests.fixtures import *  # noqa: E402,F401,F403

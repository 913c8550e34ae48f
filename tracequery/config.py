"""
Central configuration, loaded from the .env file.
"""
import os
from dotenv import load_dotenv

# Load .env from project root
load_dotenv(os.path.join(os.path.dirname(os.path.dirname(__file__)), ".env"))

# ── Cloud Trace ──
CLOUD_TRACE_API_URL = os.getenv("CLOUD_TRACE_API_URL", "https://cloudtrace.googleapis.com/v1")
RESOURCE_MANAGER_API_URL = os.getenv(
    "RESOURCE_MANAGER_API_URL", "https://cloudresourcemanager.googleapis.com/v1"
)
USER_AGENT = "googlecloud-trace-datasource"

# Project used when a query does not name one.
# Owned by whoever builds the datasource; nothing here caches it.
DEFAULT_PROJECT = os.getenv("GOOGLE_CLOUD_PROJECT", "")

# Caller deadline (seconds) applied to every remote call that does not pass its own.
REQUEST_TIMEOUT_SECONDS = float(os.getenv("REQUEST_TIMEOUT_SECONDS", "30"))

# ── Logging ──
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")

"""
config.py
---------
Central configuration module. Loads all environment variables
from the .env file and exposes them as typed constants.

Every default matches the legacy coverage database deployment, so an empty
environment behaves exactly like the old hardcoded reader.
"""

import os
from dotenv import load_dotenv

load_dotenv()


# ── PostgreSQL ────────────────────────────────────────────
DB_HOST: str = os.getenv("COVDB_HOST", "atldbpgsql07")
DB_PORT: int = int(os.getenv("COVDB_PORT", "5432"))
DB_NAME: str = os.getenv("COVDB_NAME", "videoip")
DB_USER: str = os.getenv("COVDB_USER", "dcip")
DB_PASS: str = os.getenv("COVDB_PASS", "dcip")
DB_CONNECT_TIMEOUT: int = int(os.getenv("COVDB_CONNECT_TIMEOUT", "10"))

# ── Retry policy ──────────────────────────────────────────
RETRY_SLEEP_SECONDS: float = float(os.getenv("COVDB_RETRY_SLEEP_SECONDS", "60"))
MAX_RETRIES: int = int(os.getenv("COVDB_MAX_RETRIES", "10"))
RECONNECT_AFTER: int = int(os.getenv("COVDB_RECONNECT_AFTER", "5"))

# ── Report storage ────────────────────────────────────────
REPORTS_ROOT: str = os.getenv("COVDB_REPORTS_ROOT", "/proj/videoip/web/merged_reports/")

# ── Logging ───────────────────────────────────────────────
LOG_LEVEL: str = os.getenv("COVDB_LOG_LEVEL", "INFO").upper()

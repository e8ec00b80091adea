"""Server health utilities.

Provides a simple `get_health` function returning server status,
start time, uptime in seconds and the active backend.
"""
from datetime import datetime, timezone
from typing import Optional
import time
import os

# record process start time at import
_START_TIME = time.time()


def get_health(backend_kind: Optional[str] = None) -> dict:
    """Return a dict representing server health.

    Fields:
    - status: 'ok'
    - start_time: ISO 8601 UTC timestamp when the process started
    - uptime_seconds: integer seconds since start
    - version: contents of the VERSION file, or 'unknown'
    - backend: kind of the bound parameter backend, if known
    """
    now = time.time()
    uptime = int(now - _START_TIME)
    start_dt = datetime.fromtimestamp(_START_TIME, tz=timezone.utc)

    version = "unknown"
    version_file = os.path.join(os.path.dirname(__file__), "../../VERSION")
    if os.path.exists(version_file):
        with open(version_file, "r") as f:
            version = f.read().strip()

    return {
        "status": "ok",
        "start_time": start_dt.isoformat(),
        "uptime_seconds": uptime,
        "version": version,
        "backend": backend_kind,
    }

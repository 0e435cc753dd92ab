"""
Time utilities
"""
import time
from datetime import datetime, timezone

def now() -> datetime:
    """Get current UTC time"""
    return datetime.now(timezone.utc)

def now_ms() -> int:
    """Get current timestamp in milliseconds"""
    return int(time.time() * 1000)

def now_seconds() -> int:
    """Get current timestamp in seconds"""
    return int(time.time())

def now_iso() -> str:
    """Current UTC time as ISO-8601 with a trailing Z"""
    return now().isoformat(timespec="milliseconds").replace("+00:00", "Z")

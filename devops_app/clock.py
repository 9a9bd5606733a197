import datetime as dt
import time

_STARTED = time.monotonic()


def now_iso() -> str:
    """UTC now as 2026-01-01T00:00:00.000Z."""
    return dt.datetime.now(dt.timezone.utc).isoformat(timespec="milliseconds").replace("+00:00", "Z")


def uptime() -> float:
    return time.monotonic() - _STARTED

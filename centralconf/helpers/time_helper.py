"""Time utility helpers."""

import time


def now_ms() -> int:
    """
    Get current timestamp in milliseconds since epoch.

    Returns:
        Current time as integer milliseconds
    """
    return int(time.time() * 1000)


def internal_s() -> float:
    """
    Get a monotonic timestamp in seconds.

    Use for measuring intervals only; never compare against wall-clock time.
    """
    return time.monotonic()


def format_interval(seconds: float) -> str:
    """
    Format an interval for log output, e.g. 300 -> "5m", 65.5 -> "1m 5.5s".

    Args:
        seconds: Interval length in seconds

    Returns:
        Compact human readable string
    """
    if seconds < 0:
        return f"-{format_interval(-seconds)}"

    hours, rest = divmod(seconds, 3600)
    minutes, secs = divmod(rest, 60)

    parts = []
    if hours:
        parts.append(f"{int(hours)}h")
    if minutes:
        parts.append(f"{int(minutes)}m")
    if secs or not parts:
        parts.append(f"{secs:g}s")
    return " ".join(parts)

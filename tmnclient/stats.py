"""
Throughput arithmetic and human-readable formatting.

Pure functions -- no I/O, no side effects.
"""
from __future__ import annotations


def bandwidth_mbps(bytes_total: int, seconds: float) -> float:
    """Decimal megabits per second; 0.0 when *seconds* is not positive."""
    if seconds <= 0:
        return 0.0
    return (bytes_total * 8 / seconds) / 1_000_000


# ---------------------------------------------------------------------------
# Formatting helpers
# ---------------------------------------------------------------------------

def _trim(number: str) -> str:
    if "." not in number:
        return number
    return number.rstrip("0").rstrip(".")


def format_duration(seconds: float) -> str:
    """
    Compact duration string: ``8s``, ``1.5s``, ``15m0s``, ``1h2m3.25s``,
    ``12.5ms``.  Precision is one microsecond.
    """
    if seconds < 0:
        return "-" + format_duration(-seconds)
    if seconds == 0:
        return "0s"
    if seconds < 1:
        return _trim(f"{seconds * 1000:.3f}") + "ms"

    total_us = round(seconds * 1_000_000)
    hours, rem = divmod(total_us, 3_600_000_000)
    minutes, rem = divmod(rem, 60_000_000)

    out = ""
    if hours:
        out += f"{hours}h"
    if hours or minutes:
        out += f"{minutes}m"
    return out + _trim(f"{rem / 1_000_000:.6f}") + "s"


def format_speed(speed_mbps: float) -> str:
    """Human-readable speed string."""
    if speed_mbps >= 1000:
        return f"{speed_mbps / 1000:.3f} Gbps"
    return f"{speed_mbps:.3f} Mbps"

"""
Output formatting -- CSV and plain-text result lines.
"""
from __future__ import annotations

from tmnclient.stats import format_duration


def _csv_escape(value: str) -> str:
    """Quote *value* if it contains a comma, quote or newline."""
    if any(c in value for c in (",", '"', "\n", "\r")):
        return '"' + value.replace('"', '""') + '"'
    return value


def format_csv_row(server: str, bytes_total: int, seconds: float, mbps: float) -> str:
    return f"{_csv_escape(server)},{bytes_total},{seconds:.3f},{mbps:.3f}"


def format_text_result(server: str, bytes_total: int, seconds: float, mbps: float) -> str:
    return (
        f"Downloaded {bytes_total} bytes from {server} in {format_duration(seconds)}. "
        f"Bandwidth = {mbps:.3f}Mbps"
    )

"""UI layer -- logging console and result formatters."""

from .console import configure_logging, err_console, verbosity_level
from .output import format_csv_row, format_text_result

__all__ = [
    "configure_logging",
    "err_console",
    "format_csv_row",
    "format_text_result",
    "verbosity_level",
]

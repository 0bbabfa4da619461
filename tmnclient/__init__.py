"""testmy.net client library -- options, download timing, and overload protection."""

from .download import DownloadResult, download_url, measure_download
from .errors import (
    DownloadError,
    HomeDirError,
    OptionsError,
    RateLimitError,
    StateFileError,
    TestMyNetError,
)
from .homedir import home_dir
from .locations import SERVER_LOCATIONS, location_list
from .options import Options, build_parser, parse_options, resolve_server
from .ratelimit import RateLimiter, format_timestamp, parse_timestamp
from .stats import bandwidth_mbps, format_duration, format_speed

__all__ = [
    "DownloadError",
    "DownloadResult",
    "HomeDirError",
    "Options",
    "OptionsError",
    "RateLimitError",
    "RateLimiter",
    "SERVER_LOCATIONS",
    "StateFileError",
    "TestMyNetError",
    "bandwidth_mbps",
    "build_parser",
    "download_url",
    "format_duration",
    "format_speed",
    "format_timestamp",
    "home_dir",
    "location_list",
    "measure_download",
    "parse_options",
    "parse_timestamp",
    "resolve_server",
]

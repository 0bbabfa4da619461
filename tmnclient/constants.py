"""
Defaults for the testmynet CLI: flag defaults, request headers, the
dry-run sentinel measurement, and the overload-protection state file.
"""
from datetime import timedelta

# ---------------------------------------------------------------------------
# Flag defaults
# ---------------------------------------------------------------------------

DEFAULT_LOCATION = "ca"
DEFAULT_DATA_SIZE = 10240        # KB, used verbatim in the download path
TMN_DOMAIN = "testmy.net"

# ---------------------------------------------------------------------------
# HTTP
# ---------------------------------------------------------------------------

USER_AGENT = "testmynet-cli/1.0 (+https://testmy.net)"

COMMON_HEADERS = {
    "User-Agent": USER_AGENT,
    "Accept": "*/*",
    "Accept-Encoding": "identity",
}

CHUNK_SIZE = 64 * 1024           # read size while discarding the body

# ---------------------------------------------------------------------------
# Dry-run sentinels
# ---------------------------------------------------------------------------

DRY_RUN_BYTES = 1_000_000
DRY_RUN_SECONDS = 8.0

# ---------------------------------------------------------------------------
# Overload protection
# ---------------------------------------------------------------------------

STATE_FILE = ".testmynet-cli.state"
MIN_INTERVAL = timedelta(minutes=15)
STATE_FILE_MODE = 0o600

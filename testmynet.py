#!/usr/bin/env python3
"""
testmynet -- CLI based network bandwidth tester using testmy.net.

Usage::

    python testmynet.py                       # test against the default location
    python testmynet.py --location uk         # pick a location
    python testmynet.py --location help       # list locations
    python testmynet.py --server http://host  # explicit server
    python testmynet.py --csv                 # server,bytes,seconds,mbps
    python testmynet.py --dry-run -v          # exercise everything, fake timing

The program refuses to run more than once every 15 minutes unless
``--I-WANT-TO-GET-BANNED`` is given.
"""
from __future__ import annotations

import asyncio
import logging
import sys
from typing import List, Optional

from tmnclient.download import measure_download
from tmnclient.errors import TestMyNetError
from tmnclient.options import Options, parse_options
from tmnclient.ratelimit import RateLimiter
from tmnclient.stats import format_speed
from ui.console import configure_logging
from ui.output import format_csv_row, format_text_result

log = logging.getLogger("testmynet")


# ---------------------------------------------------------------------------
# Core runner
# ---------------------------------------------------------------------------

def run(
    options: Options,
    *,
    logger: Optional[logging.Logger] = None,
    limiter: Optional[RateLimiter] = None,
) -> str:
    """Download, apply overload protection, and return the result line."""
    logger = logger or log

    result = asyncio.run(
        measure_download(options.server, options.size, options.dry_run, logger=logger)
    )

    # Don't overload testmy.net (unless forced).
    if not options.force:
        (limiter or RateLimiter(logger=logger)).check()

    logger.debug("Result: %s", result.to_dict())
    mbps = result.speed_mbps
    logger.info("Bandwidth: %s", format_speed(mbps))

    if options.csv:
        return format_csv_row(options.server, result.bytes_total, result.duration, mbps)
    return format_text_result(options.server, result.bytes_total, result.duration, mbps)


# ---------------------------------------------------------------------------
# CLI
# ---------------------------------------------------------------------------

def main(argv: Optional[List[str]] = None) -> None:
    configure_logging()

    try:
        options = parse_options(argv)
        configure_logging(options.verbose)
        line = run(options)
    except TestMyNetError as exc:
        log.error("Error: %s", exc)
        sys.exit(1)
    except KeyboardInterrupt:
        log.error("Test cancelled by user")
        sys.exit(1)

    print(line)


if __name__ == "__main__":
    main()

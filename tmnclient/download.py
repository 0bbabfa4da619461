"""
Download timing module.

Issues a single HTTP GET against ``<server>/dl-<size>`` and measures how
long it takes to stream the whole body.  The body is read in chunks and
discarded, so memory use is bounded by ``CHUNK_SIZE``.

In dry-run mode the request is still made (to validate the URL and the
connection) but the body is not read and fixed sentinel values are
returned instead of a measurement.
"""
from __future__ import annotations

import asyncio
import logging
import time
from dataclasses import dataclass
from typing import Optional

import aiohttp

from .constants import CHUNK_SIZE, COMMON_HEADERS, DRY_RUN_BYTES, DRY_RUN_SECONDS
from .errors import DownloadError
from .stats import bandwidth_mbps, format_duration

log = logging.getLogger(__name__)


# ---------------------------------------------------------------------------
# Result
# ---------------------------------------------------------------------------

@dataclass
class DownloadResult:
    """Bytes read and wall-clock time spent reading them."""

    url: str = ""
    bytes_total: int = 0
    duration: float = 0.0  # seconds
    status: int = 0
    dry_run: bool = False

    @property
    def speed_mbps(self) -> float:
        return bandwidth_mbps(self.bytes_total, self.duration)

    def to_dict(self) -> dict:
        return {
            "url": self.url,
            "bytes_total": self.bytes_total,
            "duration": round(self.duration, 6),
            "status": self.status,
            "dry_run": self.dry_run,
            "speed_mbps": round(self.speed_mbps, 3),
        }


def download_url(server: str, size: int) -> str:
    return f"{server}/dl-{size}"


# ---------------------------------------------------------------------------
# Measurement
# ---------------------------------------------------------------------------

async def _fetch(
    session: aiohttp.ClientSession,
    url: str,
    dry_run: bool,
    chunk_size: int,
    logger: logging.Logger,
) -> DownloadResult:
    result = DownloadResult(url=url, dry_run=dry_run)

    async with session.get(url, headers=COMMON_HEADERS) as resp:
        result.status = resp.status
        logger.debug("HTTP %s %s, headers: %s", resp.status, resp.reason, dict(resp.headers))

        if dry_run:
            result.bytes_total = DRY_RUN_BYTES
            result.duration = DRY_RUN_SECONDS
            return result

        t0 = time.perf_counter()
        total = 0
        async for chunk in resp.content.iter_chunked(chunk_size):
            total += len(chunk)
        result.duration = time.perf_counter() - t0
        result.bytes_total = total

    return result


async def measure_download(
    server: str,
    size: int,
    dry_run: bool = False,
    *,
    session: Optional[aiohttp.ClientSession] = None,
    logger: Optional[logging.Logger] = None,
    chunk_size: int = CHUNK_SIZE,
) -> DownloadResult:
    """
    Fetch ``<server>/dl-<size>`` once and time the body transfer.

    Any HTTP status is accepted; only transport failures raise
    :class:`DownloadError`.  A caller-supplied *session* is left open.
    """
    logger = logger or log
    url = download_url(server, size)
    logger.info("Starting download from %r", url)

    try:
        if session is not None:
            result = await _fetch(session, url, dry_run, chunk_size, logger)
        else:
            async with aiohttp.ClientSession() as own:
                result = await _fetch(own, url, dry_run, chunk_size, logger)
    except (aiohttp.ClientError, asyncio.TimeoutError, OSError) as exc:
        raise DownloadError(f"error downloading data from {server}: {str(exc) or type(exc).__name__}") from exc

    logger.info("%d bytes downloaded in %s", result.bytes_total, format_duration(result.duration))
    return result

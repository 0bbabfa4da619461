"""
Overload protection for the testmy.net servers.

The time of the last run is kept in ``~/.testmynet-cli.state`` as a
single human-readable line in the Unix ``date`` layout::

    Mon Jan  2 15:04:05 UTC 2006

The limiter refuses to run again until ``min_interval`` has passed since
that time.  A missing file means no previous run; a file that cannot be
parsed is an error and is never silently reset.

No locking is done: two runs started at the same moment can both pass.
"""
from __future__ import annotations

import logging
import os
from datetime import datetime, timedelta, timezone
from typing import Callable, Optional

from .constants import MIN_INTERVAL, STATE_FILE, STATE_FILE_MODE
from .errors import RateLimitError, StateFileError
from .homedir import home_dir
from .stats import format_duration

log = logging.getLogger(__name__)

# English names so the file does not depend on the locale.
_DAYS = ("Mon", "Tue", "Wed", "Thu", "Fri", "Sat", "Sun")
_MONTHS = ("Jan", "Feb", "Mar", "Apr", "May", "Jun",
           "Jul", "Aug", "Sep", "Oct", "Nov", "Dec")


# ---------------------------------------------------------------------------
# Timestamp codec
# ---------------------------------------------------------------------------

def format_timestamp(dt: datetime) -> str:
    """Render *dt* in UTC.  Naive datetimes are taken to be UTC already."""
    if dt.tzinfo is not None:
        dt = dt.astimezone(timezone.utc)
    return (
        f"{_DAYS[dt.weekday()]} {_MONTHS[dt.month - 1]} {dt.day:>2} "
        f"{dt.hour:02d}:{dt.minute:02d}:{dt.second:02d} UTC {dt.year}"
    )


def _number(field: str) -> int:
    # int() alone would also take signs, underscores and non-ASCII digits.
    if not (field.isascii() and field.isdigit()):
        raise ValueError(f"invalid number {field!r}")
    return int(field)


def parse_timestamp(text: str) -> datetime:
    """
    Parse a timestamp written by :func:`format_timestamp`.

    The zone must be an alphabetic abbreviation; anything other than
    ``UTC``, ``GMT`` or ``Z`` is read as a zero offset, since
    abbreviations do not identify an offset on their own.
    """
    parts = text.split()
    if len(parts) != 6:
        raise StateFileError(f"cannot parse {text.strip()!r} as a timestamp")

    wday, month, day, clock, zone, year = parts
    if wday not in _DAYS or month not in _MONTHS or not zone.isalpha():
        raise StateFileError(f"cannot parse {text.strip()!r} as a timestamp")

    try:
        hour, minute, second = (_number(p) for p in clock.split(":"))
        return datetime(
            _number(year), _MONTHS.index(month) + 1, _number(day),
            hour, minute, second,
            tzinfo=timezone.utc,
        )
    except (ValueError, OverflowError) as exc:
        raise StateFileError(f"cannot parse {text.strip()!r} as a timestamp: {exc}") from exc


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


# ---------------------------------------------------------------------------
# Limiter
# ---------------------------------------------------------------------------

class RateLimiter:
    """
    Enforces a minimum interval between runs.

    *home* and *clock* are injectable so tests can point the state file at
    a temporary directory and control "now".
    """

    def __init__(
        self,
        state_file: str = STATE_FILE,
        min_interval: timedelta = MIN_INTERVAL,
        *,
        home: Callable[[], str] = home_dir,
        clock: Callable[[], datetime] = utcnow,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self.state_file = state_file
        self.min_interval = min_interval
        self._home = home
        self._clock = clock
        self._log = logger or log

    def state_path(self) -> str:
        return os.path.join(self._home(), self.state_file)

    def last_run(self, path: str) -> Optional[datetime]:
        """Recorded time of the previous run, or ``None`` if there is none."""
        try:
            with open(path, encoding="ascii") as fh:
                text = fh.read()
        except FileNotFoundError:
            return None
        except (OSError, UnicodeDecodeError) as exc:
            raise StateFileError(f"unable to read state file {path!r}: {exc}") from exc
        return parse_timestamp(text)

    def check(self) -> None:
        """
        Raise :class:`RateLimitError` if the last run was too recent,
        otherwise record the current time.
        """
        path = self.state_path()
        self._log.info("Reading state file: %r", path)

        last = self.last_run(path)
        now = self._clock()

        if last is not None:
            elapsed = now - last
            self._log.info(
                "Last timestamp: %s, minimum interval: %s, elapsed: %s",
                format_timestamp(last),
                format_duration(self.min_interval.total_seconds()),
                format_duration(elapsed.total_seconds()),
            )
            if elapsed < self.min_interval:
                raise RateLimitError(
                    f"program ran less than {format_duration(self.min_interval.total_seconds())} "
                    f"ago ({format_duration(elapsed.total_seconds())})"
                )

        self._write(path, now)

    def _write(self, path: str, now: datetime) -> None:
        stamp = format_timestamp(now)
        self._log.info("Re-writing current time (%s) to state file", stamp)
        try:
            fd = os.open(path, os.O_WRONLY | os.O_CREAT | os.O_TRUNC, STATE_FILE_MODE)
            with os.fdopen(fd, "w", encoding="ascii") as fh:
                fh.write(stamp + "\n")
        except OSError as exc:
            raise StateFileError(f"unable to write state file {path!r}: {exc}") from exc

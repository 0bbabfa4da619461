"""Home directory lookup, kept separate so tests can inject a fake one."""
from __future__ import annotations

import os
from pathlib import Path
from typing import Mapping, Optional

from .errors import HomeDirError


def _account_home() -> str:
    if os.name != "posix":
        return str(Path.home())

    import pwd

    return pwd.getpwuid(os.getuid()).pw_dir


def home_dir(environ: Optional[Mapping[str, str]] = None) -> str:
    """
    Return the user's home directory.

    ``HOME`` is preferred; when it is unset or empty the current account's
    entry in the password database is used.  The result must exist and be
    a directory.
    """
    env = os.environ if environ is None else environ
    home = env.get("HOME", "")
    if not home:
        try:
            home = _account_home()
        except (KeyError, OSError, RuntimeError) as exc:
            raise HomeDirError(f"unable to get information for current user: {exc}") from exc

    if not home or not os.path.isdir(home):
        raise HomeDirError(f"home directory {home!r} must exist and be a directory")
    return home

"""Exception hierarchy.  Only the entry point catches these."""


class TestMyNetError(Exception):
    """Base class for every fatal error raised by the client."""

    # Not a test case, despite the name.
    __test__ = False


class OptionsError(TestMyNetError):
    """Invalid command-line configuration."""


class HomeDirError(TestMyNetError):
    """The user's home directory could not be determined."""


class StateFileError(TestMyNetError):
    """The rate-limit state file could not be read, parsed or written."""


class RateLimitError(TestMyNetError):
    """The program ran again before the minimum interval elapsed."""


class DownloadError(TestMyNetError):
    """Transport-level failure while fetching the test payload."""

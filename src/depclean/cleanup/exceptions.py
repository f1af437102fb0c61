"""Exceptions for the cleanup module."""

from depclean.exceptions import DepcleanError


class CleanupError(DepcleanError):
    """Cleanup finished with problems and the run is configured to fail."""

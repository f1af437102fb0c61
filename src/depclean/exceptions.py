"""Base exception for depclean."""


class DepcleanError(Exception):
    """Base exception for all depclean errors."""

"""Exceptions for the manifest module."""

from depclean.exceptions import DepcleanError


class ManifestError(DepcleanError):
    """Error reading, resolving or writing a POM."""

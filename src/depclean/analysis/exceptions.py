"""Exceptions for the analysis module."""

from depclean.exceptions import DepcleanError


class AnalysisError(DepcleanError):
    """Dependency usage analysis could not be performed."""


class CoordinateError(AnalysisError):
    """A dependency coordinate string could not be parsed."""

"""Cleanup package - Orchestrates POM dependency cleanup."""

from depclean.cleanup.exceptions import CleanupError
from depclean.cleanup.models import CleanupReport, HostReport, ManagementReport
from depclean.cleanup.orchestrator import CleanupOrchestrator, run_clean_dep, run_clean_dep_mgt

__all__ = [
    "CleanupError",
    "CleanupOrchestrator",
    "CleanupReport",
    "HostReport",
    "ManagementReport",
    "run_clean_dep",
    "run_clean_dep_mgt",
]

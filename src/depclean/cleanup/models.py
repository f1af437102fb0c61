"""Data models for the cleanup module."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depclean.manifest import Project
    from depclean.reconcile import TreeMode


@dataclass
class CleanupReport:
    """Outcome of cleaning one project's declared dependencies.

    Attributes:
        project: The cleaned project.
        original_count: Declared dependencies before cleanup.
        removed: Declarations removed.
        added: Declarations added.
        final_count: Declared dependencies after cleanup.
        output_path: Where the clean POM was written.
        success: False if the clean POM could not be written.
        skipped: Reason the project was not processed, if it was not.
    """

    project: Project
    original_count: int = 0
    removed: int = 0
    added: int = 0
    final_count: int = 0
    output_path: Path | None = None
    success: bool = True
    skipped: str | None = None

    @property
    def warning(self) -> bool:
        return not self.success


@dataclass
class HostReport:
    """Outcome of cleaning one host's dependencyManagement section.

    Attributes:
        host: The host project.
        members: Projects whose dependencies were consulted.
        original_count: Managed entries before cleanup.
        final_count: Managed entries after cleanup.
        removed: Signatures of removed entries.
        output_path: Where the clean POM was written.
        success: False if the clean POM could not be written.
    """

    host: Project
    members: list[Project]
    original_count: int = 0
    final_count: int = 0
    removed: list[str] = field(default_factory=list)
    output_path: Path | None = None
    success: bool = True


@dataclass
class ManagementReport:
    """Outcome of a dependency-management cleanup run."""

    mode: TreeMode
    hosts: list[HostReport] = field(default_factory=list)

    @property
    def success(self) -> bool:
        return all(host.success for host in self.hosts)

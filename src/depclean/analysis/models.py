"""Data models for the analysis module."""

from __future__ import annotations

from dataclasses import dataclass, field

from depclean.manifest import DependencyRecord


@dataclass
class DependencyAnalysis:
    """Result of analyzing a project's dependency usage.

    Attributes:
        used_undeclared: Artifacts referenced by compiled classes but not declared.
        unused_declared: Artifacts declared but never referenced.
    """

    used_undeclared: set[DependencyRecord] = field(default_factory=set)
    unused_declared: set[DependencyRecord] = field(default_factory=set)

    @property
    def has_findings(self) -> bool:
        return bool(self.used_undeclared or self.unused_declared)

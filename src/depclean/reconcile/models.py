"""Data models for the reconcile module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from depclean.manifest import DependencyRecord, Project

# Host project -> member projects in traversal order
HostAssignment = dict["Project", list["Project"]]


class TreeMode(str, Enum):
    """How a project tree is handled by dependency-management cleanup."""

    SINGLE_PROJECT = "single_project"
    MULTI_MODULE = "multi_module"
    UNSUPPORTED = "unsupported"


@dataclass
class DependencyEdit:
    """Changes to apply to a declared-dependency list.

    Attributes:
        to_remove: Unused declarations to drop, matched by groupId:artifactId.
        to_add: New declarations for used but undeclared artifacts.
    """

    to_remove: set[DependencyRecord] = field(default_factory=set)
    to_add: set[DependencyRecord] = field(default_factory=set)

    @property
    def is_empty(self) -> bool:
        return not self.to_remove and not self.to_add


@dataclass
class EditResult:
    """Outcome of applying a DependencyEdit.

    Attributes:
        dependencies: The edited list.
        removed: Number of live entries removed.
        added: Number of entries appended.
    """

    dependencies: list[DependencyRecord]
    removed: int
    added: int

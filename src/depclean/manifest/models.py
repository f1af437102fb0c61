"""Data models for the manifest module."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    import xml.etree.ElementTree as ET


class Scope(str, Enum):
    """Maven dependency scopes."""

    COMPILE = "compile"
    PROVIDED = "provided"
    RUNTIME = "runtime"
    TEST = "test"
    SYSTEM = "system"
    IMPORT = "import"


SCOPES = frozenset(scope.value for scope in Scope)


@dataclass(frozen=True)
class DependencyKey:
    """Identity of a dependency within one dependency list."""

    group_id: str
    artifact_id: str

    def __str__(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"


@dataclass(frozen=True)
class DependencyRecord:
    """A single <dependency> entry.

    Attributes:
        group_id: Maven groupId.
        artifact_id: Maven artifactId.
        version: Version string, None when inherited or managed.
        scope: Declared scope. None means the implicit compile scope.
        element: The parsed XML element, kept so a rewrite preserves
            exclusions, classifier, type and any other children.
    """

    group_id: str
    artifact_id: str
    version: str | None = None
    scope: str | None = None
    element: ET.Element | None = field(default=None, compare=False, repr=False)

    @property
    def key(self) -> DependencyKey:
        return DependencyKey(self.group_id, self.artifact_id)

    @property
    def signature(self) -> str:
        return f"{self.group_id}:{self.artifact_id}"

    @property
    def effective_scope(self) -> str:
        """Scope with the compile default applied."""
        return self.scope or Scope.COMPILE.value

    def __str__(self) -> str:
        parts = [self.group_id, self.artifact_id]
        if self.version:
            parts.append(self.version)
        if self.scope:
            parts.append(self.scope)
        return ":".join(parts)

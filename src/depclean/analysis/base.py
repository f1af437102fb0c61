"""Usage oracle interface and coordinate parsing."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from depclean.analysis.exceptions import CoordinateError
from depclean.manifest import SCOPES, DependencyRecord

if TYPE_CHECKING:
    from depclean.analysis.models import DependencyAnalysis
    from depclean.manifest import Project


class UsageOracle(Protocol):
    """Anything that can tell which dependencies a project really uses."""

    def analyze(self, project: Project) -> DependencyAnalysis:
        """Analyze a project.

        Raises:
            AnalysisError: If the analysis cannot be performed.
        """
        ...


def parse_coordinate(coordinate: str) -> DependencyRecord:
    """Parse a colon separated artifact coordinate.

    Accepted forms:
        groupId:artifactId
        groupId:artifactId:version
        groupId:artifactId:version:scope
        groupId:artifactId:type:version
        groupId:artifactId:type:version:scope
        groupId:artifactId:type:classifier:version:scope

    A four part coordinate is read as version:scope when its last part is a
    known scope, otherwise as type:version.

    Raises:
        CoordinateError: If the coordinate has the wrong shape.
    """
    parts = [part.strip() for part in coordinate.strip().split(":")]
    if any(not part for part in parts) or not 2 <= len(parts) <= 6:
        raise CoordinateError(f"Invalid dependency coordinate: '{coordinate}'")

    group_id, artifact_id = parts[0], parts[1]
    version = scope = None
    rest = parts[2:]
    if len(rest) == 1:
        version = rest[0]
    elif len(rest) == 2:
        if rest[1] in SCOPES:
            version, scope = rest
        else:
            version = rest[1]
    elif len(rest) >= 3:
        version, scope = rest[-2], rest[-1]
        if scope not in SCOPES:
            raise CoordinateError(f"Unknown scope '{scope}' in coordinate '{coordinate}'")

    return DependencyRecord(group_id=group_id, artifact_id=artifact_id, version=version, scope=scope)


def parse_mapping(entry: dict) -> DependencyRecord:
    """Build a record from a mapping with groupId/artifactId/version/scope keys."""
    group_id = entry.get("groupId") or entry.get("group_id")
    artifact_id = entry.get("artifactId") or entry.get("artifact_id")
    if not group_id or not artifact_id:
        raise CoordinateError(f"Dependency entry needs groupId and artifactId: {entry!r}")
    scope = entry.get("scope")
    if scope is not None and scope not in SCOPES:
        raise CoordinateError(f"Unknown scope '{scope}' for {group_id}:{artifact_id}")
    version = entry.get("version")
    return DependencyRecord(
        group_id=str(group_id),
        artifact_id=str(artifact_id),
        version=str(version) if version is not None else None,
        scope=scope,
    )

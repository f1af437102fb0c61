"""Dependency set reconciliation.

Pure functions turning usage analysis results into edits of a dependency
list. Matching is always by groupId:artifactId; version and scope are
ignored.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable

from depclean.manifest import DependencyKey, DependencyRecord, Scope
from depclean.reconcile.models import DependencyEdit, EditResult

logger = logging.getLogger("depclean.reconcile")


def filter_unused_declared(
    unused_declared: Iterable[DependencyRecord], ignore_non_compile: bool
) -> set[DependencyRecord]:
    """Select the unused declarations that may be removed.

    Args:
        unused_declared: Artifacts reported as declared but unused.
        ignore_non_compile: Keep artifacts whose scope is not compile.

    Returns:
        The removable artifacts.
    """
    if not ignore_non_compile:
        return set(unused_declared)

    removable = set()
    for artifact in unused_declared:
        if artifact.effective_scope == Scope.COMPILE:
            removable.add(artifact)
        else:
            logger.info("Ignore unused artifact %s (scope %s)", artifact.key, artifact.scope)
    return removable


def new_declaration(artifact: DependencyRecord) -> DependencyRecord:
    """Declaration for a used but undeclared artifact.

    The compile scope is the default and is left out.
    """
    scope = artifact.scope if artifact.effective_scope != Scope.COMPILE else None
    return DependencyRecord(
        group_id=artifact.group_id,
        artifact_id=artifact.artifact_id,
        version=artifact.version,
        scope=scope,
    )


def reconcile(
    unused_declared: Iterable[DependencyRecord],
    used_undeclared: Iterable[DependencyRecord],
    ignore_non_compile: bool = False,
) -> DependencyEdit:
    """Compute the edit for a project's declared dependencies."""
    return DependencyEdit(
        to_remove=filter_unused_declared(unused_declared, ignore_non_compile),
        to_add={new_declaration(artifact) for artifact in used_undeclared},
    )


def apply_edit(dependencies: list[DependencyRecord], edit: DependencyEdit) -> EditResult:
    """Apply an edit to a dependency list without mutating it.

    Removal candidates without a matching declaration are ignored.
    Additions are appended in signature order.
    """
    declared: dict[DependencyKey, DependencyRecord] = {}
    for dependency in dependencies:
        if dependency is not None:
            declared.setdefault(dependency.key, dependency)

    doomed: set[int] = set()
    for artifact in edit.to_remove:
        match = declared.get(artifact.key)
        if match is None:
            logger.debug("No declaration matches unused artifact %s", artifact.key)
            continue
        logger.info("Removed unused dependency %s", artifact.key)
        doomed.add(id(match))

    kept = [d for d in dependencies if d is None or id(d) not in doomed]
    added = sorted(edit.to_add, key=lambda d: d.signature)
    for dependency in added:
        logger.info("Added used undeclared dependency %s", dependency)

    return EditResult(dependencies=kept + added, removed=len(doomed), added=len(added))


def sort_key(dependency: DependencyRecord | None) -> tuple[bool, str]:
    """Sort key placing None first, then by groupId:artifactId."""
    if dependency is None:
        return (False, "")
    return (True, dependency.signature)


def sort_dependencies(dependencies: list[DependencyRecord]) -> list[DependencyRecord]:
    return sorted(dependencies, key=sort_key)


def prune_managed(
    managed: list[DependencyRecord], consumed: Iterable[DependencyRecord]
) -> tuple[list[DependencyRecord], list[DependencyRecord]]:
    """Split managed entries into those some member declares and the rest.

    Args:
        managed: A host's dependency-management entries.
        consumed: Declared dependencies of every member project.

    Returns:
        Tuple of (kept entries, removed entries), each in input order.
    """
    consumed_keys = {d.key for d in consumed if d is not None}

    kept = []
    removed = []
    for entry in managed:
        if entry is not None and entry.key not in consumed_keys:
            removed.append(entry)
        else:
            kept.append(entry)
    return kept, removed

"""Dependency management host resolution.

A host is the nearest project, itself or an ancestor, that owns a
non-empty dependencyManagement section. Every project that declares
dependencies is grouped under its host so the host's managed entries can
be checked against what its members actually declare.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from depclean.reconcile.models import HostAssignment, TreeMode

if TYPE_CHECKING:
    from depclean.manifest import Project

logger = logging.getLogger("depclean.reconcile.hosts")


def classify_tree(root: Project) -> TreeMode:
    """Decide how dependency-management cleanup treats a project tree."""
    if root.has_dependency_management and root.has_dependencies:
        return TreeMode.SINGLE_PROJECT
    if root.has_modules and not root.has_dependencies:
        return TreeMode.MULTI_MODULE
    return TreeMode.UNSUPPORTED


def resolve_hosts(root: Project) -> tuple[TreeMode, HostAssignment]:
    """Classify a tree and build its host assignment.

    A root that manages its own dependencies is its only host and its
    modules are not looked at. Unsupported trees get an empty assignment.
    """
    mode = classify_tree(root)
    if mode == TreeMode.SINGLE_PROJECT:
        return mode, {root: [root]}
    if mode == TreeMode.MULTI_MODULE:
        return mode, find_hosts(root)
    return mode, {}


def find_hosts(root: Project) -> HostAssignment:
    """Group every project in the tree under its dependency management host.

    Projects without dependencies are skipped. The root only hosts itself
    when it manages its own dependencies; it never searches its ancestors.

    Args:
        root: Top of the module tree.

    Returns:
        Mapping of host project to member projects in depth-first order.
    """
    hosts: HostAssignment = {}
    _collect_hosts(root, hosts, search_up=False)
    return hosts


def find_host_in_ancestors(project: Project) -> Project | None:
    """Nearest strict ancestor with a non-empty dependencyManagement section."""
    seen = {id(project)}
    ancestor = project.parent
    while ancestor is not None and id(ancestor) not in seen:
        if ancestor.has_dependency_management:
            return ancestor
        seen.add(id(ancestor))
        ancestor = ancestor.parent
    return None


def _collect_hosts(project: Project, hosts: HostAssignment, search_up: bool) -> None:
    if not project.has_dependencies:
        logger.debug("Skipping %s: no dependencies", project)
    elif project.has_dependency_management:
        _add_member(hosts, project, project)
    elif search_up:
        host = find_host_in_ancestors(project)
        if host is None:
            logger.warning("No dependency management host found for %s", project)
        else:
            _add_member(hosts, host, project)

    for module in project.modules:
        _collect_hosts(module, hosts, search_up=True)


def _add_member(hosts: HostAssignment, host: Project, member: Project) -> None:
    hosts.setdefault(host, []).append(member)
    logger.info("Added managed project %s to host project %s", member.artifact_id, host.artifact_id)

"""Reconcile package - Dependency edits and dependency management hosts."""

from depclean.reconcile.hosts import (
    classify_tree,
    find_host_in_ancestors,
    find_hosts,
    resolve_hosts,
)
from depclean.reconcile.models import DependencyEdit, EditResult, HostAssignment, TreeMode
from depclean.reconcile.reconciler import (
    apply_edit,
    filter_unused_declared,
    new_declaration,
    prune_managed,
    reconcile,
    sort_dependencies,
    sort_key,
)

__all__ = [
    "DependencyEdit",
    "EditResult",
    "HostAssignment",
    "TreeMode",
    "apply_edit",
    "classify_tree",
    "filter_unused_declared",
    "find_host_in_ancestors",
    "find_hosts",
    "new_declaration",
    "prune_managed",
    "reconcile",
    "resolve_hosts",
    "sort_dependencies",
    "sort_key",
]

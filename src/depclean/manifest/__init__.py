"""Manifest package - POM model, parsing and serialization."""

from depclean.manifest.exceptions import ManifestError
from depclean.manifest.models import SCOPES, DependencyKey, DependencyRecord, Scope
from depclean.manifest.pom import PomManifest
from depclean.manifest.project import Project, load_project, load_project_tree

__all__ = [
    "SCOPES",
    "DependencyKey",
    "DependencyRecord",
    "ManifestError",
    "PomManifest",
    "Project",
    "Scope",
    "load_project",
    "load_project_tree",
]

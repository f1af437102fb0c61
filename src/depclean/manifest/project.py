"""Project tree - POMs linked through <modules> and <parent>."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from depclean.manifest.exceptions import ManifestError
from depclean.manifest.models import DependencyKey, DependencyRecord
from depclean.manifest.pom import PomManifest

logger = logging.getLogger("depclean.manifest")

POM_FILE_NAME = "pom.xml"
DEFAULT_BUILD_DIRECTORY = "target"
BASEDIR_PROPERTIES = ("${project.basedir}", "${basedir}")


@dataclass(eq=False)
class Project:
    """A Maven project in a module tree.

    Projects compare and hash by identity so they can key host mappings.

    Attributes:
        manifest: The project's parsed POM.
        path: Path to the POM file.
        parent: The parent project, when it is part of the loaded tree.
        modules: Child projects listed under <modules>.
    """

    manifest: PomManifest
    path: Path
    parent: Project | None = field(default=None, repr=False)
    modules: list[Project] = field(default_factory=list, repr=False)

    @property
    def group_id(self) -> str | None:
        return self.manifest.text("groupId") or self.manifest.text("parent", "groupId")

    @property
    def artifact_id(self) -> str | None:
        return self.manifest.text("artifactId")

    @property
    def key(self) -> DependencyKey:
        return DependencyKey(self.group_id or "", self.artifact_id or "")

    @property
    def packaging(self) -> str:
        return self.manifest.text("packaging") or "jar"

    @property
    def basedir(self) -> Path:
        return self.path.parent

    @property
    def module_names(self) -> list[str]:
        return self.manifest.texts("modules", "module")

    @property
    def build_directory(self) -> Path:
        """The <build><directory>, defaulting to target/ under the basedir."""
        directory = self.manifest.text("build", "directory")
        if directory is None:
            return self.basedir / DEFAULT_BUILD_DIRECTORY
        for prop in BASEDIR_PROPERTIES:
            directory = directory.replace(prop, str(self.basedir))
        path = Path(directory)
        if not path.is_absolute():
            path = self.basedir / path
        return path

    @property
    def dependencies(self) -> list[DependencyRecord]:
        return self.manifest.dependencies

    @dependencies.setter
    def dependencies(self, value: list[DependencyRecord]) -> None:
        self.manifest.dependencies = value

    @property
    def dependency_management(self) -> list[DependencyRecord]:
        return self.manifest.dependency_management

    @dependency_management.setter
    def dependency_management(self, value: list[DependencyRecord]) -> None:
        self.manifest.dependency_management = value

    @property
    def has_dependencies(self) -> bool:
        return bool(self.manifest.dependencies)

    @property
    def has_dependency_management(self) -> bool:
        return bool(self.manifest.dependency_management)

    @property
    def has_modules(self) -> bool:
        return bool(self.module_names)

    def __str__(self) -> str:
        return str(self.key)


def load_project(pom_path: Path | str) -> Project:
    """Load a single project without resolving its modules."""
    pom_path = _pom_file(Path(pom_path))
    return Project(manifest=PomManifest.load(pom_path), path=pom_path)


def load_project_tree(pom_path: Path | str) -> Project:
    """Load a root POM and every module below it.

    Modules are loaded depth-first. Parent links follow the declared
    <parent> coordinates when the parent is part of the loaded tree.

    Args:
        pom_path: Root pom.xml, or the directory containing it.

    Returns:
        The root project.

    Raises:
        ManifestError: If a POM or a listed module cannot be read.
    """
    loaded: dict[Path, Project] = {}
    root = _load_tree(_pom_file(Path(pom_path)), loaded)

    by_key: dict[DependencyKey, Project] = {}
    for project in loaded.values():
        by_key.setdefault(project.key, project)

    for project in loaded.values():
        parent_key = project.manifest.parent_key
        if parent_key is None:
            continue
        parent = by_key.get(parent_key)
        if parent is None:
            logger.debug("Parent %s of %s is outside the project tree", parent_key, project)
        elif parent is not project:
            project.parent = parent

    logger.debug("Loaded %d project(s) from %s", len(loaded), root.path)
    return root


def _pom_file(path: Path) -> Path:
    if path.is_dir():
        path = path / POM_FILE_NAME
    return path.resolve()


def _load_tree(pom_path: Path, loaded: dict[Path, Project]) -> Project:
    project = Project(manifest=PomManifest.load(pom_path), path=pom_path)
    loaded[pom_path] = project

    for name in project.module_names:
        module_path = _pom_file(project.basedir / name)
        if not module_path.is_file():
            raise ManifestError(f"Module '{name}' of {project} not found at {module_path}")
        if module_path in loaded:
            logger.debug("Module %s already loaded, skipping", module_path)
            continue
        module = _load_tree(module_path, loaded)
        project.modules.append(module)

    return project

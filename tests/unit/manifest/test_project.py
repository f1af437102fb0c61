"""Unit tests for project tree loading."""

from collections.abc import Callable
from pathlib import Path

import pytest

from depclean.manifest import ManifestError, load_project, load_project_tree


@pytest.mark.unit
class TestProject:
    """Tests for Project properties."""

    def test_defaults(self, write_pom: Callable[..., Path], tmp_path: Path) -> None:
        project = load_project(write_pom("", "app"))

        assert project.artifact_id == "app"
        assert project.group_id == "com.example"
        assert project.packaging == "jar"
        assert project.build_directory == tmp_path.resolve() / "target"
        assert project.has_dependencies is False
        assert project.has_dependency_management is False
        assert project.has_modules is False

    def test_load_from_directory(self, write_pom: Callable[..., Path], tmp_path: Path) -> None:
        write_pom("", "app")

        project = load_project(tmp_path)

        assert project.path == (tmp_path / "pom.xml").resolve()

    def test_group_id_from_parent(self, write_pom: Callable[..., Path]) -> None:
        pom = write_pom("", "child", group_id=None, parent="org.parent:parent")

        assert load_project(pom).group_id == "org.parent"

    def test_build_directory_with_basedir_property(
        self, write_pom: Callable[..., Path], tmp_path: Path
    ) -> None:
        pom = write_pom("", "app", build_directory="${project.basedir}/out")

        assert load_project(pom).build_directory == tmp_path.resolve() / "out"

    def test_relative_build_directory(
        self, write_pom: Callable[..., Path], tmp_path: Path
    ) -> None:
        pom = write_pom("", "app", build_directory="build")

        assert load_project(pom).build_directory == tmp_path.resolve() / "build"

    def test_flags(self, write_pom: Callable[..., Path]) -> None:
        pom = write_pom(
            "",
            "app",
            dependencies=["g:a:1"],
            managed=["g:a:1"],
            modules=["core"],
        )
        project = load_project(pom)

        assert project.has_dependencies
        assert project.has_dependency_management
        assert project.has_modules
        assert project.module_names == ["core"]
        assert project.modules == []


@pytest.mark.unit
class TestLoadProjectTree:
    """Tests for load_project_tree."""

    def test_loads_modules_recursively(self, write_pom: Callable[..., Path]) -> None:
        root_pom = write_pom("", "root", packaging="pom", modules=["a", "b"])
        write_pom("a", "a", packaging="pom", modules=["a1"], parent="com.example:root")
        write_pom("a/a1", "a1", parent="com.example:a")
        write_pom("b", "b", parent="com.example:root")

        root = load_project_tree(root_pom)

        assert [m.artifact_id for m in root.modules] == ["a", "b"]
        a = root.modules[0]
        assert [m.artifact_id for m in a.modules] == ["a1"]
        assert a.modules[0].parent is a
        assert a.parent is root
        assert root.parent is None

    def test_parent_outside_tree(self, write_pom: Callable[..., Path]) -> None:
        root_pom = write_pom("", "root", packaging="pom", modules=["a"])
        write_pom("a", "a", parent="org.other:corporate-parent")

        root = load_project_tree(root_pom)

        assert root.modules[0].parent is None

    def test_parent_resolved_by_coordinates(self, write_pom: Callable[..., Path]) -> None:
        root_pom = write_pom("", "aggregator", packaging="pom", modules=["bom", "app"])
        write_pom("bom", "bom", packaging="pom")
        write_pom("app", "app", parent="com.example:bom")

        root = load_project_tree(root_pom)

        bom, app = root.modules
        assert app.parent is bom

    def test_module_pointing_at_pom_file(self, write_pom: Callable[..., Path]) -> None:
        root_pom = write_pom("", "root", packaging="pom", modules=["a/pom.xml"])
        write_pom("a", "a")

        root = load_project_tree(root_pom)

        assert root.modules[0].artifact_id == "a"

    def test_missing_module_raises(self, write_pom: Callable[..., Path]) -> None:
        root_pom = write_pom("", "root", packaging="pom", modules=["missing"])

        with pytest.raises(ManifestError, match="Module 'missing'"):
            load_project_tree(root_pom)

    def test_module_listed_twice_loaded_once(self, write_pom: Callable[..., Path]) -> None:
        root_pom = write_pom("", "root", packaging="pom", modules=["a", "./a"])
        write_pom("a", "a")

        root = load_project_tree(root_pom)

        assert len(root.modules) == 1

"""Unit tests for dependency management host resolution."""

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

from depclean.manifest import PomManifest, Project
from depclean.reconcile import (
    TreeMode,
    classify_tree,
    find_host_in_ancestors,
    find_hosts,
    resolve_hosts,
)


@pytest.fixture
def make_project(pom_text: Callable[..., str]) -> Callable[..., Project]:
    """Build an in-memory project and attach it to its parent."""

    def _make(
        name: str,
        dependencies: Sequence[str] = (),
        managed: Sequence[str] = (),
        parent: Project | None = None,
        has_modules: bool = False,
    ) -> Project:
        text = pom_text(
            name,
            dependencies=dependencies,
            managed=managed,
            modules=["child"] if has_modules else (),
        )
        project = Project(
            manifest=PomManifest.from_string(text),
            path=Path(f"/work/{name}/pom.xml"),
            parent=parent,
        )
        if parent is not None:
            parent.modules.append(project)
        return project

    return _make


@pytest.mark.unit
class TestClassifyTree:
    """Tests for classify_tree."""

    def test_single_project(self, make_project: Callable[..., Project]) -> None:
        root = make_project("root", dependencies=["g:a"], managed=["g:a:1"], has_modules=True)

        assert classify_tree(root) == TreeMode.SINGLE_PROJECT

    def test_multi_module(self, make_project: Callable[..., Project]) -> None:
        root = make_project("root", managed=["g:a:1"], has_modules=True)

        assert classify_tree(root) == TreeMode.MULTI_MODULE

    def test_unsupported(self, make_project: Callable[..., Project]) -> None:
        root = make_project("root", dependencies=["g:a"])

        assert classify_tree(root) == TreeMode.UNSUPPORTED

    def test_unsupported_resolves_to_no_hosts(self, make_project: Callable[..., Project]) -> None:
        root = make_project("root", dependencies=["g:a"])

        assert resolve_hosts(root) == (TreeMode.UNSUPPORTED, {})


@pytest.mark.unit
class TestFindHosts:
    """Tests for find_hosts."""

    def test_root_management_hosts_modules(self, make_project: Callable[..., Project]) -> None:
        root = make_project("root", managed=["g:x:1", "g:z:1", "g:w:1"], has_modules=True)
        m1 = make_project("m1", dependencies=["g:x", "g:y"], parent=root)
        m2 = make_project("m2", dependencies=["g:z"], parent=root)

        hosts = find_hosts(root)

        assert hosts == {root: [m1, m2]}

    def test_project_without_dependencies_is_never_member(
        self, make_project: Callable[..., Project]
    ) -> None:
        root = make_project("root", managed=["g:x:1"], has_modules=True)
        empty = make_project("empty", parent=root, has_modules=True)
        leaf = make_project("leaf", dependencies=["g:x"], parent=empty)

        hosts = find_hosts(root)

        assert hosts == {root: [leaf]}
        assert all(empty not in members for members in hosts.values())

    def test_self_managing_module_hosts_itself(
        self, make_project: Callable[..., Project]
    ) -> None:
        root = make_project("root", managed=["g:x:1"], has_modules=True)
        own = make_project("own", dependencies=["g:y"], managed=["g:y:1"], parent=root)
        plain = make_project("plain", dependencies=["g:x"], parent=root)

        hosts = find_hosts(root)

        assert hosts[own] == [own]
        assert hosts[root] == [plain]

    def test_nearest_ancestor_wins(self, make_project: Callable[..., Project]) -> None:
        root = make_project("root", managed=["g:x:1"], has_modules=True)
        mid = make_project("mid", managed=["g:y:1"], parent=root, has_modules=True)
        leaf = make_project("leaf", dependencies=["g:y"], parent=mid)

        assert find_hosts(root) == {mid: [leaf]}

    def test_member_order_is_depth_first(self, make_project: Callable[..., Project]) -> None:
        root = make_project("root", managed=["g:x:1"], has_modules=True)
        a = make_project("a", dependencies=["g:x"], parent=root, has_modules=True)
        a1 = make_project("a1", dependencies=["g:x"], parent=a)
        b = make_project("b", dependencies=["g:x"], parent=root)

        assert find_hosts(root)[root] == [a, a1, b]

    def test_project_without_host_is_dropped(
        self, make_project: Callable[..., Project], caplog: pytest.LogCaptureFixture
    ) -> None:
        root = make_project("root", has_modules=True)
        orphan = make_project("orphan", dependencies=["g:x"], parent=root)

        with caplog.at_level("WARNING", logger="depclean"):
            hosts = find_hosts(root)

        assert hosts == {}
        assert f"No dependency management host found for {orphan}" in caplog.text

    def test_root_never_searches_upward(self, make_project: Callable[..., Project]) -> None:
        outer = make_project("outer", managed=["g:x:1"], has_modules=True)
        root = make_project("root", dependencies=["g:x"], parent=outer)

        assert find_hosts(root) == {}

    def test_root_with_own_management_hosts_itself(
        self, make_project: Callable[..., Project]
    ) -> None:
        root = make_project("root", dependencies=["g:x"], managed=["g:x:1"], has_modules=True)
        child = make_project("child", dependencies=["g:y"], parent=root)

        assert find_hosts(root) == {root: [root, child]}


@pytest.mark.unit
class TestResolveHosts:
    """Tests for the single-project short circuit."""

    def test_single_project_ignores_modules(self, make_project: Callable[..., Project]) -> None:
        root = make_project("root", dependencies=["g:x"], managed=["g:x:1"], has_modules=True)
        make_project("child", dependencies=["g:y"], parent=root)

        mode, hosts = resolve_hosts(root)

        assert mode == TreeMode.SINGLE_PROJECT
        assert hosts == {root: [root]}

    def test_multi_module_walks_tree(self, make_project: Callable[..., Project]) -> None:
        root = make_project("root", managed=["g:x:1"], has_modules=True)
        child = make_project("child", dependencies=["g:x"], parent=root)

        assert resolve_hosts(root) == (TreeMode.MULTI_MODULE, {root: [child]})


@pytest.mark.unit
class TestFindHostInAncestors:
    """Tests for the upward search."""

    def test_skips_self(self, make_project: Callable[..., Project]) -> None:
        project = make_project("self", dependencies=["g:x"], managed=["g:x:1"])

        assert find_host_in_ancestors(project) is None

    def test_parent_cycle_terminates(self, make_project: Callable[..., Project]) -> None:
        a = make_project("a")
        b = make_project("b", parent=a)
        a.parent = b

        assert find_host_in_ancestors(b) is None

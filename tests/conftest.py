"""Shared pytest fixtures and configuration."""

from __future__ import annotations

from collections.abc import Callable, Sequence
from pathlib import Path

import pytest

POM_HEADER = (
    '<?xml version="1.0" encoding="UTF-8"?>\n'
    '<project xmlns="http://maven.apache.org/POM/4.0.0">\n'
    "    <modelVersion>4.0.0</modelVersion>\n"
)


# Register custom markers
def pytest_configure(config: pytest.Config) -> None:
    """Register custom markers for test categorization."""
    config.addinivalue_line("markers", "unit: fast tests with no external dependencies")
    config.addinivalue_line("markers", "integration: component interaction tests")


def _dependency_xml(coordinate: str, indent: str) -> str:
    parts = coordinate.split(":")
    lines = [
        f"{indent}<dependency>",
        f"{indent}    <groupId>{parts[0]}</groupId>",
        f"{indent}    <artifactId>{parts[1]}</artifactId>",
    ]
    if len(parts) > 2:
        lines.append(f"{indent}    <version>{parts[2]}</version>")
    if len(parts) > 3:
        lines.append(f"{indent}    <scope>{parts[3]}</scope>")
    lines.append(f"{indent}</dependency>")
    return "\n".join(lines)


def build_pom(
    artifact_id: str,
    group_id: str | None = "com.example",
    packaging: str | None = None,
    dependencies: Sequence[str] = (),
    managed: Sequence[str] = (),
    modules: Sequence[str] = (),
    parent: str | None = None,
    build_directory: str | None = None,
) -> str:
    """Build POM text. Dependencies are 'group:artifact[:version[:scope]]' strings."""
    body = []
    if parent is not None:
        parent_group, parent_artifact = parent.split(":")
        body.append(
            "    <parent>\n"
            f"        <groupId>{parent_group}</groupId>\n"
            f"        <artifactId>{parent_artifact}</artifactId>\n"
            "        <version>1.0</version>\n"
            "    </parent>"
        )
    if group_id is not None:
        body.append(f"    <groupId>{group_id}</groupId>")
    body.append(f"    <artifactId>{artifact_id}</artifactId>")
    body.append("    <version>1.0</version>")
    if packaging is not None:
        body.append(f"    <packaging>{packaging}</packaging>")
    if modules:
        items = "\n".join(f"        <module>{m}</module>" for m in modules)
        body.append(f"    <modules>\n{items}\n    </modules>")
    if managed:
        items = "\n".join(_dependency_xml(d, " " * 12) for d in managed)
        body.append(
            "    <dependencyManagement>\n"
            f"        <dependencies>\n{items}\n        </dependencies>\n"
            "    </dependencyManagement>"
        )
    if dependencies:
        items = "\n".join(_dependency_xml(d, " " * 8) for d in dependencies)
        body.append(f"    <dependencies>\n{items}\n    </dependencies>")
    if build_directory is not None:
        body.append(f"    <build>\n        <directory>{build_directory}</directory>\n    </build>")
    return POM_HEADER + "\n".join(body) + "\n</project>\n"


@pytest.fixture
def write_pom(tmp_path: Path) -> Callable[..., Path]:
    """Write a POM below tmp_path and return its path.

    The first argument is the directory relative to tmp_path ("" for the root).
    """

    def _write(directory: str, artifact_id: str, **kwargs: object) -> Path:
        target = tmp_path / directory
        target.mkdir(parents=True, exist_ok=True)
        pom_path = target / "pom.xml"
        pom_path.write_text(build_pom(artifact_id, **kwargs))
        return pom_path

    return _write


@pytest.fixture
def pom_text() -> Callable[..., str]:
    """Return the POM text builder."""
    return build_pom

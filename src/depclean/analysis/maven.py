"""MavenUsageOracle - Runs maven-dependency-plugin's analyze goal."""

from __future__ import annotations

import logging
import re
import subprocess
from typing import TYPE_CHECKING

from depclean.analysis.base import parse_coordinate
from depclean.analysis.exceptions import AnalysisError
from depclean.analysis.models import DependencyAnalysis
from depclean.logging import truncate_output

if TYPE_CHECKING:
    from depclean.manifest import DependencyRecord, Project

logger = logging.getLogger("depclean.analysis.maven")

USED_UNDECLARED_HEADER = "Used undeclared dependencies found:"
UNUSED_DECLARED_HEADER = "Unused declared dependencies found:"

# Strips "[WARNING] " and similar level prefixes
_LEVEL_PREFIX_RE = re.compile(r"^\[[A-Z]+\]")


class MavenUsageOracle:
    """Usage oracle that shells out to ``mvn dependency:analyze``.

    The goal prints two listings, each introduced by a header line and
    followed by indented artifact coordinates. Both listings are parsed
    from the combined output.
    """

    def __init__(self, executable: str = "mvn", timeout: int | None = None) -> None:
        """Initialize the oracle.

        Args:
            executable: Maven executable to run.
            timeout: Optional timeout in seconds. None means no timeout.
        """
        self.executable = executable
        self.timeout = timeout

    def build_command(self, project: Project) -> list[str]:
        return [
            self.executable,
            "-B",
            "-f",
            str(project.path),
            "dependency:analyze",
            "-DfailOnWarning=false",
        ]

    def analyze(self, project: Project) -> DependencyAnalysis:
        """Run the analysis for one project.

        Raises:
            AnalysisError: If Maven cannot be run or the build fails.
        """
        command = self.build_command(project)
        logger.info("Running %s", " ".join(command))
        try:
            result = subprocess.run(
                command,
                cwd=project.basedir,
                capture_output=True,
                text=True,
                timeout=self.timeout,
            )
        except FileNotFoundError as e:
            raise AnalysisError(f"Maven executable not found: {self.executable}") from e
        except subprocess.TimeoutExpired as e:
            raise AnalysisError(f"Dependency analysis timed out after {self.timeout} seconds") from e

        output = (result.stdout or "") + (result.stderr or "")
        logger.debug("Maven output: %s", truncate_output(output))
        if result.returncode != 0:
            raise AnalysisError(
                f"Cannot analyze dependencies of {project.key} "
                f"(exit code {result.returncode}): {truncate_output(output, 1000)}"
            )

        return parse_analyze_output(output)


def parse_analyze_output(output: str) -> DependencyAnalysis:
    """Extract both dependency listings from dependency:analyze output.

    Args:
        output: Combined stdout/stderr of the Maven run.

    Returns:
        The parsed analysis.

    Raises:
        CoordinateError: If a listed artifact cannot be parsed.
    """
    analysis = DependencyAnalysis()
    current: set[DependencyRecord] | None = None

    for raw_line in output.splitlines():
        line = _LEVEL_PREFIX_RE.sub("", raw_line)
        if not line.strip():
            current = None
            continue
        if USED_UNDECLARED_HEADER in line:
            current = analysis.used_undeclared
            continue
        if UNUSED_DECLARED_HEADER in line:
            current = analysis.unused_declared
            continue
        if current is None:
            continue
        # Listed artifacts are indented below their header
        if len(line) - len(line.lstrip()) >= 2:
            current.add(parse_coordinate(line.strip()))
        else:
            current = None

    return analysis

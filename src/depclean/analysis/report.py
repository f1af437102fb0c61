"""ReportUsageOracle - Reads analysis results from a YAML report."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING, Any

import yaml

from depclean.analysis.base import parse_coordinate, parse_mapping
from depclean.analysis.exceptions import AnalysisError
from depclean.analysis.models import DependencyAnalysis

if TYPE_CHECKING:
    from depclean.manifest import DependencyRecord, Project

logger = logging.getLogger("depclean.analysis.report")

SECTIONS = ("used_undeclared", "unused_declared")


class ReportUsageOracle:
    """Usage oracle backed by a previously produced analysis report.

    The report is a YAML mapping with ``used_undeclared`` and
    ``unused_declared`` lists. Entries are coordinate strings or mappings
    with groupId/artifactId/version/scope keys. A report covering several
    projects nests those lists under ``projects``, keyed by
    ``groupId:artifactId``.
    """

    def __init__(self, report_path: Path | str) -> None:
        """Initialize the oracle.

        Args:
            report_path: Path to the YAML report.
        """
        self.report_path = Path(report_path)
        self._data: dict[str, Any] | None = None

    def analyze(self, project: Project) -> DependencyAnalysis:
        """Look up the analysis for a project.

        Raises:
            AnalysisError: If the report is missing, invalid, or has no
                entry for the project.
        """
        data = self._load()
        if "projects" in data:
            projects = data["projects"] or {}
            if not isinstance(projects, dict):
                raise AnalysisError(f"'projects' in {self.report_path} must be a mapping")
            section = projects.get(str(project.key))
            if section is None:
                raise AnalysisError(f"No analysis for {project.key} in {self.report_path}")
        else:
            section = data

        if not isinstance(section, dict):
            raise AnalysisError(f"Analysis for {project.key} must be a mapping")

        analysis = DependencyAnalysis(
            used_undeclared=self._records(section, "used_undeclared"),
            unused_declared=self._records(section, "unused_declared"),
        )
        logger.debug(
            "Report analysis for %s: %d used undeclared, %d unused declared",
            project.key,
            len(analysis.used_undeclared),
            len(analysis.unused_declared),
        )
        return analysis

    def _load(self) -> dict[str, Any]:
        if self._data is not None:
            return self._data

        if not self.report_path.exists():
            raise AnalysisError(f"Analysis report not found: {self.report_path}")
        try:
            # Every scalar stays a string, so a version such as 1.10 is not read as 1.1
            with open(self.report_path) as f:
                data = yaml.load(f, Loader=yaml.BaseLoader)
        except yaml.YAMLError as e:
            raise AnalysisError(f"Invalid YAML in {self.report_path}: {e}") from e

        if data is None:
            data = {}
        if not isinstance(data, dict):
            raise AnalysisError(
                f"Analysis report must be a YAML mapping, got {type(data).__name__}"
            )
        self._data = data
        return data

    def _records(self, section: dict[str, Any], name: str) -> set[DependencyRecord]:
        entries = section.get(name) or []
        if not isinstance(entries, list):
            raise AnalysisError(f"'{name}' in {self.report_path} must be a list")

        records = set()
        for entry in entries:
            if isinstance(entry, str):
                records.add(parse_coordinate(entry))
            elif isinstance(entry, dict):
                records.add(parse_mapping(entry))
            else:
                raise AnalysisError(f"Unsupported entry in '{name}': {entry!r}")
        return records

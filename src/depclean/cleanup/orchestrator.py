"""CleanupOrchestrator - Drives dependency and dependency-management cleanup."""

from __future__ import annotations

import logging
from pathlib import Path
from typing import TYPE_CHECKING

from depclean.cleanup.exceptions import CleanupError
from depclean.cleanup.models import CleanupReport, HostReport, ManagementReport
from depclean.reconcile import (
    TreeMode,
    apply_edit,
    prune_managed,
    reconcile,
    resolve_hosts,
    sort_dependencies,
)

if TYPE_CHECKING:
    from depclean.analysis import UsageOracle
    from depclean.config import CleanupConfig
    from depclean.manifest import Project

logger = logging.getLogger("depclean.cleanup")


class CleanupOrchestrator:
    """Rewrites POMs with unused dependency entries removed.

    Two operations are offered:
    - clean_dependencies: reconcile a project's <dependencies> with a usage
      analysis and write the result
    - clean_dependency_management: drop <dependencyManagement> entries no
      member project declares, for every host in a module tree

    Neither operation applies the fail-fast policy; see run_clean_dep and
    run_clean_dep_mgt.
    """

    def __init__(self, config: CleanupConfig, oracle: UsageOracle | None = None) -> None:
        """Initialize the orchestrator.

        Args:
            config: Cleanup options.
            oracle: Usage oracle, required for clean_dependencies.
        """
        self.config = config
        self.oracle = oracle

    def clean_dependencies(self, project: Project) -> CleanupReport:
        """Reconcile a project's declared dependencies and write a clean POM.

        Args:
            project: The project to clean.

        Returns:
            CleanupReport with counts and the write outcome.

        Raises:
            AnalysisError: If the usage analysis fails.
        """
        if project.packaging == "pom":
            logger.info("Skipping pom project %s", project)
            return CleanupReport(project=project, skipped="pom packaging")

        output_directory = self.config.output_directory or project.build_directory
        if not Path(output_directory).exists():
            logger.info("Skipping project with no build directory: %s", output_directory)
            return CleanupReport(project=project, skipped="no build directory")

        if self.oracle is None:
            raise ValueError("A usage oracle is required to clean dependencies")

        analysis = self.oracle.analyze(project)
        if self.config.verbose:
            for artifact in sorted(analysis.used_undeclared, key=lambda d: d.signature):
                logger.info("Used undeclared: %s", artifact)
            for artifact in sorted(analysis.unused_declared, key=lambda d: d.signature):
                logger.info("Unused declared: %s", artifact)

        if self.config.ignore_non_compile:
            logger.info("ignoreNonCompile is turned on")
        edit = reconcile(
            analysis.unused_declared,
            analysis.used_undeclared,
            self.config.ignore_non_compile,
        )

        original_count = len(project.dependencies)
        result = apply_edit(project.dependencies, edit)
        project.dependencies = sort_dependencies(result.dependencies)
        final_count = len(project.dependencies)
        logger.info(
            "Reduced dependencies from %d to %d (added: %d, removed: %d)",
            original_count,
            final_count,
            result.added,
            result.removed,
        )

        output_path = Path(output_directory) / self.config.output_file_name
        success = self._write(project, output_path)
        return CleanupReport(
            project=project,
            original_count=original_count,
            removed=result.removed,
            added=result.added,
            final_count=final_count,
            output_path=output_path,
            success=success,
        )

    def clean_dependency_management(self, root: Project) -> ManagementReport:
        """Prune dependencyManagement sections across a project tree.

        Every host is processed even if writing an earlier host's POM failed.

        Args:
            root: Root of the project tree.

        Returns:
            ManagementReport with one HostReport per host.
        """
        mode, hosts = resolve_hosts(root)
        if mode == TreeMode.SINGLE_PROJECT:
            logger.info("Process project with dependency managed by itself")
        elif mode == TreeMode.MULTI_MODULE:
            logger.info("Process project with sub-modules")
        else:
            logger.info("This project structure is not supported for dependency management cleanup")

        report = ManagementReport(mode=mode)
        for host, members in hosts.items():
            report.hosts.append(self._clean_host(host, members))
        return report

    def _clean_host(self, host: Project, members: list[Project]) -> HostReport:
        consumed = [d for member in members for d in member.dependencies]

        original_count = len(host.dependency_management)
        kept, removed = prune_managed(host.dependency_management, consumed)
        for entry in removed:
            logger.info("Removed unused dependency %s from %s", entry.signature, host)
        host.dependency_management = sort_dependencies(kept)
        final_count = len(host.dependency_management)
        logger.info(
            "Reduced managed dependencies of %s from %d to %d", host, original_count, final_count
        )

        report = HostReport(
            host=host,
            members=list(members),
            original_count=original_count,
            final_count=final_count,
            removed=[entry.signature for entry in removed],
        )

        output_directory = host.build_directory
        try:
            output_directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            logger.error("Failed to create output directory %s: %s", output_directory, e)
            report.success = False
            return report

        report.output_path = output_directory / self.config.output_file_name
        report.success = self._write(host, report.output_path)
        return report

    def _write(self, project: Project, output_path: Path) -> bool:
        logger.info("About to create clean pom in: %s", output_path)
        try:
            project.manifest.write(output_path)
        except OSError as e:
            logger.error("Unable to create clean pom %s: %s", output_path, e)
            return False
        return True


def run_clean_dep(
    project: Project, oracle: UsageOracle, config: CleanupConfig
) -> CleanupReport:
    """Clean declared dependencies and apply the failOnWarning policy.

    Raises:
        AnalysisError: If the usage analysis fails.
        CleanupError: If a warning occurred and fail_on_warning is set.
    """
    report = CleanupOrchestrator(config, oracle).clean_dependencies(project)
    if report.warning:
        if config.fail_on_warning:
            raise CleanupError("Dependency problems found")
        logger.warning("Dependency problems found")
    return report


def run_clean_dep_mgt(root: Project, config: CleanupConfig) -> ManagementReport:
    """Clean dependencyManagement sections and apply the failBuild policy.

    Raises:
        CleanupError: If any host failed and fail_build is set.
    """
    report = CleanupOrchestrator(config).clean_dependency_management(root)
    if not report.success:
        if config.fail_build:
            raise CleanupError("Failed to clean up the Dependency Management section.")
        logger.warning("Potential problems found in cleaning up the Dependency Management section.")
    return report

"""CLI entry point for depclean.

Two commands, one per POM section:
- clean-dep: reconcile <dependencies> with a usage analysis
- clean-dep-mgt: prune <dependencyManagement> across a module tree
"""

from __future__ import annotations

import sys
from pathlib import Path

import click

from depclean import __version__
from depclean.analysis import AnalysisError, MavenUsageOracle, ReportUsageOracle
from depclean.cleanup import CleanupError, run_clean_dep, run_clean_dep_mgt
from depclean.config import CleanupConfig, ConfigError, find_config, load_config
from depclean.logging import setup_logging
from depclean.manifest import ManifestError, load_project, load_project_tree


def resolve_config(config_path: Path | None, start: Path, **overrides: object) -> CleanupConfig:
    """Load the config file (explicit or discovered) and apply CLI overrides."""
    if config_path is None:
        config_path = find_config(start)
    config = load_config(config_path) if config_path is not None else CleanupConfig()
    return config.merged(**overrides)


def _configure_logging(config: CleanupConfig) -> None:
    setup_logging(level="DEBUG" if config.verbose else None)


pom_argument = click.argument(
    "pom",
    type=click.Path(exists=True, path_type=Path),
    default="pom.xml",
)

config_option = click.option(
    "-c",
    "--config",
    "config_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="Path to depclean.yaml (auto-detected if not specified)",
)

output_file_name_option = click.option(
    "--output-file-name",
    default=None,
    help="Name of the clean POM (default: clean.pom.xml)",
)

verbose_option = click.option(
    "-v",
    "--verbose",
    is_flag=True,
    help="Enable verbose output",
)


@click.group()
@click.version_option(version=__version__)
def main() -> None:
    """depclean - remove unused entries from Maven dependency sections."""
    pass


@main.command("clean-dep")
@pom_argument
@config_option
@click.option(
    "--report",
    "report_path",
    type=click.Path(exists=True, dir_okay=False, path_type=Path),
    help="YAML analysis report to use instead of running Maven",
)
@click.option("--mvn", "mvn_executable", default="mvn", help="Maven executable (default: mvn)")
@click.option(
    "--timeout",
    type=int,
    default=None,
    help="Timeout in seconds for the Maven analysis",
)
@click.option(
    "--output-directory",
    type=click.Path(file_okay=False, path_type=Path),
    default=None,
    help="Output directory (default: the project's build directory)",
)
@output_file_name_option
@click.option(
    "--fail-on-warning/--no-fail-on-warning",
    default=None,
    help="Fail when the clean POM cannot be written (default: fail)",
)
@click.option(
    "--ignore-non-compile/--no-ignore-non-compile",
    default=None,
    help="Keep unused dependencies that are not compile scoped (default: remove them)",
)
@verbose_option
def clean_dep(
    pom: Path,
    config_path: Path | None,
    report_path: Path | None,
    mvn_executable: str,
    timeout: int | None,
    output_directory: Path | None,
    output_file_name: str | None,
    fail_on_warning: bool | None,
    ignore_non_compile: bool | None,
    verbose: bool,
) -> None:
    """Write a POM with unused dependencies removed and used ones declared."""
    try:
        config = resolve_config(
            config_path,
            pom.parent if pom.is_file() else pom,
            output_directory=output_directory,
            output_file_name=output_file_name,
            fail_on_warning=fail_on_warning,
            ignore_non_compile=ignore_non_compile,
            verbose=verbose or None,
        )
        _configure_logging(config)

        project = load_project(pom)
        click.echo(f"Project: {project.key}")

        if report_path is not None:
            oracle = ReportUsageOracle(report_path)
        else:
            oracle = MavenUsageOracle(executable=mvn_executable, timeout=timeout)

        report = run_clean_dep(project, oracle, config)

        if report.skipped:
            click.echo(f"  Skipped: {report.skipped}")
            return
        click.echo(
            f"  Dependencies: {report.original_count} -> {report.final_count} "
            f"(added: {report.added}, removed: {report.removed})"
        )
        if report.success:
            click.echo(f"\nClean POM written to: {report.output_path}")
        else:
            click.echo(f"  Warning: could not write {report.output_path}", err=True)

    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except ManifestError as e:
        click.echo(f"POM error: {e}", err=True)
        sys.exit(1)
    except AnalysisError as e:
        click.echo(f"Cannot analyze dependencies: {e}", err=True)
        sys.exit(1)
    except CleanupError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@main.command("clean-dep-mgt")
@pom_argument
@config_option
@output_file_name_option
@click.option(
    "--fail-build/--no-fail-build",
    default=None,
    help="Fail when a clean POM cannot be written (default: warn only)",
)
@verbose_option
def clean_dep_mgt(
    pom: Path,
    config_path: Path | None,
    output_file_name: str | None,
    fail_build: bool | None,
    verbose: bool,
) -> None:
    """Write POMs with unused dependencyManagement entries removed."""
    try:
        config = resolve_config(
            config_path,
            pom.parent if pom.is_file() else pom,
            output_file_name=output_file_name,
            fail_build=fail_build,
            verbose=verbose or None,
        )
        _configure_logging(config)

        root = load_project_tree(pom)
        click.echo(f"Project: {root.key}")

        report = run_clean_dep_mgt(root, config)
        if not report.hosts:
            click.echo("  No dependency management to clean")
            return

        for host in report.hosts:
            members = ", ".join(str(m.artifact_id) for m in host.members)
            click.echo(
                f"  {host.host.key}: {host.original_count} -> {host.final_count} "
                f"managed dependencies (members: {members})"
            )
            if host.success:
                click.echo(f"    Written to: {host.output_path}")
            else:
                click.echo(f"    Warning: could not write clean POM for {host.host.key}", err=True)

    except ConfigError as e:
        click.echo(f"Configuration error: {e}", err=True)
        sys.exit(1)
    except ManifestError as e:
        click.echo(f"POM error: {e}", err=True)
        sys.exit(1)
    except CleanupError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


if __name__ == "__main__":
    main()

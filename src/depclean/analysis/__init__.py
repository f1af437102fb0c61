"""Analysis package - Usage oracles reporting used and unused dependencies."""

from depclean.analysis.base import UsageOracle, parse_coordinate, parse_mapping
from depclean.analysis.exceptions import AnalysisError, CoordinateError
from depclean.analysis.maven import MavenUsageOracle, parse_analyze_output
from depclean.analysis.models import DependencyAnalysis
from depclean.analysis.report import ReportUsageOracle

__all__ = [
    "AnalysisError",
    "CoordinateError",
    "DependencyAnalysis",
    "MavenUsageOracle",
    "ReportUsageOracle",
    "UsageOracle",
    "parse_analyze_output",
    "parse_coordinate",
    "parse_mapping",
]

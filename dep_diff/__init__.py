"""DepDiff - extract Maven dependency listings and compare them between versions."""

__version__ = "0.1.0"

from .core.aggregator import VersionAggregator, aggregate
from .core.differ import DependencyDiff, InvalidInputShape, diff_dependencies, parse_dependency_map
from .core.filter import FilterState, filter_diff
from .core.version import VersionChange, compare_versions
from .mvnrepository import MvnRepositoryClient
from .output.formatters import ConsoleFormatter, JSONFormatter

__all__ = [
    "VersionAggregator",
    "aggregate",
    "DependencyDiff",
    "InvalidInputShape",
    "diff_dependencies",
    "parse_dependency_map",
    "FilterState",
    "filter_diff",
    "VersionChange",
    "compare_versions",
    "MvnRepositoryClient",
    "ConsoleFormatter",
    "JSONFormatter",
]

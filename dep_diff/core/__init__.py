"""Core version comparison, diffing, filtering and aggregation for DepDiff."""

from .aggregator import AggregationRecord, VersionAggregator, aggregate
from .differ import (
    AddedDependency,
    ChangedDependency,
    DependencyDiff,
    InvalidInputShape,
    RemovedDependency,
    compare_dependency_json,
    diff_dependencies,
    parse_dependency_map,
)
from .filter import FilterState, active_filters, filter_diff, has_visible_changes
from .version import VersionChange, compare_versions, tokenize_version

__all__ = [
    "AggregationRecord",
    "VersionAggregator",
    "aggregate",
    "AddedDependency",
    "ChangedDependency",
    "DependencyDiff",
    "InvalidInputShape",
    "RemovedDependency",
    "compare_dependency_json",
    "diff_dependencies",
    "parse_dependency_map",
    "FilterState",
    "active_filters",
    "filter_diff",
    "has_visible_changes",
    "VersionChange",
    "compare_versions",
    "tokenize_version",
]

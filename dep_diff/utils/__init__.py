"""Utility functions and helpers for DepDiff."""

from .logging import setup_logging, get_logger
from .performance import PerformanceMonitor, benchmark
from .storage import RecentSearchStore, display_name

__all__ = [
    "setup_logging",
    "get_logger",
    "PerformanceMonitor",
    "benchmark",
    "RecentSearchStore",
    "display_name",
]

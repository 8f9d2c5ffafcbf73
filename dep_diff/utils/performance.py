"""Timing utilities for DepDiff."""

import functools
import os
import time
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterator, List, Optional, TypeVar

from rich.console import Console
from rich.table import Table

F = TypeVar('F', bound=Callable[..., Any])

BENCHMARK_ENV_VAR = "DEPDIFF_VERBOSE_BENCHMARK"


@dataclass
class TimingMetric:
    """Duration of one measured step."""

    name: str
    execution_time: float


class PerformanceMonitor:
    """Collects step timings for the ``--performance`` summary."""

    def __init__(self, console: Optional[Console] = None) -> None:
        self.metrics: List[TimingMetric] = []
        self.console = console or Console()

    @contextmanager
    def measure(self, name: str) -> Iterator[None]:
        """Context manager timing the enclosed block.

        Args:
            name: Name of the step being measured
        """
        start_time = time.perf_counter()
        try:
            yield
        finally:
            self.metrics.append(TimingMetric(name=name, execution_time=time.perf_counter() - start_time))

    def get_summary(self) -> Dict[str, Any]:
        """Get performance summary.

        Returns:
            Dictionary with totals and the per-step metrics
        """
        if not self.metrics:
            return {}

        total_time = sum(m.execution_time for m in self.metrics)
        return {
            "total_executions": len(self.metrics),
            "total_time": total_time,
            "average_time": total_time / len(self.metrics),
            "metrics": self.metrics,
        }

    def print_summary(self) -> None:
        """Print the per-step timings as a table."""
        summary = self.get_summary()
        if not summary:
            return

        table = Table(title="Performance Summary")
        table.add_column("Step", style="cyan")
        table.add_column("Time", style="green")

        for metric in summary["metrics"]:
            table.add_row(metric.name, f"{metric.execution_time:.4f}s")
        table.add_row("Total", f"{summary['total_time']:.4f}s", style="bold")

        self.console.print(table)


def benchmark(func: F) -> F:
    """Log the duration of ``func`` when DEPDIFF_VERBOSE_BENCHMARK is set.

    Args:
        func: Function to benchmark

    Returns:
        Wrapped function with timing
    """
    @functools.wraps(func)
    def wrapper(*args: Any, **kwargs: Any) -> Any:
        start_time = time.perf_counter()
        result = func(*args, **kwargs)
        end_time = time.perf_counter()

        if os.environ.get(BENCHMARK_ENV_VAR):
            from .logging import get_logger
            get_logger("Performance").info(f"{func.__name__} took {end_time - start_time:.4f} seconds")
        return result
    return wrapper  # type: ignore[return-value]

"""Highest-version aggregation across many dependency observations."""

from dataclasses import dataclass, field
from typing import Dict, Iterable, List, Optional, Set, Tuple

from ..utils.logging import get_logger
from ..utils.performance import benchmark
from .version import compare_tokens, tokenize_version, version_sort_key


@dataclass
class AggregationRecord:
    """Everything observed for one dependency key."""

    key: str
    selected_version: str
    versions: Dict[str, Set[str]] = field(default_factory=dict)

    @property
    def has_conflict(self) -> bool:
        """True when more than one distinct raw version was reported."""
        return len(self.versions) > 1

    def sorted_versions(self) -> List[str]:
        """Raw versions, highest first; equal token sequences fall back to string order."""
        # reverse=True keeps sort stability, so ties stay in string order
        return sorted(sorted(self.versions), key=version_sort_key, reverse=True)


def is_higher(candidate: str, current: str) -> bool:
    """Whether ``candidate`` should replace ``current`` as the selected version.

    Higher token sequence wins. On equal tokens the longer raw string wins;
    a complete tie keeps ``current``.
    """
    result = compare_tokens(tokenize_version(candidate), tokenize_version(current))
    if result != 0:
        return result > 0
    return candidate != current and len(candidate) > len(current)


class VersionAggregator:
    """One-pass reduction of ``(key, version, source)`` observations.

    Each call to :meth:`add` updates both the highest-version selection and
    the per-key breakdown of which sources reported which version.
    """

    def __init__(self) -> None:
        self.logger = get_logger("VersionAggregator")
        self._records: Dict[str, AggregationRecord] = {}
        self.observation_count = 0

    def add(self, key: str, version: Optional[str], source: str) -> None:
        """Record a single observation.

        Args:
            key: Dependency identifier, e.g. ``group:artifact``
            version: Raw version string; ``None`` is stored as ``""``
            source: Provenance label for the observation
        """
        version = version or ""
        self.observation_count += 1

        record = self._records.get(key)
        if record is None:
            record = AggregationRecord(key=key, selected_version=version)
            self._records[key] = record
        elif is_higher(version, record.selected_version):
            self.logger.debug(f"Version conflict resolved for {key}: {record.selected_version} -> {version}")
            record.selected_version = version

        record.versions.setdefault(version, set()).add(source)

    def add_all(self, observations: Iterable[Tuple[str, Optional[str], str]]) -> "VersionAggregator":
        """Record every ``(key, version, source)`` triple and return self."""
        for key, version, source in observations:
            self.add(key, version, source)
        return self

    @property
    def records(self) -> Dict[str, AggregationRecord]:
        """Aggregation records keyed by dependency, in key order."""
        return {key: self._records[key] for key in sorted(self._records)}

    def highest_versions(self) -> Dict[str, str]:
        """Map of each key to its selected version, sorted by key."""
        return {key: record.selected_version for key, record in self.records.items()}

    def breakdown(self, conflicts_only: bool = False) -> Dict[str, Dict[str, List[str]]]:
        """Per-key mapping of raw versions to the sorted sources reporting them.

        Args:
            conflicts_only: Only include keys reported with several versions

        Returns:
            Nested mapping with keys sorted and versions highest first
        """
        result = {}
        for key, record in self.records.items():
            if conflicts_only and not record.has_conflict:
                continue
            result[key] = {
                version: sorted(record.versions[version])
                for version in record.sorted_versions()
            }
        return result

    def conflicts(self) -> Dict[str, Dict[str, List[str]]]:
        """Breakdown restricted to keys reported with more than one version."""
        return self.breakdown(conflicts_only=True)

    def __len__(self) -> int:
        return len(self._records)


@benchmark
def aggregate(observations: Iterable[Tuple[str, Optional[str], str]]) -> VersionAggregator:
    """Reduce observations into a populated :class:`VersionAggregator`."""
    return VersionAggregator().add_all(observations)

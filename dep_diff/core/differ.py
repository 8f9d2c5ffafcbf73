"""Dependency map diffing for DepDiff."""

import json
from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Tuple, Union

from ..utils.logging import get_logger
from ..utils.performance import benchmark

DependencyMap = Dict[str, str]

SIDES = ("old", "new")

logger = get_logger("DependencyDiffer")


class InvalidInputShape(ValueError):
    """Raised when input for one side of a comparison is not a dependency map.

    Attributes:
        side: Which input failed, ``"old"`` or ``"new"``
        reason: Human readable description of the failure
    """

    def __init__(self, side: str, reason: str) -> None:
        self.side = side
        self.reason = reason
        super().__init__(f"Error in {side} JSON: {reason}")


@dataclass(frozen=True)
class AddedDependency:
    """A dependency present only in the new map."""

    key: str
    version: str

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "version": self.version}


@dataclass(frozen=True)
class RemovedDependency:
    """A dependency present only in the old map."""

    key: str
    version: str

    def to_dict(self) -> Dict[str, str]:
        return {"key": self.key, "version": self.version}


@dataclass(frozen=True)
class ChangedDependency:
    """A dependency present in both maps with differing version strings."""

    key: str
    old_version: str
    new_version: str

    def to_dict(self) -> Dict[str, str]:
        return {
            "key": self.key,
            "oldVersion": self.old_version,
            "newVersion": self.new_version,
        }


DiffEntry = Union[AddedDependency, RemovedDependency, ChangedDependency]


@dataclass(frozen=True)
class DependencyDiff:
    """Classified delta between two dependency maps."""

    added: Tuple[AddedDependency, ...] = field(default_factory=tuple)
    removed: Tuple[RemovedDependency, ...] = field(default_factory=tuple)
    changed: Tuple[ChangedDependency, ...] = field(default_factory=tuple)

    @property
    def total_changes(self) -> int:
        """Number of entries across all three categories."""
        return len(self.added) + len(self.removed) + len(self.changed)

    def to_dict(self) -> Dict[str, Any]:
        """Serialize to the ``{added, removed, changed}`` display shape."""
        return {
            "added": [entry.to_dict() for entry in self.added],
            "removed": [entry.to_dict() for entry in self.removed],
            "changed": [entry.to_dict() for entry in self.changed],
        }


def validate_dependency_map(data: Any, side: str) -> DependencyMap:
    """Check that decoded data is a plain mapping of strings to strings.

    Args:
        data: Decoded JSON value
        side: ``"old"`` or ``"new"``, used in the error

    Returns:
        A copy of the mapping as a plain dict

    Raises:
        InvalidInputShape: If the value is not an object or has non-string entries
    """
    if data is None:
        raise InvalidInputShape(side, f"{side.capitalize()} JSON must be a dependencies object, got null.")
    if isinstance(data, list):
        raise InvalidInputShape(side, f"{side.capitalize()} JSON must be a dependencies object, got an array.")
    if not isinstance(data, Mapping):
        raise InvalidInputShape(
            side,
            f"{side.capitalize()} JSON must be a dependencies object, got {type(data).__name__}."
        )

    result: DependencyMap = {}
    for key, value in data.items():
        if not isinstance(key, str):
            raise InvalidInputShape(side, f"Dependency key {key!r} is not a string.")
        if not isinstance(value, str):
            raise InvalidInputShape(side, f"Version of '{key}' must be a string, got {type(value).__name__}.")
        result[key] = value
    return result


def parse_dependency_map(text: str, side: str) -> DependencyMap:
    """Decode JSON text into a dependency map.

    Args:
        text: Raw JSON text
        side: ``"old"`` or ``"new"``

    Returns:
        Parsed dependency map

    Raises:
        InvalidInputShape: If the text is not valid JSON or not a dependency map
    """
    if side not in SIDES:
        raise ValueError(f"Unknown side: {side}")

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        raise InvalidInputShape(side, f"Invalid JSON: {e}") from e

    return validate_dependency_map(data, side)


@benchmark
def diff_dependencies(old: Mapping[str, str], new: Mapping[str, str]) -> DependencyDiff:
    """Compute added, removed and changed dependencies.

    Changed means the version strings differ exactly; keys whose strings are
    identical are left out. Each list is sorted by key.

    Args:
        old: Dependency map before the change
        new: Dependency map after the change

    Returns:
        The classified diff
    """
    added = []
    changed = []
    for key in sorted(new):
        if key not in old:
            added.append(AddedDependency(key=key, version=new[key]))
        elif old[key] != new[key]:
            changed.append(ChangedDependency(key=key, old_version=old[key], new_version=new[key]))

    removed = [RemovedDependency(key=key, version=old[key]) for key in sorted(old) if key not in new]

    diff = DependencyDiff(added=tuple(added), removed=tuple(removed), changed=tuple(changed))
    logger.debug(
        f"Diff computed: {len(diff.added)} added, {len(diff.removed)} removed, {len(diff.changed)} changed"
    )
    return diff


def compare_dependency_json(old_text: str, new_text: str) -> DependencyDiff:
    """Parse both JSON inputs and diff them.

    Both sides are validated before any diffing so a failure produces no
    output at all.

    Raises:
        InvalidInputShape: Naming the first side that failed
    """
    old = parse_dependency_map(old_text, "old")
    new = parse_dependency_map(new_text, "new")
    return diff_dependencies(old, new)

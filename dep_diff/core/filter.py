"""Visibility filtering of dependency diffs."""

from dataclasses import dataclass, replace
from typing import List, Mapping

from .differ import DependencyDiff
from .version import VersionChange, compare_versions


@dataclass(frozen=True)
class FilterState:
    """Independent switches controlling which diff entries are shown.

    ``show_up``, ``show_down`` and ``show_equal`` only apply to changed
    entries.
    """

    show_added: bool = True
    show_changed: bool = True
    show_removed: bool = True
    show_only_existing: bool = False
    show_up: bool = True
    show_down: bool = True
    show_equal: bool = True

    def select_all(self) -> "FilterState":
        """Turn every show switch on, leaving ``show_only_existing`` as is."""
        return replace(
            self,
            show_added=True,
            show_changed=True,
            show_removed=True,
            show_up=True,
            show_down=True,
            show_equal=True,
        )

    def deselect_all(self) -> "FilterState":
        """Turn every show switch off, leaving ``show_only_existing`` as is."""
        return replace(
            self,
            show_added=False,
            show_changed=False,
            show_removed=False,
            show_up=False,
            show_down=False,
            show_equal=False,
        )

    def only_changes(self) -> "FilterState":
        """Show everything except changed entries whose versions compare equal."""
        return replace(self.select_all(), show_equal=False)

    def shows(self, change: VersionChange) -> bool:
        """Whether changed entries moving in ``change`` direction are shown."""
        if change is VersionChange.UP:
            return self.show_up
        if change is VersionChange.DOWN:
            return self.show_down
        return self.show_equal


def filter_diff(diff: DependencyDiff, old: Mapping[str, str], state: FilterState) -> DependencyDiff:
    """Apply filter switches to a diff.

    ``show_only_existing`` keeps entries whose key is in ``old`` and applies
    to all three categories, which empties ``added`` by construction.

    Args:
        diff: Unfiltered diff
        old: The old dependency map the diff was computed from
        state: Filter switches

    Returns:
        A new diff holding only the visible entries
    """
    added = diff.added
    removed = diff.removed
    changed = diff.changed

    if state.show_only_existing:
        added = tuple(entry for entry in added if entry.key in old)
        removed = tuple(entry for entry in removed if entry.key in old)
        changed = tuple(entry for entry in changed if entry.key in old)

    changed = tuple(
        entry for entry in changed
        if state.shows(compare_versions(entry.old_version, entry.new_version))
    )

    return DependencyDiff(
        added=added if state.show_added else (),
        removed=removed if state.show_removed else (),
        changed=changed if state.show_changed else (),
    )


def has_visible_changes(diff: DependencyDiff) -> bool:
    """True if any category of a (filtered) diff is non-empty."""
    return bool(diff.added or diff.removed or diff.changed)


def active_filters(state: FilterState) -> List[str]:
    """Labels for every switch currently restricting the output."""
    labels = []
    if state.show_only_existing:
        labels.append("Only Existing")
    if not state.show_added:
        labels.append("No Additions")
    if not state.show_changed:
        labels.append("No Modifications")
    if not state.show_removed:
        labels.append("No Removals")
    if not state.show_up:
        labels.append("No Up")
    if not state.show_down:
        labels.append("No Down")
    if not state.show_equal:
        labels.append("No Equal")
    return labels

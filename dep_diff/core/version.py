"""Version comparison for DepDiff.

Versions are ordered by a lossy numeric tokenization rather than full
semantic versioning: every character other than digits, ``.`` and ``-`` is
dropped, the remainder is split on ``.`` or ``-`` and each fragment is read as
an integer (``0`` when it does not parse). Pre-release qualifiers therefore
disappear, so ``1.0-alpha`` compares equal to ``1.0`` and ``RELEASE`` behaves
like ``0``. This is a known approximation.
"""

import functools
import re
from enum import Enum
from typing import Callable, Optional, Sequence, Tuple

_STRIP_PATTERN = re.compile(r"[^0-9.\-]")
_SPLIT_PATTERN = re.compile(r"[.\-]")
_DIGIT_CHUNK = 1000


class VersionChange(Enum):
    """Direction of a version change from an old version to a new one."""

    UP = "up"
    DOWN = "down"
    EQUAL = "equal"

    @property
    def label(self) -> str:
        """Display label for the change."""
        return _LABELS[self]

    @property
    def style(self) -> str:
        """Rich style used when rendering the change."""
        return _STYLES[self]

    @property
    def symbol(self) -> str:
        """Single character arrow for the change."""
        return _SYMBOLS[self]


_LABELS = {
    VersionChange.UP: "UPDATE",
    VersionChange.DOWN: "DOWNGRADE",
    VersionChange.EQUAL: "EQUAL",
}

_STYLES = {
    VersionChange.UP: "green",
    VersionChange.DOWN: "red",
    VersionChange.EQUAL: "yellow",
}

_SYMBOLS = {
    VersionChange.UP: "↑",
    VersionChange.DOWN: "↓",
    VersionChange.EQUAL: "=",
}


def tokenize_version(version: Optional[str]) -> Tuple[int, ...]:
    """Decompose a version string into its integer token sequence.

    Args:
        version: Raw version string; ``None`` is read as the empty string

    Returns:
        Tuple of non-negative integers, never empty
    """
    cleaned = _STRIP_PATTERN.sub("", version or "")
    return tuple(_fragment_value(fragment) for fragment in _SPLIT_PATTERN.split(cleaned))


def _fragment_value(fragment: str) -> int:
    """Integer value of an all-digit fragment; empty fragments are 0.

    Parsed in chunks so fragments longer than the interpreter's
    str-to-int digit limit keep their exact value.
    """
    value = 0
    for start in range(0, len(fragment), _DIGIT_CHUNK):
        chunk = fragment[start:start + _DIGIT_CHUNK]
        value = value * 10 ** len(chunk) + int(chunk, 10)
    return value


def compare_tokens(left: Sequence[int], right: Sequence[int]) -> int:
    """Three-way comparison of two token sequences.

    Missing trailing positions are treated as ``0``.

    Returns:
        -1 if ``left`` is lower, 1 if higher, 0 if equal
    """
    for index in range(max(len(left), len(right))):
        a = left[index] if index < len(left) else 0
        b = right[index] if index < len(right) else 0
        if a < b:
            return -1
        if a > b:
            return 1
    return 0


def compare_versions(old_version: Optional[str], new_version: Optional[str]) -> VersionChange:
    """Classify the move from ``old_version`` to ``new_version``.

    Never raises; malformed input degrades to zero tokens.

    Args:
        old_version: Version before the change
        new_version: Version after the change

    Returns:
        ``UP`` for an upgrade, ``DOWN`` for a downgrade, ``EQUAL`` otherwise
    """
    result = compare_tokens(tokenize_version(old_version), tokenize_version(new_version))
    if result < 0:
        return VersionChange.UP
    if result > 0:
        return VersionChange.DOWN
    return VersionChange.EQUAL


def _compare_raw(left: str, right: str) -> int:
    return compare_tokens(tokenize_version(left), tokenize_version(right))


version_sort_key: Callable[[str], object] = functools.cmp_to_key(_compare_raw)
"""Key function ordering raw version strings from lowest to highest."""

"""Tests for version tokenization and comparison."""

import pytest

from dep_diff.core.version import (
    VersionChange,
    compare_tokens,
    compare_versions,
    tokenize_version,
    version_sort_key,
)


class TestTokenizeVersion:
    """Test the integer token decomposition."""

    @pytest.mark.parametrize("version, expected", [
        ("1.2.3", (1, 2, 3)),
        ("1.0-alpha", (1, 0, 0)),
        ("v2.3.4-SNAPSHOT", (2, 3, 4, 0)),
        ("1..2", (1, 0, 2)),
        ("", (0,)),
        ("RELEASE", (0,)),
        ("2024.02.00", (2024, 2, 0)),
    ])
    def test_tokenize(self, version, expected):
        """Test that non-numeric characters are dropped and empty fragments become 0."""
        assert tokenize_version(version) == expected

    def test_none_is_empty(self):
        """Test that a missing version tokenizes like the empty string."""
        assert tokenize_version(None) == (0,)

    def test_long_numeric_fragment_keeps_its_value(self):
        """Test that fragments beyond the str-to-int digit limit are read exactly."""
        huge = "1" + "0" * 5000

        assert tokenize_version(huge) == (10 ** 5000,)
        assert compare_versions("2", huge) is VersionChange.UP
        assert compare_versions(huge, huge + "1") is VersionChange.UP

    def test_compare_tokens_pads_shorter_sequence(self):
        """Test that missing positions compare as zero."""
        assert compare_tokens((1, 0), (1, 0, 0)) == 0
        assert compare_tokens((1,), (1, 0, 1)) == -1
        assert compare_tokens((2,), (1, 9, 9)) == 1


class TestCompareVersions:
    """Test version change classification."""

    @pytest.mark.parametrize("old, new, expected", [
        ("1.2.3", "1.2.4", VersionChange.UP),
        ("1.10.0", "1.2.0", VersionChange.DOWN),
        ("1.0", "1.0.0", VersionChange.EQUAL),
        ("", "", VersionChange.EQUAL),
        ("1.0-alpha", "1.0", VersionChange.EQUAL),
        ("RELEASE", "0", VersionChange.EQUAL),
        ("1.9", "1.10", VersionChange.UP),
    ])
    def test_examples(self, old, new, expected):
        """Test documented comparison examples."""
        assert compare_versions(old, new) is expected

    @pytest.mark.parametrize("a, b", [
        ("1.2.3", "1.2.4"),
        ("3.0", "2.9.9"),
        ("1.0", "1.0.0"),
        ("abc", "1"),
        ("1-2-3", "1.2.4"),
    ])
    def test_inverse_consistency(self, a, b):
        """Test that swapping arguments inverts the result."""
        inverse = {
            VersionChange.UP: VersionChange.DOWN,
            VersionChange.DOWN: VersionChange.UP,
            VersionChange.EQUAL: VersionChange.EQUAL,
        }
        assert compare_versions(b, a) is inverse[compare_versions(a, b)]

    def test_never_raises_on_garbage(self):
        """Test that malformed input degrades instead of raising."""
        assert compare_versions("???", None) is VersionChange.EQUAL

    def test_display_helpers(self):
        """Test labels, styles and symbols of each direction."""
        assert VersionChange.UP.label == "UPDATE"
        assert VersionChange.DOWN.label == "DOWNGRADE"
        assert VersionChange.EQUAL.label == "EQUAL"
        assert VersionChange.UP.style == "green"
        assert VersionChange.DOWN.style == "red"
        assert VersionChange.EQUAL.symbol == "="


class TestVersionSortKey:
    """Test ordering raw version strings."""

    def test_sorts_numerically(self):
        """Test that 1.10 sorts after 1.9."""
        assert sorted(["1.10", "1.2", "1.9"], key=version_sort_key) == ["1.2", "1.9", "1.10"]

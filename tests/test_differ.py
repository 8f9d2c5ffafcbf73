"""Tests for dependency map diffing."""

import pytest

from dep_diff.core.differ import (
    AddedDependency,
    ChangedDependency,
    DependencyDiff,
    InvalidInputShape,
    RemovedDependency,
    compare_dependency_json,
    diff_dependencies,
    parse_dependency_map,
)


@pytest.fixture
def old_deps():
    return {"a:b": "1.0", "c:d": "2.0"}


@pytest.fixture
def new_deps():
    return {"a:b": "1.1", "e:f": "3.0"}


class TestDiffDependencies:
    """Test the added/removed/changed classification."""

    def test_example(self, old_deps, new_deps):
        """Test the basic added, removed and changed example."""
        diff = diff_dependencies(old_deps, new_deps)

        assert diff.added == (AddedDependency(key="e:f", version="3.0"),)
        assert diff.removed == (RemovedDependency(key="c:d", version="2.0"),)
        assert diff.changed == (ChangedDependency(key="a:b", old_version="1.0", new_version="1.1"),)
        assert diff.total_changes == 3

    def test_identical_strings_are_excluded(self):
        """Test that unchanged dependencies appear in no list."""
        diff = diff_dependencies({"a": "1.0"}, {"a": "1.0"})
        assert diff == DependencyDiff()
        assert diff.total_changes == 0

    def test_change_uses_exact_string_inequality(self):
        """Test that versions equal in value but not in text are changed."""
        diff = diff_dependencies({"a": "1.0"}, {"a": "1.0.0"})
        assert diff.changed == (ChangedDependency(key="a", old_version="1.0", new_version="1.0.0"),)

    def test_output_is_sorted_by_key(self):
        """Test deterministic ordering regardless of input order."""
        old = {"z:z": "1", "m:m": "1", "k:k": "1"}
        new = {"y:y": "1", "b:b": "1", "k:k": "2", "m:m": "2"}

        diff = diff_dependencies(old, new)

        assert [entry.key for entry in diff.added] == ["b:b", "y:y"]
        assert [entry.key for entry in diff.removed] == ["z:z"]
        assert [entry.key for entry in diff.changed] == ["k:k", "m:m"]

    def test_partition(self):
        """Test that every differing key lands in exactly one list."""
        old = {"a": "1", "b": "2", "c": "3", "d": "4"}
        new = {"b": "2", "c": "3.1", "e": "5"}

        diff = diff_dependencies(old, new)
        keys = [entry.key for entry in diff.added + diff.removed + diff.changed]

        assert sorted(keys) == ["a", "c", "d", "e"]
        assert len(keys) == len(set(keys))

    def test_inputs_are_not_modified(self, old_deps, new_deps):
        """Test that diffing leaves its inputs untouched."""
        diff_dependencies(old_deps, new_deps)
        assert old_deps == {"a:b": "1.0", "c:d": "2.0"}
        assert new_deps == {"a:b": "1.1", "e:f": "3.0"}

    def test_to_dict(self, old_deps, new_deps):
        """Test serialization to the display shape."""
        assert diff_dependencies(old_deps, new_deps).to_dict() == {
            "added": [{"key": "e:f", "version": "3.0"}],
            "removed": [{"key": "c:d", "version": "2.0"}],
            "changed": [{"key": "a:b", "oldVersion": "1.0", "newVersion": "1.1"}],
        }

    def test_entries_are_immutable(self):
        """Test that diff entries cannot be modified."""
        entry = AddedDependency(key="a", version="1")
        with pytest.raises(AttributeError):
            entry.version = "2"


class TestParseDependencyMap:
    """Test decoding and validating raw input."""

    def test_parse_object(self):
        """Test that a JSON object of strings is accepted."""
        assert parse_dependency_map('{"a:b": "1.0"}', "old") == {"a:b": "1.0"}

    @pytest.mark.parametrize("text", ["[1,2,3]", "null", "42", '"text"', "true"])
    def test_rejects_non_objects(self, text):
        """Test that arrays, null and scalars are rejected."""
        with pytest.raises(InvalidInputShape) as exc_info:
            parse_dependency_map(text, "old")

        assert exc_info.value.side == "old"
        assert "dependencies object" in exc_info.value.reason
        assert str(exc_info.value).startswith("Error in old JSON")

    def test_rejects_invalid_json(self):
        """Test that decode failures carry the underlying error."""
        with pytest.raises(InvalidInputShape) as exc_info:
            parse_dependency_map("{not json", "new")

        assert exc_info.value.side == "new"
        assert exc_info.value.__cause__ is not None

    def test_rejects_non_string_versions(self):
        """Test that every version must be a string."""
        with pytest.raises(InvalidInputShape, match="must be a string"):
            parse_dependency_map('{"a:b": 1.0}', "new")

    def test_rejects_unknown_side(self):
        """Test that the side must be old or new."""
        with pytest.raises(ValueError, match="Unknown side"):
            parse_dependency_map("{}", "left")


class TestCompareDependencyJson:
    """Test parsing and diffing together."""

    def test_compare(self):
        """Test a successful comparison from JSON text."""
        diff = compare_dependency_json('{"a": "1"}', '{"a": "2"}')
        assert diff.changed == (ChangedDependency(key="a", old_version="1", new_version="2"),)

    def test_identifies_failing_side(self):
        """Test that the invalid side is reported."""
        with pytest.raises(InvalidInputShape) as exc_info:
            compare_dependency_json('{"a": "1"}', "[]")
        assert exc_info.value.side == "new"

        with pytest.raises(InvalidInputShape) as exc_info:
            compare_dependency_json("null", "[]")
        assert exc_info.value.side == "old"

"""Tests for mvnrepository page extraction."""

import pytest

from dep_diff.mvnrepository.extractor import extract_dependencies, is_valid_url, parse_html

ARTIFACT_PAGE = """<!DOCTYPE html>
<html>
<head><meta charset="utf-8"><title>OkHttp 4.12.0</title></head>
<body>
<div class="breadcrumb">
  <a href="/">Home</a> &raquo;
  <a href="/artifact/com.squareup.okhttp3">com.squareup.okhttp3</a> &raquo;
  <a href="/artifact/com.squareup.okhttp3/okhttp">okhttp</a>
</div>
<div class="version-header">
  <h2><a href="/artifact/com.squareup.okhttp3/okhttp/4.12.0">4.12.0</a></h2>
</div>
<div class="version-section">
  <h2>Compile Dependencies (2)</h2>
  <table class="grid">
    <thead>
      <tr><th>Category/License</th><th>Group / Artifact</th><th>Version</th><th>Updates</th></tr>
    </thead>
    <tbody>
      <tr>
        <td><a>I/O Utilities</a><br/>Apache 2.0</td>
        <td><a>com.squareup.okio</a> &raquo; <a>okio</a></td>
        <td><a class="vbtn release">3.6.0</a></td>
        <td><a class="vbtn release">3.9.0</a></td>
      </tr>
      <tr>
        <td><a>Language Runtime</a></td>
        <td><a>org.jetbrains.kotlin</a> &raquo; <a>kotlin-stdlib-jdk8</a></td>
        <td>1.8.21</td>
        <td></td>
      </tr>
    </tbody>
  </table>
</div>
<div class="version-section">
  <h2>Test Dependencies (1)</h2>
  <table class="grid">
    <thead>
      <tr><th>Category/License</th><th>Group / Artifact</th><th>Version</th></tr>
    </thead>
    <tbody>
      <tr>
        <td>Testing</td>
        <td><a>junit</a> &raquo; <a>junit</a></td>
        <td>4.13.2</td>
      </tr>
      <tr><td colspan="3">View all</td></tr>
    </tbody>
  </table>
</div>
<div class="version-section">
  <h2>Licenses</h2>
  <table class="grid">
    <thead><tr><th>License</th><th>URL</th></tr></thead>
    <tbody><tr><td>Apache 2.0</td><td>https://www.apache.org/licenses/LICENSE-2.0.txt</td></tr></tbody>
  </table>
</div>
</body>
</html>
"""


class TestExtractDependencies:
    """Test dependency table extraction."""

    def test_library_identifier(self):
        """Test group, artifact and version taken from the page header."""
        result = extract_dependencies(ARTIFACT_PAGE)
        assert result.library == "com.squareup.okhttp3:okhttp:4.12.0"

    def test_dependencies_sorted_by_key(self):
        """Test rows from every dependency table are collected."""
        result = extract_dependencies(ARTIFACT_PAGE)

        assert result.dependencies == {
            "com.squareup.okio:okio": "3.6.0",
            "junit:junit": "4.13.2",
            "org.jetbrains.kotlin:kotlin-stdlib-jdk8": "1.8.21",
        }
        assert list(result.dependencies) == sorted(result.dependencies)
        assert len(result) == 3

    def test_tables_without_dependency_columns_are_ignored(self):
        """Test that the licenses table contributes nothing."""
        result = extract_dependencies(ARTIFACT_PAGE)
        assert "Apache 2.0" not in result.dependencies.values()

    def test_page_without_dependencies(self):
        """Test extraction from a page with no dependency sections."""
        result = extract_dependencies("<html><body><p>Nothing here</p></body></html>")

        assert result.dependencies == {}
        assert result.library == ""

    def test_later_rows_win_for_repeated_keys(self):
        """Test that a key listed twice keeps its last version."""
        html = """
        <div class="version-section"><table class="grid">
          <thead><tr><th>Group / Artifact</th><th>Version</th></tr></thead>
          <tbody>
            <tr><td><a>a</a><a>b</a></td><td>1.0</td></tr>
            <tr><td><a>a</a><a>b</a></td><td>2.0</td></tr>
          </tbody>
        </table></div>
        """
        assert extract_dependencies(html).dependencies == {"a:b": "2.0"}


class TestParseHtml:
    """Test the minimal HTML tree."""

    def test_select_by_class_and_tag(self):
        """Test element lookup and text collection."""
        document = parse_html('<div class="a b"><span>x</span><br><span>y</span></div>')

        assert len(document.select(cls="b")) == 1
        assert [span.text for span in document.select("span")] == ["x", "y"]
        assert document.select_one("div").text == "xy"
        assert document.select_one("table") is None

    def test_unclosed_tags(self):
        """Test that unclosed children are closed by their parent."""
        document = parse_html("<ul><li>one<li>two</ul><p>after</p>")
        assert document.select_one("p").text == "after"


class TestIsValidUrl:
    """Test artifact URL validation."""

    @pytest.mark.parametrize("url, expected", [
        ("https://mvnrepository.com/artifact/com.squareup.okhttp3/okhttp/4.12.0", True),
        ("https://mvnrepository.com/artifact/junit", True),
        ("http://mvnrepository.com/artifact/junit/junit/4.13.2", False),
        ("https://example.com/artifact/junit/junit/4.13.2", False),
        ("", False),
    ])
    def test_is_valid_url(self, url, expected):
        """Test that only mvnrepository artifact pages are accepted."""
        assert is_valid_url(url) is expected

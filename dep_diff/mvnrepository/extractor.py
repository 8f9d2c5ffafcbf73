"""Dependency extraction from mvnrepository.com artifact pages."""

from dataclasses import dataclass, field
from html.parser import HTMLParser
from typing import Dict, Iterator, List, Optional, Tuple, Union

ARTIFACT_URL_PREFIX = "https://mvnrepository.com/artifact/"

ARTIFACT_HEADER = "Group / Artifact"
VERSION_HEADER = "Version"

_VOID_ELEMENTS = {
    "area", "base", "br", "col", "embed", "hr", "img", "input",
    "link", "meta", "source", "track", "wbr",
}


def is_valid_url(url: str) -> bool:
    """Check that ``url`` points at an mvnrepository artifact page."""
    return bool(url) and url.startswith(ARTIFACT_URL_PREFIX)


class _Element:
    """Minimal DOM element produced by :class:`_TreeBuilder`."""

    def __init__(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self.tag = tag
        self.attrs = {name: value or "" for name, value in attrs}
        self.children: List[Union["_Element", str]] = []

    @property
    def classes(self) -> List[str]:
        return self.attrs.get("class", "").split()

    def iter(self) -> Iterator["_Element"]:
        """Descendant elements in document order."""
        for child in self.children:
            if isinstance(child, _Element):
                yield child
                yield from child.iter()

    def select(self, tag: Optional[str] = None, cls: Optional[str] = None) -> List["_Element"]:
        """Descendants matching a tag name and/or class."""
        return [
            element for element in self.iter()
            if (tag is None or element.tag == tag) and (cls is None or cls in element.classes)
        ]

    def select_one(self, tag: Optional[str] = None, cls: Optional[str] = None) -> Optional["_Element"]:
        for element in self.iter():
            if (tag is None or element.tag == tag) and (cls is None or cls in element.classes):
                return element
        return None

    @property
    def text(self) -> str:
        parts = []
        for child in self.children:
            parts.append(child.text if isinstance(child, _Element) else child)
        return "".join(parts)


class _TreeBuilder(HTMLParser):
    """Builds an :class:`_Element` tree from HTML text."""

    def __init__(self) -> None:
        super().__init__(convert_charrefs=True)
        self.root = _Element("#document", [])
        self._stack = [self.root]

    def handle_starttag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        element = _Element(tag, attrs)
        self._stack[-1].children.append(element)
        if tag not in _VOID_ELEMENTS:
            self._stack.append(element)

    def handle_startendtag(self, tag: str, attrs: List[Tuple[str, Optional[str]]]) -> None:
        self._stack[-1].children.append(_Element(tag, attrs))

    def handle_endtag(self, tag: str) -> None:
        # Unmatched end tags are ignored; matched ones close anything left open inside
        for index in range(len(self._stack) - 1, 0, -1):
            if self._stack[index].tag == tag:
                del self._stack[index:]
                return

    def handle_data(self, data: str) -> None:
        self._stack[-1].children.append(data)


def parse_html(html: str) -> _Element:
    """Parse HTML into a document element."""
    builder = _TreeBuilder()
    builder.feed(html)
    builder.close()
    return builder.root


@dataclass
class ExtractionResult:
    """Dependencies found on one artifact page."""

    library: str
    dependencies: Dict[str, str] = field(default_factory=dict)

    def __len__(self) -> int:
        return len(self.dependencies)


def _library_identifier(document: _Element) -> str:
    crumbs = [
        link.text.strip()
        for breadcrumb in document.select(cls="breadcrumb")
        for link in breadcrumb.select("a")
    ]
    version = ""
    header = document.select_one(cls="version-header")
    if header is not None:
        heading = header.select_one("h2")
        link = heading.select_one("a") if heading is not None else None
        if link is not None:
            version = link.text.strip()
    return ":".join(crumbs[-2:] + [version])


def _column_indexes(table: _Element) -> Tuple[int, int]:
    artifact_index = version_index = -1
    head = table.select_one("thead")
    if head is None:
        return artifact_index, version_index
    for index, cell in enumerate(head.select("th")):
        label = cell.text.strip()
        if label == ARTIFACT_HEADER:
            artifact_index = index
        if label == VERSION_HEADER:
            version_index = index
    return artifact_index, version_index


def extract_dependencies(html: str) -> ExtractionResult:
    """Extract the dependency tables of an artifact page.

    Every ``.version-section`` whose ``table.grid`` has ``Group / Artifact``
    and ``Version`` header columns contributes its rows. The key of a row is
    the text of every link in the artifact cell joined by ``:``.

    Args:
        html: Page HTML

    Returns:
        Library identifier and the dependencies sorted by key
    """
    document = parse_html(html)
    dependencies: Dict[str, str] = {}

    for section in document.select(cls="version-section"):
        table = next((t for t in section.select("table") if "grid" in t.classes), None)
        if table is None:
            continue

        artifact_index, version_index = _column_indexes(table)
        if artifact_index == -1 or version_index == -1:
            continue

        body = table.select_one("tbody")
        if body is None:
            continue

        for row in body.select("tr"):
            cells = row.select("td")
            if len(cells) <= max(artifact_index, version_index):
                continue
            key = ":".join(link.text.strip() for link in cells[artifact_index].select("a"))
            version = cells[version_index].text.strip()
            if key and version:
                dependencies[key] = version

    return ExtractionResult(
        library=_library_identifier(document),
        dependencies={key: dependencies[key] for key in sorted(dependencies)},
    )

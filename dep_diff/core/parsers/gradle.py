"""Parser for ``gradle dependencies`` tree reports."""

import re
from typing import Optional, Tuple

from .base import BaseParser, ParsedObservations

_TREE_LINE = re.compile(r"^[|\s]*[+\\]--- (?P<coordinate>.+?)(?: \((?:\*|c|n)\))?\s*$")
_PROJECT_HEADER = re.compile(r"^(?:Root project|Project) '(?P<name>[^']*)'")
_CONFIGURATION_HEADER = re.compile(r"^(?P<name>[A-Za-z][\w]*)(?: - .*)?$")


class GradleTreeParser(BaseParser):
    """Parser for the text output of ``gradle dependencies``.

    Every tree entry contributes its resolved version (after ``->``) or its
    declared version. The source label of an entry is the current project
    (or the given source when no project header was seen) followed by the
    configuration it is listed under, e.g. ``:app:debugRuntimeClasspath``.
    """

    def __init__(self) -> None:
        """Initialize the Gradle report parser."""
        super().__init__()
        self.parser_type = "gradle"
        self.supported_extensions = [".txt", ".gradle-deps"]

    def parse_text(self, text: str, source: str) -> ParsedObservations:
        result = ParsedObservations(source=source, parser_type=self.parser_type)
        base = source
        configuration = None
        skipped = 0

        for line in text.splitlines():
            stripped = line.rstrip()
            if not stripped:
                continue

            project = _PROJECT_HEADER.match(stripped)
            if project:
                base = project.group("name") or source
                configuration = None
                continue

            tree = _TREE_LINE.match(stripped)
            if tree:
                parsed = self._parse_coordinate(tree.group("coordinate"))
                if parsed is None:
                    skipped += 1
                    continue
                key, version = parsed
                label = f"{base}:{configuration}" if configuration else base
                result.add(key, version, source=label)
                continue

            header = _CONFIGURATION_HEADER.match(stripped)
            if header:
                configuration = header.group("name")

        result.metadata["skipped"] = skipped
        return result

    def _parse_coordinate(self, coordinate: str) -> Optional[Tuple[str, str]]:
        """Split ``group:artifact[:version][ -> resolved]`` into key and version.

        Args:
            coordinate: Tree entry text without the branch prefix

        Returns:
            ``(key, version)`` or None for project entries and unversioned ones
        """
        if coordinate.startswith("project "):
            return None

        declared, _, resolved = coordinate.partition(" -> ")
        parts = declared.strip().split(":")
        if len(parts) < 2:
            return None

        key = f"{parts[0]}:{parts[1]}"
        version = resolved.strip() or (parts[2].strip() if len(parts) > 2 else "")
        if not version:
            return None
        return key, version

"""Parser for JSON dependency maps."""

import json
from typing import Optional

from ..differ import InvalidInputShape, validate_dependency_map
from .base import BaseParser, ParsedObservations


class JsonMapParser(BaseParser):
    """Parser for ``{"group:artifact": "version"}`` JSON files.

    These are the files written by ``depdiff fetch`` and the Gradle
    ``generateDependenciesJson`` task.
    """

    def __init__(self, side: Optional[str] = None) -> None:
        """Initialize the JSON map parser.

        Args:
            side: Side reported in shape errors; the source label is used
                when omitted
        """
        super().__init__()
        self.parser_type = "json"
        self.supported_extensions = [".json"]
        self.side = side

    def parse_text(self, text: str, source: str) -> ParsedObservations:
        """Parse a JSON dependency map.

        Raises:
            InvalidInputShape: If the text is not a JSON object of strings
        """
        side = self.side or source
        try:
            data = json.loads(text)
        except json.JSONDecodeError as e:
            raise InvalidInputShape(side, f"Invalid JSON: {e}") from e

        dependencies = validate_dependency_map(data, side)

        result = ParsedObservations(source=source, parser_type=self.parser_type)
        for key, version in dependencies.items():
            result.add(key, version)
        return result

"""Registry of dependency report parsers."""

from pathlib import Path
from typing import Dict, List, Optional

from .base import BaseParser, ParsedObservations


class ParserRegistry:
    """Registry mapping report formats to parsers."""

    def __init__(self) -> None:
        """Initialize the parser registry."""
        self._parsers: Dict[str, BaseParser] = {}

    def register(self, parser_type: str, parser: BaseParser) -> None:
        """Register a parser for a report format.

        Args:
            parser_type: Format name (e.g., 'json', 'gradle')
            parser: Parser instance to register
        """
        self._parsers[parser_type] = parser

    def get_parser(self, parser_type: str) -> Optional[BaseParser]:
        """Get the parser registered for a format.

        Args:
            parser_type: Format name

        Returns:
            Parser instance or None if not found
        """
        return self._parsers.get(parser_type)

    def find_parser_for_file(self, file_path: Path) -> Optional[BaseParser]:
        """Find a parser that can handle the given file.

        Args:
            file_path: Path to the file

        Returns:
            Parser that can handle the file or None
        """
        for parser in self._parsers.values():
            if parser.can_parse(file_path):
                return parser
        return None

    def get_supported_formats(self) -> List[str]:
        """Get registered format names in registration order."""
        return list(self._parsers.keys())

    def get_supported_extensions(self) -> List[str]:
        """Get every file extension some parser accepts."""
        extensions: List[str] = []
        for parser in self._parsers.values():
            extensions.extend(ext for ext in parser.supported_extensions if ext not in extensions)
        return extensions

    def parse_file(self, file_path: Path, source: Optional[str] = None) -> Optional[ParsedObservations]:
        """Parse a file using the appropriate parser.

        Args:
            file_path: Path to the file to parse
            source: Optional provenance label

        Returns:
            Parsed observations or None if no parser found
        """
        parser = self.find_parser_for_file(file_path)
        if parser:
            return parser.parse(file_path, source)
        return None

    def parse_files(self, file_paths: List[Path]) -> List[ParsedObservations]:
        """Parse multiple files, skipping those no parser accepts.

        Args:
            file_paths: List of file paths to parse

        Returns:
            List of parsed observations
        """
        results = []
        for file_path in file_paths:
            parsed = self.parse_file(file_path)
            if parsed is not None:
                results.append(parsed)
        return results

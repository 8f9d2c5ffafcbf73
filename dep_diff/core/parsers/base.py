"""Base parser class and data models for dependency observations."""

import os
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterator, List, Optional, Set, Tuple


@dataclass(frozen=True)
class Observation:
    """A single ``(key, version, source)`` sighting of a dependency."""

    key: str
    version: str
    source: str

    def __post_init__(self) -> None:
        """Validate the observation."""
        if not self.key or not self.key.strip():
            raise ValueError("Dependency key cannot be empty")

    def as_tuple(self) -> Tuple[str, str, str]:
        return (self.key, self.version, self.source)


@dataclass
class ParsedObservations:
    """Container for observations parsed from one file or text."""

    observations: List[Observation] = field(default_factory=list)
    source_file: Optional[Path] = None
    source: str = ""
    parser_type: str = ""
    metadata: Dict[str, Any] = field(default_factory=dict)

    def add(self, key: str, version: str, source: Optional[str] = None) -> None:
        """Add an observation, defaulting its source to the container's.

        Args:
            key: Dependency identifier
            version: Raw version string
            source: Provenance label
        """
        self.observations.append(Observation(key=key, version=version, source=source or self.source))

    def keys(self) -> Set[str]:
        """Distinct dependency keys observed."""
        return {obs.key for obs in self.observations}

    def find(self, key: str) -> List[Observation]:
        """All observations for ``key`` in parse order."""
        return [obs for obs in self.observations if obs.key == key]

    def to_dependency_map(self) -> Dict[str, str]:
        """Collapse to a key-sorted dependency map; later observations win."""
        collapsed: Dict[str, str] = {}
        for obs in self.observations:
            collapsed[obs.key] = obs.version
        return {key: collapsed[key] for key in sorted(collapsed)}

    def __iter__(self) -> Iterator[Tuple[str, str, str]]:
        return (obs.as_tuple() for obs in self.observations)

    def __len__(self) -> int:
        return len(self.observations)


class BaseParser(ABC):
    """Abstract base class for dependency report parsers."""

    def __init__(self) -> None:
        """Initialize the parser."""
        self.supported_extensions: List[str] = []
        self.parser_type: str = ""

    def can_parse(self, file_path: Path) -> bool:
        """Check if this parser can handle the given file.

        Args:
            file_path: Path to the file to check

        Returns:
            True if parser can handle the file
        """
        return file_path.suffix.lower() in self.supported_extensions

    @abstractmethod
    def parse_text(self, text: str, source: str) -> ParsedObservations:
        """Parse report text.

        Args:
            text: File contents
            source: Provenance label for every observation

        Returns:
            Parsed observations
        """

    def parse(self, file_path: Path, source: Optional[str] = None) -> ParsedObservations:
        """Parse a report file.

        Args:
            file_path: Path to the file to parse
            source: Provenance label, defaults to the file stem

        Returns:
            Parsed observations from the file
        """
        self.validate_file(file_path)
        text = file_path.read_text(encoding="utf-8")
        result = self.parse_text(text, source or file_path.stem)
        result.source_file = file_path
        return result

    def validate_file(self, file_path: Path) -> None:
        """Validate that the file exists and is readable.

        Args:
            file_path: Path to validate

        Raises:
            FileNotFoundError: If file doesn't exist
            PermissionError: If file is not readable
        """
        if not file_path.exists():
            raise FileNotFoundError(f"File not found: {file_path}")

        if not file_path.is_file():
            raise ValueError(f"Path is not a file: {file_path}")

        if not os.access(file_path, os.R_OK):
            raise PermissionError(f"File is not readable: {file_path}")

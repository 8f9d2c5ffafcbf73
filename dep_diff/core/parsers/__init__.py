"""Parsers turning dependency reports into observations."""

from .base import BaseParser, Observation, ParsedObservations
from .gradle import GradleTreeParser
from .json_map import JsonMapParser
from .registry import ParserRegistry

# Register built-in parsers
registry = ParserRegistry()
registry.register("json", JsonMapParser())
registry.register("gradle", GradleTreeParser())

# Convenience exports
ReportParser = registry
__all__ = [
    "BaseParser",
    "Observation",
    "ParsedObservations",
    "GradleTreeParser",
    "JsonMapParser",
    "ParserRegistry",
    "ReportParser",
    "registry",
]

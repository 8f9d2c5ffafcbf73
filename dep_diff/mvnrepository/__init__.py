"""mvnrepository.com page fetching and dependency extraction."""

from .client import MvnRepositoryClient, MvnRepositoryError
from .extractor import ExtractionResult, extract_dependencies, is_valid_url

__all__ = [
    "MvnRepositoryClient",
    "MvnRepositoryError",
    "ExtractionResult",
    "extract_dependencies",
    "is_valid_url",
]

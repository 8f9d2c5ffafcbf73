"""Recent search history for DepDiff."""

import json
import re
from pathlib import Path
from typing import Dict, List

from .logging import get_logger

_ARTIFACT_URL = re.compile(r"https://mvnrepository\.com/artifact/([^/]+)/([^/]+)/([^/]+)")

DEFAULT_HISTORY_LIMIT = 10


def display_name(url: str) -> str:
    """Short ``artifact:version`` name for an mvnrepository URL.

    Args:
        url: Repository page URL

    Returns:
        Display name, or the URL itself if it is not a versioned artifact page
    """
    match = _ARTIFACT_URL.match(url)
    if match:
        return f"{match.group(2)}:{match.group(3)}"
    return url


class RecentSearchStore:
    """JSON file backed list of recent searches, most recent first."""

    def __init__(self, path: Path, limit: int = DEFAULT_HISTORY_LIMIT) -> None:
        """Initialize the store.

        Args:
            path: JSON file holding the history
            limit: Maximum number of searches kept
        """
        if limit < 1:
            raise ValueError("History limit must be at least 1")
        self.path = path
        self.limit = limit
        self.logger = get_logger("RecentSearchStore")

    def get(self) -> List[Dict[str, str]]:
        """Load recent searches.

        Returns:
            List of ``{"url", "displayName"}`` entries; empty if the file is
            missing or unreadable
        """
        if not self.path.exists():
            return []

        try:
            with open(self.path, 'r', encoding='utf-8') as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            self.logger.error(f"Error loading recent searches: {e}")
            return []

        if not isinstance(data, list):
            self.logger.error(f"Ignoring malformed history file {self.path}")
            return []
        return [entry for entry in data if isinstance(entry, dict) and "url" in entry]

    def save(self, searches: List[Dict[str, str]]) -> None:
        """Write the history file.

        Args:
            searches: Entries to persist
        """
        try:
            self.path.parent.mkdir(parents=True, exist_ok=True)
            with open(self.path, 'w', encoding='utf-8') as f:
                json.dump(searches, f, indent=2)
        except OSError as e:
            self.logger.error(f"Error saving recent searches: {e}")

    def add(self, url: str, name: str = "") -> List[Dict[str, str]]:
        """Move or insert ``url`` at the front of the history.

        Args:
            url: Searched URL
            name: Display name, derived from the URL when empty

        Returns:
            Updated history
        """
        searches = [entry for entry in self.get() if entry.get("url") != url]
        searches.insert(0, {"url": url, "displayName": name or display_name(url)})
        del searches[self.limit:]
        self.save(searches)
        return searches

    def remove(self, index: int) -> List[Dict[str, str]]:
        """Remove the entry at ``index``.

        Raises:
            IndexError: If no entry exists at ``index``
        """
        searches = self.get()
        if not 0 <= index < len(searches):
            raise IndexError(f"No recent search at position {index}")
        del searches[index]
        self.save(searches)
        return searches

    def clear(self) -> None:
        """Delete the history file."""
        try:
            self.path.unlink()
        except FileNotFoundError:
            pass

"""Runtime configuration for DepDiff."""

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Mapping, Optional

DEFAULT_PROXY_URL = "https://api.allorigins.win/get?url={url}"
DEFAULT_HISTORY_FILE = Path.home() / ".depdiff_recent.json"


@dataclass
class DepDiffConfig:
    """Settings for fetching pages and keeping search history."""

    proxy_url: Optional[str] = DEFAULT_PROXY_URL
    timeout: float = 30.0
    max_concurrent: int = 4
    history_file: Path = field(default_factory=lambda: DEFAULT_HISTORY_FILE)
    history_limit: int = 10

    def __post_init__(self) -> None:
        """Validate configuration."""
        if self.proxy_url is not None and "{url}" not in self.proxy_url:
            raise ValueError("Proxy URL must contain a '{url}' placeholder")
        if self.timeout <= 0:
            raise ValueError("Timeout must be positive")
        if self.max_concurrent < 1:
            raise ValueError("max_concurrent must be at least 1")
        if self.history_limit < 1:
            raise ValueError("history_limit must be at least 1")

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "DepDiffConfig":
        """Build configuration from ``DEPDIFF_*`` environment variables.

        An empty ``DEPDIFF_PROXY_URL`` disables the proxy.

        Args:
            environ: Mapping to read instead of ``os.environ``

        Returns:
            Configuration with defaults for unset variables
        """
        env = os.environ if environ is None else environ
        kwargs = {}

        if "DEPDIFF_PROXY_URL" in env:
            kwargs["proxy_url"] = env["DEPDIFF_PROXY_URL"] or None
        if env.get("DEPDIFF_TIMEOUT"):
            kwargs["timeout"] = float(env["DEPDIFF_TIMEOUT"])
        if env.get("DEPDIFF_MAX_CONCURRENT"):
            kwargs["max_concurrent"] = int(env["DEPDIFF_MAX_CONCURRENT"])
        if env.get("DEPDIFF_HISTORY_FILE"):
            kwargs["history_file"] = Path(env["DEPDIFF_HISTORY_FILE"]).expanduser()
        if env.get("DEPDIFF_HISTORY_LIMIT"):
            kwargs["history_limit"] = int(env["DEPDIFF_HISTORY_LIMIT"])

        return cls(**kwargs)

"""Async client fetching dependency listings from mvnrepository.com."""

import asyncio
import ssl
from typing import Dict, List, Optional, Union
from urllib.parse import quote

import aiohttp
import certifi
from aiohttp import ClientTimeout

from ..config import DepDiffConfig
from ..utils.logging import get_logger
from .extractor import ExtractionResult, extract_dependencies, is_valid_url


class MvnRepositoryError(Exception):
    """Raised when a dependency page cannot be fetched or read."""

    def __init__(self, url: str, message: str) -> None:
        self.url = url
        self.message = message
        super().__init__(f"{message} ({url})")


class MvnRepositoryClient:
    """Fetches artifact pages, optionally through a CORS-style JSON proxy.

    The proxy is expected to answer ``{"contents": "<html>"}`` like
    allorigins does. Without a proxy the page is requested directly.
    """

    def __init__(
        self,
        config: Optional[DepDiffConfig] = None,
        session: Optional[aiohttp.ClientSession] = None
    ) -> None:
        """Initialize the client.

        Args:
            config: Fetch settings; read from the environment when omitted
            session: Optional aiohttp session for connection reuse
        """
        self.config = config or DepDiffConfig.from_env()
        self.logger = get_logger("MvnRepositoryClient")
        self._session = session
        self._owns_session = session is None
        self._ssl_context = ssl.create_default_context(cafile=certifi.where())

    async def __aenter__(self) -> "MvnRepositoryClient":
        """Async context manager entry."""
        self._get_session()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Async context manager exit."""
        await self.close()

    async def close(self) -> None:
        if self._owns_session and self._session and not self._session.closed:
            await self._session.close()

    def _get_session(self) -> aiohttp.ClientSession:
        """Get or create the aiohttp session."""
        if not self._session or self._session.closed:
            connector = aiohttp.TCPConnector(ssl=self._ssl_context)
            self._session = aiohttp.ClientSession(
                timeout=ClientTimeout(total=self.config.timeout),
                connector=connector
            )
            self._owns_session = True
        return self._session

    def request_url(self, url: str) -> str:
        """URL actually requested for ``url``, accounting for the proxy."""
        if self.config.proxy_url:
            return self.config.proxy_url.format(url=quote(url, safe=""))
        return url

    async def fetch_html(self, url: str) -> str:
        """Fetch the HTML of an artifact page.

        Args:
            url: mvnrepository artifact URL

        Returns:
            Page HTML

        Raises:
            MvnRepositoryError: On invalid URLs, network errors or empty content
        """
        if not is_valid_url(url):
            raise MvnRepositoryError(url, "Please enter a valid Maven Repository URL")

        session = self._get_session()
        target = self.request_url(url)
        self.logger.debug(f"Fetching {target}")

        try:
            async with session.get(target) as response:
                if response.status != 200:
                    raise MvnRepositoryError(url, f"Network error: {response.status} {response.reason or ''}".strip())

                if self.config.proxy_url:
                    data = await response.json(content_type=None)
                    html = data.get("contents") if isinstance(data, dict) else None
                else:
                    html = await response.text()
        except (aiohttp.ClientError, asyncio.TimeoutError) as e:
            raise MvnRepositoryError(url, f"Network error: {str(e) or type(e).__name__}") from e
        except ValueError as e:
            raise MvnRepositoryError(url, f"Invalid proxy response: {e}") from e

        if not html:
            raise MvnRepositoryError(url, "Could not get HTML content from URL")
        return html

    async def fetch_dependencies(self, url: str) -> ExtractionResult:
        """Fetch an artifact page and extract its dependencies.

        Args:
            url: mvnrepository artifact URL

        Returns:
            Extraction result with dependencies sorted by key
        """
        html = await self.fetch_html(url)
        result = extract_dependencies(html)
        self.logger.info(f"Extracted {len(result)} dependencies for {result.library or url}")
        return result

    async def fetch_many(self, urls: List[str]) -> Dict[str, Union[ExtractionResult, MvnRepositoryError]]:
        """Fetch several pages concurrently.

        Args:
            urls: Artifact URLs

        Returns:
            Mapping of each URL to its result or the error it raised
        """
        semaphore = asyncio.Semaphore(self.config.max_concurrent)

        async def fetch_with_semaphore(url: str) -> ExtractionResult:
            async with semaphore:
                return await self.fetch_dependencies(url)

        results = await asyncio.gather(*(fetch_with_semaphore(url) for url in urls), return_exceptions=True)

        outcome: Dict[str, Union[ExtractionResult, MvnRepositoryError]] = {}
        for url, result in zip(urls, results):
            if isinstance(result, MvnRepositoryError):
                self.logger.error(f"Fetch failed: {result}")
                outcome[url] = result
            elif isinstance(result, BaseException):
                raise result
            else:
                outcome[url] = result
        return outcome

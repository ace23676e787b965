"""Page metadata fetcher for submission URLs.

Fetches the page behind a submission's original_url and extracts the
fields the verification rubric looks at (title, author, publish date,
site name) plus description and preview image.

Network failures never raise: they come back as
PageMetadata(accessible=False, error=...). Only a malformed URL raises
MetadataFetchError.
"""

from typing import Optional
from urllib.parse import urlparse

import httpx
from bs4 import BeautifulSoup
from loguru import logger

from content_sentinel.exceptions import MetadataFetchError
from content_sentinel.schemas import PageMetadata

DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) content-sentinel/0.1"
)


def _meta(soup: BeautifulSoup, **attrs) -> Optional[str]:
    tag = soup.find("meta", attrs=attrs)
    if tag is None:
        return None
    content = (tag.get("content") or "").strip()
    return content or None


def parse_metadata(html: str) -> PageMetadata:
    """
    Extract page metadata from HTML.

    Title falls back from <title> to og:title; description from the
    description meta to og:description.
    """
    soup = BeautifulSoup(html or "", "html.parser")

    title = soup.title.get_text(strip=True) if soup.title else None
    return PageMetadata(
        accessible=True,
        title=title or _meta(soup, property="og:title"),
        description=_meta(soup, name="description") or _meta(soup, property="og:description"),
        author=_meta(soup, name="author"),
        publish_date=_meta(soup, property="article:published_time"),
        site_name=_meta(soup, property="og:site_name"),
        image=_meta(soup, property="og:image"),
    )


class MetadataFetcher:
    """
    Fetch and parse page metadata over HTTP.

    Usage:
        fetcher = MetadataFetcher(timeout=10.0)
        metadata = await fetcher.fetch("https://example.com/post/1")
        if metadata.accessible:
            print(metadata.title)
        await fetcher.close()
    """

    def __init__(
        self,
        timeout: float = 10.0,
        client: Optional[httpx.AsyncClient] = None,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        self.timeout = timeout
        self.user_agent = user_agent
        self._client = client
        self.logger = logger.bind(component="MetadataFetcher")

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create async HTTP client."""
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self.timeout),
                limits=httpx.Limits(max_connections=20),
                follow_redirects=True,
                headers={"User-Agent": self.user_agent},
            )
        return self._client

    async def close(self) -> None:
        """Close the HTTP client."""
        if self._client and not self._client.is_closed:
            await self._client.aclose()
            self._client = None

    @staticmethod
    def validate_url(url: str) -> str:
        """
        Reject URLs that cannot be fetched.

        Raises:
            MetadataFetchError: If the URL is empty, unparseable or not http(s) with a host
        """
        if not url or not url.strip():
            raise MetadataFetchError(url or "", "empty URL")
        try:
            parsed = urlparse(url.strip())
        except ValueError:
            raise MetadataFetchError(url, "malformed URL") from None
        if parsed.scheme not in ("http", "https") or not parsed.netloc:
            raise MetadataFetchError(url, "URL must be absolute http(s)")
        return url.strip()

    async def fetch(self, url: str) -> PageMetadata:
        """
        Fetch metadata for a URL.

        Args:
            url: Absolute http(s) URL

        Returns:
            PageMetadata; accessible=False with an error when the page
            could not be fetched

        Raises:
            MetadataFetchError: If the URL is malformed
        """
        url = self.validate_url(url)

        try:
            client = await self._get_client()
            response = await client.get(url)
            response.raise_for_status()
        except httpx.InvalidURL as e:
            raise MetadataFetchError(url, f"malformed URL: {e}") from e
        except httpx.HTTPStatusError as e:
            error_msg = f"HTTP error {e.response.status_code}"
            self.logger.warning(error_msg, url=url)
            return PageMetadata.inaccessible(error_msg)
        except httpx.TimeoutException:
            self.logger.warning("Metadata fetch timed out", url=url)
            return PageMetadata.inaccessible("timeout")
        except httpx.RequestError as e:
            error_msg = f"Request failed: {e}"
            self.logger.warning("Metadata request failed", url=url, error=str(e))
            return PageMetadata.inaccessible(error_msg)

        metadata = parse_metadata(response.text)
        self.logger.debug(
            "Metadata extracted",
            url=url,
            title=bool(metadata.title),
            author=bool(metadata.author),
            publish_date=bool(metadata.publish_date),
            site_name=bool(metadata.site_name),
        )
        return metadata


__all__ = ["MetadataFetcher", "parse_metadata"]

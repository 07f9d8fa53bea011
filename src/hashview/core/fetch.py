"""Single-shot async retrieval of stored artifacts from the content resolution endpoint"""

import logging
import re
from typing import Optional
from urllib.parse import quote, unquote

import httpx

from hashview.core.classify import classify_media_type
from hashview.core.models import MediaVariant, RetrievedArtifact, TEXT_VARIANTS


logger = logging.getLogger(__name__)

DEFAULT_CONTENT_PATH = "/content/{identifier}"

_FILENAME_STAR_RE = re.compile(r"filename\*\s*=\s*([^']*)'[^']*'([^;]+)", re.IGNORECASE)
_FILENAME_RE = re.compile(r'filename\s*=\s*(?:"([^"]+)"|([^;\s]+))', re.IGNORECASE)


class HashviewError(Exception):
    """Base class for errors surfaced to the viewer."""


class FetchFailed(HashviewError):
    """Non-success transport status or network failure. Never retried."""

    def __init__(self, status: Optional[int], message: Optional[str] = None):
        self.status = status
        super().__init__(message or f"HTTP error! status: {status}")


def filename_from_disposition(header: Optional[str]) -> Optional[str]:
    """Extract a filename from a Content-Disposition header, preferring filename*=."""
    if not header:
        return None
    if m := _FILENAME_STAR_RE.search(header):
        charset = m.group(1) or "utf-8"
        try:
            return unquote(m.group(2).strip(), encoding=charset)
        except LookupError:
            return unquote(m.group(2).strip())
    if m := _FILENAME_RE.search(header):
        return m.group(1) or m.group(2)
    return None


def _decode_text(response: httpx.Response, variant: MediaVariant) -> Optional[str]:
    """Decode a read body. Markdown/code decode leniently; unknown must be real text."""
    if variant is not MediaVariant.unknown:
        return response.text
    try:
        text = response.content.decode(response.encoding or "utf-8")
    except (UnicodeDecodeError, LookupError):
        return None
    return None if "\x00" in text else text


class ContentFetcher:
    """Resolve a content identifier to a RetrievedArtifact over HTTP.

    Image, video and PDF bodies are never read: they are rendered by
    reference URL. The owned client (if none was passed) is closed by aclose().
    """

    def __init__(
        self,
        base_url: str,
        content_path: str = DEFAULT_CONTENT_PATH,
        timeout: float = 15.0,
        client: Optional[httpx.AsyncClient] = None,
        ):
        self.base_url = base_url.rstrip("/")
        self.content_path = content_path
        self.timeout = timeout
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout, follow_redirects=True)

    def content_url(self, identifier: str) -> str:
        """Return the reference URL for an identifier."""
        path = self.content_path.format(identifier=quote(identifier, safe=""))
        return f"{self.base_url}{path}"

    async def fetch(self, identifier: str) -> RetrievedArtifact:
        """Fetch headers, and the body for text variants only. Raises FetchFailed."""
        url = self.content_url(identifier)
        logger.debug("GET %s", url)
        try:
            async with self._client.stream("GET", url, timeout=self.timeout, follow_redirects=True) as response:
                if not response.is_success:
                    logger.warning("Fetch of %s failed: HTTP %s", identifier, response.status_code)
                    raise FetchFailed(response.status_code)

                media_type = response.headers.get("content-type", "")
                filename = filename_from_disposition(response.headers.get("content-disposition"))
                variant = classify_media_type(media_type)

                text = None
                if variant in TEXT_VARIANTS:
                    await response.aread()
                    text = _decode_text(response, variant)
        except httpx.RequestError as e:
            logger.warning("Fetch of %s failed: %s", identifier, e)
            raise FetchFailed(None, f"Network error: {e}") from e

        return RetrievedArtifact(media_type=media_type, filename=filename, url=url, text=text)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> "ContentFetcher":
        return self

    async def __aexit__(self, *exc) -> None:
        await self.aclose()

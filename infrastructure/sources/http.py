"""Taxonomy source fetched over HTTP(S)."""

import logging

import httpx

from domain.taxonomy.errors import TaxonomyLoadError
from infrastructure.config.models import SourceConfig, SourceKind

from .base import TaxonomySource
from .registry import register_source

logger = logging.getLogger(__name__)


class HttpTaxonomySource(TaxonomySource):
    """
    Fetch the taxonomy text with a GET request.

    - The timeout covers the whole fetch; scoring itself has no timeout
    - Non-2xx responses, transport errors and non-UTF-8 bodies become TaxonomyLoadError
    - A preconfigured httpx.Client can be injected (e.g. with MockTransport in tests)
    """

    kind = SourceKind.HTTP

    def __init__(self, url: str, *, timeout_s: float = 30.0, client: httpx.Client | None = None) -> None:
        self.url = url
        self.timeout_s = timeout_s
        self._client = client

    @classmethod
    def from_cfg(cls, cfg: SourceConfig) -> "HttpTaxonomySource":
        if cfg.http is None:
            raise ValueError("Source kind=http but cfg.http is missing")
        return cls(cfg.http.url, timeout_s=cfg.http.timeout_s)

    def describe(self) -> str:
        return f"http:{self.url}"

    def read_text(self) -> str:
        logger.info("Fetching taxonomy from %s (timeout=%.1fs)", self.url, self.timeout_s)
        try:
            if self._client is not None:
                response = self._client.get(self.url, timeout=self.timeout_s)
            else:
                with httpx.Client(timeout=self.timeout_s, follow_redirects=True) as client:
                    response = client.get(self.url)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            reason = e.response.reason_phrase
            raise TaxonomyLoadError(f"Failed to fetch taxonomy: {status} {reason} ({self.url})") from e
        except httpx.HTTPError as e:
            raise TaxonomyLoadError(f"Failed to fetch taxonomy from {self.url}: {e}") from e

        # The taxonomy files are UTF-8 regardless of what the server declares
        try:
            return response.content.decode("utf-8")
        except UnicodeDecodeError as e:
            raise TaxonomyLoadError(f"Taxonomy from {self.url} is not valid UTF-8: {e}") from e


register_source(SourceKind.HTTP, HttpTaxonomySource)

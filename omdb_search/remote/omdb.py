"""Open Movie Database search backend.

Talks to the OMDb HTTP API (https://www.omdbapi.com). The API key travels as
the ``apikey`` query parameter of every request; the base URL carrying it is
built once and only ever copied afterwards.
"""

import time
from typing import List, Optional

import httpx
import structlog
from pydantic import ValidationError

from ..common.config import DEFAULT_OMDB_BASE_URL
from ..common.metrics import MetricsCollector
from .base import InvalidSearchRequest, RemoteConfigurationError, RemoteSearchError, SearchBackend
from .models import SearchRequest, SearchResult, SearchResultEnvelope

logger = structlog.get_logger("omdb_search.remote.omdb")


class OMDbClient(SearchBackend):
    """Search backend for the Open Movie Database.

    Parameters
    - api_key: OMDb API key, embedded in every outbound URL
    - base_url: Absolute http(s) URL of the OMDb endpoint
    - timeout: Outbound deadline in seconds; ``None`` waits indefinitely
    - transport: Optional ``httpx`` transport (e.g. ``MockTransport`` in tests)
    - metrics: Optional collector for upstream call metrics

    Raises ``RemoteConfigurationError`` if the key is empty or the base URL is
    not an absolute http(s) URL.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = DEFAULT_OMDB_BASE_URL,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
        metrics: Optional[MetricsCollector] = None,
    ):
        if not api_key:
            raise RemoteConfigurationError("OMDb API key is required")

        try:
            url = httpx.URL(base_url)
        except httpx.InvalidURL as e:
            raise RemoteConfigurationError(f"invalid OMDb base URL {base_url!r}: {e}") from e
        if url.scheme not in ("http", "https") or not url.host:
            raise RemoteConfigurationError(f"invalid OMDb base URL {base_url!r}")

        self._base_url = url.copy_set_param("apikey", api_key)
        self._metrics = metrics
        self._http_client = httpx.AsyncClient(
            timeout=timeout,
            follow_redirects=True,
            transport=transport,
        )

    @property
    def base_url(self) -> httpx.URL:
        """Endpoint URL with the API key already embedded."""
        return self._base_url

    def build_search_url(self, request: SearchRequest) -> httpx.URL:
        """Return the full query URL for ``request``.

        Sets ``s`` to the title and adds ``type``/``y`` only when the request
        carries them.
        """
        url = self._base_url.copy_set_param("s", request.title)
        if request.media_type:
            url = url.copy_set_param("type", request.media_type)
        if request.release_year:
            url = url.copy_set_param("y", request.release_year)
        return url

    async def search(self, request: SearchRequest) -> List[SearchResult]:
        if not request.title:
            raise InvalidSearchRequest("title is required")

        start_time = time.time()
        try:
            url = self.build_search_url(request)
            response = await self._http_client.get(url)
            envelope = SearchResultEnvelope.decode(response.content)
        except (httpx.HTTPError, httpx.InvalidURL, ValidationError) as e:
            self._record("error", start_time)
            raise RemoteSearchError(str(e) or e.__class__.__name__) from e

        self._record("success", start_time)

        # Status is informational; a decodable body is a result.
        if response.is_error:
            logger.warning(
                "OMDb returned an error status",
                status_code=response.status_code,
                title=request.title,
            )
        if envelope.response == "False":
            logger.info("OMDb reported no results", title=request.title, reason=envelope.error)

        return envelope.search

    async def aclose(self) -> None:
        await self._http_client.aclose()

    def _record(self, outcome: str, start_time: float) -> None:
        if self._metrics is not None:
            self._metrics.record_upstream_request(outcome, time.time() - start_time)

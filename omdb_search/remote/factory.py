"""Search backend factory.

Centralizes creation of the concrete ``SearchBackend`` so the service
entrypoint does not depend on implementation details.
"""

from typing import Optional

import httpx
import structlog

from ..common.config import SearchServiceConfig
from ..common.metrics import MetricsCollector
from .base import RemoteConfigurationError, SearchBackend
from .omdb import OMDbClient

logger = structlog.get_logger("omdb_search.remote.factory")


def create_search_backend(
    config: SearchServiceConfig,
    metrics: Optional[MetricsCollector] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> SearchBackend:
    """Create the search backend described by ``config``.

    Parameters
    - config: Service settings; ``omdb_api_key`` must be set
    - metrics: Optional collector handed to the backend
    - transport: Optional ``httpx`` transport override (tests)
    """
    if not config.omdb_api_key:
        raise RemoteConfigurationError("OMDb API key is required")

    backend = OMDbClient(
        api_key=config.omdb_api_key,
        base_url=config.omdb_base_url,
        timeout=config.omdb_timeout_seconds,
        transport=transport,
        metrics=metrics,
    )
    logger.info(
        "Search backend created",
        backend="omdb",
        base_url=config.omdb_base_url,
        timeout_seconds=config.omdb_timeout_seconds,
    )
    return backend

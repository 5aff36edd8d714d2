"""Remote search backends.

Primary components:
- ``base``: abstract ``SearchBackend`` interface and common exceptions.
- ``models``: request, result, and envelope models plus JSON encoding.
- ``omdb``: the Open Movie Database implementation of the interface.
- ``factory``: builds a backend from ``SearchServiceConfig``.

Guidance:
- Construct via ``factory.create_search_backend`` so the HTTP layer stays
  decoupled from the concrete backend.
"""

from .base import (
    InvalidSearchRequest,
    RemoteConfigurationError,
    RemoteSearchError,
    SearchBackend,
    SearchBackendError,
)
from .factory import create_search_backend
from .models import SearchRequest, SearchResult, SearchResultEnvelope
from .omdb import OMDbClient

__all__ = [
    "InvalidSearchRequest",
    "OMDbClient",
    "RemoteConfigurationError",
    "RemoteSearchError",
    "SearchBackend",
    "SearchBackendError",
    "SearchRequest",
    "SearchResult",
    "SearchResultEnvelope",
    "create_search_backend",
]

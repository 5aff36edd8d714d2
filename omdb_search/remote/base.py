"""Base search backend interface.

Defines the contract the HTTP layer depends on, independent of the remote
movie database behind it.
"""

from abc import ABC, abstractmethod
from typing import List

from .models import SearchRequest, SearchResult


class SearchBackend(ABC):
    """Abstract base class for remote search backends.

    Implementations hold only configuration fixed at construction time and
    must be safe to share across concurrent requests.
    """

    @abstractmethod
    async def search(self, request: SearchRequest) -> List[SearchResult]:
        """Run one search against the remote service.

        Returns
        - Results in the order the remote service returned them (may be empty)

        Raises
        - ``InvalidSearchRequest`` when the request cannot be sent
        - ``RemoteSearchError`` on transport or decoding failure
        """
        pass

    @abstractmethod
    async def aclose(self) -> None:
        """Release network resources held by the backend."""
        pass


class SearchBackendError(Exception):
    """Base exception for search backend operations."""
    pass


class RemoteConfigurationError(SearchBackendError):
    """Backend cannot be constructed from the given configuration."""
    pass


class InvalidSearchRequest(SearchBackendError):
    """Request is missing data the remote service requires."""
    pass


class RemoteSearchError(SearchBackendError):
    """Remote call failed or returned an undecodable body.

    The message is the underlying error's text, unchanged.
    """
    pass

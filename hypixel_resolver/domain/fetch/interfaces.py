"""
Fetcher Interface

Abstract contract for the network collaborator. Implementations own
transport, timeouts and retry policy; the resolution layer only sees
FetchResponse values.
"""

from abc import ABC, abstractmethod
from typing import Optional, Dict, Any

from .value_objects import FetchType, FetchResponse


class Fetcher(ABC):
    """Performs remote calls for the resolution layer."""

    @abstractmethod
    async def fetch(
        self, fetch_type: FetchType, params: Optional[Dict[str, str]] = None
    ) -> FetchResponse:
        """Call the endpoint for ``fetch_type``; never raises for remote errors."""
        pass

    @abstractmethod
    async def get_url_contents(self, url: str) -> Optional[Dict[str, Any]]:
        """Fetch an arbitrary URL and return its decoded JSON object, if any."""
        pass

    async def close(self) -> None:
        """Release transport resources."""
        return None

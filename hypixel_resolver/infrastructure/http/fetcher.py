"""
HTTP Fetcher

Default Fetcher backed by httpx. Converts every remote outcome, including
transport errors and throttling, into a FetchResponse; it never raises for
remote failures and never retries.
"""

from typing import Optional, Dict, Any

import httpx
import structlog

from ...constants import API_KEY_HEADER
from ...core.config import Settings, get_settings
from ...domain.fetch.interfaces import Fetcher
from ...domain.fetch.value_objects import FetchType, FetchResponse

logger = structlog.get_logger(__name__)


class HttpxFetcher(Fetcher):
    """Fetcher for the statistics API and auxiliary JSON endpoints."""

    def __init__(
        self,
        api_key: str,
        settings: Optional[Settings] = None,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.api_key = api_key
        self.settings = settings or get_settings()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=self.settings.HTTP_TIMEOUT_SECONDS
        )

    def _url(self, fetch_type: FetchType) -> str:
        return self.settings.HYPIXEL_API_URL.rstrip("/") + "/" + fetch_type.endpoint

    async def fetch(
        self, fetch_type: FetchType, params: Optional[Dict[str, str]] = None
    ) -> FetchResponse:
        url = self._url(fetch_type)
        try:
            response = await self._client.get(
                url, params=params or {}, headers={API_KEY_HEADER: self.api_key}
            )
        except httpx.HTTPError as e:
            logger.warning(
                "Fetch transport error",
                fetch_type=fetch_type.value,
                error_type=type(e).__name__,
                error=str(e),
            )
            return FetchResponse.failure(f"{type(e).__name__}: {e}")

        try:
            body = response.json()
        except ValueError:
            logger.warning(
                "Fetch returned undecodable body",
                fetch_type=fetch_type.value,
                status_code=response.status_code,
            )
            return FetchResponse.failure(
                "Invalid JSON response", status_code=response.status_code
            )

        if not isinstance(body, dict):
            return FetchResponse.failure(
                "Unexpected response shape", status_code=response.status_code
            )

        throttled = response.status_code == 429 or bool(body.get("throttle"))
        if response.status_code == 200 and body.get("success"):
            return FetchResponse.ok(body, status_code=response.status_code)

        cause = body.get("cause") or f"HTTP {response.status_code}"
        logger.info(
            "Fetch unsuccessful",
            fetch_type=fetch_type.value,
            status_code=response.status_code,
            cause=cause,
            throttled=throttled,
        )
        return FetchResponse.failure(
            cause, status_code=response.status_code, data=body, throttled=throttled
        )

    async def get_url_contents(self, url: str) -> Optional[Dict[str, Any]]:
        try:
            response = await self._client.get(url)
        except httpx.HTTPError as e:
            logger.warning("URL fetch transport error", url=url, error=str(e))
            return None

        if response.status_code != 200:
            logger.debug("URL fetch unsuccessful", url=url, status_code=response.status_code)
            return None
        try:
            body = response.json()
        except ValueError:
            return None
        return body if isinstance(body, dict) else None

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

"""
Thin async client for the OpenFEC API.

API docs: https://api.open.fec.gov/developers/

Every call goes through ``get_json`` so that HTTP errors, timeouts and
malformed bodies all surface as ``UpstreamFailureError``.

Usage:
    async with FECClient(api_key="...") as client:
        data = await client.get_json("/candidates/", {"office": "S"})
"""
import logging
from typing import Any, Optional

import httpx

from whofunds.config.settings import settings
from whofunds.errors import MissingCredentialError, UpstreamFailureError

logger = logging.getLogger(__name__)


class FECClient:
    """
    Async OpenFEC client with a shared connection pool.

    Pass ``transport`` to swap the network for an ``httpx.MockTransport``.
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        self.api_key = api_key if api_key is not None else settings.FEC_API_KEY
        self.base_url = (base_url or settings.FEC_BASE_URL).rstrip("/")
        self.timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT
        self.transport = transport
        self.request_count = 0
        self._client: Optional[httpx.AsyncClient] = None

    @property
    def has_credentials(self) -> bool:
        return bool(self.api_key and self.api_key.strip())

    def _get_client(self) -> httpx.AsyncClient:
        if self._client is None:
            self._client = httpx.AsyncClient(
                base_url=self.base_url,
                timeout=self.timeout,
                transport=self.transport,
            )
        return self._client

    async def aclose(self):
        """Close the underlying connection pool"""
        if self._client is not None:
            await self._client.aclose()
            self._client = None

    async def __aenter__(self) -> "FECClient":
        return self

    async def __aexit__(self, *exc_info):
        await self.aclose()

    async def get_json(self, path: str, params: Optional[dict] = None) -> dict[str, Any]:
        """
        GET an OpenFEC endpoint and return the decoded body.

        Args:
            path: Endpoint path relative to the base URL (e.g., "/candidates/")
            params: Query parameters; api_key is added automatically

        Returns:
            Decoded JSON object

        Raises:
            MissingCredentialError: If no API key is configured
            UpstreamFailureError: On non-2xx status, timeout, transport error
                or a body that is not a JSON object
        """
        if not self.has_credentials:
            raise MissingCredentialError("FEC_API_KEY not found in settings")

        query = dict(params or {})
        query["api_key"] = self.api_key

        self.request_count += 1
        logger.debug(f"GET {path} params={params}")

        try:
            response = await self._get_client().get(path, params=query)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status = e.response.status_code
            logger.error(f"FEC API returned {status} for {path}")
            raise UpstreamFailureError(
                f"FEC API returned {status} for {path}", upstream_status=status
            ) from e
        except httpx.TimeoutException as e:
            logger.error(f"Timed out calling FEC API {path}: {e}")
            raise UpstreamFailureError(f"Timed out calling FEC API {path}") from e
        except httpx.HTTPError as e:
            logger.error(f"HTTP error calling FEC API {path}: {e}")
            raise UpstreamFailureError(f"HTTP error calling FEC API {path}: {e}") from e

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamFailureError(
                f"FEC API returned a non-JSON body for {path}",
                upstream_status=response.status_code,
            ) from e

        if not isinstance(data, dict):
            raise UpstreamFailureError(
                f"Unexpected response shape from FEC API for {path}",
                upstream_status=response.status_code,
            )
        return data

    async def get_results(self, path: str, params: Optional[dict] = None) -> tuple[list[dict], int]:
        """
        GET a paginated endpoint.

        Returns:
            (results, total_pages) where total_pages comes from pagination.pages.
            Results that are not JSON objects are skipped.

        Raises:
            UpstreamFailureError: If the body has no ``results`` list or its
                pagination is not a page count
        """
        data = await self.get_json(path, params)
        results = data.get("results")
        if not isinstance(results, list):
            raise UpstreamFailureError(f"Invalid response format from FEC API for {path}")

        pagination = data.get("pagination") or {}
        try:
            total_pages = int(pagination.get("pages") or 0)
        except (AttributeError, TypeError, ValueError) as e:
            raise UpstreamFailureError(f"Invalid pagination from FEC API for {path}") from e

        records = [item for item in results if isinstance(item, dict)]
        if len(records) < len(results):
            logger.warning(f"Skipping {len(results) - len(records)} malformed results from {path}")
        return records, total_pages

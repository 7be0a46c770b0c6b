"""Async client for the paginated listing search API.

One request per page: ``GET <base>?p=<page>&q=<query>`` returning a JSON list.
Transport and decoding problems surface as ``FetchError`` subclasses.
"""

from __future__ import annotations

import logging

import httpx

from .config import DEFAULT_API_URL, DEFAULT_REQUEST_TIMEOUT
from .errors import DecodeError, NetworkError
from .navigation import QueryParams
from .records import ResultRecord, decode_records

logger = logging.getLogger(__name__)

USER_AGENT = "nyaaview/0.1"


class NyaaClient:
    """Fetch one page of listings at a time.

    An externally supplied ``http_client`` is borrowed and never closed here;
    otherwise the client owns its own ``httpx.AsyncClient``.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_REQUEST_TIMEOUT,
        http_client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url
        self._owns_client = http_client is None
        self._client = http_client or httpx.AsyncClient(
            timeout=timeout,
            headers={"User-Agent": USER_AGENT},
            follow_redirects=True,
        )

    async def fetch(self, params: QueryParams) -> list[ResultRecord]:
        """Return the records for ``params`` in the order the API sent them."""
        request_params = {"p": str(params.page), "q": params.query}
        logger.info("fetching page=%d query=%r", params.page, params.query)
        try:
            response = await self._client.get(self.base_url, params=request_params)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            raise NetworkError(f"search API returned HTTP {exc.response.status_code}") from exc
        except httpx.HTTPError as exc:
            raise NetworkError(f"search request failed: {exc}") from exc

        try:
            payload = response.json()
        except ValueError as exc:
            raise DecodeError(f"search API returned invalid JSON: {exc}") from exc
        records = decode_records(payload)
        logger.info("fetched %d records for page=%d", len(records), params.page)
        return records

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def __aenter__(self) -> NyaaClient:
        return self

    async def __aexit__(self, *_exc_info: object) -> None:
        await self.aclose()

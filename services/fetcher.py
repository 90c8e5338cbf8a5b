"""HTTP access to the water-level API."""

from __future__ import annotations

import logging
from typing import Any, Optional

import httpx

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Raised when the API cannot be reached or returns an unusable response."""


class DataFetcher:
    """Issues a single GET per call and decodes the JSON body."""

    def __init__(
        self,
        timeout: float = 30.0,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self.timeout = timeout
        self._transport = transport

    async def fetch(self, url: str) -> Any:
        logger.debug("Requesting water level data", extra={"url": url})
        try:
            async with httpx.AsyncClient(
                timeout=self.timeout,
                transport=self._transport,
                follow_redirects=True,
            ) as client:
                response = await client.get(url)
                response.raise_for_status()
                return response.json()
        except httpx.HTTPStatusError as exc:
            status_code = exc.response.status_code
            logger.warning(
                "Water level API returned an error status",
                extra={"url": url, "status_code": status_code},
            )
            raise FetchError(f"Request failed with status {status_code}.") from exc
        except (httpx.HTTPError, httpx.InvalidURL) as exc:
            logger.warning(
                "Water level API request failed",
                extra={"url": url, "reason": exc.__class__.__name__},
            )
            raise FetchError(f"Request to {url} failed: {exc}") from exc
        except ValueError as exc:
            logger.warning(
                "Water level API returned an undecodable body",
                extra={"url": url, "reason": "invalid json"},
            )
            raise FetchError("Response body is not valid JSON.") from exc

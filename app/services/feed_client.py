"""HTTP access to the upstream feed."""

from __future__ import annotations

from typing import Any

import httpx

from app.config import FeedSettings
from app.logging import logger
from app.services.exceptions import FetchError, UpstreamError

SUCCESS_CODE = 200


class FeedClient:
    """Fetch the raw feed payload from the configured endpoint.

    The upstream wraps the payload in a JSON envelope: ``RC`` (result code),
    ``RCM`` (message) and ``DATA`` (pipe-delimited text). Only ``RC == 200``
    counts as success. Nothing is retried.
    """

    def __init__(self, http_client: httpx.AsyncClient, settings: FeedSettings | None = None) -> None:
        self._client = http_client
        self._settings = settings or FeedSettings()

    @property
    def url(self) -> str:
        return str(self._settings.url)

    async def fetch(self) -> str:
        logger.debug("feed_fetch_started", url=self.url)
        try:
            response = await self._client.get(self.url, timeout=self._settings.timeout_seconds)
        except httpx.RequestError as exc:
            logger.error("feed_fetch_failed", url=self.url, error=str(exc))
            raise FetchError(str(exc) or exc.__class__.__name__) from exc

        envelope = self._decode(response)
        code = envelope.get("RC")
        if not response.is_success or code != SUCCESS_CODE:
            message = envelope.get("RCM")
            upstream_code = code if isinstance(code, int) and not isinstance(code, bool) else None
            logger.warning(
                "feed_upstream_error",
                url=self.url,
                http_status=response.status_code,
                result_code=code,
                message=message,
            )
            raise UpstreamError(message if isinstance(message, str) and message else None, upstream_code)

        data = envelope.get("DATA")
        if data is None:
            return ""
        if not isinstance(data, str):
            logger.warning("feed_payload_malformed", url=self.url, payload_type=type(data).__name__)
            raise UpstreamError("Malformed data received from external API")
        return data

    @staticmethod
    def _decode(response: httpx.Response) -> dict[str, Any]:
        try:
            payload = response.json()
        except ValueError:
            return {}
        return payload if isinstance(payload, dict) else {}


__all__ = ["FeedClient", "SUCCESS_CODE"]

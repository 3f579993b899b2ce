# src/taskpulse/notify/sinks.py

from __future__ import annotations

"""
Concrete notification sinks.

- LoggingSink: console fallback, always available.
- WebhookSink: POSTs the alert as JSON (ntfy/Gotify-style push relays,
  home-automation hooks, ...).
"""

import logging
from typing import Any

import httpx

logger = logging.getLogger(__name__)


class LoggingSink:
    def __init__(self, *, level: int = logging.INFO) -> None:
        self._level = level

    async def notify(self, *, title: str, body: str, tag: str) -> None:
        logger.log(self._level, "NOTIFICATION [%s] %s: %s", tag, title, body)


class WebhookSink:
    """
    Send alerts to an HTTP endpoint.

    Raises on transport errors and non-2xx responses; the dispatcher logs them.
    An injected client is not closed by aclose().
    """

    def __init__(
        self,
        url: str,
        *,
        client: httpx.AsyncClient | None = None,
        timeout_seconds: float = 10.0,
        headers: dict[str, str] | None = None,
    ) -> None:
        if not url or not url.strip():
            raise ValueError("webhook url is required")
        self._url = url.strip()
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds, connect=min(5.0, timeout_seconds))
        )
        self._headers = dict(headers or {})

    async def notify(self, *, title: str, body: str, tag: str) -> None:
        payload: dict[str, Any] = {"title": title, "body": body, "tag": tag}
        resp = await self._client.post(self._url, json=payload, headers=self._headers)
        resp.raise_for_status()
        logger.debug("Webhook accepted tag=%s status=%s", tag, resp.status_code)

    async def aclose(self) -> None:
        if self._owns_client:
            await self._client.aclose()

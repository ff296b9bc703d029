"""
ReelChat — Recommendation Webhook Client

Sends the user's query to the automation webhook and returns whatever JSON
comes back. One POST per call: no retries, no cache.

Design patterns:
  - Gateway: hides the remote workflow behind search_movies()
  - Singleton: shared httpx client with connection pooling
"""

from __future__ import annotations

import json
import logging
from typing import Any, Optional

import httpx

from reelchat.config import settings
from reelchat.errors import HttpError, InvalidPayloadError, NetworkError

logger = logging.getLogger(__name__)

# ── Shared client ─────────────────────────────────────────

_client: Optional[httpx.AsyncClient] = None


async def get_client() -> httpx.AsyncClient:
    global _client
    if _client is None or _client.is_closed:
        _client = httpx.AsyncClient(
            timeout=httpx.Timeout(settings.webhook_timeout),
            follow_redirects=True,
        )
    return _client


async def close_client() -> None:
    global _client
    if _client and not _client.is_closed:
        await _client.aclose()
        _client = None


# ── Public API ────────────────────────────────────────────


def _reject_constant(name: str) -> Any:
    """NaN and Infinity are not JSON."""
    raise ValueError(f"invalid JSON constant: {name}")


async def search_movies(
    query: str,
    *,
    client: Optional[httpx.AsyncClient] = None,
    url: Optional[str] = None,
) -> Any:
    """
    POST ``{"query": query}`` to the webhook and return the decoded body.

    Raises:
      - NetworkError: the webhook could not be reached
      - HttpError: non-2xx response (``status`` is preserved)
      - InvalidPayloadError: the body is not JSON
    """
    client = client or await get_client()
    url = url or settings.webhook_url

    logger.debug("Webhook request: %s query=%r", url, query[:80])
    try:
        resp = await client.post(url, json={"query": query})
    except (httpx.HTTPError, httpx.InvalidURL) as exc:
        logger.warning("Webhook unreachable: %s", exc)
        raise NetworkError(str(exc) or type(exc).__name__) from exc

    if not resp.is_success:
        logger.warning("Webhook returned HTTP %d", resp.status_code)
        raise HttpError(resp.status_code)

    text = resp.text
    try:
        data = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, RecursionError) as exc:
        logger.warning("Webhook returned invalid JSON (%d chars)", len(text))
        raise InvalidPayloadError("Invalid JSON returned from workflow") from exc

    logger.info("Webhook response: %d chars", len(text))
    return data

"""Client for the third-party chat-completion gateway.

Failures are raised as :class:`GatewayError` subclasses, each carrying the
HTTP status and error code the relay hands back to its caller.
"""

from __future__ import annotations

import logging

import httpx

from relay.config import Settings

logger = logging.getLogger(__name__)


class GatewayError(Exception):
    """A chat-completion request that produced no usable content."""

    status_code = 500
    code = "upstream_error"

    def __init__(self, message: str) -> None:
        super().__init__(message)
        self.message = message


class GatewayRateLimitedError(GatewayError):
    status_code = 429
    code = "rate_limited"


class GatewayQuotaError(GatewayError):
    status_code = 402
    code = "quota_exhausted"


class GatewayUpstreamError(GatewayError):
    status_code = 500
    code = "upstream_error"


class GatewayNotConfiguredError(GatewayError):
    status_code = 500
    code = "not_configured"


class GatewayUnreachableError(GatewayError):
    status_code = 500
    code = "gateway_unreachable"


def _extract_content(data: object) -> str | None:
    """Pull ``choices[0].message.content`` out of a completion payload."""
    if not isinstance(data, dict):
        return None
    choices = data.get("choices") or []
    if not choices or not isinstance(choices[0], dict):
        return None
    message = choices[0].get("message") or {}
    content = message.get("content") if isinstance(message, dict) else None
    return content if isinstance(content, str) else None


async def call_gateway(
    settings: Settings,
    system_prompt: str,
    user_prompt: str,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> str:
    """Send one system/user prompt pair and return the completion text.

    Raises:
        GatewayError: see the subclasses for the individual failure modes.
    """
    if not settings.ai_gateway_api_key:
        raise GatewayNotConfiguredError("AI gateway API key is not configured")

    payload = {
        "model": settings.ai_model,
        "messages": [
            {"role": "system", "content": system_prompt},
            {"role": "user", "content": user_prompt},
        ],
    }
    headers = {"Authorization": f"Bearer {settings.ai_gateway_api_key}"}

    try:
        async with httpx.AsyncClient(
            timeout=settings.request_timeout, transport=transport
        ) as client:
            resp = await client.post(settings.ai_gateway_url, json=payload, headers=headers)
    except httpx.ConnectError as exc:
        logger.error("Cannot connect to AI gateway at %s: %s", settings.ai_gateway_url, exc)
        raise GatewayUnreachableError(
            f"Cannot connect to AI gateway at {settings.ai_gateway_url}"
        ) from exc
    except httpx.TimeoutException as exc:
        logger.error("AI gateway timed out after %ss", settings.request_timeout)
        raise GatewayUpstreamError(
            f"AI gateway timed out after {settings.request_timeout}s"
        ) from exc
    except httpx.HTTPError as exc:
        logger.error("AI gateway request failed: %s", exc)
        raise GatewayUnreachableError(f"AI gateway request failed: {exc}") from exc

    if resp.status_code == 429:
        raise GatewayRateLimitedError("Rate limit exceeded. Please try again later.")
    if resp.status_code == 402:
        raise GatewayQuotaError("AI credits depleted. Please add more credits.")
    if resp.is_error:
        logger.error("AI gateway error: %s %s", resp.status_code, resp.text[:500])
        raise GatewayUpstreamError(f"AI gateway error: {resp.status_code}")

    try:
        data = resp.json()
    except ValueError as exc:
        raise GatewayUpstreamError("AI gateway returned invalid JSON") from exc

    content = _extract_content(data)
    if content is None:
        logger.error("AI gateway response had no message content")
        raise GatewayUpstreamError("AI gateway returned no content")

    logger.info("AI response received, content length: %d", len(content))
    return content

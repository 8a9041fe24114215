"""
HTTP client utilities for the chat API.
Builds the httpx client owned by a single DeepSeekClient instance.
"""
from typing import Optional

import httpx
from config import Config


def create_api_client(
    api_key: str,
    timeout: float,
    base_url: Optional[str] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """
    Create an httpx client preconfigured for the chat completions API.

    Features:
    - Static bearer authentication
    - Accept: text/event-stream on every request
    - Connection pooling (reuses TCP connections)

    Args:
        api_key: Bearer token sent on every request
        timeout: Request timeout in seconds
        base_url: API root, defaults to Config.DEEPSEEK_BASE_URL
        transport: Optional transport override (used by tests)

    Returns:
        Configured httpx.AsyncClient
    """
    limits = httpx.Limits(
        max_connections=Config.MAX_CONNECTIONS,
        max_keepalive_connections=Config.MAX_KEEPALIVE_CONNECTIONS,
        keepalive_expiry=Config.KEEPALIVE_EXPIRY
    )

    headers = {
        "Authorization": f"Bearer {api_key}",
        "Accept": "text/event-stream",
    }

    return httpx.AsyncClient(
        base_url=base_url or Config.DEEPSEEK_BASE_URL,
        headers=headers,
        timeout=timeout,
        limits=limits,
        http2=Config.HTTP2_ENABLED and transport is None,
        transport=transport
    )

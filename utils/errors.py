"""
Exception types raised across the client call boundary.

Only transport-level failures are raised; payload anomalies inside a
response are reported through the client's error observer instead.
"""
from typing import Optional


class ChatClientError(Exception):
    """Base class for errors raised by the chat client."""


class ChatAPIError(ChatClientError):
    """The chat API answered with a non-2xx status."""

    def __init__(self, status_code: int, message: str, body: str = "", url: Optional[str] = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.body = body
        self.url = url

    def __str__(self) -> str:
        return f"HTTP {self.status_code}: {self.message}"


class ClientClosedError(ChatClientError, RuntimeError):
    """The client was used after aclose()."""

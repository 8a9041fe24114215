"""
DeepSeek chat client.
Sends chat completion requests, dispatches to the streaming or
non-streaming assembler and keeps the managed conversation history.
"""
from typing import Iterable, List, Optional

import httpx

from config import Config
from models.api_models import ChatMessage, ChatRequest
from models.chat_models import ChatResult, ClientOptions, Role
from services.history import ConversationHistory
from services.response_assembler import ResponseAssembler
from utils.errors import ChatAPIError, ClientClosedError
from utils.events import ClientEvents
from utils.http_client import create_api_client
from utils.logger import app_logger


class DeepSeekClient:
    """Client for an OpenAI-compatible chat completions endpoint.

    One call in flight per instance is the supported pattern; history and
    options are not locked. Observers registered on ``events`` are called
    synchronously on the awaiting task.

    Usage::

        async with DeepSeekClient(api_key) as client:
            client.events.chunk_received.subscribe(lambda text: print(text, end=""))
            result = await client.send_message("Hello")
    """

    def __init__(
        self,
        api_key: str,
        options: Optional[ClientOptions] = None,
        *,
        base_url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            api_key: Bearer token for the API
            options: Client options, defaults to ClientOptions()
            base_url: API root, defaults to Config.DEEPSEEK_BASE_URL
            transport: Optional httpx transport override
        """
        if not api_key or not api_key.strip():
            raise ValueError("api_key must not be empty")

        self.options = options if options is not None else ClientOptions()
        self.events = ClientEvents()
        self._history = ConversationHistory(
            self.options,
            on_message_added=self.events.message_added,
            on_cleared=self.events.history_cleared
        )
        self._assembler = ResponseAssembler(self.options, self.events)
        self._http = create_api_client(api_key, self.options.timeout, base_url, transport)
        self._closed = False

    async def __aenter__(self) -> "DeepSeekClient":
        return self

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.aclose()

    @property
    def closed(self) -> bool:
        return self._closed

    @property
    def history_count(self) -> int:
        """Number of messages currently kept in history."""
        return len(self._history)

    async def send_message(self, message: str, stream: bool = True) -> ChatResult:
        """
        Send a user message with the whole managed history.

        The user turn is recorded before the request goes out; the assistant
        turn only after the response was fully processed. A failed or
        cancelled call therefore leaves just the user turn in history.

        Args:
            message: User text
            stream: Stream the response

        Returns:
            The chat result
        """
        self._ensure_open()
        self._history.append(ChatMessage(role=Role.USER.value, content=message))

        result = await self.send_messages(self._history.snapshot(), stream)

        self._history.append(ChatMessage(role=result.role, content=result.content))
        return result

    async def send_message_once(self, message: str, stream: bool = True) -> ChatResult:
        """Send a single user message without reading or writing history."""
        return await self.send_messages([ChatMessage(role=Role.USER.value, content=message)], stream)

    async def send_messages(self, messages: Iterable[ChatMessage], stream: bool = True) -> ChatResult:
        """
        Send an explicit list of messages verbatim, bypassing history.

        Args:
            messages: Ordered conversation to send
            stream: Stream the response

        Returns:
            The chat result

        Raises:
            ChatAPIError: The API answered with a non-2xx status
            ClientClosedError: The client was closed
            httpx.TransportError: Connection failure or timeout
        """
        self._ensure_open()

        request = ChatRequest(
            model=self.options.model,
            messages=list(messages),
            stream=stream,
            max_tokens=self.options.max_tokens,
            temperature=self.options.temperature
        )

        app_logger.info(
            f"Sending {len(request.messages)} message(s) to {request.model} (stream={stream})"
        )

        http_request = self._http.build_request(
            "POST",
            Config.CHAT_COMPLETIONS_PATH,
            json=request.to_payload(),
            headers={"Accept": "text/event-stream"},
            timeout=self.options.timeout
        )

        # stream=True returns once headers arrive; the body is read lazily
        response = await self._http.send(http_request, stream=stream)
        try:
            await self._raise_for_status(response)

            if stream:
                if self.options.show_debug_info:
                    content_type = response.headers.get("content-type", "")
                    media_type = content_type.split(";")[0].strip() or None
                    self.events.debug_info.emit(f"Response Content-Type: {media_type}")

                return await self._assembler.assemble_stream(response.aiter_lines())

            return self._assembler.assemble_body(response.text)
        finally:
            await response.aclose()

    async def send_message_with_debug(self, message: str, stream: bool = True) -> ChatResult:
        """Like send_message, with debug info and token usage forced on for this call only."""
        with self.options.overridden(show_debug_info=True, show_token_usage=True):
            return await self.send_message(message, stream)

    def get_history(self) -> List[ChatMessage]:
        """Return a copy of the conversation history."""
        return self._history.snapshot()

    def clear_history(self) -> None:
        self._history.clear()

    def add_message(self, role: str, content: str) -> ChatMessage:
        """
        Manually append a message to history, e.g. to seed a system instruction.

        Raises:
            ValueError: role is not user, assistant or system
        """
        self._ensure_open()
        role = Role(role).value
        return self._history.add(role, content)

    async def aclose(self) -> None:
        """Release the HTTP client and drop history. Safe to call more than once."""
        if self._closed:
            return

        self._closed = True
        try:
            await self._http.aclose()
        finally:
            self._history.clear()
            app_logger.info("Chat client closed")

    def _ensure_open(self) -> None:
        if self._closed:
            raise ClientClosedError("Chat client is closed")

    async def _raise_for_status(self, response: httpx.Response) -> None:
        """Raise ChatAPIError for a non-2xx response."""
        if response.is_success:
            return

        await response.aread()
        body = response.text
        message = response.reason_phrase or "Request failed"

        try:
            error = response.json().get("error")
            if isinstance(error, dict) and error.get("message"):
                message = error["message"]
        except (ValueError, AttributeError):
            pass

        app_logger.error(f"Chat API error {response.status_code}: {message}")
        raise ChatAPIError(
            status_code=response.status_code,
            message=message,
            body=body,
            url=str(response.request.url)
        )

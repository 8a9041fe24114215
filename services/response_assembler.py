"""
Response assembly for streamed and non-streamed chat completions.
Both paths produce the same ChatResult shape.
"""
from typing import AsyncIterable

from pydantic import ValidationError

from models.api_models import ChatCompletion
from models.chat_models import (
    ChatResult,
    ChunkError,
    ClientOptions,
    ContentDelta,
    DebugNote,
    FinishReason,
    FinishReasonSet,
    Role,
    RoleAnnounced,
    StreamEnded,
    UsageReported,
)
from services.stream_decoder import StreamDecoder
from utils.events import ClientEvents
from utils.logger import app_logger


class ResponseAssembler:
    """Folds a chat completion response into a ChatResult while notifying observers."""

    def __init__(self, options: ClientOptions, events: ClientEvents):
        self.options = options
        self.events = events

    async def assemble_stream(self, lines: AsyncIterable[str]) -> ChatResult:
        """
        Drive the stream decoder over the body lines.

        Content deltas are appended and forwarded to chunk_received one at a
        time, in arrival order. Usage is forwarded as soon as it is reported.
        Unparseable chunks go to the error observer and are skipped.

        Args:
            lines: Response body lines

        Returns:
            ChatResult with was_streamed=True
        """
        decoder = StreamDecoder(debug=self.options.show_debug_info)
        result = ChatResult(was_streamed=True)
        content_parts = []

        event_stream = decoder.decode(lines)
        try:
            async for event in event_stream:
                if isinstance(event, ContentDelta):
                    content_parts.append(event.text)
                    self.events.chunk_received.emit(event.text)

                elif isinstance(event, RoleAnnounced):
                    result.role = event.role

                elif isinstance(event, FinishReasonSet):
                    result.finish_reason = event.reason

                elif isinstance(event, UsageReported):
                    result.usage = event.usage
                    if self.options.show_token_usage:
                        self.events.token_usage.emit(event.usage)

                elif isinstance(event, ChunkError):
                    app_logger.warning(f"Skipping malformed stream chunk: {event.payload[:200]!r}")
                    self.events.error.emit(event.error)

                elif isinstance(event, DebugNote):
                    self.events.debug_info.emit(event.message)

                elif isinstance(event, StreamEnded):
                    result.finish_reason = event.finish_reason
                    app_logger.debug(
                        f"Stream finished after {event.lines_read} lines "
                        f"(done sentinel: {event.done_sentinel}, finish reason: {event.finish_reason})"
                    )
        finally:
            await event_stream.aclose()

        result.content = "".join(content_parts)
        return result

    def assemble_body(self, body: str) -> ChatResult:
        """
        Parse a complete non-streamed response body.

        A body that cannot be parsed is reported to the error observer and
        yields an empty result instead of raising.

        Args:
            body: Raw JSON response body

        Returns:
            ChatResult with was_streamed=False
        """
        try:
            completion = ChatCompletion.model_validate_json(body)
        except ValidationError as e:
            if self.options.show_debug_info:
                self.events.debug_info.emit(f"Failed to parse response: {e}")
            app_logger.warning(f"Failed to parse chat completion body ({len(body)} chars)")
            self.events.error.emit(e)
            return ChatResult(content="", was_streamed=False)

        if not completion.choices:
            app_logger.warning("Chat completion body contained no choices")
            return ChatResult(content="", was_streamed=False)

        choice = completion.choices[0]
        message = choice.message

        result = ChatResult(
            content=(message.content if message and message.content else ""),
            role=(message.role if message and message.role else Role.ASSISTANT.value),
            usage=completion.usage,
            was_streamed=False,
            finish_reason=FinishReason.from_wire(choice.finish_reason)
        )

        if self.options.show_token_usage and completion.usage is not None:
            self.events.token_usage.emit(completion.usage)

        return result

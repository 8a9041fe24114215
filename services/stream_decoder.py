"""
Server-sent event decoder for streamed chat completions.
Turns response body lines into typed content/metadata events.
"""
from typing import AsyncIterable, AsyncIterator, Optional

from pydantic import ValidationError

from config import Config
from models.api_models import ChatCompletionChunk
from models.chat_models import (
    ChunkError,
    ContentDelta,
    DebugNote,
    FinishReason,
    FinishReasonSet,
    RoleAnnounced,
    StreamEnded,
    StreamEvent,
    UsageReported,
)

DATA_PREFIX = "data: "
DONE_SENTINEL = "[DONE]"


class StreamDecoder:
    """Decodes `data: ` lines of a chat completion stream.

    Only lines carrying the exact ``"data: "`` prefix hold payload. A
    ``[DONE]`` payload ends the stream; any other payload is one JSON chunk
    of the shape ``{choices: [{delta: {role?, content?}, finish_reason?}], usage?}``.
    Only the first choice is read.

    A payload that fails to parse yields ``ChunkError`` and decoding carries
    on with the next line. Running out of lines without ``[DONE]`` is a
    normal end of stream.
    """

    def __init__(self, debug: bool = False, preview_lines: Optional[int] = None):
        """
        Args:
            debug: Emit DebugNote events for raw lines and parse failures
            preview_lines: Number of leading lines echoed as debug notes
        """
        self.debug = debug
        self.preview_lines = Config.DEBUG_PREVIEW_LINES if preview_lines is None else preview_lines

    async def decode(self, lines: AsyncIterable[str]) -> AsyncIterator[StreamEvent]:
        """
        Decode an async sequence of text lines.

        Each line read is a suspension point; the generator is single-pass
        and always finishes with a StreamEnded event unless the consumer
        stops early or the line source raises.

        Yields:
            ContentDelta, RoleAnnounced, FinishReasonSet, UsageReported,
            ChunkError, DebugNote and finally StreamEnded
        """
        finish_reason: Optional[FinishReason] = None
        done_sentinel = False
        line_count = 0

        async for line in lines:
            line_count += 1

            if self.debug and line_count <= self.preview_lines:
                yield DebugNote(f"Stream line {line_count}: {line}")

            if not line.startswith(DATA_PREFIX):
                if self.debug and line.strip():
                    yield DebugNote(f"Non-data line: {line}")
                continue

            payload = line[len(DATA_PREFIX):]

            if payload == DONE_SENTINEL:
                if self.debug:
                    yield DebugNote("Stream ended with [DONE]")
                if finish_reason is None:
                    finish_reason = FinishReason.STOP
                    yield FinishReasonSet(finish_reason)
                done_sentinel = True
                break

            try:
                chunk = ChatCompletionChunk.model_validate_json(payload)
            except ValidationError as e:
                if self.debug:
                    yield DebugNote(f"JSON parsing error: {e}")
                yield ChunkError(error=e, payload=payload)
                continue

            if chunk.choices:
                choice = chunk.choices[0]
                delta = choice.delta

                if delta is not None:
                    if delta.content:
                        yield ContentDelta(delta.content)
                    if delta.role is not None:
                        yield RoleAnnounced(delta.role)

                if choice.finish_reason is not None:
                    finish_reason = FinishReason.from_wire(choice.finish_reason)
                    yield FinishReasonSet(finish_reason)

            if chunk.usage is not None:
                yield UsageReported(chunk.usage)

        if self.debug:
            yield DebugNote(f"Total lines processed: {line_count}")

        yield StreamEnded(
            finish_reason=finish_reason,
            done_sentinel=done_sentinel,
            lines_read=line_count
        )

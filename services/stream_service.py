"""
Streaming service for the HTTP bridge.
Relays a client's streamed completion as server-sent events.
"""
import asyncio
import json
from typing import AsyncIterator

from services.chat_client import DeepSeekClient


class StreamService:
    """Service for handling streaming chat operations."""

    @staticmethod
    def send_sse_event(event_type: str, data: dict) -> str:
        """Format data as Server-Sent Events (SSE) format."""
        return f"event: {event_type}\ndata: {json.dumps(data, separators=(',', ':'))}\n\n"

    @staticmethod
    async def relay_chat_stream(
        client: DeepSeekClient,
        prompt: str,
        managed: bool = True
    ) -> AsyncIterator[str]:
        """Run one streamed send and yield its observer events as SSE.

        Chunk, usage and non-fatal error notifications are queued by the
        observers in the order the client fires them and yielded in that
        order. A final ``done`` event carries the ChatResult. Failures of
        the send itself are raised after the queued events were yielded.

        Args:
            client: Chat client to send with
            prompt: User text
            managed: Use send_message (history-aware) instead of send_message_once

        Yields:
            SSE events: token, usage, error, done
        """
        queue: asyncio.Queue = asyncio.Queue()

        def on_chunk(text):
            queue.put_nowait(StreamService.send_sse_event("token", {"content": text}))

        def on_usage(usage):
            queue.put_nowait(StreamService.send_sse_event("usage", usage.model_dump()))

        def on_error(error):
            queue.put_nowait(StreamService.send_sse_event("error", {
                "type": "chunk_error",
                "message": str(error)
            }))

        client.events.chunk_received.subscribe(on_chunk)
        client.events.token_usage.subscribe(on_usage)
        client.events.error.subscribe(on_error)

        send = client.send_message if managed else client.send_message_once
        task = asyncio.create_task(send(prompt, stream=True))
        # observers fire inside the task, so the sentinel is always queued last
        task.add_done_callback(lambda _: queue.put_nowait(None))

        try:
            while True:
                event = await queue.get()
                if event is None:
                    break
                yield event

            result = task.result()
            done = result.to_dict()
            done["history_count"] = client.history_count
            yield StreamService.send_sse_event("done", done)
        finally:
            if not task.done():
                task.cancel()
                await asyncio.gather(task, return_exceptions=True)
            client.events.chunk_received.unsubscribe(on_chunk)
            client.events.token_usage.unsubscribe(on_usage)
            client.events.error.unsubscribe(on_error)

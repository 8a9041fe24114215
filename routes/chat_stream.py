"""
Route handlers for streaming chat operations.
Handles the /chat/stream endpoint, relaying content deltas as SSE.
"""
import asyncio
from typing import AsyncIterator

import httpx
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from models.api_models import PromptRequest
from routes.chat import get_chat_client, get_chat_lock
from services.chat_client import DeepSeekClient
from services.stream_service import StreamService
from utils.errors import ChatAPIError
from utils.logger import app_logger

router = APIRouter()


@router.post("/chat/stream")
async def chat_stream(
    payload: PromptRequest,
    client: DeepSeekClient = Depends(get_chat_client),
    lock: asyncio.Lock = Depends(get_chat_lock)
):
    """
    Streaming chat endpoint.
    Emits token, usage and error events as they arrive, then done.
    """

    async def event_generator() -> AsyncIterator[str]:
        async with lock:
            try:
                async for event in StreamService.relay_chat_stream(
                    client=client,
                    prompt=payload.prompt,
                    managed=payload.managed
                ):
                    yield event

            except ChatAPIError as e:
                app_logger.error(f"Chat API error: {e}")
                yield StreamService.send_sse_event("error", {
                    "type": "upstream_error",
                    "status_code": e.status_code,
                    "message": e.message
                })
            except httpx.HTTPError as e:
                app_logger.error(f"Transport error: {e}")
                yield StreamService.send_sse_event("error", {"type": "transport_error", "message": str(e)})

    return StreamingResponse(
        event_generator(),
        media_type="text/event-stream",
        headers={
            "Cache-Control": "no-cache",
            "Connection": "keep-alive",
            "X-Accel-Buffering": "no"
        }
    )

"""
Route handlers for standard chat operations.
Handles the /chat endpoint (non-streaming).
"""
import asyncio

import httpx
from fastapi import APIRouter, Depends, Request, status
from fastapi.responses import JSONResponse

from models.api_models import PromptRequest
from services.chat_client import DeepSeekClient
from utils.errors import ChatAPIError
from utils.logger import app_logger

router = APIRouter()


def get_chat_client(request: Request) -> DeepSeekClient:
    """Shared chat client created at application startup."""
    return request.app.state.chat_client


def get_chat_lock(request: Request) -> asyncio.Lock:
    """Lock serializing calls on the shared client."""
    return request.app.state.chat_lock


def send_upstream_error(e: Exception) -> JSONResponse:
    """Map a failed upstream call to a bridge error response."""
    if isinstance(e, ChatAPIError):
        return JSONResponse(
            status_code=status.HTTP_502_BAD_GATEWAY,
            content={
                "error": "upstream_error",
                "status_code": e.status_code,
                "message": e.message
            },
        )

    if isinstance(e, httpx.TimeoutException):
        return JSONResponse(
            status_code=status.HTTP_504_GATEWAY_TIMEOUT,
            content={"error": "upstream_timeout", "message": str(e) or "Request timed out"},
        )

    return JSONResponse(
        status_code=status.HTTP_502_BAD_GATEWAY,
        content={"error": "transport_error", "message": str(e)},
    )


@router.post("/chat")
async def chat(
    payload: PromptRequest,
    client: DeepSeekClient = Depends(get_chat_client),
    lock: asyncio.Lock = Depends(get_chat_lock)
):
    """
    Non-streamed chat endpoint.
    Managed requests include and extend the shared conversation history.
    """
    async with lock:
        warnings = []
        client.events.error.subscribe(warnings.append)
        try:
            if payload.managed:
                result = await client.send_message(payload.prompt, stream=False)
            else:
                result = await client.send_message_once(payload.prompt, stream=False)
        except (ChatAPIError, httpx.HTTPError) as e:
            app_logger.error(f"Chat error: {e}")
            return send_upstream_error(e)
        finally:
            client.events.error.unsubscribe(warnings.append)

    response_data = result.to_dict()
    response_data["warnings"] = [str(w) for w in warnings]
    response_data["history_count"] = client.history_count
    return response_data

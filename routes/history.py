"""
Route handlers for the shared conversation history.
"""
import asyncio

from fastapi import APIRouter, Depends, status
from fastapi.responses import JSONResponse

from models.api_models import HistoryMessageRequest
from routes.chat import get_chat_client, get_chat_lock
from services.chat_client import DeepSeekClient

router = APIRouter()


@router.get("/history")
async def get_history(client: DeepSeekClient = Depends(get_chat_client)):
    """Current conversation history, oldest first."""
    messages = client.get_history()
    return {
        "messages": [message.model_dump() for message in messages],
        "count": len(messages),
        "max_history_size": client.options.max_history_size,
    }


@router.delete("/history")
async def clear_history(
    client: DeepSeekClient = Depends(get_chat_client),
    lock: asyncio.Lock = Depends(get_chat_lock)
):
    async with lock:
        client.clear_history()
    return {"cleared": True, "count": client.history_count}


@router.post("/history")
async def add_history_message(
    payload: HistoryMessageRequest,
    client: DeepSeekClient = Depends(get_chat_client),
    lock: asyncio.Lock = Depends(get_chat_lock)
):
    """Append a message by hand, e.g. a system instruction."""
    async with lock:
        try:
            message = client.add_message(payload.role, payload.content)
        except ValueError:
            return JSONResponse(
                status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
                content={
                    "error": "invalid_role",
                    "message": f"Role must be one of: user, assistant, system (got '{payload.role}')"
                },
            )
    return {"message": message.model_dump(), "count": client.history_count}

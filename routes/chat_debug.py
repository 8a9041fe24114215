"""
Debug route: one managed send with debug info and token usage forced on.
"""
import asyncio

import httpx
from fastapi import APIRouter, Depends

from models.api_models import PromptRequest
from routes.chat import get_chat_client, get_chat_lock, send_upstream_error
from services.chat_client import DeepSeekClient
from utils.errors import ChatAPIError
from utils.logger import app_logger

router = APIRouter()


@router.post("/chat/debug")
async def chat_debug(
    payload: PromptRequest,
    client: DeepSeekClient = Depends(get_chat_client),
    lock: asyncio.Lock = Depends(get_chat_lock)
):
    """Streamed managed send returning the result together with every debug line and usage report."""
    async with lock:
        debug_lines = []
        usage_reports = []
        client.events.debug_info.subscribe(debug_lines.append)
        client.events.token_usage.subscribe(usage_reports.append)
        try:
            result = await client.send_message_with_debug(payload.prompt, stream=True)
        except (ChatAPIError, httpx.HTTPError) as e:
            app_logger.error(f"Debug chat error: {e}")
            return send_upstream_error(e)
        finally:
            client.events.debug_info.unsubscribe(debug_lines.append)
            client.events.token_usage.unsubscribe(usage_reports.append)

    for line in debug_lines:
        app_logger.debug(line)

    return {
        "result": result.to_dict(),
        "debug": debug_lines,
        "usage_reports": [usage.model_dump() for usage in usage_reports],
    }

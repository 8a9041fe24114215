import asyncio

import pytest

from models.chat_models import ClientOptions
from services.chat_client import DeepSeekClient
from utils.events import ClientEvents

TEST_BASE_URL = "https://api.deepseek.test"


@pytest.fixture
def anyio_backend():
    return "asyncio"


@pytest.fixture
def chat_api():
    """Recorded, scriptable chat completions API."""
    from tests.fixtures.mock_clients import ChatAPIMock
    return ChatAPIMock()


@pytest.fixture
def client_options():
    return ClientOptions()


@pytest.fixture
def make_client(chat_api):
    """Factory for clients wired to the mock API. Extra kwargs become options."""
    def _make(**option_values):
        options = ClientOptions(**option_values)
        return DeepSeekClient("test-key", options, base_url=TEST_BASE_URL, transport=chat_api.transport)
    return _make


@pytest.fixture
def chat_client(make_client):
    return make_client()


@pytest.fixture
def recorded_events():
    """ClientEvents with every channel recorded into one ordered log."""
    events = ClientEvents()
    log = []
    events.chunk_received.subscribe(lambda text: log.append(("chunk", text)))
    events.error.subscribe(lambda error: log.append(("error", error)))
    events.debug_info.subscribe(lambda message: log.append(("debug", message)))
    events.token_usage.subscribe(lambda usage: log.append(("usage", usage)))
    events.message_added.subscribe(lambda message: log.append(("added", message)))
    events.history_cleared.subscribe(lambda: log.append(("cleared", None)))
    return events, log


@pytest.fixture
def auth_headers():
    """Authentication headers for bridge requests."""
    return {"X-API-Key": "test-key"}


@pytest.fixture
def bridge_client(chat_api):
    """Shared chat client used by the bridge app."""
    return DeepSeekClient("upstream-key", ClientOptions(), base_url=TEST_BASE_URL, transport=chat_api.transport)


@pytest.fixture
def configured_app(monkeypatch, bridge_client):
    """Bridge app with the mock API behind the shared client."""
    from contextlib import asynccontextmanager
    from fastapi import FastAPI
    from fastapi.testclient import TestClient
    from auth import APIKeyMiddleware
    from routes import chat, chat_debug, chat_stream, history

    monkeypatch.setattr(APIKeyMiddleware, "API_KEY", "test-key")

    @asynccontextmanager
    async def lifespan(app):
        app.state.chat_client = bridge_client
        app.state.chat_lock = asyncio.Lock()
        yield
        await bridge_client.aclose()

    app = FastAPI(lifespan=lifespan)
    app.add_middleware(APIKeyMiddleware)
    app.include_router(chat.router)
    app.include_router(chat_stream.router)
    app.include_router(chat_debug.router)
    app.include_router(history.router)

    with TestClient(app) as client:
        yield client

"""
DeepSeek Chat Bridge - FastAPI application exposing one streaming chat client
with a managed conversation history over HTTP.
"""
import asyncio
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from auth import APIKeyMiddleware
from config import Config
from routes import chat, chat_debug, chat_stream, history
from services.chat_client import DeepSeekClient
from utils.logger import app_logger


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Create the shared chat client on startup and release it on shutdown."""
    app.state.chat_client = DeepSeekClient(Config.DEEPSEEK_API_KEY, Config.build_client_options())
    app.state.chat_lock = asyncio.Lock()
    app_logger.info(f"Chat client ready (model: {app.state.chat_client.options.model})")
    yield
    await app.state.chat_client.aclose()

app = FastAPI(title=Config.APP_TITLE, lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    """Handle validation errors with user-friendly messages"""
    errors = exc.errors()
    app_logger.error(f"Validation error for {request.url}: {errors}")

    if errors:
        first_error = errors[0]
        field = first_error.get('loc', [])[-1] if first_error.get('loc') else 'field'
        message = f"{field}: {first_error.get('msg', 'Validation error')}"

        return JSONResponse(
            status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
            content={
                "detail": [{
                    "msg": message,
                    "type": first_error.get('type', ''),
                    "loc": list(first_error.get('loc', []))
                }]
            },
        )

    return JSONResponse(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY,
        content={"detail": errors},
    )


app.add_middleware(APIKeyMiddleware)


@app.get("/")
async def root():
    """Root endpoint - health check."""
    return {"message": "DeepSeek Chat Bridge is running"}

app.include_router(chat.router, tags=["chat"])
app.include_router(chat_stream.router, tags=["chat"])
app.include_router(chat_debug.router, tags=["debug"])
app.include_router(history.router, tags=["history"])


if __name__ == "__main__":
    import uvicorn
    uvicorn.run(app, host="0.0.0.0", port=8000)

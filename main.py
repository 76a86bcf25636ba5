"""AI Code Completion Server - FastAPI Application."""

from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from config import settings, VERSION
from routers.completion import router as completion_router
from services.llm_client import LLMClient
from utils.logger import log

# Shutdown timeout in seconds
SHUTDOWN_TIMEOUT_SECONDS = 10


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Handle startup and shutdown events for the FastAPI application.

    The chat-completion client is built once from the settings on startup
    and closed on shutdown. Configuration is not validated here: a missing
    API key or base URL shows up as an error on the first completion.

    Args:
        app: The FastAPI application instance.

    Yields:
        None: Control is yielded to the application after startup completes.
    """
    # Startup
    app.state.llm_client = LLMClient.from_settings(settings)

    log.info(f"Server started on http://localhost:{settings.port}")
    log.info(
        "Completion endpoint",
        {"baseUrl": settings.base_url or "default", "model": settings.model},
    )
    log.info("Endpoints: POST /inline, GET /health")
    log.info(f"Logging to: {log.get_log_file_path()}")

    if not settings.secret_key:
        log.warn("SECRET_KEY is not set; completion requests will fail to authenticate")

    yield

    # Shutdown (uvicorn handles graceful shutdown of in-flight requests)
    log.info("Server shutting down gracefully...")
    await app.state.llm_client.close()
    log.close()


app = FastAPI(
    title="AI Code Completion Server",
    description="Inline code completion backed by an OpenAI-compatible chat-completion endpoint",
    version=VERSION,
    lifespan=lifespan,
)

# CORS middleware for the editor extension
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_methods=["POST", "OPTIONS", "GET"],
    allow_headers=["Content-Type"],
)

# Include routers
app.include_router(completion_router)


if __name__ == "__main__":
    import uvicorn

    uvicorn.run(
        "main:app",
        host="127.0.0.1",
        port=settings.port,
        timeout_graceful_shutdown=SHUTDOWN_TIMEOUT_SECONDS,
    )

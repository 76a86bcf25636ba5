"""Completion API router."""

import time
import uuid

from fastapi import APIRouter, Depends, Request

from config import VERSION, Settings, settings
from models.request import CompletionRequest
from models.response import CompletionResponse, HealthResponse
from services.completion import get_completion
from services.llm_client import LLMClient
from utils.logger import log
from utils.metrics import metrics

router = APIRouter()

# Server start time for uptime calculation
_start_time = time.time()


def format_duration(seconds: int) -> str:
    """Format duration in seconds to human-readable string."""
    hours = seconds // 3600
    minutes = (seconds % 3600) // 60
    secs = seconds % 60
    return f"{hours}h {minutes}m {secs}s"


def get_settings() -> Settings:
    """Settings dependency."""
    return settings


def get_llm_client(request: Request) -> LLMClient:
    """Client dependency; the client is created in the app lifespan."""
    return request.app.state.llm_client


@router.post("/inline", response_model=CompletionResponse)
async def inline(
    request: CompletionRequest,
    client: LLMClient = Depends(get_llm_client),
    config: Settings = Depends(get_settings),
) -> CompletionResponse:
    """
    Generate an inline code completion.

    Takes the document text, language and cursor position and returns
    a suggestion with its insertion range. An empty completion means
    there is nothing to show.
    """
    request_id = str(uuid.uuid4())

    log.info("Incoming request", {"requestId": request_id, "method": "POST", "url": "/inline"})

    return await get_completion(request, client, config, request_id)


@router.get("/health", response_model=HealthResponse)
async def health() -> HealthResponse:
    """
    Health check endpoint.

    Returns server status, version, uptime, and metrics.
    """
    log.debug("Health check")
    uptime_seconds = int(time.time() - _start_time)

    return HealthResponse(
        status="ok",
        version=VERSION,
        uptime=uptime_seconds,
        uptimeHuman=format_duration(uptime_seconds),
        logFile=log.get_log_file_path() or "",
        metrics=metrics.get_metrics(),
    )

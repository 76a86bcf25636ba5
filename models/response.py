"""Response models for the completion API."""

from typing import Dict, Optional

from pydantic import BaseModel, Field

from models.request import Position


class Range(BaseModel):
    """Document range a suggestion is inserted into."""

    start: Position
    end: Position


class MetricsSnapshot(BaseModel):
    """Snapshot of server metrics."""

    totalRequests: int = Field(default=0, description="Total request count")
    emptyCompletions: int = Field(default=0, description="Requests with no suggestion")
    avgResponseTimeMs: float = Field(default=0.0, description="Average response time")
    requestsByLanguage: Dict[str, int] = Field(
        default_factory=dict, description="Requests per language"
    )
    errorCount: int = Field(default=0, description="Total error count")


class CompletionResponse(BaseModel):
    """Response model for an inline completion.

    An empty ``completion`` with no ``range`` means there is nothing to show.
    """

    completion: str = Field(default="", description="Sanitized completion text")
    range: Optional[Range] = Field(default=None, description="Insertion range")
    error: Optional[str] = Field(default=None, description="Error message if failed")
    requestId: Optional[str] = Field(default=None, description="Request tracking ID")


class HealthResponse(BaseModel):
    """Response model for health check endpoint."""

    status: str = Field(default="ok", description="Server status")
    version: str = Field(description="Server version")
    uptime: float = Field(description="Uptime in seconds")
    uptimeHuman: str = Field(description="Human-readable uptime")
    logFile: str = Field(description="Path to current log file")
    metrics: MetricsSnapshot = Field(description="Current metrics snapshot")

"""Request models for the completion API."""

from typing import Optional

from pydantic import BaseModel, Field

# Largest document accepted per request (characters)
MAX_TEXT_LENGTH = 200000


class Position(BaseModel):
    """Zero-based cursor position in a document."""

    line: int = Field(..., ge=0, description="Line number")
    character: int = Field(
        ..., ge=0, description="Column offset within the line, in UTF-16 code units"
    )


class CompletionRequest(BaseModel):
    """Request model for an inline completion at the cursor."""

    text: str = Field(..., max_length=MAX_TEXT_LENGTH, description="Full document text")
    language: str = Field(..., min_length=1, description="Language identifier")
    position: Position = Field(..., description="Cursor position")
    filename: Optional[str] = Field(default=None, description="Source filename")

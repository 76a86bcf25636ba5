"""Inline completion logic: prompt, model call, sanitization."""

import re
import time
from typing import Optional

from config import Settings
from models.request import CompletionRequest
from models.response import CompletionResponse, Range
from services.llm_client import (
    LLMClient,
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    OpenAIError,
)
from utils.document import clamp_position, get_line_prefix
from utils.logger import log
from utils.metrics import metrics
from utils.prompts import get_system_prompt, get_user_prompt

# Markdown fence lines, including an info string such as ```js
FENCE_LINE = re.compile(r"^[ \t]*```[^\r\n]*\r?$", re.MULTILINE)

# Anything that is not an ASCII letter or digit, whitespace, or allowed punctuation
DISALLOWED_CHARS = re.compile(r"""[^a-zA-Z0-9\s{}()\[\];:.,+\-*/%=><!&|^~?\\"']""")

# Line comments to end of line, and block comments (non-greedy, across lines)
COMMENTS = re.compile(r"//[^\r\n]*|/\*[\s\S]*?\*/")


def sanitize_completion(text: str, language: str) -> str:
    """
    Reduce a raw model response to a bare code suggestion.

    Steps run in order, each on the output of the previous one: surrounding
    line breaks trimmed, fence lines dropped, disallowed characters removed,
    whole-word echoes of the language identifier removed (case-insensitive),
    comments removed, and surrounding line breaks trimmed again. Spaces at
    either end are kept, so the result is stable when sanitized again.

    Args:
        text: Raw completion text from the model
        language: Language identifier of the document

    Returns:
        Sanitized completion, "" when nothing usable is left
    """
    cleaned = FENCE_LINE.sub("", text.strip("\r\n"))
    cleaned = DISALLOWED_CHARS.sub("", cleaned)

    if language:
        language_word = re.compile(rf"(?<!\w){re.escape(language)}(?!\w)", re.IGNORECASE)
        cleaned = language_word.sub("", cleaned)

    cleaned = COMMENTS.sub("", cleaned)
    return cleaned.strip("\r\n")


def _failure(
    req: CompletionRequest,
    request_id: Optional[str],
    start_time: float,
    message: str,
    error_msg: str,
    error: Optional[Exception] = None,
) -> CompletionResponse:
    """Log and record a failed completion; return it as "no suggestion"."""
    elapsed = time.time() * 1000 - start_time
    data = {"requestId": request_id, "elapsed": elapsed}
    if error is not None:
        data["error"] = str(error)
    log.error(message, data)
    metrics.record_request(req.language, elapsed, empty=True, error=True)
    return CompletionResponse(completion="", error=error_msg, requestId=request_id)


async def get_completion(
    req: CompletionRequest,
    client: LLMClient,
    config: Settings,
    request_id: Optional[str] = None,
) -> CompletionResponse:
    """
    Generates an inline completion for the cursor position.

    Failures of the model call never propagate: they are logged and
    returned as an empty completion carrying an ``error`` message.

    Args:
        req: The document snapshot and cursor position
        client: Client for the chat-completion endpoint
        config: Server settings
        request_id: Optional unique identifier for request tracing

    Returns:
        CompletionResponse with the suggestion and its insertion range,
        or an empty completion when there is nothing to show
    """
    language = req.language
    filename = req.filename or "unknown"

    start_time = time.time() * 1000  # Convert to milliseconds

    if language not in config.languages:
        log.debug("Language not enabled", {"requestId": request_id, "language": language})
        metrics.record_request(language, 0, empty=True, error=False)
        return CompletionResponse(completion="", requestId=request_id)

    position = clamp_position(req.text, req.position)
    line_prefix = get_line_prefix(req.text, position)

    log.info(
        "Processing completion request",
        {
            "requestId": request_id,
            "language": language,
            "filename": filename,
            "model": client.model,
            "line": position.line,
            "character": position.character,
            "textLength": len(req.text),
            "linePrefixLength": len(line_prefix),
        },
    )

    system_prompt = get_system_prompt()
    prompt = get_user_prompt(
        file_content=req.text,
        language=language,
        line_prefix=line_prefix,
    )

    try:
        completion_text = await client.complete(system_prompt=system_prompt, prompt=prompt)
    except APITimeoutError as e:
        return _failure(req, request_id, start_time, "Request timed out", "Request timed out", e)
    except AuthenticationError as e:
        return _failure(
            req,
            request_id,
            start_time,
            "Authentication failed",
            "Failed to fetch code completion. Please check your API key.",
            e,
        )
    except APIConnectionError as e:
        return _failure(
            req,
            request_id,
            start_time,
            "Connection error",
            f"Failed to connect to the completion endpoint: {e}",
            e,
        )
    except APIStatusError as e:
        return _failure(
            req,
            request_id,
            start_time,
            "Completion endpoint returned an error",
            f"Completion endpoint returned status {e.status_code}",
            e,
        )
    except OpenAIError as e:
        return _failure(
            req,
            request_id,
            start_time,
            "Completion client error",
            f"Completion client error: {e}",
            e,
        )
    except Exception as e:
        error_msg = str(e) if str(e) else "Unknown error"
        return _failure(req, request_id, start_time, "Completion failed", error_msg, e)

    cleaned_completion = sanitize_completion(completion_text, language)
    elapsed = time.time() * 1000 - start_time

    if not cleaned_completion:
        log.debug(
            "No suggestion after sanitization",
            {"requestId": request_id, "elapsed": elapsed, "rawLength": len(completion_text)},
        )
        metrics.record_request(language, elapsed, empty=True, error=False)
        return CompletionResponse(completion="", requestId=request_id)

    log.info(
        "Completion generated",
        {
            "requestId": request_id,
            "elapsed": elapsed,
            "completionLength": len(cleaned_completion),
            "completion": cleaned_completion[:100],
        },
    )
    metrics.record_request(language, elapsed, empty=False, error=False)

    return CompletionResponse(
        completion=cleaned_completion,
        range=Range(start=position, end=position),
        requestId=request_id,
    )

"""Chat-completion client wrapper around the OpenAI SDK."""

from typing import Optional

import httpx
from openai import (
    AsyncOpenAI,
    # Error types for proper error handling
    APIConnectionError,
    APIStatusError,
    APITimeoutError,
    AuthenticationError,
    OpenAIError,
)

from config import Settings

# Re-export error types for use by other modules
__all__ = [
    "LLMClient",
    "APIConnectionError",
    "APIStatusError",
    "APITimeoutError",
    "AuthenticationError",
    "OpenAIError",
]


class LLMClient:
    """
    Sends a system instruction and a prompt to an OpenAI-compatible
    chat-completion endpoint and returns the generated text.

    One client is built per server process and shared by all requests.
    """

    def __init__(
        self,
        api_key: str,
        model: str,
        base_url: Optional[str] = None,
        temperature: float = 0.2,
        max_tokens: int = 256,
        timeout_ms: Optional[int] = None,
        http_client: Optional[httpx.AsyncClient] = None,
    ) -> None:
        kwargs: dict[str, object] = {
            "api_key": api_key,
            "base_url": base_url,
            "max_retries": 0,
        }
        if timeout_ms is not None:
            kwargs["timeout"] = timeout_ms / 1000
        if http_client is not None:
            kwargs["http_client"] = http_client

        self._client = AsyncOpenAI(**kwargs)  # type: ignore[arg-type]
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens

    @classmethod
    def from_settings(cls, config: Settings) -> "LLMClient":
        """Build a client from the server settings."""
        return cls(
            api_key=config.secret_key,
            model=config.model,
            base_url=config.base_url or None,
            temperature=config.temperature,
            max_tokens=config.max_tokens,
            timeout_ms=config.completion_timeout_ms,
        )

    async def complete(self, system_prompt: str, prompt: str) -> str:
        """
        Request one chat completion.

        Args:
            system_prompt: System instructions for completion behavior
            prompt: The user prompt with document context

        Returns:
            The first choice's message content, or "" if there is none

        Raises:
            APITimeoutError: If the request times out
            APIConnectionError: If the endpoint cannot be reached
            AuthenticationError: If the API key is missing or rejected
            APIStatusError: If the endpoint answers with a non-2xx status
            OpenAIError: Base error for other SDK errors, including malformed responses
        """
        response = await self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": system_prompt},
                {"role": "user", "content": prompt},
            ],
            temperature=self.temperature,
            max_tokens=self.max_tokens,
        )

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def close(self) -> None:
        """Release underlying HTTP resources."""
        await self._client.close()

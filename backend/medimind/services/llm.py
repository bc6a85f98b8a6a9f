"""Text generation for the patient chat assistant.

Thin wrapper over the OpenAI Responses API: a system-instruction string and a
user message go in, reply text comes out. Any failure surfaces as
``ReplyGenerationError`` so callers have one exception type to handle.
"""

import logging
import time
from typing import Any

from openai import AsyncOpenAI, OpenAIError

from medimind.config import settings

logger = logging.getLogger(__name__)


class ReplyGenerationError(RuntimeError):
    """Raised when the model call fails or yields no usable text."""

    pass


def _extract_usage(response: Any) -> dict[str, int]:
    """Extract token usage from an OpenAI response, returning empty dict if unavailable."""
    usage = getattr(response, "usage", None)
    if usage is None:
        return {}
    return {
        "input_tokens": getattr(usage, "input_tokens", 0),
        "output_tokens": getattr(usage, "output_tokens", 0),
    }


class ReplyGenerator:
    """Generates assistant replies with the OpenAI Responses API.

    Example:
        generator = ReplyGenerator()
        reply = await generator.generate_reply(
            system_instructions="You are Dr. A's assistant.",
            user_message="What are your opening hours?",
        )
    """

    def __init__(
        self,
        client: AsyncOpenAI | None = None,
        model: str | None = None,
        max_output_tokens: int | None = None,
        timeout: float | None = None,
    ):
        """Initialize ReplyGenerator.

        Args:
            client: Optional pre-configured AsyncOpenAI client (for testing).
                   If not provided, one is created from settings when an API
                   key is configured.
            model: Model name. Defaults to ``settings.openai_model``.
            max_output_tokens: Reply token cap. Defaults to settings.
            timeout: Request timeout in seconds. Defaults to
                ``settings.chat_reply_timeout_seconds``.
        """
        effective_timeout = timeout if timeout is not None else settings.chat_reply_timeout_seconds
        if client is not None:
            self._client: AsyncOpenAI | None = client
        elif settings.openai_api_key:
            self._client = AsyncOpenAI(
                api_key=settings.openai_api_key,
                timeout=effective_timeout,
            )
        else:
            # No client: generate_reply raises ReplyGenerationError
            self._client = None

        self._model = model or settings.openai_model
        self._max_output_tokens = max_output_tokens or settings.max_output_tokens

    async def close(self) -> None:
        """Close the OpenAI client connection."""
        if self._client is not None:
            await self._client.close()

    async def generate_reply(self, system_instructions: str, user_message: str) -> str:
        """Generate a reply to ``user_message`` under ``system_instructions``.

        Raises:
            ReplyGenerationError: If the client is unconfigured, the API call
                fails, or the model returns no text.
        """
        if self._client is None:
            raise ReplyGenerationError(
                "OPENAI_API_KEY environment variable is required. "
                "Set it in your .env file or environment."
            )

        t0 = time.perf_counter()
        try:
            response = await self._client.responses.create(
                model=self._model,
                instructions=system_instructions,
                input=user_message,
                max_output_tokens=self._max_output_tokens,
            )
        except OpenAIError as e:
            raise ReplyGenerationError(f"OpenAI request failed: {e}") from e

        text = getattr(response, "output_text", None)
        if not isinstance(text, str) or not text.strip():
            raise ReplyGenerationError("Model returned no output text")

        logger.info(
            "generate_reply complete: %.1fs, usage=%s",
            time.perf_counter() - t0, _extract_usage(response) or "n/a",
        )
        return text

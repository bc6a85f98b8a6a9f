"""Tests for ReplyGenerator with a mocked OpenAI client."""

from types import SimpleNamespace
from unittest.mock import AsyncMock, MagicMock

import pytest
from openai import OpenAIError

from medimind.services.llm import ReplyGenerationError, ReplyGenerator, _extract_usage


def make_client(output_text: str | None = "Hi there", usage=None) -> MagicMock:
    client = MagicMock()
    client.responses.create = AsyncMock(
        return_value=SimpleNamespace(output_text=output_text, usage=usage)
    )
    client.close = AsyncMock()
    return client


class TestGenerateReply:
    """Tests for the Responses API call."""

    @pytest.mark.asyncio
    async def test_passes_instructions_and_input(self):
        client = make_client()
        generator = ReplyGenerator(client=client, model="test-model", max_output_tokens=256)

        reply = await generator.generate_reply("Be kind.", "Hello")

        assert reply == "Hi there"
        client.responses.create.assert_awaited_once_with(
            model="test-model",
            instructions="Be kind.",
            input="Hello",
            max_output_tokens=256,
        )

    @pytest.mark.asyncio
    async def test_empty_output_raises(self):
        generator = ReplyGenerator(client=make_client(output_text=""))

        with pytest.raises(ReplyGenerationError, match="no output"):
            await generator.generate_reply("Be kind.", "Hello")

    @pytest.mark.asyncio
    async def test_missing_output_raises(self):
        generator = ReplyGenerator(client=make_client(output_text=None))

        with pytest.raises(ReplyGenerationError):
            await generator.generate_reply("Be kind.", "Hello")

    @pytest.mark.asyncio
    async def test_openai_error_is_wrapped(self):
        client = make_client()
        client.responses.create.side_effect = OpenAIError("boom")
        generator = ReplyGenerator(client=client)

        with pytest.raises(ReplyGenerationError, match="boom") as exc_info:
            await generator.generate_reply("Be kind.", "Hello")

        assert isinstance(exc_info.value.__cause__, OpenAIError)

    @pytest.mark.asyncio
    async def test_unconfigured_client_raises(self, monkeypatch):
        from medimind.config import settings

        monkeypatch.setattr(settings, "openai_api_key", "")
        generator = ReplyGenerator()

        with pytest.raises(ReplyGenerationError, match="OPENAI_API_KEY"):
            await generator.generate_reply("Be kind.", "Hello")

    @pytest.mark.asyncio
    async def test_close_closes_client(self):
        client = make_client()
        generator = ReplyGenerator(client=client)

        await generator.close()

        client.close.assert_awaited_once()


class TestExtractUsage:
    def test_reads_token_counts(self):
        response = SimpleNamespace(usage=SimpleNamespace(input_tokens=12, output_tokens=7))
        assert _extract_usage(response) == {"input_tokens": 12, "output_tokens": 7}

    def test_missing_usage(self):
        assert _extract_usage(SimpleNamespace()) == {}

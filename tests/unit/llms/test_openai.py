# tests/unit/llms/test_openai.py

from unittest.mock import AsyncMock, MagicMock, patch

import pytest
from openai import NOT_GIVEN

from contract_kit.llms.base import Message, Role
from contract_kit.llms.openai import OpenAILLMClient


@pytest.fixture
def mock_openai_response() -> MagicMock:
    """Create a mock OpenAI response."""
    response = MagicMock()
    response.choices = [MagicMock()]
    response.choices[0].message.content = '{"buyer": "Jane Doe"}'
    response.choices[0].finish_reason = "stop"
    response.usage.prompt_tokens = 10
    response.usage.completion_tokens = 8
    response.usage.total_tokens = 18
    return response


class TestOpenAILLMClient:
    @pytest.mark.asyncio
    async def test_complete_basic(self, mock_openai_response: MagicMock) -> None:
        """Test basic completion."""
        with patch("contract_kit.llms.openai.AsyncOpenAI") as mock_openai:
            mock_client = AsyncMock()
            mock_client.chat.completions.create.return_value = mock_openai_response
            mock_openai.return_value = mock_client

            client = OpenAILLMClient(api_key="test-key", model="gpt-4o")
            response = await client.complete(
                messages=[Message(role=Role.USER, content="Extract the buyer.")]
            )

            assert response.content == '{"buyer": "Jane Doe"}'
            assert response.finish_reason == "stop"
            assert response.usage.total_tokens == 18
            assert response.latency_ms >= 0

    @pytest.mark.asyncio
    async def test_messages_and_json_mode_sent(
        self, mock_openai_response: MagicMock
    ) -> None:
        """Test message conversion and JSON response format."""
        with patch("contract_kit.llms.openai.AsyncOpenAI") as mock_openai:
            mock_client = AsyncMock()
            mock_client.chat.completions.create.return_value = mock_openai_response
            mock_openai.return_value = mock_client

            client = OpenAILLMClient(api_key="test-key")
            await client.complete(
                messages=[
                    Message(role=Role.SYSTEM, content="Return JSON only."),
                    Message(role=Role.USER, content="Contract text"),
                ],
                temperature=0.1,
                max_tokens=1500,
                json_mode=True,
            )

            kwargs = mock_client.chat.completions.create.call_args.kwargs
            assert kwargs["messages"] == [
                {"role": "system", "content": "Return JSON only."},
                {"role": "user", "content": "Contract text"},
            ]
            assert kwargs["temperature"] == 0.1
            assert kwargs["max_tokens"] == 1500
            assert kwargs["response_format"] == {"type": "json_object"}

    @pytest.mark.asyncio
    async def test_plain_text_mode(self, mock_openai_response: MagicMock) -> None:
        """Test that no response format is sent without json_mode."""
        with patch("contract_kit.llms.openai.AsyncOpenAI") as mock_openai:
            mock_client = AsyncMock()
            mock_client.chat.completions.create.return_value = mock_openai_response
            mock_openai.return_value = mock_client

            client = OpenAILLMClient(api_key="test-key")
            await client.complete(messages=[Message(role=Role.USER, content="Hi")])

            kwargs = mock_client.chat.completions.create.call_args.kwargs
            assert kwargs["response_format"] is NOT_GIVEN
            assert kwargs["max_tokens"] is NOT_GIVEN

    @pytest.mark.asyncio
    async def test_length_finish_reason(self, mock_openai_response: MagicMock) -> None:
        """Test truncated completions are normalized."""
        mock_openai_response.choices[0].finish_reason = "length"
        with patch("contract_kit.llms.openai.AsyncOpenAI") as mock_openai:
            mock_client = AsyncMock()
            mock_client.chat.completions.create.return_value = mock_openai_response
            mock_openai.return_value = mock_client

            client = OpenAILLMClient(api_key="test-key")
            response = await client.complete(
                messages=[Message(role=Role.USER, content="Hi")]
            )

            assert response.finish_reason == "length"

    @pytest.mark.asyncio
    async def test_metrics_hook_called(self, mock_openai_response: MagicMock) -> None:
        """Test that metrics hook is called."""
        with patch("contract_kit.llms.openai.AsyncOpenAI") as mock_openai:
            mock_client = AsyncMock()
            mock_client.chat.completions.create.return_value = mock_openai_response
            mock_openai.return_value = mock_client

            metrics_hook = MagicMock()
            client = OpenAILLMClient(api_key="test-key", metrics_hook=metrics_hook)

            await client.complete(messages=[Message(role=Role.USER, content="Hi")])

            metrics_hook.record_latency.assert_called_once()
            call_args = metrics_hook.record_latency.call_args
            assert call_args[0][0] == "llm_completion_duration"
            assert call_args[0][1] >= 0

    @pytest.mark.asyncio
    async def test_non_retryable_error_propagates(self) -> None:
        """Test that errors outside the OpenAI hierarchy are not retried."""
        with patch("contract_kit.llms.openai.AsyncOpenAI") as mock_openai:
            mock_client = AsyncMock()
            mock_client.chat.completions.create.side_effect = RuntimeError("boom")
            mock_openai.return_value = mock_client

            client = OpenAILLMClient(api_key="test-key")

            with pytest.raises(RuntimeError, match="boom"):
                await client.complete(messages=[Message(role=Role.USER, content="Hi")])

            assert mock_client.chat.completions.create.await_count == 1

"""Tests for the Gemini multimodal adapter."""

from __future__ import annotations

import base64
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from advisor_gateway.prompts import REMEDY_PERSONA_ML, build_chat_request, build_remedy_request
from advisor_gateway.providers.gemini import GeminiAdapter, build_config, build_contents
from advisor_gateway.types import ProviderSuccess, TransportFailure


def _fake_client(return_value=None, side_effect=None) -> MagicMock:
    client = MagicMock()
    client.aio.models.generate_content = AsyncMock(return_value=return_value, side_effect=side_effect)
    return client


class TestBuildContents:
    """Tests for build_contents and build_config."""

    def test_image_part_precedes_text(self, sample_image_base64):
        request = build_remedy_request(None, sample_image_base64, "ml")

        contents = build_contents(request)

        assert len(contents) == 1
        assert contents[0].role == "user"
        image, text = contents[0].parts
        assert image.inline_data.mime_type == "image/jpeg"
        assert image.inline_data.data == base64.b64decode(sample_image_base64)
        assert text.text == request.content[-1].text

    def test_history_turns_come_first(self):
        request = build_chat_request(
            "and potatoes?",
            [{"role": "user", "content": "best crop for clay soil?"}, {"role": "assistant", "content": "Rice."}],
            include_history=True,
        )

        contents = build_contents(request)

        assert [c.role for c in contents] == ["user", "model", "user"]
        assert contents[-1].parts[0].text == "and potatoes?"

    def test_config_carries_system_instruction(self):
        config = build_config(build_remedy_request("wilt", None, "ml"))

        assert config.system_instruction == REMEDY_PERSONA_ML

    def test_no_config_without_instruction(self):
        assert build_config(build_chat_request("hello")) is None


class TestGeminiAdapter:
    """Tests for GeminiAdapter.generate."""

    @pytest.mark.asyncio
    async def test_success_wraps_raw_response(self):
        response = MagicMock(text="Use copper fungicide.")
        client = _fake_client(return_value=response)
        adapter = GeminiAdapter("gm-test", model="gemini-test", client=client)

        outcome = await adapter.generate(build_remedy_request("blight", None, "en"))

        assert outcome == ProviderSuccess(response)
        client.aio.models.generate_content.assert_awaited_once()
        kwargs = client.aio.models.generate_content.await_args.kwargs
        assert kwargs["model"] == "gemini-test"
        assert kwargs["config"].system_instruction.startswith("You are an expert agricultural advisor")

    @pytest.mark.asyncio
    async def test_model_override(self):
        client = _fake_client(return_value=MagicMock())
        adapter = GeminiAdapter("gm-test", client=client)

        await adapter.generate(build_chat_request("hi"), model="gemini-other")

        assert client.aio.models.generate_content.await_args.kwargs["model"] == "gemini-other"

    @pytest.mark.asyncio
    async def test_sdk_error_is_transport_failure(self):
        error = RuntimeError("400 INVALID_ARGUMENT")
        client = _fake_client(side_effect=error)
        adapter = GeminiAdapter("gm-test", client=client)

        outcome = await adapter.generate(build_chat_request("hi"))

        assert outcome == TransportFailure(error)
        assert client.aio.models.generate_content.await_count == 1

    @pytest.mark.asyncio
    async def test_bad_base64_is_transport_failure(self):
        client = _fake_client(return_value=MagicMock())
        adapter = GeminiAdapter("gm-test", client=client)

        outcome = await adapter.generate(build_remedy_request(None, "abc", "en"))

        assert isinstance(outcome, TransportFailure)
        client.aio.models.generate_content.assert_not_awaited()

    @pytest.mark.asyncio
    @patch("advisor_gateway.providers.gemini.genai.Client")
    async def test_client_construction_failure_is_transport_failure(self, mock_client_cls):
        mock_client_cls.side_effect = ValueError("Missing key inputs argument!")
        adapter = GeminiAdapter(None)

        outcome = await adapter.generate(build_chat_request("hi"))

        assert isinstance(outcome, TransportFailure)
        assert isinstance(outcome.error, ValueError)

    @pytest.mark.asyncio
    @patch("advisor_gateway.providers.gemini.genai.Client")
    async def test_client_created_once(self, mock_client_cls):
        mock_client_cls.return_value = _fake_client(return_value=MagicMock())
        adapter = GeminiAdapter("gm-test")

        await adapter.generate(build_chat_request("one"))
        await adapter.generate(build_chat_request("two"))

        mock_client_cls.assert_called_once_with(api_key="gm-test")

"""
Tests for the shared Gemini client, the generation call and response reduction.
"""

import asyncio
from unittest.mock import patch

import pytest
from google.genai import types

from relay import llm
from relay.errors import GenerationError, ProviderConnectionError
from relay.settings import settings
from tests.factories import make_result


class TestReduceResponse:
    """Test flattening of a provider result into reply text."""

    def test_first_candidate_only(self):
        assert llm.reduce_response(make_result(["A", "B"], ["C"])) == "AB"

    def test_zero_candidates(self):
        assert llm.reduce_response(types.GenerateContentResponse(candidates=[])) == ""
        assert llm.reduce_response(types.GenerateContentResponse()) == ""

    def test_candidate_without_content(self):
        result = types.GenerateContentResponse(candidates=[types.Candidate()])
        assert llm.reduce_response(result) == ""

    def test_non_text_parts_ignored(self):
        result = types.GenerateContentResponse(
            candidates=[
                types.Candidate(
                    content=types.Content(
                        role="model",
                        parts=[
                            types.Part(text="before "),
                            types.Part(inline_data=types.Blob(mime_type="image/png", data=b"\x89PNG")),
                            types.Part(text="after"),
                        ],
                    )
                )
            ]
        )
        assert llm.reduce_response(result) == "before after"


class TestGetClient:
    """Test creation and reuse of the shared client."""

    def test_reused_across_calls(self, monkeypatch):
        monkeypatch.setattr(llm, "_client", None)
        with patch("relay.llm.genai.Client") as client_cls:
            first = llm.get_client()
            second = llm.get_client()
        assert first is second
        client_cls.assert_called_once_with(api_key=settings.GEMINI_API_KEY)

    def test_missing_key(self, monkeypatch):
        monkeypatch.setattr(llm, "_client", None)
        monkeypatch.setattr(settings, "GEMINI_API_KEY", "")
        with pytest.raises(ProviderConnectionError) as exc_info:
            llm.get_client()
        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Connection Error"

    def test_sdk_rejects_configuration(self, monkeypatch):
        monkeypatch.setattr(llm, "_client", None)
        with patch("relay.llm.genai.Client", side_effect=ValueError("bad key")):
            with pytest.raises(ProviderConnectionError) as exc_info:
                llm.get_client()
        assert exc_info.value.data == {"reason": "bad key"}
        assert llm._client is None


class TestGenerateReply:
    """Test the upstream call wrapper."""

    @pytest.mark.asyncio
    async def test_sends_single_user_content(self, fake_genai_client):
        parts = [types.Part(text="hi")]
        reply = await llm.generate_reply(parts)

        assert reply == "Hello there"
        fake_genai_client.aio.models.generate_content.assert_awaited_once()
        kwargs = fake_genai_client.aio.models.generate_content.call_args.kwargs
        assert kwargs["model"] == settings.GEMINI_MODEL
        assert kwargs["contents"] == [types.Content(role="user", parts=parts)]
        assert "config" not in kwargs

    @pytest.mark.asyncio
    async def test_upstream_failure(self, fake_genai_client):
        fake_genai_client.aio.models.generate_content.side_effect = RuntimeError("quota exceeded")
        with pytest.raises(GenerationError) as exc_info:
            await llm.generate_reply([types.Part(text="hi")])
        assert exc_info.value.message == "AI Error: quota exceeded"
        assert exc_info.value.detail == "quota exceeded"

    @pytest.mark.asyncio
    async def test_timeout_cancels_upstream(self, fake_genai_client, monkeypatch):
        cancelled = asyncio.Event()

        async def hang(**kwargs):
            try:
                await asyncio.sleep(5)
            except asyncio.CancelledError:
                cancelled.set()
                raise

        fake_genai_client.aio.models.generate_content.side_effect = hang
        monkeypatch.setattr(settings, "REQUEST_TIMEOUT", 0.01)

        with pytest.raises(GenerationError, match="timed out"):
            await llm.generate_reply([types.Part(text="hi")])
        assert cancelled.is_set()

"""
Completion Backend Tests

OpenAI request shape, status handling, content extraction, stub and factory.
"""

from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from config import BotConfig
from inference import (
    SYSTEM_PROMPT,
    CompletionError,
    CompletionSettings,
    OpenAICompletionBackend,
    StubCompletionBackend,
    UpstreamError,
    build_messages,
    create_completion_backend,
)


def _http(status_code=200, body=None, json_error=None):
    response = MagicMock()
    response.status_code = status_code
    response.text = ""
    if json_error:
        response.json.side_effect = json_error
    else:
        response.json.return_value = body if body is not None else {}
    http = AsyncMock()
    http.post = AsyncMock(return_value=response)
    return http


def _body(content):
    return {"choices": [{"index": 0, "message": {"role": "assistant", "content": content}}]}


class TestPrompt:
    def test_messages_are_system_then_user(self):
        messages = build_messages("moon landing")

        assert [m.role for m in messages] == ["system", "user"]
        assert messages[0].content == SYSTEM_PROMPT
        assert messages[1].content == "Topic: moon landing\nGive me the brutal truth (concise)."

    def test_empty_topic(self):
        assert build_messages("")[1].content.startswith("Topic: \n")


class TestOpenAIBackend:
    """Test the chat-completions call."""

    @pytest.mark.asyncio
    async def test_request_shape(self):
        http = _http(200, _body("ok"))
        backend = OpenAICompletionBackend(
            "sk-abc",
            settings=CompletionSettings(model="gpt-4o-mini", temperature=0.7, max_tokens=400, timeout_s=12),
            http_client=http,
        )

        await backend.complete("moon landing")

        call = http.post.await_args
        assert call.args[0] == "https://api.openai.com/v1/chat/completions"
        assert call.kwargs["headers"]["Authorization"] == "Bearer sk-abc"
        assert call.kwargs["timeout"] == 12
        payload = call.kwargs["json"]
        assert payload["model"] == "gpt-4o-mini"
        assert payload["temperature"] == 0.7
        assert payload["max_tokens"] == 400
        assert payload["messages"][0] == {"role": "system", "content": SYSTEM_PROMPT}
        assert "Topic: moon landing" in payload["messages"][1]["content"]

    @pytest.mark.asyncio
    async def test_content_is_trimmed(self):
        backend = OpenAICompletionBackend("sk-abc", http_client=_http(200, _body("  truth \n")))
        assert await backend.complete("x") == "truth"

    @pytest.mark.asyncio
    @pytest.mark.parametrize(
        "body",
        [
            {},
            {"choices": []},
            {"choices": [{}]},
            {"choices": [{"message": {}}]},
            {"choices": [{"message": {"content": None}}]},
            ["not", "a", "dict"],
        ],
    )
    async def test_missing_content_returns_empty(self, body):
        backend = OpenAICompletionBackend("sk-abc", http_client=_http(200, body))
        assert await backend.complete("x") == ""

    @pytest.mark.asyncio
    @pytest.mark.parametrize("status_code", [400, 401, 429, 500, 503])
    async def test_error_status_raises_upstream_error(self, status_code):
        backend = OpenAICompletionBackend("sk-abc", http_client=_http(status_code))

        with pytest.raises(UpstreamError) as exc_info:
            await backend.complete("x")

        assert exc_info.value.status_code == status_code
        assert str(exc_info.value) == f"OpenAI {status_code}"

    @pytest.mark.asyncio
    async def test_transport_error_raises_completion_error(self):
        http = AsyncMock()
        http.post = AsyncMock(side_effect=httpx.ReadTimeout("slow"))
        backend = OpenAICompletionBackend("sk-abc", http_client=http)

        with pytest.raises(CompletionError) as exc_info:
            await backend.complete("x")

        assert not isinstance(exc_info.value, UpstreamError)
        assert "ReadTimeout" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_invalid_json_raises_completion_error(self):
        backend = OpenAICompletionBackend("sk-abc", http_client=_http(200, json_error=ValueError("bad")))
        with pytest.raises(CompletionError):
            await backend.complete("x")

    @pytest.mark.asyncio
    async def test_custom_base_url(self):
        http = _http(200, _body("ok"))
        backend = OpenAICompletionBackend("sk", base_url="http://proxy/v1/", http_client=http)
        await backend.complete("x")
        assert http.post.await_args.args[0] == "http://proxy/v1/chat/completions"


class TestStubBackend:
    @pytest.mark.asyncio
    async def test_stub_is_deterministic(self):
        backend = StubCompletionBackend()
        first = await backend.complete("moon landing")
        second = await backend.complete("moon landing")
        assert first == second
        assert "Topic: moon landing" in first


class TestFactory:
    def test_openai_backend_from_config(self):
        config = BotConfig(
            openai_api_key="sk-x",
            openai_model="gpt-4o",
            openai_temperature=0.2,
            openai_max_tokens=100,
            http_timeout_s=5.0,
        )
        backend = create_completion_backend(config)

        assert isinstance(backend, OpenAICompletionBackend)
        assert backend.api_key == "sk-x"
        assert backend.settings == CompletionSettings("gpt-4o", 0.2, 100, 5.0)

    def test_stub_backend_from_config(self):
        backend = create_completion_backend(BotConfig(llm_backend="stub"))
        assert isinstance(backend, StubCompletionBackend)

    def test_unknown_backend_rejected(self):
        with pytest.raises(ValueError):
            create_completion_backend(BotConfig(llm_backend="mystery"))  # type: ignore

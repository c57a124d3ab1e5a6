"""
Tests for the OpenAI and Gemini adapters with the SDK objects mocked out.
"""
from types import SimpleNamespace
from unittest.mock import MagicMock

import httpx
import openai
import pytest
from google.api_core import exceptions as google_exceptions

from stacksfit_ai.agents.planner_agent import FallbackOrchestrator
from stacksfit_ai.config import Settings
from stacksfit_ai.errors import AdapterCallFailed, ErrorKind
from stacksfit_ai.llm.llm_client import GeminiAdapter, OpenAIAdapter, _extract_text_from_response
from stacksfit_ai.llm.prompts import NUTRITION_SYSTEM_INSTRUCTION, WORKOUT_SYSTEM_INSTRUCTION, workout_prompt
from stacksfit_ai.models import Provider, UserProfile

OPENAI_URL = "https://api.openai.com/v1/chat/completions"


@pytest.fixture
def prompt(profile_data):
    return workout_prompt(UserProfile.model_validate(profile_data))


def _completion(content):
    return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=content))])


def _status_error(cls, status):
    request = httpx.Request("POST", OPENAI_URL)
    return cls("error", response=httpx.Response(status, request=request), body=None)


class TestOpenAIAdapter:

    def test_placeholder_key_is_unavailable(self):
        adapter = OpenAIAdapter(Settings(openai_api_key="your_openai_api_key_here"))
        assert adapter.is_available() is False

    def test_missing_key_is_unavailable(self):
        assert OpenAIAdapter(Settings()).is_available() is False

    @pytest.mark.asyncio
    async def test_unconfigured_adapter_is_skipped_by_the_orchestrator(self, workout_request):
        primary = OpenAIAdapter(Settings())
        primary._generate_sync = MagicMock(side_effect=AssertionError("must not be called"))
        orchestrator = FallbackOrchestrator(primary, GeminiAdapter(Settings()))

        result = await orchestrator.generate_workout(workout_request)

        primary._generate_sync.assert_not_called()
        assert result.provider is Provider.STATIC
        assert result.attempts[0].error == "openai: not configured"

    @pytest.mark.asyncio
    async def test_sends_system_and_user_messages(self, prompt):
        client = MagicMock()
        client.chat.completions.create.return_value = _completion('  {"planName": "x"}\n')
        adapter = OpenAIAdapter(Settings(openai_api_key="sk-test", openai_model="gpt-4o-mini"), client=client)

        text = await adapter.generate(prompt)

        assert text == '{"planName": "x"}'
        kwargs = client.chat.completions.create.call_args.kwargs
        assert kwargs["model"] == "gpt-4o-mini"
        assert kwargs["max_tokens"] == 2000
        assert kwargs["temperature"] == 0.7
        assert kwargs["messages"][0] == {"role": "system", "content": WORKOUT_SYSTEM_INSTRUCTION}
        assert kwargs["messages"][1] == {"role": "user", "content": prompt.text}

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc,kind", [
        (_status_error(openai.RateLimitError, 429), ErrorKind.RATE_LIMITED),
        (_status_error(openai.AuthenticationError, 401), ErrorKind.AUTH_ERROR),
        (openai.APIConnectionError(request=httpx.Request("POST", OPENAI_URL)), ErrorKind.UNREACHABLE),
        (ValueError("weird"), ErrorKind.UNKNOWN),
    ])
    async def test_errors_are_typed(self, prompt, exc, kind):
        client = MagicMock()
        client.chat.completions.create.side_effect = exc
        adapter = OpenAIAdapter(Settings(openai_api_key="sk-test"), client=client)

        with pytest.raises(AdapterCallFailed) as info:
            await adapter.generate(prompt)
        assert info.value.kind is kind
        assert info.value.backend == "openai"


class TestGeminiAdapter:

    @pytest.mark.asyncio
    async def test_single_text_without_role_split(self, prompt):
        model = MagicMock()
        model.generate_content.return_value = SimpleNamespace(text='{"ok": true}')
        adapter = GeminiAdapter(Settings(gemini_api_key="g-test", request_timeout=12), model=model)

        assert await adapter.generate(prompt) == '{"ok": true}'
        args, kwargs = model.generate_content.call_args
        assert args[0] == f"{WORKOUT_SYSTEM_INSTRUCTION}\n\n{prompt.text}"
        assert kwargs["request_options"] == {"timeout": 12}

    def test_placeholder_key_is_unavailable(self):
        adapter = GeminiAdapter(Settings(gemini_api_key="your_gemini_api_key_here"))
        assert adapter.is_available() is False

    @pytest.mark.asyncio
    @pytest.mark.parametrize("exc,kind", [
        (google_exceptions.ResourceExhausted("quota"), ErrorKind.RATE_LIMITED),
        (google_exceptions.PermissionDenied("key"), ErrorKind.AUTH_ERROR),
        (google_exceptions.ServiceUnavailable("down"), ErrorKind.UNREACHABLE),
        (google_exceptions.InvalidArgument("bad"), ErrorKind.UNKNOWN),
    ])
    async def test_errors_are_typed(self, prompt, exc, kind):
        model = MagicMock()
        model.generate_content.side_effect = exc
        adapter = GeminiAdapter(Settings(gemini_api_key="g-test"), model=model)

        with pytest.raises(AdapterCallFailed) as info:
            await adapter.generate(prompt)
        assert info.value.kind is kind


class TestExtractText:

    def test_blocked_response_falls_back_to_parts(self):
        class Blocked:
            candidates = [SimpleNamespace(content=SimpleNamespace(parts=[SimpleNamespace(text='{"a": 1}')]))]

            @property
            def text(self):
                raise ValueError("no text")

        assert _extract_text_from_response(Blocked()) == '{"a": 1}'

    def test_none(self):
        assert _extract_text_from_response(None) == ""


def test_nutrition_instruction_differs():
    assert NUTRITION_SYSTEM_INSTRUCTION != WORKOUT_SYSTEM_INSTRUCTION
    assert "nutritionist" in NUTRITION_SYSTEM_INSTRUCTION

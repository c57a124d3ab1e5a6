# src/stacksfit_ai/llm/llm_client.py
"""
Provider adapters for plan generation.

Each adapter wraps one text-generation backend behind the same contract:
`await adapter.generate(prompt)` returns the raw completion text or raises
AdapterCallFailed carrying an ErrorKind. The SDKs are blocking, so calls run
in the default executor; cancelling the awaiting task abandons the call.
"""

import asyncio
import logging
from abc import ABC, abstractmethod
from typing import Any, Optional

import google.generativeai as genai
import openai
from google.api_core import exceptions as google_exceptions

from stacksfit_ai.config import Settings
from stacksfit_ai.errors import AdapterCallFailed, ErrorKind, GenerationError
from stacksfit_ai.llm.prompts import Prompt

logger = logging.getLogger(__name__)


class ProviderAdapter(ABC):
    """One external generation backend."""

    name = "provider"
    configured = False

    @abstractmethod
    def is_available(self) -> bool:
        ...

    @abstractmethod
    def _generate_sync(self, prompt: Prompt) -> str:
        ...

    def _error_kind(self, exc: Exception) -> ErrorKind:
        return ErrorKind.UNKNOWN

    async def generate(self, prompt: Prompt) -> str:
        """Run one completion. Callers check is_available() first."""
        loop = asyncio.get_running_loop()
        try:
            return await loop.run_in_executor(None, self._generate_sync, prompt)
        except GenerationError:
            raise
        except Exception as e:
            kind = self._error_kind(e)
            logger.warning("%s call failed (%s): %s", self.name, kind.value, e)
            raise AdapterCallFailed(self.name, kind, str(e)) from e


class OpenAIAdapter(ProviderAdapter):
    """Primary backend: OpenAI chat completions with a system/user split."""

    name = "openai"

    def __init__(self, settings: Settings, client: Optional[Any] = None):
        self.model = settings.openai_model
        self.configured = settings.openai_configured
        self._client = client
        if self._client is None and self.configured:
            # retries would turn one stage into several attempts
            self._client = openai.OpenAI(
                api_key=settings.openai_api_key,
                timeout=settings.request_timeout,
                max_retries=0,
            )
            logger.info("OpenAI client initialized (model=%s)", self.model)
        elif not self.configured:
            logger.info("OPENAI_API_KEY not configured; primary stage disabled")

    def is_available(self) -> bool:
        return self.configured and self._client is not None

    def _generate_sync(self, prompt: Prompt) -> str:
        completion = self._client.chat.completions.create(
            model=self.model,
            messages=[
                {"role": "system", "content": prompt.system_instruction},
                {"role": "user", "content": prompt.text},
            ],
            temperature=prompt.temperature,
            max_tokens=prompt.max_output_tokens,
        )
        content = completion.choices[0].message.content
        return (content or "").strip()

    def _error_kind(self, exc: Exception) -> ErrorKind:
        if isinstance(exc, openai.APIConnectionError):
            return ErrorKind.UNREACHABLE
        if isinstance(exc, openai.RateLimitError):
            return ErrorKind.RATE_LIMITED
        if isinstance(exc, (openai.AuthenticationError, openai.PermissionDeniedError)):
            return ErrorKind.AUTH_ERROR
        return ErrorKind.UNKNOWN


def _extract_text_from_response(resp: Any) -> str:
    """Read text from a GenerateContentResponse; blocked responses yield ''."""
    if resp is None:
        return ""
    try:
        return resp.text
    except ValueError:
        # .text raises when the candidate has no text parts (e.g. safety block)
        pass
    candidates = getattr(resp, "candidates", None) or []
    for candidate in candidates:
        content = getattr(candidate, "content", None)
        parts = getattr(content, "parts", None) or []
        texts = [getattr(p, "text", "") for p in parts if getattr(p, "text", "")]
        if texts:
            return "".join(texts)
    return ""


class GeminiAdapter(ProviderAdapter):
    """Secondary backend: Gemini generate_content, instruction and prompt in one text."""

    name = "gemini"

    def __init__(self, settings: Settings, model: Optional[Any] = None):
        self.model_name = settings.gemini_model
        self.timeout = settings.request_timeout
        self.configured = settings.gemini_configured
        self._model = model
        if self._model is None and self.configured:
            genai.configure(api_key=settings.gemini_api_key)
            self._model = genai.GenerativeModel(self.model_name)
            logger.info("Gemini model initialized (model=%s)", self.model_name)
        elif not self.configured:
            logger.info("GEMINI_API_KEY not configured; secondary stage disabled")

    def is_available(self) -> bool:
        return self.configured and self._model is not None

    def _generate_sync(self, prompt: Prompt) -> str:
        text = f"{prompt.system_instruction}\n\n{prompt.text}"
        resp = self._model.generate_content(
            text,
            generation_config=genai.GenerationConfig(
                temperature=prompt.temperature,
                max_output_tokens=prompt.max_output_tokens,
            ),
            request_options={"timeout": self.timeout},
        )
        return _extract_text_from_response(resp).strip()

    def _error_kind(self, exc: Exception) -> ErrorKind:
        if isinstance(exc, (google_exceptions.ResourceExhausted, google_exceptions.TooManyRequests)):
            return ErrorKind.RATE_LIMITED
        if isinstance(exc, (google_exceptions.Unauthenticated, google_exceptions.PermissionDenied)):
            return ErrorKind.AUTH_ERROR
        if isinstance(exc, (google_exceptions.ServiceUnavailable, google_exceptions.DeadlineExceeded, ConnectionError, TimeoutError)):
            return ErrorKind.UNREACHABLE
        return ErrorKind.UNKNOWN

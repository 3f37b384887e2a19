"""
OpenAI adapter - OpenAI API client.

Provides:
- Chat completions for post generation and Content Pack builds
- Retry with exponential backoff, then the same on a fallback model
- Speech-to-text for audio ingestion

Retry Accounting:
=================
    max_retries = 2

    primary  (gpt-4o-mini)   attempt 1 ✗  wait base*1
                             attempt 2 ✗
    fallback (gpt-3.5-turbo) attempt 1 ✗  wait base*1
                             attempt 2 ✗  → last error re-raised

Every provider error consumes an attempt, including non-transient ones
such as an invalid request.
"""

import logging
import time
from dataclasses import dataclass, replace
from typing import Optional

from openai import APIConnectionError, APIError, AsyncOpenAI, RateLimitError
from tenacity import AsyncRetrying, before_sleep_log, stop_after_attempt, wait_exponential

from ...config.ai_models import GENERATE_FALLBACK_MODEL, TRANSCRIPTION_MODEL
from ...config.settings import settings

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GenerationOptions:
    """Parameters for one completion request."""

    model: str = "gpt-4o-mini"
    temperature: float = 0.7
    max_tokens: int = 1000
    fallback_model: str = GENERATE_FALLBACK_MODEL


@dataclass
class CompletionResult:
    """Result of LLM completion."""

    content: str
    model: str
    attempts: int = 1
    latency_ms: int = 0


@dataclass
class TranscriptionResult:
    """Result of speech-to-text."""

    text: str
    language: Optional[str] = None
    duration_seconds: Optional[float] = None


class OpenAIAdapter:
    """
    Adapter for OpenAI API operations.

    Handles:
    - Single chat completions (system + user message)
    - Retry/backoff and primary → fallback model escalation
    - Audio transcription
    """

    def __init__(
        self,
        api_key: Optional[str] = None,
        retry_base_delay: Optional[float] = None,
        timeout: Optional[float] = None,
    ):
        """
        Initialize OpenAI adapter.

        Args:
            api_key: OpenAI API key. If not provided, uses settings.
            retry_base_delay: Backoff base in seconds (0 disables waiting).
            timeout: Per-request timeout in seconds.
        """
        self.api_key = api_key or settings.OPENAI_API_KEY
        self.retry_base_delay = (
            settings.GENERATION_RETRY_BASE_DELAY_SECONDS if retry_base_delay is None else retry_base_delay
        )
        self.timeout = timeout or settings.OPENAI_TIMEOUT_SECONDS
        self._client: Optional[AsyncOpenAI] = None

    @property
    def client(self) -> AsyncOpenAI:
        """Lazy-loaded OpenAI client."""
        if self._client is None:
            if not self.api_key:
                raise ValueError("OpenAI API key not configured")
            self._client = AsyncOpenAI(api_key=self.api_key, timeout=self.timeout, max_retries=0)
        return self._client

    # ═══════════════════════════════════════════════════════════════════════════
    # COMPLETIONS
    # ═══════════════════════════════════════════════════════════════════════════

    async def generate_content(
        self,
        user_prompt: str,
        system_prompt: str,
        options: Optional[GenerationOptions] = None,
    ) -> str:
        """
        Generate one completion.

        Args:
            user_prompt: User message (task plus source material)
            system_prompt: System instruction
            options: Model, temperature and token budget

        Returns:
            Completion text, or "" when the provider returns no content
        """
        options = options or GenerationOptions()
        try:
            response = await self.client.chat.completions.create(
                model=options.model,
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_prompt},
                ],
                temperature=options.temperature,
                max_tokens=options.max_tokens,
            )
        except RateLimitError as e:
            logger.warning("OpenAI rate limit hit (model=%s): %s", options.model, e)
            raise
        except APIConnectionError as e:
            logger.error("OpenAI connection error (model=%s): %s", options.model, e)
            raise
        except APIError as e:
            logger.error("OpenAI API error (model=%s): %s", options.model, e)
            raise

        if not response.choices:
            return ""
        return response.choices[0].message.content or ""

    async def _attempt_model(
        self,
        user_prompt: str,
        system_prompt: str,
        options: GenerationOptions,
        max_retries: int,
    ) -> tuple[str, int]:
        """Run up to max_retries attempts on options.model."""
        retrying = AsyncRetrying(
            stop=stop_after_attempt(max_retries),
            wait=wait_exponential(multiplier=self.retry_base_delay, min=0, max=30),
            before_sleep=before_sleep_log(logger, logging.WARNING),
            reraise=True,
        )
        content = ""
        attempts = 0
        async for attempt in retrying:
            with attempt:
                attempts = attempt.retry_state.attempt_number
                content = await self.generate_content(user_prompt, system_prompt, options)
        return content, attempts

    async def complete_with_fallback(
        self,
        user_prompt: str,
        system_prompt: str,
        options: Optional[GenerationOptions] = None,
        max_retries: Optional[int] = None,
    ) -> CompletionResult:
        """
        Generate with retries on the primary model, then on the fallback.

        Returns:
            CompletionResult naming the model that produced the text

        Raises:
            The last provider error once both phases are exhausted
        """
        options = options or GenerationOptions()
        max_retries = max_retries or settings.GENERATION_MAX_RETRIES
        started = time.monotonic()

        try:
            content, attempts = await self._attempt_model(user_prompt, system_prompt, options, max_retries)
            return CompletionResult(
                content=content,
                model=options.model,
                attempts=attempts,
                latency_ms=int((time.monotonic() - started) * 1000),
            )
        except Exception as primary_error:
            logger.warning(
                "Primary model %s failed after %d attempts, falling back to %s: %s",
                options.model,
                max_retries,
                options.fallback_model,
                primary_error,
            )

        fallback = replace(options, model=options.fallback_model)
        try:
            content, attempts = await self._attempt_model(user_prompt, system_prompt, fallback, max_retries)
        except Exception as fallback_error:
            logger.error(
                "Fallback model %s failed after %d attempts: %s",
                fallback.model,
                max_retries,
                fallback_error,
            )
            raise
        return CompletionResult(
            content=content,
            model=fallback.model,
            attempts=max_retries + attempts,
            latency_ms=int((time.monotonic() - started) * 1000),
        )

    async def generate_content_with_retry(
        self,
        user_prompt: str,
        system_prompt: str,
        options: Optional[GenerationOptions] = None,
        max_retries: Optional[int] = None,
    ) -> str:
        """Like complete_with_fallback(), returning only the text."""
        result = await self.complete_with_fallback(user_prompt, system_prompt, options, max_retries)
        return result.content

    # ═══════════════════════════════════════════════════════════════════════════
    # TRANSCRIPTION
    # ═══════════════════════════════════════════════════════════════════════════

    async def transcribe_audio(self, file_name: str, data: bytes) -> TranscriptionResult:
        """
        Transcribe an audio file.

        Args:
            file_name: Original file name (the extension tells the format)
            data: Raw audio bytes

        Returns:
            TranscriptionResult with raw (unnormalized) text
        """
        try:
            response = await self.client.audio.transcriptions.create(
                model=TRANSCRIPTION_MODEL,
                file=(file_name, data),
                response_format="verbose_json",
            )
        except (RateLimitError, APIConnectionError, APIError) as e:
            logger.error("OpenAI transcription error: %s", e)
            raise

        return TranscriptionResult(
            text=getattr(response, "text", "") or "",
            language=getattr(response, "language", None),
            duration_seconds=getattr(response, "duration", None),
        )


# Singleton instance for convenience
_openai_adapter: Optional[OpenAIAdapter] = None


def get_openai_adapter() -> OpenAIAdapter:
    """Get or create OpenAI adapter singleton."""
    global _openai_adapter
    if _openai_adapter is None:
        _openai_adapter = OpenAIAdapter()
    return _openai_adapter

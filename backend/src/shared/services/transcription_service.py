"""
Transcription Service

Turns uploaded audio and plain-text documents into project source content.

Audio Flow:
===========
    ingest_audio()
        │
        ├── 1. audio quota (text_audio plans only)   → QuotaExceededError
        ├── 2. project ownership                     → ProjectNotFoundError
        ├── 3. file size                             → ValidationError
        ├── 4. speech-to-text (retried)              → ExternalServiceError
        ├── 5. minutes = duration / 60, must fit the remaining quota
        ├── 6. increment audio minutes
        └── 7. normalized transcript → project.source_content

Raw audio is never stored.
"""

import logging
from dataclasses import dataclass
from pathlib import PurePath
from typing import Optional
from uuid import UUID

from openai import APIConnectionError, APIError, RateLimitError
from sqlalchemy.ext.asyncio import AsyncSession
from tenacity import AsyncRetrying, before_sleep_log, retry_if_exception_type, stop_after_attempt, wait_exponential

from src.config.ai_models import WHISPER_COST_PER_MINUTE
from src.config.settings import settings
from src.shared.adapters.openai_adapter import OpenAIAdapter, TranscriptionResult, get_openai_adapter
from src.shared.core.exceptions import (
    ExternalServiceError,
    ProjectNotFoundError,
    QuotaExceededError,
    ValidationError,
)
from src.shared.core.logging import get_logger
from src.shared.models.enums import ProjectAction
from src.shared.models.project import Project
from src.shared.repositories.project_repository import ProjectRepository
from src.shared.services.history_service import HistoryService
from src.shared.services.quota_service import QuotaService

logger = get_logger(__name__)

TRANSCRIPTION_ATTEMPTS = 3
MIN_DOCUMENT_CHARS = 10
TEXT_EXTENSIONS = (".txt", ".md", ".markdown")


@dataclass
class AudioIngestResult:
    """Outcome of an audio upload."""

    project: Project
    text: str
    language: Optional[str]
    duration_seconds: Optional[float]
    minutes: float
    cost_estimate: Optional[float]


@dataclass
class ExtractedText:
    """Text pulled from an uploaded document."""

    text: str
    truncated: bool = False


def normalize_transcript(text: str) -> str:
    """Trim and collapse every whitespace run (blank lines included) to one space."""
    return " ".join(text.split())


def extract_plain_text(file_name: str, data: bytes) -> ExtractedText:
    """
    Read a UTF-8 text or markdown document.

    Raises:
        ValidationError: Other file types, undecodable bytes, or too little text
    """
    suffix = PurePath(file_name or "").suffix.lower()
    if suffix not in TEXT_EXTENSIONS:
        raise ValidationError(
            message="Unsupported document type. Upload a .txt or .md file.",
            details={"file_name": file_name},
        )
    try:
        text = data.decode("utf-8").strip()
    except UnicodeDecodeError:
        raise ValidationError(message="Document is not valid UTF-8 text", details={"file_name": file_name})

    if len(text) < MIN_DOCUMENT_CHARS:
        raise ValidationError(
            message=f"Document must contain at least {MIN_DOCUMENT_CHARS} characters",
            details={"length": len(text)},
        )

    limit = settings.SOURCE_CONTENT_MAX_LENGTH
    if len(text) > limit:
        return ExtractedText(text=text[:limit], truncated=True)
    return ExtractedText(text=text)


class TranscriptionService:
    """
    Service for audio ingestion.

    Handles:
    - Audio quota and file size checks
    - Speech-to-text with retry
    - Audio minute accounting
    """

    def __init__(
        self,
        session: AsyncSession,
        openai: Optional[OpenAIAdapter] = None,
        retry_base_delay: Optional[float] = None,
    ) -> None:
        """
        Initialize TranscriptionService.

        Args:
            session: Async database session
            openai: Speech-to-text client (defaults to the shared adapter)
            retry_base_delay: Backoff base in seconds between attempts
        """
        self.session = session
        self.openai = openai or get_openai_adapter()
        self.retry_base_delay = (
            settings.GENERATION_RETRY_BASE_DELAY_SECONDS if retry_base_delay is None else retry_base_delay
        )
        self.quota = QuotaService(session)
        self.project_repo = ProjectRepository(session)
        self.history = HistoryService(session)

    async def _transcribe(self, file_name: str, data: bytes) -> TranscriptionResult:
        retrying = AsyncRetrying(
            stop=stop_after_attempt(TRANSCRIPTION_ATTEMPTS),
            wait=wait_exponential(multiplier=self.retry_base_delay, min=0, max=30),
            retry=retry_if_exception_type((RateLimitError, APIConnectionError, APIError)),
            before_sleep=before_sleep_log(logging.getLogger(__name__), logging.WARNING),
            reraise=True,
        )
        try:
            async for attempt in retrying:
                with attempt:
                    return await self.openai.transcribe_audio(file_name, data)
        except (RateLimitError, APIConnectionError, APIError) as e:
            raise ExternalServiceError(
                "transcription",
                message="Transcription failed",
                details={"reason": str(e)},
            )

    async def ingest_audio(self, project_id: UUID, user_id: UUID, file_name: str, data: bytes) -> AudioIngestResult:
        """
        Transcribe audio into a project's source content.

        Raises:
            QuotaExceededError: Plan without audio, or minutes exhausted
            ProjectNotFoundError: Missing or not owned
            ValidationError: Empty or oversized file
            ExternalServiceError: Speech-to-text failed after retries
        """
        quota = await self.quota.check_audio_quota(user_id)
        if not quota.allowed:
            raise QuotaExceededError(
                message="Audio is not available on your plan or this period's minutes are used up",
                current=quota.used_minutes,
                limit=quota.limit_minutes,
                plan=quota.plan_type.value,
            )

        project = await self.project_repo.get_owned(project_id, user_id)
        if project is None:
            raise ProjectNotFoundError(project_id)

        if not data:
            raise ValidationError(message="Audio file is empty")
        if len(data) > settings.MAX_AUDIO_FILE_BYTES:
            raise ValidationError(
                message="Audio file too large",
                details={"size_bytes": len(data), "max_bytes": settings.MAX_AUDIO_FILE_BYTES},
            )

        result = await self._transcribe(file_name, data)
        minutes = (result.duration_seconds or 0) / 60
        if minutes > 0 and not quota.can_add_minutes(minutes):
            raise QuotaExceededError(
                message=f"This audio is {minutes:.1f} min, more than the minutes left this period",
                current=quota.used_minutes,
                limit=quota.limit_minutes,
                plan=quota.plan_type.value,
            )

        await self.quota.increment_audio_minutes_used(user_id, minutes)

        text = normalize_transcript(result.text)[: settings.SOURCE_CONTENT_MAX_LENGTH]
        project.source_content = text
        await self.session.flush()

        await self.history.log_project_change(
            project.id,
            user_id,
            ProjectAction.UPDATE,
            {"source": "audio", "minutes": round(minutes, 2), "length": len(text)},
        )
        logger.info(
            "Audio transcribed into project",
            project_id=str(project.id),
            user_id=str(user_id),
            minutes=round(minutes, 2),
            language=result.language,
        )
        return AudioIngestResult(
            project=project,
            text=text,
            language=result.language,
            duration_seconds=result.duration_seconds,
            minutes=minutes,
            cost_estimate=minutes * WHISPER_COST_PER_MINUTE if minutes > 0 else None,
        )

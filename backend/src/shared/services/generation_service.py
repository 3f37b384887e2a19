"""
Generation Service

Orchestrates multi-platform content generation for a project.

Pipeline:
=========
┌─────────────────────────────────────────────────────────────────────────────┐
│                      generate_for_platforms()                               │
├─────────────────────────────────────────────────────────────────────────────┤
│                                                                             │
│   1. Quota gate            → QuotaExceededError (no provider calls)         │
│   2. Ownership             → ProjectNotFoundError                           │
│   3. Plan parameters       → model, temperature, max_tokens per platform    │
│   4. Material              → Content Pack (long sources) or raw text        │
│   5. Slots                 → platform × series_index                        │
│                                                                             │
│        series 1:  [linkedin#1] [twitter#1] [email#1]   ← ≤ CONCURRENCY      │
│        series 2:  [linkedin#2] [twitter#2] [email#2]   ← sees series 1      │
│                                                                             │
│      per slot: prompt → cache? → retry+fallback → sanitize → validate       │
│                → cache write → upsert Output (+ version snapshot)           │
│                                                                             │
│   6. History entry (best-effort)                                            │
│                                                                             │
└─────────────────────────────────────────────────────────────────────────────┘

Failure Isolation:
==================
A slot that fails (provider exhausted, unsupported platform, storage error)
becomes an entry in `failed`; its siblings continue and any content already
stored for that slot is left untouched.

Concurrency:
============
Network calls of one series group run concurrently, bounded by
GENERATION_CONCURRENCY. All slots share the request's AsyncSession, so
database work is serialized behind one asyncio.Lock.
"""

import asyncio
import time
from dataclasses import asdict, dataclass, field
from typing import Any, Optional
from uuid import UUID

from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.ai_models import GenerationConfig, get_generation_config
from src.config.plans import MAX_POSTS_PER_PLATFORM, Plan
from src.config.platforms import Platform
from src.config.settings import settings
from src.shared.adapters.openai_adapter import GenerationOptions, OpenAIAdapter, get_openai_adapter
from src.shared.core.exceptions import (
    BrandVoiceNotFoundError,
    GenerationFailedError,
    ProjectNotFoundError,
    QuotaExceededError,
    UnsupportedPlatformError,
    ValidationError,
)
from src.shared.core.logging import get_logger, new_request_id
from src.shared.models.brand_voice import BrandVoice
from src.shared.models.enums import GenerationSource, ProjectAction
from src.shared.models.output import Output
from src.shared.models.project import Project
from src.shared.prompts import (
    build_previous_posts_summary,
    format_prompt,
    get_platform_pack_template,
    get_platform_prompt_template,
    get_platform_system_prompt,
    get_series_context,
    get_tone_instruction,
    serialize_brand_voice,
)
from src.shared.repositories.output_repository import OutputRepository, OutputVersionRepository
from src.shared.repositories.project_repository import BrandVoiceRepository, ProjectRepository
from src.shared.services.cache_service import (
    CacheService,
    build_generation_cache_key,
    generate_cache_key,
    hash_options,
)
from src.shared.services.content_pack_service import ContentPackService, format_content_pack_for_prompt
from src.shared.services.history_service import HistoryService
from src.shared.services.quota_service import QuotaService
from src.shared.utils.content import sanitize_content, validate_platform_content
from src.shared.utils.time import utcnow

logger = get_logger(__name__)

MAX_VARIATIONS = 5

SLOT_INTERNAL_ERROR_MESSAGE = "Content generation failed"

VARIATION_STYLES = (
    ("Professional", "Formal and authoritative tone"),
    ("Casual", "Friendly and conversational tone"),
    ("Creative", "Playful and imaginative tone"),
    ("Direct", "Straightforward and to-the-point tone"),
    ("Storytelling", "Narrative-driven approach"),
)


# ═══════════════════════════════════════════════════════════════════════════════
# RESULT TYPES
# ═══════════════════════════════════════════════════════════════════════════════


@dataclass
class GenerationOverrides:
    """Caller overrides of the plan's generation parameters."""

    temperature: Optional[float] = None
    max_tokens: Optional[int] = None


@dataclass
class GenerationResult:
    """Outcome of one slot."""

    platform: str
    series_index: int
    success: bool
    content: str = ""
    output_id: Optional[UUID] = None
    metadata: dict[str, Any] = field(default_factory=dict)
    error: Optional[str] = None
    error_code: Optional[str] = None


@dataclass
class BulkGenerationResult:
    """Outcome of a multi-platform request; arrays follow completion order."""

    successful: list[GenerationResult]
    failed: list[GenerationResult]
    total_requested: int


@dataclass
class _Slot:
    platform: str
    series_index: int
    series_total: int


@dataclass
class _Context:
    """Everything slots of one request share."""

    request_id: str
    project: Project
    user_id: UUID
    plan: Plan
    config: GenerationConfig
    overrides: GenerationOverrides
    brand_voice: Optional[BrandVoice]
    material: str
    use_pack: bool
    input_hash: str
    options_hash: str
    db_lock: asyncio.Lock = field(default_factory=asyncio.Lock)

    @property
    def brand_voice_id(self) -> Optional[UUID]:
        return self.brand_voice.id if self.brand_voice else None


def _parse_platform(value: str) -> Platform:
    try:
        return Platform(str(value).strip().lower())
    except ValueError:
        raise UnsupportedPlatformError(value) from None


def _public_error(e: Exception) -> tuple[str, str]:
    """(message, error_code) safe to return to the caller for a failed slot."""
    # Datastore errors carry SQL text; callers only see a fixed message
    if isinstance(e, SQLAlchemyError):
        return SLOT_INTERNAL_ERROR_MESSAGE, "INTERNAL_ERROR"
    return str(e), getattr(e, "error_code", "GENERATION_FAILED")


class GenerationService:
    """
    Service for AI content generation.

    Handles:
    - Bulk generation across platforms and series posts
    - Single-slot regeneration
    - Unsaved style variations
    """

    def __init__(
        self,
        session: AsyncSession,
        openai: Optional[OpenAIAdapter] = None,
    ) -> None:
        """
        Initialize GenerationService.

        Args:
            session: Async database session
            openai: Generative client (defaults to the shared adapter)
        """
        self.session = session
        self.openai = openai or get_openai_adapter()
        self.cache = CacheService(session)
        self.quota = QuotaService(session)
        self.history = HistoryService(session)
        self.packs = ContentPackService(session, openai=self.openai, cache=self.cache)
        self.project_repo = ProjectRepository(session)
        self.brand_voice_repo = BrandVoiceRepository(session)
        self.output_repo = OutputRepository(session)
        self.version_repo = OutputVersionRepository(session)

    # ═══════════════════════════════════════════════════════════════════════════
    # PUBLIC API
    # ═══════════════════════════════════════════════════════════════════════════

    async def generate_for_platforms(
        self,
        project_id: UUID,
        user_id: UUID,
        source_content: Optional[str],
        platforms: Optional[list[str]],
        options: Optional[GenerationOverrides] = None,
        brand_voice_id: Optional[UUID] = None,
        posts_per_platform: Optional[int] = None,
    ) -> BulkGenerationResult:
        """
        Generate posts for every requested platform.

        Args:
            project_id: Target project (must belong to user_id)
            user_id: Caller
            source_content: Text to repurpose (None: the project's stored source)
            platforms: Platform identifiers; unknown ones become failures
                (None: the project's platforms)
            options: Temperature / max_tokens overrides
            brand_voice_id: Brand voice to use (default: the active one)
            posts_per_platform: Series length, capped by the plan (None: the
                project's setting)

        Returns:
            BulkGenerationResult

        Raises:
            QuotaExceededError: Plan quota exhausted (checked first)
            ProjectNotFoundError: Missing or not owned
            ValidationError: No source content or no platforms
            GenerationFailedError: Long source whose Content Pack failed
        """
        ctx = await self._prepare(project_id, user_id, source_content, options, brand_voice_id)

        requested = ctx.project.platforms if platforms is None else platforms
        if not requested:
            raise ValidationError(message="Select at least one platform")
        if posts_per_platform is None:
            posts_per_platform = ctx.project.posts_per_platform

        series_total = max(1, min(posts_per_platform, MAX_POSTS_PER_PLATFORM[ctx.plan]))
        unique_platforms = list(dict.fromkeys(str(p).strip().lower() for p in requested))
        slots = [
            _Slot(platform=p, series_index=index, series_total=series_total)
            for index in range(1, series_total + 1)
            for p in unique_platforms
        ]

        logger.info(
            "Starting content generation",
            request_id=ctx.request_id,
            project_id=str(project_id),
            user_id=str(user_id),
            platforms=unique_platforms,
            slots=len(slots),
            plan=ctx.plan.value,
            use_pack=ctx.use_pack,
        )

        successful: list[GenerationResult] = []
        failed: list[GenerationResult] = []
        semaphore = asyncio.Semaphore(settings.GENERATION_CONCURRENCY)

        async def run(slot: _Slot) -> None:
            async with semaphore:
                result = await self._generate_slot(ctx, slot, read_cache=True)
            (successful if result.success else failed).append(result)

        # Later series posts read the earlier ones from the database
        for index in range(1, series_total + 1):
            group = [slot for slot in slots if slot.series_index == index]
            await asyncio.gather(*(run(slot) for slot in group))

        await self.history.log_project_change(
            project_id,
            user_id,
            ProjectAction.GENERATE,
            {
                "platforms": unique_platforms,
                "slots": len(slots),
                "successful": len(successful),
                "failed": len(failed),
                "brand_voice_id": str(ctx.brand_voice_id) if ctx.brand_voice_id else None,
            },
        )

        logger.info(
            "Content generation completed",
            request_id=ctx.request_id,
            project_id=str(project_id),
            successful=len(successful),
            failed=len(failed),
            total_slots=len(slots),
        )
        return BulkGenerationResult(successful=successful, failed=failed, total_requested=len(slots))

    async def regenerate_for_platform(
        self,
        project_id: UUID,
        user_id: UUID,
        platform: str,
        series_index: int = 1,
        options: Optional[GenerationOverrides] = None,
        brand_voice_id: Optional[UUID] = None,
    ) -> GenerationResult:
        """
        Regenerate one slot from the project's stored source content.

        The cache is not read, so a new draft is always produced.

        Raises:
            QuotaExceededError, ProjectNotFoundError, UnsupportedPlatformError
            GenerationFailedError: Provider failed after retries and fallback
        """
        quota_plan = await self._check_preconditions(project_id, user_id)
        target = _parse_platform(platform)
        project = quota_plan[1]

        ctx = await self._prepare(
            project_id, user_id, project.source_content, options, brand_voice_id, checked=quota_plan
        )
        series_total = max(1, min(project.posts_per_platform, MAX_POSTS_PER_PLATFORM[ctx.plan]))
        series_index = max(1, min(series_index, series_total))

        result = await self._generate_slot(
            ctx,
            _Slot(platform=target.value, series_index=series_index, series_total=series_total),
            read_cache=False,
        )
        if not result.success:
            raise GenerationFailedError(
                message=result.error or "Content generation failed",
                details={"platform": target.value, "series_index": series_index},
            )

        await self.history.log_project_change(
            project_id,
            user_id,
            ProjectAction.GENERATE,
            {"platforms": [target.value], "series_index": series_index, "regenerate": True},
        )
        return result

    async def generate_content_variations(
        self,
        project_id: UUID,
        user_id: UUID,
        platform: str,
        count: int = 3,
        options: Optional[GenerationOverrides] = None,
        brand_voice_id: Optional[UUID] = None,
    ) -> list[GenerationResult]:
        """
        Alternative drafts for one platform in different styles.

        Up to five styles, temperature stepped by 0.1 per variation. Nothing
        is stored as an Output.
        """
        checked = await self._check_preconditions(project_id, user_id)
        target = _parse_platform(platform)
        project = checked[1]
        ctx = await self._prepare(
            project_id, user_id, project.source_content, options, brand_voice_id, checked=checked
        )

        styles = VARIATION_STYLES[: max(1, min(count, MAX_VARIATIONS))]
        semaphore = asyncio.Semaphore(settings.GENERATION_CONCURRENCY)

        async def run(index: int, name: str, description: str) -> GenerationResult:
            async with semaphore:
                return await self._generate_variation(ctx, target, index, name, description)

        return list(
            await asyncio.gather(*(run(i, name, desc) for i, (name, desc) in enumerate(styles)))
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # PREPARATION
    # ═══════════════════════════════════════════════════════════════════════════

    async def _check_preconditions(self, project_id: UUID, user_id: UUID) -> tuple[Plan, Project]:
        """Quota first, then ownership."""
        quota = await self.quota.check_project_quota(user_id)
        if not quota.can_create:
            raise QuotaExceededError(current=quota.current, limit=quota.limit, plan=quota.plan.value)

        project = await self.project_repo.get_owned(project_id, user_id)
        if project is None:
            raise ProjectNotFoundError(project_id)
        return quota.plan, project

    async def _resolve_brand_voice(self, user_id: UUID, brand_voice_id: Optional[UUID]) -> Optional[BrandVoice]:
        if brand_voice_id is not None:
            brand_voice = await self.brand_voice_repo.get_owned(brand_voice_id, user_id)
            if brand_voice is None:
                raise BrandVoiceNotFoundError(brand_voice_id)
            return brand_voice
        return await self.brand_voice_repo.get_active(user_id)

    async def _prepare(
        self,
        project_id: UUID,
        user_id: UUID,
        source_content: Optional[str],
        options: Optional[GenerationOverrides],
        brand_voice_id: Optional[UUID],
        checked: Optional[tuple[Plan, Project]] = None,
    ) -> _Context:
        plan, project = checked or await self._check_preconditions(project_id, user_id)
        if source_content is None:
            source_content = project.source_content
        if not source_content or not source_content.strip():
            raise ValidationError(message="Project has no source content to repurpose")
        request_id = new_request_id("gen")
        overrides = options or GenerationOverrides()
        brand_voice = await self._resolve_brand_voice(user_id, brand_voice_id)

        material = source_content
        use_pack = len(source_content) >= settings.LONG_TEXT_THRESHOLD_CHARS
        if use_pack:
            try:
                pack = await self.packs.get_or_create_content_pack(
                    project_id,
                    user_id,
                    source_content,
                    brand_voice_id=brand_voice.id if brand_voice else None,
                    brand_voice_updated_at=brand_voice.updated_at if brand_voice else None,
                    plan=plan,
                )
            except Exception as e:
                logger.error(
                    "Content Pack required for long text but build failed",
                    request_id=request_id,
                    project_id=str(project_id),
                    source_length=len(source_content),
                    error=str(e),
                )
                raise GenerationFailedError(
                    message="Source content is too long and its Content Pack could not be built",
                    details={"source_length": len(source_content)},
                )
            material = format_content_pack_for_prompt(pack)

        return _Context(
            request_id=request_id,
            project=project,
            user_id=user_id,
            plan=plan,
            config=get_generation_config(plan),
            overrides=overrides,
            brand_voice=brand_voice,
            material=material,
            use_pack=use_pack,
            input_hash=generate_cache_key(material),
            options_hash=hash_options({**asdict(overrides), "tone": project.tone}),
        )

    def _build_user_message(
        self,
        ctx: _Context,
        platform: Platform,
        series_index: int,
        series_total: int,
        previous_posts: str = "",
    ) -> str:
        template = (
            get_platform_pack_template(platform.value)
            if ctx.use_pack
            else get_platform_prompt_template(platform.value)
        )
        variables = {"brand_voice": serialize_brand_voice(ctx.brand_voice)}
        variables["content_pack" if ctx.use_pack else "source_content"] = ctx.material
        message = format_prompt(template, variables)

        tone = get_tone_instruction(ctx.project.tone)
        if tone:
            message = f"{tone}\n\n{message}"
        if series_total > 1:
            message = f"{get_series_context(series_index, series_total)}\n\n{message}"
        if previous_posts:
            message = f"{previous_posts}\n\n{message}"
        return message

    def _options_for(self, ctx: _Context, platform: Platform, temperature_step: float = 0.0) -> GenerationOptions:
        temperature = ctx.overrides.temperature
        if temperature is None:
            temperature = ctx.config.temperature_for(platform)
        return GenerationOptions(
            model=ctx.config.model,
            temperature=round(temperature + temperature_step, 2),
            max_tokens=ctx.overrides.max_tokens or ctx.config.max_tokens_for(platform),
            fallback_model=ctx.config.fallback_model,
        )

    # ═══════════════════════════════════════════════════════════════════════════
    # SLOTS
    # ═══════════════════════════════════════════════════════════════════════════

    async def _generate_slot(self, ctx: _Context, slot: _Slot, read_cache: bool) -> GenerationResult:
        """Generate and store one slot. Never raises."""
        project_id = ctx.project.id
        try:
            platform = _parse_platform(slot.platform)

            previous_posts = ""
            if slot.series_index > 1:
                async with ctx.db_lock:
                    previous = await self.output_repo.list_previous_in_series(
                        project_id, platform.value, slot.series_index
                    )
                previous_posts = build_previous_posts_summary([o for o in previous if o.content])

            system_prompt = get_platform_system_prompt(platform.value)
            user_message = self._build_user_message(
                ctx, platform, slot.series_index, slot.series_total, previous_posts
            )
            options = self._options_for(ctx, platform)
            cache_key = build_generation_cache_key(
                user_id=ctx.user_id,
                project_id=project_id,
                step="generate_from_pack" if ctx.use_pack else "generate",
                model=options.model,
                platform=platform.value,
                input_hash=ctx.input_hash,
                options_hash=ctx.options_hash,
                brand_voice_id=ctx.brand_voice_id,
                brand_voice_updated_at=ctx.brand_voice.updated_at if ctx.brand_voice else None,
                series_index=slot.series_index,
                series_total=slot.series_total,
            )

            started = time.monotonic()
            content, model_used, source = await self._complete(
                ctx, cache_key, user_message, system_prompt, options, read_cache
            )
            latency_ms = int((time.monotonic() - started) * 1000)

            sanitized = sanitize_content(content)
            validation = validate_platform_content(sanitized, platform.value)
            metadata = {
                "model": model_used,
                "temperature": options.temperature,
                "max_tokens": options.max_tokens,
                "timestamp": utcnow().isoformat(),
                "success": True,
                "source": source.value,
                "brand_voice_id": str(ctx.brand_voice_id) if ctx.brand_voice_id else None,
                "latency_ms": latency_ms,
                "validation_messages": validation.messages,
                "series_index": slot.series_index,
                "series_total": slot.series_total,
            }

            async with ctx.db_lock:
                output = await self._upsert_output(project_id, platform.value, slot.series_index, sanitized, metadata)

            logger.info(
                "Platform slot generated",
                request_id=ctx.request_id,
                project_id=str(project_id),
                platform=platform.value,
                series_index=slot.series_index,
                model=model_used,
                source=source.value,
                latency_ms=latency_ms,
            )
            return GenerationResult(
                platform=platform.value,
                series_index=slot.series_index,
                success=True,
                content=sanitized,
                output_id=output.id,
                metadata=metadata,
            )
        except Exception as e:
            logger.error(
                "Error generating content for platform slot",
                request_id=ctx.request_id,
                project_id=str(project_id),
                platform=slot.platform,
                series_index=slot.series_index,
                model=ctx.config.model,
                error=str(e),
                error_type=type(e).__name__,
                exc_info=isinstance(e, SQLAlchemyError),
            )
            message, error_code = _public_error(e)
            return GenerationResult(
                platform=slot.platform,
                series_index=slot.series_index,
                success=False,
                metadata={
                    "model": ctx.config.model,
                    "timestamp": utcnow().isoformat(),
                    "success": False,
                    "error_message": message,
                },
                error=message,
                error_code=error_code,
            )

    async def _complete(
        self,
        ctx: _Context,
        cache_key: str,
        user_message: str,
        system_prompt: str,
        options: GenerationOptions,
        read_cache: bool,
    ) -> tuple[str, str, GenerationSource]:
        """Cached text or a fresh completion: (content, model, source)."""
        if read_cache:
            async with ctx.db_lock:
                cached = await self.cache.get(cache_key)
            if cached is not None:
                return cached, options.model, GenerationSource.CACHE

        completion = await self.openai.complete_with_fallback(
            user_message,
            system_prompt,
            options,
            max_retries=settings.GENERATION_MAX_RETRIES,
        )
        if completion.content:
            async with ctx.db_lock:
                await self.cache.set(
                    cache_key,
                    completion.content,
                    settings.OUTPUT_CACHE_TTL_SECONDS,
                    project_id=ctx.project.id,
                )
        return completion.content, completion.model, GenerationSource.API

    async def _upsert_output(
        self,
        project_id: UUID,
        platform: str,
        series_index: int,
        content: str,
        metadata: dict[str, Any],
    ) -> Output:
        """
        Store generated content in its slot.

        New slot: insert with original_content. Existing slot: snapshot the
        previous non-empty content as a version, then overwrite. A concurrent
        insert of the same slot falls through to the update path.
        """
        existing = await self.output_repo.get_slot(project_id, platform, series_index)
        if existing is None:
            created = await self.output_repo.insert_slot(
                project_id=project_id,
                platform=platform,
                series_index=series_index,
                content=content,
                original_content=content,
                is_edited=False,
                generation_metadata=metadata,
            )
            if created is not None:
                return created
            existing = await self.output_repo.get_slot(project_id, platform, series_index)

        if existing.content and existing.content.strip():
            await self.version_repo.add_snapshot(existing.id, existing.content, existing.generation_metadata)

        existing.content = content
        existing.is_edited = False
        existing.generation_metadata = metadata
        if existing.original_content is None:
            existing.original_content = content
        await self.session.flush()
        return existing

    async def _generate_variation(
        self,
        ctx: _Context,
        platform: Platform,
        index: int,
        style: str,
        description: str,
    ) -> GenerationResult:
        """One unsaved draft in a given style. Never raises."""
        options = self._options_for(ctx, platform, temperature_step=index * 0.1)
        user_message = (
            self._build_user_message(ctx, platform, 1, 1)
            + f"\n\nIMPORTANT: Generate this content in a {style.lower()} style. {description}."
        )
        cache_key = build_generation_cache_key(
            user_id=ctx.user_id,
            project_id=ctx.project.id,
            step=f"variation_{index}_{style}",
            model=options.model,
            platform=platform.value,
            input_hash=ctx.input_hash,
            options_hash=ctx.options_hash,
            brand_voice_id=ctx.brand_voice_id,
            brand_voice_updated_at=ctx.brand_voice.updated_at if ctx.brand_voice else None,
        )
        try:
            content, model_used, source = await self._complete(
                ctx, cache_key, user_message, get_platform_system_prompt(platform.value), options, read_cache=True
            )
        except Exception as e:
            logger.error(
                "Error generating variation",
                request_id=ctx.request_id,
                platform=platform.value,
                variation_index=index,
                error=str(e),
            )
            message, error_code = _public_error(e)
            return GenerationResult(
                platform=platform.value,
                series_index=1,
                success=False,
                metadata={"variation_style": style, "variation_index": index, "success": False},
                error=message,
                error_code=error_code,
            )

        sanitized = sanitize_content(content)
        return GenerationResult(
            platform=platform.value,
            series_index=1,
            success=True,
            content=sanitized,
            metadata={
                "model": model_used,
                "temperature": options.temperature,
                "max_tokens": options.max_tokens,
                "timestamp": utcnow().isoformat(),
                "success": True,
                "source": source.value,
                "variation_style": style,
                "variation_index": index,
                "validation_messages": validate_platform_content(sanitized, platform.value).messages,
            },
        )

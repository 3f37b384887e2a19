"""
Content Pack Service

Builds, stores and reuses Content Packs.

Lookup Order:
=============
    get_or_create_content_pack()
        │
        ├── 1. cache (fingerprint key)             hit → return, no model call
        ├── 2. content_packs row (same key)        hit → re-cache, return
        └── 3. build_content_pack_from_text()      one model call
                 → store row → cache → return

Fingerprint:
============
    project id + sha256(source) + brand voice (id, updated_at) + plan

Parsing:
========
    raw model text → strip ```json fence → json.loads → ContentPack.model_validate
    Unparseable JSON or missing/empty required fields → InvalidContentPackError
"""

import json
import re
from datetime import datetime
from typing import Optional
from uuid import UUID

from pydantic import ValidationError as PydanticValidationError
from sqlalchemy.exc import IntegrityError
from sqlalchemy.ext.asyncio import AsyncSession

from src.config.ai_models import CONTENT_PACK_PARAMS
from src.config.plans import Plan
from src.config.settings import settings
from src.shared.adapters.openai_adapter import GenerationOptions, OpenAIAdapter, get_openai_adapter
from src.shared.core.exceptions import InvalidContentPackError
from src.shared.core.logging import get_logger
from src.shared.repositories.cache_repository import ContentPackRepository
from src.shared.schemas.content_pack import ContentPack
from src.shared.services.cache_service import (
    CacheService,
    build_generation_cache_key,
    generate_cache_key,
    hash_options,
)

logger = get_logger(__name__)

# Characters of source text sent to the model
PACK_SOURCE_CHAR_LIMIT = 30000

_FENCE_START = re.compile(r"^```(?:json)?\s*", re.IGNORECASE)
_FENCE_END = re.compile(r"\s*```$")

CONTENT_PACK_SYSTEM_PROMPT = """You are a content analyst. Output ONLY valid JSON, no markdown, no explanation.
Required keys: summary_short (5-7 lines), summary_long (12-20 lines), key_points (array, 10-25 items), audience, tone_suggestions, quotes (array, 5-15 items), cta_options (array, 3-8 items).
Optional keys: hashtags (array), compliance_notes (string)."""

CONTENT_PACK_USER_PROMPT = """Analyze the following content and produce a content pack JSON.

Content:
{text}

Return only the JSON object."""


def strip_code_fence(raw: str) -> str:
    """Remove a surrounding ```json (or bare ```) fence."""
    text = raw.strip()
    text = _FENCE_START.sub("", text)
    text = _FENCE_END.sub("", text)
    return text.strip()


def parse_content_pack(raw: str) -> ContentPack:
    """
    Parse model output into a ContentPack.

    Raises:
        InvalidContentPackError: Not JSON, or required fields missing/empty
    """
    try:
        data = json.loads(strip_code_fence(raw))
    except json.JSONDecodeError as e:
        raise InvalidContentPackError(
            message="Invalid Content Pack: response is not valid JSON",
            details={"reason": str(e)},
        )
    if not isinstance(data, dict):
        raise InvalidContentPackError(message="Invalid Content Pack: expected a JSON object")

    try:
        return ContentPack.model_validate(data)
    except PydanticValidationError as e:
        missing = sorted({str(err["loc"][0]) for err in e.errors() if err.get("loc")})
        raise InvalidContentPackError(details={"fields": missing})


def format_content_pack_for_prompt(pack: ContentPack) -> str:
    """Compact text rendering of a pack for the {content_pack} slot."""
    parts = [
        f"Summary (short): {pack.summary_short}",
        f"Summary (long): {pack.summary_long}",
        f"Key points: {'; '.join(pack.key_points)}",
        f"Audience: {pack.audience}",
        f"Tone: {pack.tone_suggestions}",
        f"Quotes: {' | '.join(pack.quotes[:8])}",
        f"CTAs: {'; '.join(pack.cta_options)}",
    ]
    if pack.hashtags:
        parts.append(f"Hashtags: {', '.join(pack.hashtags)}")
    if pack.compliance_notes:
        parts.append(f"Compliance: {pack.compliance_notes}")
    return "\n".join(parts)


class ContentPackService:
    """
    Service for Content Packs.

    Handles:
    - One-call pack builds with strict JSON validation
    - Cache and durable storage keyed by fingerprint
    """

    def __init__(
        self,
        session: AsyncSession,
        openai: Optional[OpenAIAdapter] = None,
        cache: Optional[CacheService] = None,
    ) -> None:
        """
        Initialize ContentPackService.

        Args:
            session: Async database session
            openai: Generative client (defaults to the shared adapter)
            cache: Cache service sharing the same session
        """
        self.session = session
        self.openai = openai or get_openai_adapter()
        self.cache = cache or CacheService(session)
        self.pack_repo = ContentPackRepository(session)

    async def build_content_pack_from_text(self, source_text: str) -> ContentPack:
        """
        Build a pack with exactly one generative call.

        Raises:
            InvalidContentPackError: Model output unusable
            Provider errors propagate unchanged
        """
        raw = await self.openai.generate_content(
            user_prompt=CONTENT_PACK_USER_PROMPT.format(text=source_text[:PACK_SOURCE_CHAR_LIMIT]),
            system_prompt=CONTENT_PACK_SYSTEM_PROMPT,
            options=GenerationOptions(
                model=CONTENT_PACK_PARAMS.model,
                temperature=CONTENT_PACK_PARAMS.temperature,
                max_tokens=CONTENT_PACK_PARAMS.max_tokens,
            ),
        )
        return parse_content_pack(raw)

    @staticmethod
    def pack_key(
        project_id: UUID,
        user_id: UUID,
        source_text: str,
        brand_voice_id: Optional[UUID],
        brand_voice_updated_at: Optional[datetime],
        plan: Plan,
    ) -> str:
        """Fingerprint of everything a pack depends on."""
        return build_generation_cache_key(
            user_id=user_id,
            project_id=project_id,
            step="content_pack",
            model=CONTENT_PACK_PARAMS.model,
            platform="",
            input_hash=generate_cache_key(source_text),
            options_hash=hash_options({"plan": plan.value}),
            brand_voice_id=brand_voice_id,
            brand_voice_updated_at=brand_voice_updated_at,
        )

    async def get_or_create_content_pack(
        self,
        project_id: UUID,
        user_id: UUID,
        source_text: str,
        brand_voice_id: Optional[UUID] = None,
        brand_voice_updated_at: Optional[datetime] = None,
        plan: Plan = Plan.FREE,
    ) -> ContentPack:
        """
        Cached pack for this source, building one only on a miss.

        Returns:
            ContentPack (never persisted when invalid)
        """
        key = self.pack_key(project_id, user_id, source_text, brand_voice_id, brand_voice_updated_at, plan)
        ttl = settings.CONTENT_PACK_CACHE_TTL_SECONDS

        cached = await self.cache.get(key)
        if cached:
            try:
                pack = ContentPack.model_validate_json(cached)
                logger.info("Content Pack cache hit", project_id=str(project_id))
                return pack
            except PydanticValidationError:
                logger.warning("Ignoring unreadable cached Content Pack", project_id=str(project_id))

        record = await self.pack_repo.get_by_key(key)
        if record is not None:
            pack = ContentPack.model_validate(record.pack)
            await self.cache.set(key, pack.model_dump_json(), ttl, project_id=project_id)
            logger.info("Content Pack loaded from storage", project_id=str(project_id))
            return pack

        pack = await self.build_content_pack_from_text(source_text)
        try:
            async with self.session.begin_nested():
                await self.pack_repo.create(
                    project_id=project_id,
                    user_id=user_id,
                    pack_key=key,
                    input_hash=generate_cache_key(source_text),
                    model=CONTENT_PACK_PARAMS.model,
                    plan=plan.value,
                    pack=pack.model_dump(),
                )
        except IntegrityError:
            logger.info("Content Pack stored concurrently", project_id=str(project_id))

        await self.cache.set(key, pack.model_dump_json(), ttl, project_id=project_id)
        logger.info(
            "Content Pack built",
            project_id=str(project_id),
            key_points=len(pack.key_points),
            source_length=len(source_text),
        )
        return pack

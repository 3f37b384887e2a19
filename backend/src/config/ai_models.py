"""
AI Model Configuration

Model identifiers and per-plan, per-platform generation parameters.

Lookup:
=======
    config = get_generation_config(Plan.PRO)
    config.model                                  # "gpt-4o-mini"
    config.temperature_for(Platform.EMAIL)        # 0.6
    config.max_tokens_for(Platform.TWITTER)       # 500
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping

from src.config.plans import Plan
from src.config.platforms import Platform


GENERATE_FALLBACK_MODEL = "gpt-3.5-turbo"
TRANSCRIPTION_MODEL = "whisper-1"
WHISPER_COST_PER_MINUTE = 0.006


@dataclass(frozen=True)
class ModelParams:
    """Parameters for a single generative call."""

    model: str
    temperature: float
    max_tokens: int


# One call, low temperature, bounded size
CONTENT_PACK_PARAMS = ModelParams(model="gpt-4o-mini", temperature=0.2, max_tokens=1500)

MAX_TOKENS_BY_PLATFORM: Mapping[Platform, int] = MappingProxyType({
    Platform.LINKEDIN: 900,
    Platform.TWITTER: 500,
    Platform.EMAIL: 1400,
    Platform.INSTAGRAM: 900,
    Platform.FACEBOOK: 1200,
    Platform.TIKTOK: 500,
    Platform.YOUTUBE: 1500,
})

TEMPERATURE_BY_PLATFORM: Mapping[Platform, float] = MappingProxyType({
    Platform.LINKEDIN: 0.7,
    Platform.TWITTER: 0.7,
    Platform.EMAIL: 0.6,
    Platform.INSTAGRAM: 0.7,
    Platform.FACEBOOK: 0.7,
    Platform.TIKTOK: 0.7,
    Platform.YOUTUBE: 0.7,
})

GENERATE_MODEL_BY_PLAN: Mapping[Plan, str] = MappingProxyType({
    Plan.TRIAL: "gpt-4o-mini",
    Plan.FREE: "gpt-4o-mini",
    Plan.PRO: "gpt-4o-mini",
    Plan.ENTERPRISE: "gpt-4o",
})


@dataclass(frozen=True)
class GenerationConfig:
    """Generation parameters for one plan."""

    model: str
    fallback_model: str
    temperature_by_platform: Mapping[Platform, float]
    max_tokens_by_platform: Mapping[Platform, int]

    def temperature_for(self, platform: Platform) -> float:
        return self.temperature_by_platform[platform]

    def max_tokens_for(self, platform: Platform) -> int:
        return self.max_tokens_by_platform[platform]


GENERATION_CONFIG: Mapping[Plan, GenerationConfig] = MappingProxyType({
    plan: GenerationConfig(
        model=model,
        fallback_model=GENERATE_FALLBACK_MODEL,
        temperature_by_platform=TEMPERATURE_BY_PLATFORM,
        max_tokens_by_platform=MAX_TOKENS_BY_PLATFORM,
    )
    for plan, model in GENERATE_MODEL_BY_PLAN.items()
})


def get_generation_config(plan: Plan) -> GenerationConfig:
    """Generation parameters for a plan."""
    return GENERATION_CONFIG[plan]

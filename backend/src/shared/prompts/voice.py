"""
Brand Voice and Tone Blocks

Text blocks injected into the {brand_voice} slot and ahead of the user
message when a project has a tone preference.
"""

from types import MappingProxyType
from typing import Mapping, Optional

from src.shared.models.brand_voice import BrandVoice
from src.shared.models.enums import PostTone


def serialize_brand_voice(brand_voice: Optional[BrandVoice]) -> str:
    """
    Render a brand voice for the {brand_voice} placeholder.

    Returns:
        Multi-line block, or "" when there is no brand voice
    """
    if brand_voice is None:
        return ""

    examples = " | ".join((brand_voice.examples or [])[:2])
    return f"""
BRAND VOICE:
- Tone: {brand_voice.tone}
- Style: {brand_voice.style}
- Personality: {brand_voice.personality}
- Sentence Structure: {brand_voice.sentence_structure}
- Preferred Vocabulary: {", ".join(brand_voice.vocabulary or [])}
- Vocabulary to Avoid: {", ".join(brand_voice.avoid_vocabulary or [])}
- Example Content: {examples}
"""


_TONE_INSTRUCTIONS: Mapping[PostTone, str] = MappingProxyType({
    PostTone.PROFESSIONAL: (
        "TONE: Professional and authoritative\n"
        "- Industry terminology, formal but approachable\n"
        "- No slang or emojis"
    ),
    PostTone.FRIENDLY: (
        "TONE: Friendly and conversational\n"
        "- Use \"you\" and \"we\" language\n"
        "- Light humor where it fits, at most 2 emojis"
    ),
    PostTone.SASSY: (
        "TONE: Bold and sassy\n"
        "- Sharp, punchy sentences that challenge conventional thinking\n"
        "- Edge is good, offensive is not"
    ),
    PostTone.POLITE: (
        "TONE: Polite and respectful\n"
        "- Courteous phrasing that acknowledges the reader's perspective\n"
        "- No pushy language"
    ),
    PostTone.AUTHORITATIVE: (
        "TONE: Authoritative and expert\n"
        "- State facts with confidence and reference data or experience\n"
        "- Minimize hedging words"
    ),
    PostTone.WITTY: (
        "TONE: Witty and clever\n"
        "- Wordplay and clever observations\n"
        "- Never sacrifice clarity for a joke"
    ),
    PostTone.INSPIRATIONAL: (
        "TONE: Inspirational and uplifting\n"
        "- Aspirational language focused on possibilities\n"
        "- Positive framing throughout"
    ),
    PostTone.CASUAL: (
        "TONE: Casual and laid-back\n"
        "- Short sentences and contractions\n"
        "- Conversational flow over structure"
    ),
    PostTone.URGENT: (
        "TONE: Urgent and action-oriented\n"
        "- Action verbs and imperative mood\n"
        "- A clear, time-sensitive call to action"
    ),
})


def get_tone_instruction(tone: Optional[str]) -> str:
    """Instruction block for a tone id; "" for none, "neutral" or unknown ids."""
    if not tone:
        return ""
    try:
        return _TONE_INSTRUCTIONS[PostTone(tone)]
    except ValueError:
        return ""

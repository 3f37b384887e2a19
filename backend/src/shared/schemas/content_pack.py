"""
Content Pack Schemas

A Content Pack is the structured summary of a long source, built by one
model call and used in place of the raw text in platform prompts.

SAMPLE PACK:
============
┌──────────────────┬──────────────────────────────────────────────────────┐
│ Field            │ Example                                              │
├──────────────────┼──────────────────────────────────────────────────────┤
│ summary_short    │ "A 10-module productivity course with exercises..."  │
│ summary_long     │ "The course walks through goal setting, ..."         │
│ key_points       │ ["Goals fail without systems", "10 modules", ...]    │
│ audience         │ "Busy professionals"                                 │
│ tone_suggestions │ "Practical, encouraging"                             │
│ quotes           │ ["Motivation fades, systems stay"]                   │
│ cta_options      │ ["Enroll today", "Get the first module free"]        │
│ hashtags         │ ["productivity", "habits"]           (optional)      │
│ compliance_notes │ None                                 (optional)      │
└──────────────────┴──────────────────────────────────────────────────────┘
"""

from typing import Optional

from pydantic import Field

from src.shared.schemas.common import BaseSchema


class ContentPack(BaseSchema):
    """Validated Content Pack; every required field is present and non-empty."""

    summary_short: str = Field(..., min_length=1)
    summary_long: str = Field(..., min_length=1)
    key_points: list[str] = Field(..., min_length=1)
    audience: str = Field(..., min_length=1)
    tone_suggestions: str = Field(..., min_length=1)
    quotes: list[str] = Field(..., min_length=1)
    cta_options: list[str] = Field(..., min_length=1)
    hashtags: Optional[list[str]] = None
    compliance_notes: Optional[str] = None


class ContentPackResponse(BaseSchema):
    """Response for POST /projects/{id}/content-pack."""

    project_id: str
    content_pack: ContentPack

"""
Quota Handler

Plan and usage of the authenticated user.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.shared.schemas.admin import QuotaResponse
from src.shared.services.quota_service import QuotaService
from src.api.dependencies import CurrentUser
from src.api.dependencies.services import get_quota_service


router = APIRouter()


@router.get("", response_model=QuotaResponse)
async def get_quota(
    current_user: CurrentUser,
    quota_service: QuotaService = Depends(get_quota_service),
):
    """Effective plan, project usage and audio minutes."""
    user_id = UUID(current_user["user_id"])
    projects = await quota_service.check_project_quota(user_id)
    audio = await quota_service.check_audio_quota(user_id)
    return QuotaResponse(
        plan=projects.plan.value,
        plan_type=projects.plan_type.value,
        projects_used=projects.current,
        projects_limit=projects.limit,
        can_create_project=projects.can_create,
        can_use_audio=projects.can_use_audio,
        audio_minutes_used=audio.used_minutes if projects.can_use_audio else None,
        audio_minutes_limit=audio.limit_minutes,
    )

"""
Output Handler

Handles manual edits, reverts and version history of generated outputs.
"""

from uuid import UUID

from fastapi import APIRouter, Depends

from src.shared.schemas.output import (
    OutputResponse,
    OutputUpdate,
    OutputVersionListResponse,
    OutputVersionResponse,
)
from src.shared.services.editor_service import EditorService
from src.api.dependencies import CurrentUser
from src.api.dependencies.services import get_editor_service


router = APIRouter()


@router.patch("/{output_id}", response_model=OutputResponse)
async def update_output(
    output_id: UUID,
    request: OutputUpdate,
    current_user: CurrentUser,
    editor_service: EditorService = Depends(get_editor_service),
):
    """Save a manual edit; the previous text becomes a version."""
    output = await editor_service.update_output_content(output_id, UUID(current_user["user_id"]), request.content)
    return OutputResponse.model_validate(output)


@router.post("/{output_id}/revert", response_model=OutputResponse)
async def revert_output(
    output_id: UUID,
    current_user: CurrentUser,
    editor_service: EditorService = Depends(get_editor_service),
):
    """Restore the generated original text."""
    output = await editor_service.revert_output_content(output_id, UUID(current_user["user_id"]))
    return OutputResponse.model_validate(output)


@router.get("/{output_id}/versions", response_model=OutputVersionListResponse)
async def list_versions(
    output_id: UUID,
    current_user: CurrentUser,
    editor_service: EditorService = Depends(get_editor_service),
):
    """Stored versions, newest first."""
    versions = await editor_service.get_output_versions(output_id, UUID(current_user["user_id"]))
    return OutputVersionListResponse(
        output_id=output_id,
        versions=[OutputVersionResponse.model_validate(v) for v in versions],
    )


@router.post("/{output_id}/versions/{version_id}/restore", response_model=OutputResponse)
async def restore_version(
    output_id: UUID,
    version_id: UUID,
    current_user: CurrentUser,
    editor_service: EditorService = Depends(get_editor_service),
):
    """Restore the text of a stored version."""
    output = await editor_service.revert_output_to_version(output_id, version_id, UUID(current_user["user_id"]))
    return OutputResponse.model_validate(output)

"""
Project Handler

Handles project CRUD, history, Content Pack and source ingestion endpoints.

ARCHITECTURE:
=============
    Handler → Service → Repository → Model

Handlers should ONLY:
- Parse HTTP requests
- Call service methods
- Format HTTP responses

Business logic belongs in the SERVICE layer.
"""

from uuid import UUID

from fastapi import APIRouter, Depends, File, UploadFile, status

from src.shared.core.exceptions import ValidationError
from src.shared.schemas.content_pack import ContentPackResponse
from src.shared.schemas.project import (
    AudioIngestResponse,
    ProjectCreate,
    ProjectHistoryResponse,
    ProjectListResponse,
    ProjectResponse,
    ProjectUpdate,
)
from src.shared.services.content_pack_service import ContentPackService
from src.shared.services.project_service import ProjectService
from src.shared.services.quota_service import QuotaService
from src.shared.services.transcription_service import TranscriptionService, extract_plain_text
from src.api.dependencies import CurrentUser, Pagination, rate_limit
from src.api.dependencies.services import (
    get_content_pack_service,
    get_project_service,
    get_quota_service,
    get_transcription_service,
)


router = APIRouter()


@router.post(
    "",
    response_model=ProjectResponse,
    status_code=status.HTTP_201_CREATED,
)
async def create_project(
    request: ProjectCreate,
    current_user: CurrentUser,
    project_service: ProjectService = Depends(get_project_service),
):
    """
    Create a project for the authenticated user.

    Counts against the plan's project quota.
    """
    project = await project_service.create_project(
        user_id=UUID(current_user["user_id"]),
        title=request.title,
        source_content=request.source_content,
        platforms=request.platforms,
        posts_per_platform=request.posts_per_platform,
        tone=request.tone.value if request.tone else None,
    )
    return ProjectResponse.model_validate(project)


@router.get("", response_model=ProjectListResponse)
async def list_projects(
    current_user: CurrentUser,
    pagination: Pagination,
    project_service: ProjectService = Depends(get_project_service),
):
    """List the caller's projects, newest first."""
    result = await project_service.list_projects(
        UUID(current_user["user_id"]),
        page=pagination.page,
        page_size=pagination.per_page,
    )
    return ProjectListResponse(
        items=[ProjectResponse.model_validate(p) for p in result.items],
        total=result.total,
        page=result.page,
        page_size=result.page_size,
        has_next=result.has_next,
        has_prev=result.has_prev,
    )


@router.get("/{project_id}", response_model=ProjectResponse)
async def get_project(
    project_id: UUID,
    current_user: CurrentUser,
    project_service: ProjectService = Depends(get_project_service),
):
    """Get one of the caller's projects."""
    project = await project_service.get_project(project_id, UUID(current_user["user_id"]))
    return ProjectResponse.model_validate(project)


@router.patch("/{project_id}", response_model=ProjectResponse)
async def update_project(
    project_id: UUID,
    request: ProjectUpdate,
    current_user: CurrentUser,
    project_service: ProjectService = Depends(get_project_service),
):
    """Partially update a project; omitted fields are unchanged."""
    fields = request.model_dump(exclude_none=True)
    if "tone" in fields:
        fields["tone"] = request.tone.value
    project = await project_service.update_project(project_id, UUID(current_user["user_id"]), **fields)
    return ProjectResponse.model_validate(project)


@router.delete("/{project_id}", status_code=status.HTTP_204_NO_CONTENT)
async def delete_project(
    project_id: UUID,
    current_user: CurrentUser,
    project_service: ProjectService = Depends(get_project_service),
):
    """Delete a project with its outputs and versions."""
    await project_service.delete_project(project_id, UUID(current_user["user_id"]))


@router.get("/{project_id}/history", response_model=list[ProjectHistoryResponse])
async def get_project_history(
    project_id: UUID,
    current_user: CurrentUser,
    project_service: ProjectService = Depends(get_project_service),
):
    """History of a project, newest first."""
    entries = await project_service.get_project_history(project_id, UUID(current_user["user_id"]))
    return [ProjectHistoryResponse.model_validate(e) for e in entries]


@router.post(
    "/{project_id}/content-pack",
    response_model=ContentPackResponse,
    dependencies=[Depends(rate_limit("content_pack"))],
)
async def build_content_pack(
    project_id: UUID,
    current_user: CurrentUser,
    project_service: ProjectService = Depends(get_project_service),
    quota_service: QuotaService = Depends(get_quota_service),
    content_pack_service: ContentPackService = Depends(get_content_pack_service),
):
    """
    Get (or build) the Content Pack of a project's source content.

    A cached or stored pack is returned without a model call.
    """
    user_id = UUID(current_user["user_id"])
    project = await project_service.get_project(project_id, user_id)
    if not project.source_content.strip():
        raise ValidationError(message="Project has no source content")
    plan = await quota_service.get_effective_plan(user_id)
    pack = await content_pack_service.get_or_create_content_pack(
        project.id,
        user_id,
        project.source_content,
        plan=plan,
    )
    return ContentPackResponse(project_id=str(project.id), content_pack=pack)


@router.post(
    "/{project_id}/ingest-audio",
    response_model=AudioIngestResponse,
    dependencies=[Depends(rate_limit("transcribe"))],
)
async def ingest_audio(
    project_id: UUID,
    current_user: CurrentUser,
    file: UploadFile = File(..., description="Audio file (mp3, m4a, wav, webm, ogg, flac)"),
    transcription_service: TranscriptionService = Depends(get_transcription_service),
):
    """
    Transcribe audio into the project's source content.

    Requires a text + audio plan; counts against the monthly audio minutes.
    """
    data = await file.read()
    result = await transcription_service.ingest_audio(
        project_id,
        UUID(current_user["user_id"]),
        file.filename or "audio.webm",
        data,
    )
    return AudioIngestResponse(
        project_id=result.project.id,
        text=result.text,
        language=result.language,
        duration_seconds=result.duration_seconds,
        minutes=result.minutes,
        cost_estimate=result.cost_estimate,
    )


@router.post("/{project_id}/ingest-document", response_model=ProjectResponse)
async def ingest_document(
    project_id: UUID,
    current_user: CurrentUser,
    file: UploadFile = File(..., description="Plain text or markdown document"),
    project_service: ProjectService = Depends(get_project_service),
):
    """Replace the project's source content with an uploaded text document."""
    extracted = extract_plain_text(file.filename or "", await file.read())
    project = await project_service.update_project(
        project_id,
        UUID(current_user["user_id"]),
        source_content=extracted.text,
    )
    return ProjectResponse.model_validate(project)

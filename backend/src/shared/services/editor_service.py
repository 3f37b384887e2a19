"""
Editor Service

User edits of generated outputs, with version history.

Every overwrite first appends the current content to output_versions, so
any earlier text can be restored:

    update_output_content()       snapshot → content = edited, is_edited = True
    revert_output_content()       snapshot → content = original, is_edited = False
    revert_output_to_version()    snapshot → content = version.content

Ownership is resolved through the output's project. A missing output and an
output owned by someone else raise the same OutputNotFoundError.
"""

from typing import Optional
from uuid import UUID

from sqlalchemy.ext.asyncio import AsyncSession

from src.shared.core.exceptions import NoOriginalContentError, OutputNotFoundError, VersionMismatchError
from src.shared.core.logging import get_logger
from src.shared.models.enums import ProjectAction
from src.shared.models.output import Output
from src.shared.models.output_version import OutputVersion
from src.shared.repositories.output_repository import OutputRepository, OutputVersionRepository
from src.shared.services.history_service import HistoryService
from src.shared.utils.content import sanitize_content

logger = get_logger(__name__)


class EditorService:
    """
    Service for editing outputs.

    Handles:
    - Manual edits (sanitized)
    - Revert to the generated original or to a stored version
    - Version listing
    """

    def __init__(self, session: AsyncSession, history: Optional[HistoryService] = None) -> None:
        """
        Initialize EditorService.

        Args:
            session: Async database session
            history: History service sharing the same session
        """
        self.session = session
        self.output_repo = OutputRepository(session)
        self.version_repo = OutputVersionRepository(session)
        self.history = history or HistoryService(session)

    async def _get_owned(self, output_id: UUID, user_id: UUID) -> Output:
        output = await self.output_repo.get_owned(output_id, user_id)
        if output is None:
            raise OutputNotFoundError(output_id)
        return output

    async def _snapshot(self, output: Output, new_content: Optional[str]) -> None:
        """Keep the current text as a version unless it is empty or unchanged."""
        if output.content and output.content != new_content:
            await self.version_repo.add_snapshot(output.id, output.content, output.generation_metadata)

    async def update_output_content(self, output_id: UUID, user_id: UUID, content: str) -> Output:
        """
        Replace an output's text with a user edit.

        The generated text stays available as original_content.

        Raises:
            OutputNotFoundError: Missing or not owned
        """
        output = await self._get_owned(output_id, user_id)
        new_content = sanitize_content(content)
        await self._snapshot(output, new_content)

        if output.original_content is None:
            output.original_content = output.content
        output.content = new_content
        output.is_edited = True
        await self.session.flush()

        await self.history.log_project_change(
            output.project_id,
            user_id,
            ProjectAction.EDIT_OUTPUT,
            {"output_id": str(output.id), "platform": output.platform, "length": len(output.content)},
        )
        logger.info("Output edited", output_id=str(output.id), user_id=str(user_id))
        return output

    async def revert_output_content(self, output_id: UUID, user_id: UUID) -> Output:
        """
        Restore the generated original.

        Raises:
            OutputNotFoundError: Missing or not owned
            NoOriginalContentError: Output has no original content
        """
        output = await self._get_owned(output_id, user_id)
        if not output.original_content:
            raise NoOriginalContentError(output_id)

        await self._snapshot(output, output.original_content)
        output.content = output.original_content
        output.is_edited = False
        await self.session.flush()

        await self.history.log_project_change(
            output.project_id,
            user_id,
            ProjectAction.REVERT_OUTPUT,
            {"output_id": str(output.id), "platform": output.platform},
        )
        logger.info("Output reverted to original", output_id=str(output.id))
        return output

    async def revert_output_to_version(self, output_id: UUID, version_id: UUID, user_id: UUID) -> Output:
        """
        Restore the content of a stored version.

        Raises:
            OutputNotFoundError: Output missing or not owned
            VersionMismatchError: Version missing or belongs to another output
        """
        output = await self._get_owned(output_id, user_id)
        version = await self.version_repo.get(version_id)
        if version is None or version.output_id != output.id:
            raise VersionMismatchError(output_id, version_id)

        await self._snapshot(output, version.content)
        output.content = version.content
        output.is_edited = output.content != output.original_content
        await self.session.flush()

        await self.history.log_project_change(
            output.project_id,
            user_id,
            ProjectAction.REVERT_TO_VERSION,
            {
                "output_id": str(output.id),
                "version_id": str(version.id),
                "version_number": version.version_number,
            },
        )
        logger.info(
            "Output restored from version",
            output_id=str(output.id),
            version_number=version.version_number,
        )
        return output

    async def get_output_versions(self, output_id: UUID, user_id: UUID) -> list[OutputVersion]:
        """
        Versions of an output, newest first, at most 50.

        Raises:
            OutputNotFoundError: Missing or not owned
        """
        output = await self._get_owned(output_id, user_id)
        return await self.version_repo.list_for_output(output.id)

"""
Tests for output editing, reverting and version history.
"""

import uuid

import pytest

from src.shared.core.exceptions import NoOriginalContentError, OutputNotFoundError, VersionMismatchError
from src.shared.models import Output
from src.shared.models.enums import ProjectAction
from src.shared.services.editor_service import EditorService

from tests.conftest import make_project


async def _make_output(db, project, content="Generated text", original="Generated text", platform="linkedin"):
    output = Output(
        project_id=project.id,
        platform=platform,
        series_index=1,
        content=content,
        original_content=original,
        is_edited=False,
        generation_metadata={"model": "gpt-4o-mini"},
    )
    db.add(output)
    await db.flush()
    return output


@pytest.fixture
def editor(db) -> EditorService:
    return EditorService(db)


class TestUpdate:
    async def test_edit_snapshots_previous_content(self, db, editor, project, trial_user):
        output = await _make_output(db, project)

        edited = await editor.update_output_content(output.id, trial_user.id, "My own words")

        assert edited.content == "My own words"
        assert edited.original_content == "Generated text"
        assert edited.is_edited is True
        versions = await editor.get_output_versions(output.id, trial_user.id)
        assert [v.version_number for v in versions] == [1]
        assert versions[0].content == "Generated text"

    async def test_edit_is_sanitized(self, db, editor, project, trial_user):
        output = await _make_output(db, project)

        edited = await editor.update_output_content(output.id, trial_user.id, "Hi<script>alert(1)</script>")

        assert edited.content == "Hi"

    async def test_original_recorded_on_first_edit_only(self, db, editor, project, trial_user):
        output = await _make_output(db, project, original=None)

        await editor.update_output_content(output.id, trial_user.id, "first edit")
        await editor.update_output_content(output.id, trial_user.id, "second edit")

        assert output.original_content == "Generated text"
        versions = await editor.get_output_versions(output.id, trial_user.id)
        assert [v.content for v in versions] == ["first edit", "Generated text"]

    async def test_empty_content_is_not_snapshotted(self, db, editor, project, trial_user):
        output = await _make_output(db, project, content="", original=None)

        await editor.update_output_content(output.id, trial_user.id, "now something")

        assert await editor.get_output_versions(output.id, trial_user.id) == []

    async def test_unchanged_edit_is_not_snapshotted(self, db, editor, project, trial_user):
        output = await _make_output(db, project)

        await editor.update_output_content(output.id, trial_user.id, "Generated text")

        assert await editor.get_output_versions(output.id, trial_user.id) == []

    async def test_edit_writes_history(self, db, editor, project, trial_user):
        output = await _make_output(db, project)

        await editor.update_output_content(output.id, trial_user.id, "edit")

        entries = await editor.history.list_project_history(project.id)
        assert entries[0].action == ProjectAction.EDIT_OUTPUT.value
        assert entries[0].changes["output_id"] == str(output.id)

    async def test_other_users_output_is_not_found(self, db, editor, project, other_user):
        output = await _make_output(db, project)

        with pytest.raises(OutputNotFoundError):
            await editor.update_output_content(output.id, other_user.id, "hijack")

        assert output.content == "Generated text"

    async def test_missing_output(self, editor, trial_user):
        with pytest.raises(OutputNotFoundError):
            await editor.update_output_content(uuid.uuid4(), trial_user.id, "x")


class TestRevert:
    async def test_revert_to_original(self, db, editor, project, trial_user):
        output = await _make_output(db, project)
        await editor.update_output_content(output.id, trial_user.id, "edited")

        reverted = await editor.revert_output_content(output.id, trial_user.id)

        assert reverted.content == "Generated text"
        assert reverted.is_edited is False
        versions = await editor.get_output_versions(output.id, trial_user.id)
        assert versions[0].content == "edited"

    async def test_revert_of_unedited_output_adds_no_version(self, db, editor, project, trial_user):
        output = await _make_output(db, project)

        reverted = await editor.revert_output_content(output.id, trial_user.id)

        assert reverted.content == "Generated text"
        assert await editor.get_output_versions(output.id, trial_user.id) == []

    async def test_revert_without_original(self, db, editor, project, trial_user):
        output = await _make_output(db, project, original=None)

        with pytest.raises(NoOriginalContentError):
            await editor.revert_output_content(output.id, trial_user.id)

        assert await editor.get_output_versions(output.id, trial_user.id) == []


class TestRevertToVersion:
    async def test_restore_version(self, db, editor, project, trial_user):
        output = await _make_output(db, project)
        await editor.update_output_content(output.id, trial_user.id, "edit one")
        await editor.update_output_content(output.id, trial_user.id, "edit two")
        versions = await editor.get_output_versions(output.id, trial_user.id)
        edit_one = next(v for v in versions if v.content == "edit one")

        restored = await editor.revert_output_to_version(output.id, edit_one.id, trial_user.id)

        assert restored.content == "edit one"
        assert restored.is_edited is True
        versions = await editor.get_output_versions(output.id, trial_user.id)
        assert [v.version_number for v in versions] == [3, 2, 1]
        assert versions[0].content == "edit two"

    async def test_restoring_the_original_clears_edited_flag(self, db, editor, project, trial_user):
        output = await _make_output(db, project)
        await editor.update_output_content(output.id, trial_user.id, "edit")
        original_version = (await editor.get_output_versions(output.id, trial_user.id))[0]

        restored = await editor.revert_output_to_version(output.id, original_version.id, trial_user.id)

        assert restored.content == "Generated text"
        assert restored.is_edited is False

    async def test_version_of_another_output_is_rejected(self, db, editor, project, trial_user):
        first = await _make_output(db, project, platform="linkedin")
        second = await _make_output(db, project, platform="twitter")
        await editor.update_output_content(second.id, trial_user.id, "edit")
        foreign = (await editor.get_output_versions(second.id, trial_user.id))[0]

        with pytest.raises(VersionMismatchError):
            await editor.revert_output_to_version(first.id, foreign.id, trial_user.id)

        assert first.content == "Generated text"
        assert await editor.get_output_versions(first.id, trial_user.id) == []

    async def test_unknown_version(self, db, editor, project, trial_user):
        output = await _make_output(db, project)

        with pytest.raises(VersionMismatchError):
            await editor.revert_output_to_version(output.id, uuid.uuid4(), trial_user.id)


async def test_versions_of_unowned_output(db, editor, other_user, trial_user):
    theirs = await make_project(db, other_user)
    output = await _make_output(db, theirs)

    with pytest.raises(OutputNotFoundError):
        await editor.get_output_versions(output.id, trial_user.id)

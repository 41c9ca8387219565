"""Tests for the platform tool catalog."""

from unittest.mock import AsyncMock, patch

import pytest

from kiisha_tools.base import Permission
from kiisha_tools.dispatch import ToolDispatcher
from kiisha_tools.platform import PlatformClient
from kiisha_tools.platform.exceptions import PlatformNotFoundError
from kiisha_tools.platform.schemas import ListAssetsInput, ListRfisInput
from kiisha_tools.platform.tools import (
    ALL_TOOLS,
    AddRfiCommentTool,
    DraftRfiResponseTool,
    GetDocumentSummaryTool,
    ListAssetsTool,
    ListRfisTool,
    SuggestVatrValueTool,
    UpdateDocumentCategoryTool,
)


@pytest.fixture
def client():
    return PlatformClient("http://platform.test/api")


class TestCatalog:
    """Tests for catalog metadata."""

    def test_seventeen_unique_tools(self):
        names = [cls.name for cls in ALL_TOOLS]
        assert len(names) == 17
        assert len(set(names)) == 17

    def test_confirmation_tools(self):
        confirmed = {cls.name for cls in ALL_TOOLS if cls.metadata.requires_confirmation}
        assert confirmed == {"suggest_vatr_value", "update_document_category", "draft_rfi_response"}

    def test_write_tools_limited_to_writers(self):
        for cls in ALL_TOOLS:
            if cls.metadata.required_permission == Permission.WRITE:
                assert set(cls.metadata.allowed_roles) == {"admin", "editor"}, cls.name

    def test_every_tool_has_description(self):
        for cls in ALL_TOOLS:
            assert cls.description.strip(), cls.name


class TestAssetTools:
    @pytest.mark.asyncio
    async def test_list_assets_drops_all_status(self, client, make_ctx):
        tool = ListAssetsTool(client)
        ctx = make_ctx()

        with patch.object(client, "get", new=AsyncMock(return_value=[{"id": 1}])) as mock_get:
            result = await tool.execute(ctx, ListAssetsInput(status="all", project_id=4))

        assert result.data == [{"id": 1}]
        mock_get.assert_awaited_once_with(
            "/assets",
            ctx,
            params={"project_id": 4, "portfolio_id": None, "status": None, "limit": 50},
        )

    @pytest.mark.asyncio
    async def test_suggest_vatr_value_posts_evidence(self, client, make_ctx):
        tool = SuggestVatrValueTool(client)
        ctx = make_ctx()
        input_data = tool.input_model(
            asset_id=12,
            field_name="capacity_kw",
            suggested_value="2500",
            evidence_document_id=88,
            evidence_page_number=4,
            confidence=0.9,
        )

        with patch.object(client, "post", new=AsyncMock(return_value={"id": 1})) as mock_post:
            result = await tool.execute(ctx, input_data)

        mock_post.assert_awaited_once_with(
            "/assets/12/vatr-suggestions",
            ctx,
            json={
                "field_name": "capacity_kw",
                "value": "2500",
                "evidence_ref": {"document_id": 88, "page_number": 4},
                "confidence": 0.9,
            },
        )
        assert result.data["requires_verification"] is True


class TestDocumentTools:
    @pytest.mark.asyncio
    async def test_update_category(self, client, make_ctx):
        tool = UpdateDocumentCategoryTool(client)
        ctx = make_ctx()

        with patch.object(client, "patch", new=AsyncMock(return_value=None)) as mock_patch:
            result = await tool.execute(ctx, tool.input_model(document_id=3, category_id=5))

        mock_patch.assert_awaited_once_with(
            "/documents/3/category", ctx, json={"category_id": 5, "reason": None}
        )
        assert result.data == {"message": "Document category updated successfully"}

    @pytest.mark.asyncio
    async def test_summary_wraps_document_id(self, client, make_ctx):
        tool = GetDocumentSummaryTool(client)

        with patch.object(client, "get", new=AsyncMock(return_value="Short summary")):
            result = await tool.execute(make_ctx(), tool.input_model(document_id=3))

        assert result.data == {"document_id": 3, "summary": "Short summary"}


class TestRfiTools:
    @pytest.mark.asyncio
    async def test_list_rfis_assigned_to_me(self, client, make_ctx):
        tool = ListRfisTool(client)
        ctx = make_ctx(user_id=42)

        with patch.object(client, "get", new=AsyncMock(return_value=[])) as mock_get:
            await tool.execute(ctx, ListRfisInput(assigned_to_me=True))

        mock_get.assert_awaited_once_with(
            "/rfis",
            ctx,
            params={"project_id": None, "status": "open", "assigned_to_user_id": 42, "limit": 50},
        )

    @pytest.mark.asyncio
    async def test_draft_response_is_draft(self, client, make_ctx):
        tool = DraftRfiResponseTool(client)

        with patch.object(client, "post", new=AsyncMock(return_value={})):
            result = await tool.execute(
                make_ctx(), tool.input_model(rfi_id=1, response_text="See attached")
            )

        assert result.data["status"] == "draft"


class TestDispatchThroughCatalog:
    @pytest.mark.asyncio
    async def test_platform_error_becomes_failure(self, platform_registry, platform_client, make_ctx):
        dispatcher = ToolDispatcher(platform_registry)

        with patch.object(
            platform_client, "request", new=AsyncMock(side_effect=PlatformNotFoundError("Not found: asset 9"))
        ):
            result = await dispatcher.execute("get_asset", {"asset_id": 9}, make_ctx(role="investor_viewer"))

        assert result.to_payload() == {
            "success": False,
            "error": "Tool execution failed: Not found: asset 9",
        }

    @pytest.mark.asyncio
    async def test_reviewer_cannot_comment(self, platform_registry, make_ctx):
        dispatcher = ToolDispatcher(platform_registry)

        result = await dispatcher.execute(
            "add_rfi_comment", {"rfi_id": 1, "comment": "hi"}, make_ctx(role="reviewer")
        )

        assert result.error == "Permission denied: add_rfi_comment requires role admin or editor"

    @pytest.mark.asyncio
    async def test_editor_comment_runs_without_confirmation(self, platform_registry, platform_client, make_ctx):
        dispatcher = ToolDispatcher(platform_registry)

        with patch.object(platform_client, "post", new=AsyncMock(return_value={})) as mock_post:
            result = await dispatcher.execute(
                "add_rfi_comment", {"rfi_id": 1, "comment": "hi"}, make_ctx(role="editor")
            )

        assert result.data == {"message": "Comment added successfully"}
        mock_post.assert_awaited_once()
        assert AddRfiCommentTool.metadata.requires_confirmation is False

"""RFI (Request for Information) tools."""

from kiisha_tools.base import ExecutionContext, Permission, ToolMetadata
from kiisha_tools.platform.schemas import (
    AddRfiCommentInput,
    DraftRfiResponseInput,
    GetRfiInput,
    GetRfiStatisticsInput,
    LinkDocumentToRfiInput,
    ListRfisInput,
)
from kiisha_tools.results import ToolSuccess

from .common import INTERNAL_ROLES, WRITER_ROLES, PlatformTool


class ListRfisTool(PlatformTool):
    name = "list_rfis"
    description = (
        "List RFIs (Requests for Information) in the project. Returns RFI metadata "
        "including title, status, assignee, and due date."
    )
    input_model = ListRfisInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=INTERNAL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: ListRfisInput) -> ToolSuccess:
        rfis = await self.client.get(
            "/rfis",
            ctx,
            params={
                "project_id": input_data.project_id,
                "status": None if input_data.status == "all" else input_data.status,
                "assigned_to_user_id": ctx.user_id if input_data.assigned_to_me else None,
                "limit": input_data.limit,
            },
        )
        return ToolSuccess(data=rfis)


class GetRfiTool(PlatformTool):
    name = "get_rfi"
    description = (
        "Get detailed information about a specific RFI including its question, linked "
        "documents, comments, and response history."
    )
    input_model = GetRfiInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=INTERNAL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: GetRfiInput) -> ToolSuccess:
        rfi = await self.client.get(f"/rfis/{input_data.rfi_id}", ctx)
        return ToolSuccess(data=rfi)


class DraftRfiResponseTool(PlatformTool):
    """Saves a draft only; sending the response is a separate human step."""

    name = "draft_rfi_response"
    description = (
        "Draft a response to an RFI. The response will be saved as a draft and must be "
        "reviewed before sending. Requires confirmation."
    )
    input_model = DraftRfiResponseInput
    # reviewers hold no write permission, so they are not allow-listed
    metadata = ToolMetadata(
        required_permission=Permission.WRITE,
        requires_confirmation=True,
        allowed_roles=WRITER_ROLES,
    )

    async def execute(self, ctx: ExecutionContext, input_data: DraftRfiResponseInput) -> ToolSuccess:
        await self.client.post(
            f"/rfis/{input_data.rfi_id}/draft-response",
            ctx,
            json={
                "response": input_data.response_text,
                "linked_document_ids": input_data.linked_document_ids,
            },
        )
        return ToolSuccess(
            data={
                "message": "RFI response drafted successfully. Please review before sending.",
                "status": "draft",
            }
        )


class AddRfiCommentTool(PlatformTool):
    name = "add_rfi_comment"
    description = "Add a comment to an RFI for discussion or clarification."
    input_model = AddRfiCommentInput
    metadata = ToolMetadata(required_permission=Permission.WRITE, allowed_roles=WRITER_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: AddRfiCommentInput) -> ToolSuccess:
        await self.client.post(
            f"/rfis/{input_data.rfi_id}/comments",
            ctx,
            json={"comment": input_data.comment, "is_internal": input_data.is_internal},
        )
        return ToolSuccess(data={"message": "Comment added successfully"})


class LinkDocumentToRfiTool(PlatformTool):
    name = "link_document_to_rfi"
    description = "Link a document to an RFI as supporting evidence or reference."
    input_model = LinkDocumentToRfiInput
    metadata = ToolMetadata(required_permission=Permission.WRITE, allowed_roles=WRITER_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: LinkDocumentToRfiInput) -> ToolSuccess:
        await self.client.post(
            f"/rfis/{input_data.rfi_id}/documents",
            ctx,
            json={"document_id": input_data.document_id, "note": input_data.relevance_note},
        )
        return ToolSuccess(data={"message": "Document linked to RFI successfully"})


class GetRfiStatisticsTool(PlatformTool):
    name = "get_rfi_statistics"
    description = (
        "Get statistics about RFIs including counts by status, average response time, and trends."
    )
    input_model = GetRfiStatisticsInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=INTERNAL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: GetRfiStatisticsInput) -> ToolSuccess:
        stats = await self.client.get(
            "/rfis/statistics",
            ctx,
            params={"project_id": input_data.project_id, "date_range": input_data.date_range},
        )
        return ToolSuccess(data=stats)

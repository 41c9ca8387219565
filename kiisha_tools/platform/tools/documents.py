"""Document tools."""

from kiisha_tools.base import ExecutionContext, Permission, ToolMetadata
from kiisha_tools.platform.schemas import (
    GetDocumentInput,
    GetDocumentSummaryInput,
    ListDocumentCategoriesInput,
    SearchDocumentsInput,
    UpdateDocumentCategoryInput,
)
from kiisha_tools.results import ToolSuccess

from .common import ALL_ROLES, WRITER_ROLES, PlatformTool


class SearchDocumentsTool(PlatformTool):
    name = "search_documents"
    description = (
        "Search for documents in the current project or organization. Returns document "
        "metadata including title, category, and upload date."
    )
    input_model = SearchDocumentsInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=ALL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: SearchDocumentsInput) -> ToolSuccess:
        results = await self.client.get(
            "/documents/search",
            ctx,
            params={
                "query": input_data.query,
                "project_id": input_data.project_id,
                "category_id": input_data.category_id,
                "limit": input_data.limit,
            },
        )
        return ToolSuccess(data=results)


class GetDocumentTool(PlatformTool):
    name = "get_document"
    description = (
        "Get detailed information about a specific document including its content, "
        "metadata, and linked entities."
    )
    input_model = GetDocumentInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=ALL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: GetDocumentInput) -> ToolSuccess:
        document = await self.client.get(f"/documents/{input_data.document_id}", ctx)
        return ToolSuccess(data=document)


class ListDocumentCategoriesTool(PlatformTool):
    name = "list_document_categories"
    description = "List all document categories available in the project or organization."
    input_model = ListDocumentCategoriesInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=ALL_ROLES)

    async def execute(
        self, ctx: ExecutionContext, input_data: ListDocumentCategoriesInput
    ) -> ToolSuccess:
        categories = await self.client.get(
            "/document-categories", ctx, params={"project_id": input_data.project_id}
        )
        return ToolSuccess(data=categories)


class UpdateDocumentCategoryTool(PlatformTool):
    name = "update_document_category"
    description = "Change the category of a document. This action requires confirmation."
    input_model = UpdateDocumentCategoryInput
    metadata = ToolMetadata(
        required_permission=Permission.WRITE,
        requires_confirmation=True,
        allowed_roles=WRITER_ROLES,
    )

    async def execute(
        self, ctx: ExecutionContext, input_data: UpdateDocumentCategoryInput
    ) -> ToolSuccess:
        await self.client.patch(
            f"/documents/{input_data.document_id}/category",
            ctx,
            json={"category_id": input_data.category_id, "reason": input_data.reason},
        )
        return ToolSuccess(data={"message": "Document category updated successfully"})


class GetDocumentSummaryTool(PlatformTool):
    name = "get_document_summary"
    description = "Get an AI-generated summary of a document's contents."
    input_model = GetDocumentSummaryInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=ALL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: GetDocumentSummaryInput) -> ToolSuccess:
        summary = await self.client.get(f"/documents/{input_data.document_id}/summary", ctx)
        return ToolSuccess(data={"document_id": input_data.document_id, "summary": summary})

"""Platform tool input schemas.

Field descriptions are shown to the model in the function-calling menu.
"""

from typing import Literal

from pydantic import Field

from kiisha_tools.base import ToolInput


# ============================================================================
# ASSET TOOL SCHEMAS
# ============================================================================


class ListAssetsInput(ToolInput):
    project_id: int | None = Field(None, description="Filter by project ID")
    portfolio_id: int | None = Field(None, description="Filter by portfolio ID")
    status: Literal["active", "inactive", "all"] = Field("active", description="Asset status filter")
    limit: int = Field(50, ge=1, le=500, description="Maximum results to return")


class GetAssetInput(ToolInput):
    asset_id: int = Field(..., description="The asset ID to retrieve")


class GetVatrFieldsInput(ToolInput):
    asset_id: int = Field(..., description="The asset ID to get VATR fields for")
    category: str | None = Field(None, description="Filter by field category")


class SuggestVatrValueInput(ToolInput):
    asset_id: int = Field(..., description="The asset ID")
    field_name: str = Field(..., description="The VATR field name")
    suggested_value: str = Field(..., description="The suggested value")
    evidence_document_id: int = Field(..., description="Document ID providing evidence")
    evidence_page_number: int | None = Field(None, description="Page number in the evidence document")
    confidence: float = Field(..., ge=0, le=1, description="Confidence score 0-1")


class GetAssetComplianceInput(ToolInput):
    asset_id: int = Field(..., description="The asset ID to check compliance for")


class CompareAssetVersionsInput(ToolInput):
    asset_id: int = Field(..., description="The asset ID")
    from_version: int = Field(..., description="Earlier version number")
    to_version: int = Field(..., description="Later version number")


# ============================================================================
# DOCUMENT TOOL SCHEMAS
# ============================================================================


class SearchDocumentsInput(ToolInput):
    query: str = Field(..., description="Search query for documents")
    project_id: int | None = Field(None, description="Filter by project ID")
    category_id: int | None = Field(None, description="Filter by category ID")
    limit: int = Field(20, ge=1, le=200, description="Maximum results to return")


class GetDocumentInput(ToolInput):
    document_id: int = Field(..., description="The document ID to retrieve")


class ListDocumentCategoriesInput(ToolInput):
    project_id: int | None = Field(None, description="Filter by project ID")


class UpdateDocumentCategoryInput(ToolInput):
    document_id: int = Field(..., description="The document ID to update")
    category_id: int = Field(..., description="The new category ID")
    reason: str | None = Field(None, description="Reason for the category change")


class GetDocumentSummaryInput(ToolInput):
    document_id: int = Field(..., description="The document ID to summarize")


# ============================================================================
# RFI TOOL SCHEMAS
# ============================================================================


class ListRfisInput(ToolInput):
    project_id: int | None = Field(None, description="Filter by project ID")
    status: Literal["open", "pending", "resolved", "all"] = Field("open", description="RFI status filter")
    assigned_to_me: bool = Field(False, description="Only show RFIs assigned to current user")
    limit: int = Field(50, ge=1, le=500, description="Maximum results to return")


class GetRfiInput(ToolInput):
    rfi_id: int = Field(..., description="The RFI ID to retrieve")


class DraftRfiResponseInput(ToolInput):
    rfi_id: int = Field(..., description="The RFI ID to respond to")
    response_text: str = Field(..., description="The drafted response text")
    linked_document_ids: list[int] | None = Field(None, description="Document IDs to link as evidence")


class AddRfiCommentInput(ToolInput):
    rfi_id: int = Field(..., description="The RFI ID to comment on")
    comment: str = Field(..., description="The comment text")
    is_internal: bool = Field(False, description="Whether this is an internal-only comment")


class LinkDocumentToRfiInput(ToolInput):
    rfi_id: int = Field(..., description="The RFI ID")
    document_id: int = Field(..., description="The document ID to link")
    relevance_note: str | None = Field(None, description="Note explaining why this document is relevant")


class GetRfiStatisticsInput(ToolInput):
    project_id: int | None = Field(None, description="Filter by project ID")
    date_range: Literal["week", "month", "quarter", "year"] = Field(
        "month", description="Time range for statistics"
    )

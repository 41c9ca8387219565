"""Asset and VATR tools."""

from kiisha_tools.base import ExecutionContext, Permission, ToolMetadata
from kiisha_tools.platform.schemas import (
    CompareAssetVersionsInput,
    GetAssetComplianceInput,
    GetAssetInput,
    GetVatrFieldsInput,
    ListAssetsInput,
    SuggestVatrValueInput,
)
from kiisha_tools.results import ToolSuccess

from .common import ALL_ROLES, INTERNAL_ROLES, WRITER_ROLES, PlatformTool


class ListAssetsTool(PlatformTool):
    name = "list_assets"
    description = (
        "List renewable energy assets in the organization. Returns asset metadata "
        "including name, type, capacity, and location."
    )
    input_model = ListAssetsInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=ALL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: ListAssetsInput) -> ToolSuccess:
        assets = await self.client.get(
            "/assets",
            ctx,
            params={
                "project_id": input_data.project_id,
                "portfolio_id": input_data.portfolio_id,
                "status": None if input_data.status == "all" else input_data.status,
                "limit": input_data.limit,
            },
        )
        return ToolSuccess(data=assets)


class GetAssetTool(PlatformTool):
    name = "get_asset"
    description = (
        "Get detailed information about a specific renewable energy asset including "
        "VATR data, linked documents, and compliance status."
    )
    input_model = GetAssetInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=ALL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: GetAssetInput) -> ToolSuccess:
        asset = await self.client.get(f"/assets/{input_data.asset_id}", ctx)
        return ToolSuccess(data=asset)


class GetVatrFieldsTool(PlatformTool):
    name = "get_vatr_fields"
    description = (
        "Get VATR (Verified Asset Technical Record) fields for an asset. Returns field "
        "values with verification status and evidence references."
    )
    input_model = GetVatrFieldsInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=ALL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: GetVatrFieldsInput) -> ToolSuccess:
        fields = await self.client.get(
            f"/assets/{input_data.asset_id}/vatr-fields",
            ctx,
            params={"category": input_data.category},
        )
        return ToolSuccess(data=fields)


class SuggestVatrValueTool(PlatformTool):
    """Creates an unverified suggestion; a human still verifies it afterwards."""

    name = "suggest_vatr_value"
    description = (
        "Suggest a value for a VATR field with evidence reference. This creates a "
        "suggestion that must be verified by a human. Requires confirmation."
    )
    input_model = SuggestVatrValueInput
    metadata = ToolMetadata(
        required_permission=Permission.WRITE,
        requires_confirmation=True,
        allowed_roles=WRITER_ROLES,
    )

    async def execute(self, ctx: ExecutionContext, input_data: SuggestVatrValueInput) -> ToolSuccess:
        await self.client.post(
            f"/assets/{input_data.asset_id}/vatr-suggestions",
            ctx,
            json={
                "field_name": input_data.field_name,
                "value": input_data.suggested_value,
                "evidence_ref": {
                    "document_id": input_data.evidence_document_id,
                    "page_number": input_data.evidence_page_number,
                },
                "confidence": input_data.confidence,
            },
        )
        return ToolSuccess(
            data={
                "message": "VATR field suggestion created. Awaiting verification.",
                "requires_verification": True,
            }
        )


class GetAssetComplianceTool(PlatformTool):
    name = "get_asset_compliance"
    description = (
        "Get the compliance status for an asset including pending items, alerts, and deadlines."
    )
    input_model = GetAssetComplianceInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=INTERNAL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: GetAssetComplianceInput) -> ToolSuccess:
        compliance = await self.client.get(f"/assets/{input_data.asset_id}/compliance", ctx)
        return ToolSuccess(data=compliance)


class CompareAssetVersionsTool(PlatformTool):
    name = "compare_asset_versions"
    description = "Compare two versions of an asset's VATR data to see what changed."
    input_model = CompareAssetVersionsInput
    metadata = ToolMetadata(required_permission=Permission.READ, allowed_roles=INTERNAL_ROLES)

    async def execute(self, ctx: ExecutionContext, input_data: CompareAssetVersionsInput) -> ToolSuccess:
        diff = await self.client.get(
            f"/assets/{input_data.asset_id}/vatr-diff",
            ctx,
            params={"from_version": input_data.from_version, "to_version": input_data.to_version},
        )
        return ToolSuccess(data=diff)

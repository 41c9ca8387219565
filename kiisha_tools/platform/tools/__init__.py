"""Platform tools package.

Exports all platform tools for easy importing.
"""

from .assets import (
    CompareAssetVersionsTool,
    GetAssetComplianceTool,
    GetAssetTool,
    GetVatrFieldsTool,
    ListAssetsTool,
    SuggestVatrValueTool,
)
from .common import PlatformTool
from .documents import (
    GetDocumentSummaryTool,
    GetDocumentTool,
    ListDocumentCategoriesTool,
    SearchDocumentsTool,
    UpdateDocumentCategoryTool,
)
from .rfis import (
    AddRfiCommentTool,
    DraftRfiResponseTool,
    GetRfiStatisticsTool,
    GetRfiTool,
    LinkDocumentToRfiTool,
    ListRfisTool,
)

ASSET_TOOLS = [
    ListAssetsTool,
    GetAssetTool,
    GetVatrFieldsTool,
    SuggestVatrValueTool,
    GetAssetComplianceTool,
    CompareAssetVersionsTool,
]

DOCUMENT_TOOLS = [
    SearchDocumentsTool,
    GetDocumentTool,
    ListDocumentCategoriesTool,
    UpdateDocumentCategoryTool,
    GetDocumentSummaryTool,
]

RFI_TOOLS = [
    ListRfisTool,
    GetRfiTool,
    DraftRfiResponseTool,
    AddRfiCommentTool,
    LinkDocumentToRfiTool,
    GetRfiStatisticsTool,
]

ALL_TOOLS = ASSET_TOOLS + DOCUMENT_TOOLS + RFI_TOOLS

__all__ = [
    "PlatformTool",
    "ASSET_TOOLS",
    "DOCUMENT_TOOLS",
    "RFI_TOOLS",
    "ALL_TOOLS",
    # Assets
    "ListAssetsTool",
    "GetAssetTool",
    "GetVatrFieldsTool",
    "SuggestVatrValueTool",
    "GetAssetComplianceTool",
    "CompareAssetVersionsTool",
    # Documents
    "SearchDocumentsTool",
    "GetDocumentTool",
    "ListDocumentCategoriesTool",
    "UpdateDocumentCategoryTool",
    "GetDocumentSummaryTool",
    # RFIs
    "ListRfisTool",
    "GetRfiTool",
    "DraftRfiResponseTool",
    "AddRfiCommentTool",
    "LinkDocumentToRfiTool",
    "GetRfiStatisticsTool",
]

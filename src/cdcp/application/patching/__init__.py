"""Generic JSON Patch / Merge Patch application with validation."""

from cdcp.application.patching.media_types import (
    JSON_PATCH,
    MERGE_PATCH,
    PATCH_MEDIA_TYPES,
)
from cdcp.application.patching.patch_document import (
    JsonPatchDocument,
    MergePatchDocument,
    PatchDocument,
    merge_patch,
)
from cdcp.application.patching.patch_processor import (
    PatchProcessor,
    PatchResult,
    field_errors_from_pydantic,
)
from cdcp.application.patching.validation import (
    ValidationRule,
    ValidationRuleRegistry,
    default_rules,
    not_blank,
)

__all__ = [
    "JSON_PATCH",
    "MERGE_PATCH",
    "PATCH_MEDIA_TYPES",
    "JsonPatchDocument",
    "MergePatchDocument",
    "PatchDocument",
    "PatchProcessor",
    "PatchResult",
    "ValidationRule",
    "ValidationRuleRegistry",
    "default_rules",
    "field_errors_from_pydantic",
    "merge_patch",
    "not_blank",
]

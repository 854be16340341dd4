"""Helpers for endpoints that accept JSON Patch / Merge Patch bodies."""

from fastapi import Request

from cdcp.application.patching import JSON_PATCH, MERGE_PATCH, PatchDocument

PATCH_OPENAPI_EXTRA = {
    "requestBody": {
        "required": True,
        "content": {
            JSON_PATCH: {
                "schema": {"type": "array", "items": {"type": "object"}},
            },
            MERGE_PATCH: {"schema": {"type": "object"}},
        },
    },
}


async def read_patch_document(request: Request) -> PatchDocument:
    """Parse the request body according to its Content-Type."""
    return PatchDocument.from_request(
        request.headers.get("content-type"),
        await request.body(),
    )

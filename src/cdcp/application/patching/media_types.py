"""Media types accepted for partial updates."""

JSON_PATCH = "application/json-patch+json"
MERGE_PATCH = "application/merge-patch+json"

PATCH_MEDIA_TYPES = (JSON_PATCH, MERGE_PATCH)


def base_media_type(content_type: str | None) -> str:
    """Strip parameters (e.g. ``; charset=utf-8``) and normalise case."""
    if not content_type:
        return ""
    return content_type.split(";", 1)[0].strip().lower()

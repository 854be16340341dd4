"""Patch documents: RFC 6902 JSON Patch and RFC 7386 JSON Merge Patch.

A patch document is parsed once from a request body and applied to a
JSON tree (dicts, lists and scalars). Applying never modifies the input
tree; a new tree is returned.
"""

from __future__ import annotations

import copy
import json
from abc import ABC, abstractmethod
from typing import Any

import jsonpatch
import jsonpointer

from cdcp.application.patching.media_types import (
    JSON_PATCH,
    MERGE_PATCH,
    base_media_type,
)
from cdcp.domain.shared.exceptions import (
    MalformedPatchError,
    UnsupportedMediaTypeError,
)


def merge_patch(target: Any, patch: Any) -> Any:
    """Overlay ``patch`` onto ``target`` following RFC 7386.

    A ``None`` value removes the key, objects merge recursively and any
    other value replaces the target. A patch that is not an object
    replaces the whole target.
    """
    if not isinstance(patch, dict):
        return copy.deepcopy(patch)

    result = dict(target) if isinstance(target, dict) else {}
    for key, value in patch.items():
        if value is None:
            result.pop(key, None)
        else:
            result[key] = merge_patch(result.get(key), value)
    return result


class PatchDocument(ABC):
    """A parsed patch, ready to be applied to a JSON tree."""

    media_type: str

    @abstractmethod
    def apply(self, document: Any) -> Any:
        """Return a patched copy of ``document``.

        Raises
        ------
        MalformedPatchError
            If the patch cannot be applied to the document
        """

    @classmethod
    def from_request(cls, content_type: str | None, body: bytes | str) -> PatchDocument:
        """Parse a request body according to its content type."""
        media_type = base_media_type(content_type)
        if media_type == JSON_PATCH:
            return JsonPatchDocument.from_json(body)
        if media_type == MERGE_PATCH:
            return MergePatchDocument.from_json(body)
        raise UnsupportedMediaTypeError(content_type)


def _load_json(body: bytes | str) -> Any:
    try:
        return json.loads(body)
    except (TypeError, ValueError) as e:
        msg = f"Patch body is not valid JSON: {e}"
        raise MalformedPatchError(msg) from e


class JsonPatchDocument(PatchDocument):
    """An ordered list of RFC 6902 operations, applied all-or-nothing."""

    media_type = JSON_PATCH

    def __init__(self, operations: list[dict[str, Any]]):
        if not isinstance(operations, list):
            msg = "JSON Patch document must be an array of operations"
            raise MalformedPatchError(msg)
        try:
            self._patch = jsonpatch.JsonPatch(operations)
        except jsonpatch.JsonPatchException as e:
            raise MalformedPatchError(str(e)) from e
        except TypeError as e:
            msg = "Each JSON Patch operation must be an object"
            raise MalformedPatchError(msg) from e
        except jsonpointer.JsonPointerException as e:
            msg = f"Invalid JSON pointer: {e}"
            raise MalformedPatchError(msg) from e
        self._operations = copy.deepcopy(operations)

    @classmethod
    def from_json(cls, body: bytes | str) -> JsonPatchDocument:
        return cls(_load_json(body))

    @property
    def operations(self) -> list[dict[str, Any]]:
        return copy.deepcopy(self._operations)

    def apply(self, document: Any) -> Any:
        try:
            return self._patch.apply(document, in_place=False)
        except jsonpatch.JsonPatchTestFailed as e:
            msg = f"Patch test operation failed: {e}"
            raise MalformedPatchError(msg) from e
        except jsonpatch.JsonPatchException as e:
            msg = f"Patch could not be applied: {e}"
            raise MalformedPatchError(msg) from e
        except jsonpointer.JsonPointerException as e:
            msg = f"Patch path could not be resolved: {e}"
            raise MalformedPatchError(msg) from e

    def __repr__(self) -> str:
        return f"JsonPatchDocument(operations={self._operations!r})"


class MergePatchDocument(PatchDocument):
    """A partial object overlaid onto the target (RFC 7386)."""

    media_type = MERGE_PATCH

    def __init__(self, patch: Any):
        self._patch = copy.deepcopy(patch)

    @classmethod
    def from_json(cls, body: bytes | str) -> MergePatchDocument:
        return cls(_load_json(body))

    @property
    def patch(self) -> Any:
        return copy.deepcopy(self._patch)

    def apply(self, document: Any) -> Any:
        return merge_patch(document, self._patch)

    def __repr__(self) -> str:
        return f"MergePatchDocument(patch={self._patch!r})"

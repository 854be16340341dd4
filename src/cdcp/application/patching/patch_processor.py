"""Apply a patch document to a model snapshot and validate the result."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Generic, Optional, TypeVar

from pydantic import BaseModel
from pydantic import ValidationError as PydanticValidationError

from cdcp.application.patching.patch_document import PatchDocument
from cdcp.application.patching.validation import (
    ValidationRuleRegistry,
    default_rules,
)
from cdcp.domain.shared.exceptions import (
    FieldError,
    MalformedPatchError,
    ValidationFailure,
)

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)


@dataclass(frozen=True)
class PatchResult(Generic[ModelT]):
    """Outcome of a patch: either an accepted value or field errors."""

    value: Optional[ModelT] = None
    errors: tuple[FieldError, ...] = field(default_factory=tuple)

    @property
    def ok(self) -> bool:
        return not self.errors

    def unwrap(self) -> ModelT:
        """Return the accepted value or raise ``ValidationFailure``."""
        if self.errors:
            raise ValidationFailure(self.errors)
        assert self.value is not None
        return self.value


def field_errors_from_pydantic(error: PydanticValidationError) -> list[FieldError]:
    """Convert a pydantic validation error into field errors."""
    return [
        FieldError(
            field=".".join(str(part) for part in detail["loc"]) or "__root__",
            message=detail["msg"],
        )
        for detail in error.errors()
    ]


class PatchProcessor:
    """Applies JSON Patch / Merge Patch documents to pydantic models.

    The model is serialized to a JSON tree (using field aliases), the
    patch is applied to that tree, and a new instance of the same model
    type is built from the result. The original instance is never
    touched. The new instance must pass both the model's own validation
    and every rule registered for its type before it is accepted.
    """

    def __init__(self, rules: ValidationRuleRegistry | None = None):
        self._rules = rules if rules is not None else default_rules

    def apply(self, obj: ModelT, patch: PatchDocument) -> PatchResult[ModelT]:
        """Apply ``patch`` to ``obj``.

        Returns
        -------
        PatchResult holding the patched copy, or the collected field errors

        Raises
        ------
        MalformedPatchError
            If the patch cannot be applied to the object's structure
        """
        if obj is None:
            msg = "obj is required; it must not be None"
            raise ValueError(msg)
        if patch is None:
            msg = "patch is required; it must not be None"
            raise ValueError(msg)

        model_type = type(obj)
        tree = obj.model_dump(mode="json", by_alias=True)
        patched_tree = patch.apply(tree)

        if not isinstance(patched_tree, dict):
            msg = f"Patched {model_type.__name__} must be a JSON object"
            raise MalformedPatchError(msg)

        try:
            patched = model_type.model_validate(patched_tree)
        except PydanticValidationError as e:
            errors = field_errors_from_pydantic(e)
            logger.debug(
                "Patched %s failed structural validation: %s",
                model_type.__name__,
                errors,
            )
            failed = {str(detail["loc"][0]) for detail in e.errors() if detail["loc"]}
            errors.extend(
                self._rule_errors_outside(tree, patched_tree, failed, model_type),
            )
            return PatchResult(errors=tuple(errors))

        errors = self._rules.validate(patched)
        if errors:
            return PatchResult(errors=tuple(errors))

        return PatchResult(value=patched)

    def _rule_errors_outside(
        self,
        original: dict,
        patched_tree: dict,
        failed: set[str],
        model_type: type[ModelT],
    ) -> list[FieldError]:
        """Run the rules on the fields that passed structural validation.

        Fields that failed are reset to their pre-patch value (or dropped
        when they did not exist), and rule errors reported against them
        are discarded so each field is reported once.
        """
        if not failed:
            return []
        partial = {k: v for k, v in patched_tree.items() if k not in failed}
        partial.update({k: original[k] for k in failed if k in original})
        try:
            candidate = model_type.model_validate(partial)
        except PydanticValidationError:
            return []
        return [
            error
            for error in self._rules.validate(candidate)
            if _top_level(error.field) not in failed
        ]

    def apply_or_raise(self, obj: ModelT, patch: PatchDocument) -> ModelT:
        """Like :meth:`apply` but raises ``ValidationFailure`` on rule violations."""
        return self.apply(obj, patch).unwrap()


def _top_level(field_path: str) -> str:
    return field_path.split(".", 1)[0].split("[", 1)[0]

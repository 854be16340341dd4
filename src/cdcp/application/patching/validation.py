"""Explicit validation rules for patched objects.

Structural checks (types, required fields, lengths) come from the pydantic
model itself. Rules registered here cover everything else. Every rule for
a type runs; violations are collected rather than stopping at the first.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Iterable

from cdcp.domain.shared.exceptions import FieldError

logger = logging.getLogger(__name__)

ValidationRule = Callable[[Any], Iterable[FieldError]]


class ValidationRuleRegistry:
    """Maps a model type to its ordered list of validation rules.

    Rules registered for a base class also apply to its subclasses.

    Examples
    --------
    >>> registry = ValidationRuleRegistry()
    >>> registry.register(SubscriptionPatchModel, not_blank("ms_language_code"))
    >>> errors = registry.validate(model)
    """

    def __init__(self) -> None:
        self._rules: dict[type, list[ValidationRule]] = {}

    def register(self, model_type: type, *rules: ValidationRule) -> None:
        self._rules.setdefault(model_type, []).extend(rules)

    def rule(self, model_type: type) -> Callable[[ValidationRule], ValidationRule]:
        """Decorator form of :meth:`register`."""

        def decorator(func: ValidationRule) -> ValidationRule:
            self.register(model_type, func)
            return func

        return decorator

    def rules_for(self, model_type: type) -> list[ValidationRule]:
        rules: list[ValidationRule] = []
        for klass in reversed(model_type.__mro__):
            rules.extend(self._rules.get(klass, ()))
        return rules

    def validate(self, obj: Any) -> list[FieldError]:
        errors: list[FieldError] = []
        for rule in self.rules_for(type(obj)):
            errors.extend(rule(obj))
        if errors:
            logger.debug(
                "%s failed %d validation rule(s)",
                type(obj).__name__,
                len(errors),
            )
        return errors


def not_blank(
    attribute: str,
    field: str | None = None,
    message: str = "must not be blank",
) -> ValidationRule:
    """Rule requiring ``attribute`` to be a string with non-whitespace text.

    ``field`` is the name reported in the error (defaults to ``attribute``),
    typically the JSON alias the client sees.
    """

    def _rule(obj: Any) -> list[FieldError]:
        value = getattr(obj, attribute, None)
        if not isinstance(value, str) or not value.strip():
            return [FieldError(field or attribute, message)]
        return []

    return _rule


# Rules shared by the API schemas; the PatchProcessor uses it by default.
default_rules = ValidationRuleRegistry()

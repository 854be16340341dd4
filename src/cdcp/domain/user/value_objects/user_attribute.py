"""Opaque name/value attribute attached to a user."""

from dataclasses import dataclass


@dataclass(frozen=True)
class UserAttribute:
    name: str
    value: str | None = None

"""AlertType reference entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class AlertType:
    """A category of notification a user can subscribe to."""

    id: str
    code: str
    description: str

"""Language reference entity."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Language:
    """A notification language.

    Besides its own code, a language is known by its ISO 639-3 code and by
    the Microsoft locale code used by the notification front end.
    """

    id: str
    code: str
    description: str
    iso_code: str
    ms_locale_code: str

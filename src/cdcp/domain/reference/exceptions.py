"""Reference data exceptions."""

from cdcp.domain.shared.exceptions import EntityNotFoundError, ErrorCode


class AlertTypeNotFoundError(EntityNotFoundError):
    default_code = ErrorCode.ALERT_TYPE_NOT_FOUND

    def __init__(self, alert_type_id: str) -> None:
        self.alert_type_id = alert_type_id
        super().__init__(f"No alert type with id=[{alert_type_id}] was found")


class LanguageNotFoundError(EntityNotFoundError):
    default_code = ErrorCode.LANGUAGE_NOT_FOUND

    def __init__(self, language_id: str) -> None:
        self.language_id = language_id
        super().__init__(f"No language with id=[{language_id}] was found")

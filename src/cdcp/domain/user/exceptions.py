"""User domain exceptions."""

from cdcp.domain.shared.exceptions import (
    ConflictError,
    EntityNotFoundError,
    ErrorCode,
)


class UserNotFoundError(EntityNotFoundError):
    default_code = ErrorCode.USER_NOT_FOUND

    def __init__(self, user_id: str) -> None:
        self.user_id = user_id
        super().__init__(f"No user with id=[{user_id}] was found")


class SubscriptionNotFoundError(EntityNotFoundError):
    default_code = ErrorCode.SUBSCRIPTION_NOT_FOUND

    def __init__(self, subscription_id: str) -> None:
        self.subscription_id = subscription_id
        super().__init__(f"No subscription with id=[{subscription_id}] was found")


class SubscriptionAlreadyExistsError(ConflictError):
    """The user already holds a subscription for this alert type."""

    default_code = ErrorCode.SUBSCRIPTION_ALREADY_EXISTS

    def __init__(self, user_id: str, alert_type_code: str) -> None:
        self.user_id = user_id
        self.alert_type_code = alert_type_code
        super().__init__(
            f"A subscription with code [{alert_type_code}] already exists "
            f"for user [{user_id}]",
        )


class EmailAlreadyExistsError(ConflictError):
    default_code = ErrorCode.EMAIL_ALREADY_EXISTS

    def __init__(self, email: str) -> None:
        self.email = email
        super().__init__(f"Email already registered: {email}")

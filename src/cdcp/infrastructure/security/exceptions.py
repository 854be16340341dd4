"""Bearer token exceptions."""


class InvalidTokenError(Exception):
    """The token failed signature, expiry or claim checks; maps to HTTP 401."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)
        self.message = message

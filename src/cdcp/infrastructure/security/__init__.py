"""Bearer token verification."""

from cdcp.infrastructure.security.exceptions import InvalidTokenError
from cdcp.infrastructure.security.jwt_service import JWTService, TokenPayload

__all__ = [
    "InvalidTokenError",
    "JWTService",
    "TokenPayload",
]

"""JWT bearer token verification.

Tokens are issued by an external identity provider; this service only
checks the signature, expiry and role claims. ``create_access_token``
exists for local tooling and tests.
"""

from dataclasses import dataclass, field
from datetime import datetime, timedelta, timezone

import jwt

from cdcp.infrastructure.security.exceptions import InvalidTokenError


@dataclass(frozen=True)
class TokenPayload:
    """Decoded claims of a verified token."""

    subject: str
    exp: datetime
    roles: tuple[str, ...] = field(default_factory=tuple)

    def has_role(self, role: str) -> bool:
        return role in self.roles


class JWTService:
    """Service for JWT token verification.

    Examples
    --------
    >>> service = JWTService(secret_key="your-secret-key")
    >>> token = service.create_access_token("client-app", roles=["Users.Administer"])
    >>> service.verify_token(token).has_role("Users.Administer")
    True
    """

    DEFAULT_ALGORITHM = "HS256"
    DEFAULT_EXPIRE_HOURS = 1

    def __init__(self, secret_key: str, algorithm: str = DEFAULT_ALGORITHM):
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._algorithm = algorithm

    def create_access_token(
        self,
        subject: str,
        roles: list[str] | tuple[str, ...] = (),
        expires_delta: timedelta | None = None,
    ) -> str:
        now = datetime.now(tz=timezone.utc)
        payload = {
            "sub": subject,
            "roles": list(roles),
            "iat": now,
            "exp": now + (expires_delta or timedelta(hours=self.DEFAULT_EXPIRE_HOURS)),
        }
        return jwt.encode(payload, self._secret_key, algorithm=self._algorithm)

    def verify_token(self, token: str) -> TokenPayload:
        """Verify and decode a JWT token.

        Raises
        ------
        InvalidTokenError
            If token is invalid, expired, or malformed
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self._algorithm],
                options={"require": ["sub", "exp"]},
            )

            roles = payload.get("roles") or []
            if isinstance(roles, str):
                roles = [roles]

            return TokenPayload(
                subject=str(payload["sub"]),
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                roles=tuple(str(r) for r in roles),
            )

        except jwt.ExpiredSignatureError as e:
            raise InvalidTokenError("Token has expired") from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

"""
Stateless session tokens.

Tokens are HS256 JWTs carrying ``sub`` (user id), ``role`` and optionally
``username``. Nothing is stored server-side: a token is valid exactly when it
verifies against the current secret and has not expired.
"""
from datetime import timedelta

from ..utils.error_handlers import ForbiddenError, TokenMalformed, get_error_message
from ..utils.jwt import create_access_token, decode_access_token

ADMIN_ROLE = "admin"


class SessionTokens:
    def __init__(
        self,
        secret_key: str,
        admin_expire_minutes: int = 60 * 24,
        user_expire_minutes: int = 60 * 24 * 7,
    ):
        if not secret_key:
            raise ValueError("secret_key is required")
        self._secret_key = secret_key
        self.admin_expires = timedelta(minutes=admin_expire_minutes)
        self.user_expires = timedelta(minutes=user_expire_minutes)

    def issue(self, subject_id: str, role: str, username: str | None = None) -> str:
        claims = {"sub": str(subject_id), "role": role}
        if username:
            claims["username"] = username
        expires = self.admin_expires if role == ADMIN_ROLE else self.user_expires
        return create_access_token(claims, self._secret_key, expires)

    def verify(self, token: str) -> dict:
        claims = decode_access_token(token, self._secret_key)
        if not claims.get("sub") or not claims.get("role"):
            raise TokenMalformed()
        return claims


def require_admin(claims: dict) -> dict:
    if claims.get("role") != ADMIN_ROLE:
        raise ForbiddenError(get_error_message("admin_required"))
    return claims

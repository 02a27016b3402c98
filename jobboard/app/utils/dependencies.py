from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from ..services.identity import IdentityService
from ..services.job_catalog import JobCatalog
from ..services.sessions import SessionTokens
from .error_handlers import AuthRequiredError

# auto_error=False so a missing header becomes our 401 envelope instead of FastAPI's 403.
security = HTTPBearer(auto_error=False)


def get_catalog(request: Request) -> JobCatalog:
    return request.app.state.catalog


def get_identity(request: Request) -> IdentityService:
    return request.app.state.identity


def get_tokens(request: Request) -> SessionTokens:
    return request.app.state.tokens


def get_current_user(
    credentials: HTTPAuthorizationCredentials | None = Depends(security),
    tokens: SessionTokens = Depends(get_tokens),
) -> dict:
    """Verified token claims for the caller. 401 without a token, 403 for a bad one."""
    if credentials is None or not credentials.credentials:
        raise AuthRequiredError()
    return tokens.verify(credentials.credentials)

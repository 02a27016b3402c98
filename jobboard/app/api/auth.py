import logging

from fastapi import APIRouter, Depends
from pydantic import BaseModel

from ..services.identity import IdentityService
from ..services.sessions import SessionTokens
from ..utils.dependencies import get_identity, get_tokens
from ..utils.error_handlers import AuthFailure

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/admin", tags=["Auth"])


class LoginRequest(BaseModel):
    username: str | None = None
    password: str | None = None


@router.post("/login")
def admin_login(
    payload: LoginRequest,
    identity: IdentityService = Depends(get_identity),
    tokens: SessionTokens = Depends(get_tokens),
):
    if not payload.username or not payload.password:
        raise AuthFailure()

    user = identity.verify_credentials(payload.username, payload.password)
    if user.role != "admin":
        logger.warning("Non-admin user %r attempted admin login", user.username)
        raise AuthFailure()

    token = tokens.issue(user.id, user.role, username=user.username)
    logger.info("Admin %r logged in", user.username)

    return {
        "success": True,
        "message": "Admin login successful",
        "token": token,
        "user": user.public(),
    }

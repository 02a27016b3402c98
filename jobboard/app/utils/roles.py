from fastapi import Depends

from ..services.identity import IdentityService
from ..services.sessions import require_admin
from .dependencies import get_current_user, get_identity
from .error_handlers import TokenMalformed


def _role_required(check):
    def check_role(
        user=Depends(get_current_user),
        identity: IdentityService = Depends(get_identity),
    ):
        claims = check(user)
        # The token subject must still exist in the users collection.
        if identity.get_user(claims["sub"]) is None:
            raise TokenMalformed()
        return claims
    return check_role


admin_only = _role_required(require_admin)

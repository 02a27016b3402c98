import logging
from datetime import datetime, timezone
from uuid import uuid4

from ..config import DEV_ADMIN_PASSWORD
from ..database import RecordStore
from ..models.user import User
from ..utils.error_handlers import AuthFailure
from ..utils.security import hash_password, verify_password

logger = logging.getLogger(__name__)

USERS = "users"


class IdentityService:
    """Owns the ``users`` collection: bootstrap admin and credential checks."""

    def __init__(
        self,
        store: RecordStore,
        *,
        admin_username: str,
        admin_email: str,
        admin_password: str,
        admin_name: str = "Admin",
        bcrypt_rounds: int = 12,
    ):
        self.store = store
        self.admin_username = admin_username
        self.admin_email = admin_email
        self.admin_name = admin_name
        self._admin_password = admin_password
        self.bcrypt_rounds = bcrypt_rounds
        self._dummy_hash = hash_password(uuid4().hex, rounds=bcrypt_rounds)

    def ensure_bootstrap_admin(self) -> User:
        """
        Create the bootstrap administrator if no admin exists yet.

        Safe to call on every startup: the check and the insert happen under the
        users lock, so repeated or concurrent calls never produce a second admin and
        nothing is written once one exists.
        """
        with self.store.transaction(USERS) as records:
            for record in records:
                if record.get("role") == "admin":
                    return User.model_validate(record)

            if self._admin_password == DEV_ADMIN_PASSWORD:
                logger.warning(
                    "Bootstrap admin %r uses the well-known development password; "
                    "set ADMIN_PASSWORD before exposing this server",
                    self.admin_username,
                )

            admin = User(
                id=uuid4().hex,
                username=self.admin_username,
                name=self.admin_name,
                email=self.admin_email,
                password=hash_password(self._admin_password, rounds=self.bcrypt_rounds),
                role="admin",
                created_at=datetime.now(timezone.utc).isoformat(),
            )
            records.append(admin.to_record())

        logger.info("Created bootstrap admin user %r", admin.username)
        return admin

    def verify_credentials(self, username: str, password: str) -> User:
        username = (username or "").strip()
        user = self._find_by_username(username) if username else None

        # An unknown user is checked against a dummy hash of the same cost, so
        # response time does not reveal whether the username exists.
        hashed = user.password if user else self.dummy_hash
        if not verify_password(password, hashed) or user is None:
            logger.warning("Failed login attempt for username %r", username)
            raise AuthFailure()
        return user

    @property
    def dummy_hash(self) -> str:
        return self._dummy_hash

    def get_user(self, user_id: str) -> User | None:
        for record in self.store.load(USERS):
            if record.get("id") == user_id:
                return User.model_validate(record)
        return None

    def _find_by_username(self, username: str) -> User | None:
        for record in self.store.load(USERS):
            if record.get("username") == username:
                return User.model_validate(record)
        return None

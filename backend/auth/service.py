# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Registration and login use-cases.

Security notes
--------------
* Login raises the *same* InvalidCredentials error whether the email doesn't
  exist or the password is wrong.  This prevents user-enumeration attacks.
  The log line does not distinguish the two causes either.
* ``is_admin`` is computed from role membership here, once, and baked into
  the token (see core/security.py for the staleness trade-off).
"""

from core.errors import DuplicateEmail, InvalidCredentials, Unauthenticated
from core.logger import logger
from core.security import Principal, issue_token
from auth.schemas import AuthResponse, MeResponse
from auth.store import CredentialStore
from models.user import ROLE_ADMIN, ROLE_USER, User


class AuthService:
    def __init__(self, store: CredentialStore):
        self.store = store

    def _respond(self, user: User, is_admin: bool) -> AuthResponse:
        return AuthResponse(
            token=issue_token(user.id, user.email, is_admin),
            user_id=user.id,
            email=user.email,
            display_name=user.display_name,
            is_admin=is_admin,
        )

    def register(self, email: str, display_name: str, password: str) -> AuthResponse:
        """Create a regular account and sign it in."""
        if self.store.find_by_email(email):
            raise DuplicateEmail()

        user = self.store.create(email, display_name, password)
        self.store.assign_role(user, ROLE_USER)

        logger.info("User registered | user_id=%d", user.id)
        return self._respond(user, is_admin=False)

    def login(self, email: str, password: str) -> AuthResponse:
        """Authenticate and return a signed token."""
        user = self.store.find_by_email(email)

        # Unified failure path – no information leaks about whether the email exists
        if not user or not self.store.verify_password(user, password):
            logger.warning("Login failed")
            raise InvalidCredentials()

        is_admin = ROLE_ADMIN in self.store.roles_of(user)
        logger.info("Login succeeded | user_id=%d admin=%s", user.id, is_admin)
        return self._respond(user, is_admin)

    def me(self, principal: Principal) -> MeResponse:
        """Profile of the caller; the admin flag comes from the token, not the store."""
        user = self.store.find_by_id(principal.user_id)
        if not user:
            raise Unauthenticated("User no longer exists.")
        return MeResponse(
            user_id=user.id,
            email=user.email,
            display_name=user.display_name,
            is_admin=principal.is_admin,
        )

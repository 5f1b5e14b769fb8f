# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Credential store – persistence of user identities and role memberships.

The store is a plain object built around a SQLAlchemy session and handed to
the workflows that need it (see auth/service.py).  Email uniqueness and the
password policy are enforced here, not by the callers.

Every write commits a single entity.  Unique-constraint races (two requests
registering the same email, two requests creating the same role) are caught
and resolved instead of surfacing as server errors.
"""

import re
from typing import Optional

from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import DuplicateEmail, ValidationError
from core.security import hash_password, verify_password as _verify_password
from models.user import ALL_ROLES, DISPLAY_NAME_MAX, EMAIL_MAX, Role, User

PASSWORD_MIN_LENGTH = 6

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")


def normalize_email(email: str) -> str:
    return (email or "").strip().lower()


def password_policy_errors(password: str) -> list[str]:
    """
    Return every reason *password* is rejected (empty list when acceptable).

    Policy: >= 6 chars, at least one digit.  Symbols are allowed, not required.
    """
    errors = []
    if len(password or "") < PASSWORD_MIN_LENGTH:
        errors.append(f"Passwords must be at least {PASSWORD_MIN_LENGTH} characters.")
    if not re.search(r"[0-9]", password or ""):
        errors.append("Passwords must have at least one digit ('0'-'9').")
    return errors


class CredentialStore:
    def __init__(self, db: Session):
        self.db = db

    # -- Lookups -----------------------------------------------------------

    def find_by_email(self, email: str) -> Optional[User]:
        key = normalize_email(email)
        if not key:
            return None
        return self.db.query(User).filter(User.normalized_email == key).first()

    def find_by_id(self, user_id: int) -> Optional[User]:
        return self.db.query(User).filter(User.id == user_id).first()

    def _find_role(self, role_name: str) -> Optional[Role]:
        return self.db.query(Role).filter(Role.name == role_name).first()

    def roles_of(self, user: User) -> set[str]:
        return {role.name for role in user.roles}

    # -- Writes ------------------------------------------------------------

    def create(self, email: str, display_name: str, raw_password: str) -> User:
        """
        Create a user with a hashed password.

        Raises ValidationError listing every rejected field, or DuplicateEmail
        if an account with the same email (any casing) already exists.
        """
        email = (email or "").strip()
        display_name = (display_name or "").strip()

        errors = []
        if not email:
            errors.append("Email is required.")
        elif len(email) > EMAIL_MAX or not _EMAIL_RE.match(email):
            errors.append(f"Email '{email}' is invalid.")
        if not display_name:
            errors.append("Display name is required.")
        elif len(display_name) > DISPLAY_NAME_MAX:
            errors.append(f"Display name must be at most {DISPLAY_NAME_MAX} characters.")
        errors.extend(password_policy_errors(raw_password))
        if errors:
            raise ValidationError("Registration failed.", errors)

        if self.find_by_email(email):
            raise DuplicateEmail()

        user = User(
            email=email,
            normalized_email=normalize_email(email),
            password_hash=hash_password(raw_password),
            display_name=display_name,
        )
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            # Lost a race against a concurrent registration of the same email
            self.db.rollback()
            raise DuplicateEmail()
        self.db.refresh(user)
        return user

    def verify_password(self, user: User, raw_password: str) -> bool:
        return _verify_password(raw_password or "", user.password_hash)

    def ensure_role(self, role_name: str) -> Role:
        """Return the named role, creating it if absent.  Safe to call concurrently."""
        if role_name not in ALL_ROLES:
            raise ValueError(f"Unknown role: {role_name!r}")

        role = self._find_role(role_name)
        if role:
            return role

        role = Role(name=role_name)
        self.db.add(role)
        try:
            self.db.commit()
        except IntegrityError:
            # Another request created it first – use theirs
            self.db.rollback()
            return self.db.query(Role).filter(Role.name == role_name).one()
        self.db.refresh(role)
        return role

    def assign_role(self, user: User, role_name: str) -> None:
        """Add *user* to *role_name*.  No-op if already a member."""
        role = self.ensure_role(role_name)
        if role in user.roles:
            return
        user.roles.append(role)
        try:
            self.db.commit()
        except IntegrityError:
            # Concurrent assignment of the same membership row
            self.db.rollback()

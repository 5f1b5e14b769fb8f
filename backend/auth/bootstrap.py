# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
First-run provisioning – ensures both roles exist and that the configured
administrator account exists.

Runs on every process start (see main.py) and from bin/seed_admin.py.  Every
step is idempotent: an existing admin is never overwritten, only given the
Admin role if it is missing one.

The admin credential comes from FIRST_ADMIN_EMAIL / FIRST_ADMIN_PASSWORD in
etc/app.conf or the environment.  Nothing is hard-coded; when they are unset
only the roles are seeded.
"""

from typing import Optional

from sqlalchemy.orm import Session

from core.config import settings
from core.errors import DuplicateEmail, ValidationError
from core.logger import logger
from auth.store import CredentialStore
from models.user import ALL_ROLES, ROLE_ADMIN, User


def seed_roles_and_admin(
    db: Session,
    admin_email: Optional[str] = None,
    admin_password: Optional[str] = None,
    admin_display_name: Optional[str] = None,
) -> Optional[User]:
    """
    Ensure roles and the bootstrap admin.  Returns the admin user, or None
    when no admin is configured or it could not be created.
    """
    admin_email = settings.first_admin_email if admin_email is None else admin_email
    admin_password = settings.first_admin_password if admin_password is None else admin_password
    admin_display_name = admin_display_name or settings.first_admin_display_name or "Admin"

    store = CredentialStore(db)
    for role_name in ALL_ROLES:
        store.ensure_role(role_name)

    if not admin_email:
        logger.warning("FIRST_ADMIN_EMAIL not set – skipping admin bootstrap")
        return None

    admin = store.find_by_email(admin_email)
    if admin:
        logger.info("Bootstrap admin already exists – skipping creation")
    else:
        if not admin_password:
            logger.warning("FIRST_ADMIN_PASSWORD not set – cannot create bootstrap admin")
            return None
        try:
            admin = store.create(admin_email, admin_display_name, admin_password)
        except ValidationError as exc:
            logger.error("Bootstrap admin rejected: %s", "; ".join(exc.errors))
            return None
        except DuplicateEmail:
            # Created by a concurrently starting worker
            admin = store.find_by_email(admin_email)
        else:
            logger.info("Bootstrap admin created | user_id=%d", admin.id)

    store.assign_role(admin, ROLE_ADMIN)
    return admin

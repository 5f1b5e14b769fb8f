# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Bootstrap script – creates the tables, both roles and the first admin user.

The service runs the same step on startup; this script exists so operators
can provision a database before the first deploy:
    python bin/seed_admin.py

The script reads FIRST_ADMIN_EMAIL and FIRST_ADMIN_PASSWORD from etc/app.conf
or the environment.  After the row is inserted those values are no longer
used by the application.
"""

import sys
import os

# ---------------------------------------------------------------------------
# Path setup so backend modules are importable
# ---------------------------------------------------------------------------
# bin/seed_admin.py  →  ../  →  project root
_PROJECT_ROOT = os.path.abspath(os.path.join(os.path.dirname(__file__), ".."))
_BACKEND_DIR  = os.path.join(_PROJECT_ROOT, "backend")
if _BACKEND_DIR not in sys.path:
    sys.path.insert(0, _BACKEND_DIR)

from auth.bootstrap import seed_roles_and_admin  # noqa: E402
from core.config import settings                 # noqa: E402
from database import SessionLocal, init_db       # noqa: E402


def seed() -> int:
    init_db()
    db = SessionLocal()
    try:
        admin = seed_roles_and_admin(db)
        admin_email = admin.email if admin else None
    finally:
        db.close()

    if admin_email is None:
        print("[seed_admin] Roles ensured; no admin account was created (see log/app.log).")
        return 1 if settings.first_admin_email else 0
    print(f"[seed_admin] Admin '{admin_email}' is present with the Admin role.")
    return 0


if __name__ == "__main__":
    sys.exit(seed())

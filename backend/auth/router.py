# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Auth endpoints – register, login, current-user info.

Business rules live in auth/service.py; handlers only wire the request to
the service and let AppError subclasses propagate to the handlers in main.py.
"""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session

from database import get_db
from core.security import Principal, get_current_principal
from auth.schemas import AuthResponse, LoginRequest, MeResponse, RegisterRequest
from auth.service import AuthService
from auth.store import CredentialStore

router = APIRouter(prefix="/api/auth", tags=["auth"])


def get_auth_service(db: Session = Depends(get_db)) -> AuthService:
    return AuthService(CredentialStore(db))


# ---------------------------------------------------------------------------
# POST /api/auth/register
# ---------------------------------------------------------------------------


@router.post("/register", response_model=AuthResponse)
def register(body: RegisterRequest, service: AuthService = Depends(get_auth_service)):
    """Create a regular user account and return a signed token."""
    return service.register(body.email, body.display_name, body.password)


# ---------------------------------------------------------------------------
# POST /api/auth/login
# ---------------------------------------------------------------------------


@router.post("/login", response_model=AuthResponse)
def login(body: LoginRequest, service: AuthService = Depends(get_auth_service)):
    """Authenticate and return a signed token."""
    return service.login(body.email, body.password)


# ---------------------------------------------------------------------------
# GET /api/auth/me
# ---------------------------------------------------------------------------


@router.get("/me", response_model=MeResponse)
def me(
    principal: Principal = Depends(get_current_principal),
    service: AuthService = Depends(get_auth_service),
):
    """Return the authenticated user's public profile (no secrets)."""
    return service.me(principal)

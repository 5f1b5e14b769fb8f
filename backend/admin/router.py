# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Admin endpoints – recipe moderation.

Every endpoint in this router is guarded by ``require_admin``.  A request
that carries a valid token without the admin claim receives 403 before any
business logic runs, whether or not the recipe id exists.
"""

from typing import List

from fastapi import APIRouter, Depends, Response, status

from core.security import Principal, require_admin
from recipes.router import get_recipe_service
from recipes.schemas import RecipeResponse
from recipes.service import RecipeService

router = APIRouter(prefix="/api/admin", tags=["admin"])


# ---------------------------------------------------------------------------
# GET /api/admin/recipes/pending  – moderation queue
# ---------------------------------------------------------------------------


@router.get("/recipes/pending", response_model=List[RecipeResponse])
def list_pending(
    admin: Principal = Depends(require_admin),
    service: RecipeService = Depends(get_recipe_service),
):
    """Return every recipe still waiting for moderation, newest first."""
    return [RecipeResponse.from_recipe(r) for r in service.list_pending(admin)]


# ---------------------------------------------------------------------------
# POST /api/admin/recipes/{id}/approve
# ---------------------------------------------------------------------------


@router.post("/recipes/{recipe_id}/approve")
def approve_recipe(
    recipe_id: int,
    admin: Principal = Depends(require_admin),
    service: RecipeService = Depends(get_recipe_service),
):
    """Pending / Disabled → Approved.  Approving twice is a no-op."""
    service.approve(recipe_id, admin)
    return Response(status_code=status.HTTP_200_OK)


# ---------------------------------------------------------------------------
# POST /api/admin/recipes/{id}/disable
# ---------------------------------------------------------------------------


@router.post("/recipes/{recipe_id}/disable")
def disable_recipe(
    recipe_id: int,
    admin: Principal = Depends(require_admin),
    service: RecipeService = Depends(get_recipe_service),
):
    """Any state → Disabled.  Disabling twice is a no-op."""
    service.disable(recipe_id, admin)
    return Response(status_code=status.HTTP_200_OK)

# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Public recipe endpoints – listing, submission, lookup.

* GET  /api/recipes          anonymous; Approved recipes only.
* POST /api/recipes          bearer token; new recipes start Pending.
* GET  /api/recipes/mine     bearer token; the caller's recipes in any state.
* GET  /api/recipes/{id}     anonymous or bearer; hidden recipes are 404.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query, status
from sqlalchemy.orm import Session

from database import get_db
from core.security import Principal, get_current_principal, get_optional_principal
from recipes.schemas import RecipeCreate, RecipeResponse
from recipes.service import RecipeService

router = APIRouter(prefix="/api/recipes", tags=["recipes"])


def get_recipe_service(db: Session = Depends(get_db)) -> RecipeService:
    return RecipeService(db)


@router.get("", response_model=List[RecipeResponse])
def list_recipes(
    search: Optional[str] = Query(None, description="Case-insensitive title / description match"),
    service: RecipeService = Depends(get_recipe_service),
):
    return [RecipeResponse.from_recipe(r) for r in service.list_public(search)]


@router.post("", response_model=RecipeResponse, status_code=status.HTTP_201_CREATED)
def submit_recipe(
    body: RecipeCreate,
    principal: Principal = Depends(get_current_principal),
    service: RecipeService = Depends(get_recipe_service),
):
    """Submit a recipe for moderation."""
    return RecipeResponse.from_recipe(service.submit(body, principal))


@router.get("/mine", response_model=List[RecipeResponse])
def my_recipes(
    principal: Principal = Depends(get_current_principal),
    service: RecipeService = Depends(get_recipe_service),
):
    return [RecipeResponse.from_recipe(r) for r in service.list_mine(principal)]


@router.get("/{recipe_id}", response_model=RecipeResponse)
def get_recipe(
    recipe_id: int,
    principal: Optional[Principal] = Depends(get_optional_principal),
    service: RecipeService = Depends(get_recipe_service),
):
    return RecipeResponse.from_recipe(service.get_visible(recipe_id, principal))

# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Recipe submission, moderation and queries.

Visibility rules
----------------
* Public listings and anonymous lookups only ever see Approved recipes.
* The author sees their own recipes in every state.
* Admins see everything; only admins can approve or disable.

Listings are newest first, ties broken by id, so repeated calls over the
same data return the same order.
"""

from typing import Optional

from sqlalchemy import func, or_
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from core.errors import Forbidden, NotFound, ValidationError
from core.logger import logger
from core.security import Principal
from models.recipe import INGREDIENT_NAME_MAX, Ingredient, Recipe, RecipeState, RecipeStep, RecipeTag, Tag
from recipes import moderation
from recipes.parsing import (
    ParsedIngredient,
    ParsedStep,
    number_steps,
    parse_ingredient_line,
    parse_ingredient_lines,
    parse_step_lines,
)
from recipes.schemas import IngredientIn, RecipeCreate


def _clean(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    return value or None


def _unique_tags(tags: list[str]) -> list[str]:
    """Trim, drop blanks and case-insensitive duplicates; keep first-seen order."""
    seen = set()
    result = []
    for tag in tags:
        name = (tag or "").strip()
        if not name or name.lower() in seen:
            continue
        seen.add(name.lower())
        result.append(name)
    return result


def _to_ingredient(entry) -> Optional[ParsedIngredient]:
    if isinstance(entry, IngredientIn):
        name = (entry.name or "").strip()
        if not name:
            return None
        return ParsedIngredient(name=name, quantity=_clean(entry.quantity), unit=_clean(entry.unit))
    return parse_ingredient_line(entry)


def _to_ingredients(entries) -> list[ParsedIngredient]:
    """Structured entries, raw lines, or one multi-line text block."""
    if isinstance(entries, str):
        return parse_ingredient_lines(entries)
    return [i for i in (_to_ingredient(e) for e in entries) if i]


def _to_steps(entries) -> list[ParsedStep]:
    if isinstance(entries, str):
        return parse_step_lines(entries)
    return number_steps(e if isinstance(e, str) else e.description for e in entries)


class RecipeService:
    def __init__(self, db: Session):
        self.db = db

    def _base_query(self):
        return self.db.query(Recipe).order_by(Recipe.created_at.desc(), Recipe.id.desc())

    def _get(self, recipe_id: int) -> Recipe:
        recipe = self.db.query(Recipe).filter(Recipe.id == recipe_id).first()
        if not recipe:
            raise NotFound("Recipe not found.")
        return recipe

    def _find_tag(self, name: str) -> Optional[Tag]:
        return self.db.query(Tag).filter(func.lower(Tag.name) == name.lower()).first()

    def _tag(self, name: str) -> Tag:
        """Existing tag matched case-insensitively, or a new one left for the caller's commit."""
        return self._find_tag(name) or Tag(name=name)

    # -- Submission ----------------------------------------------------------

    def submit(self, payload: RecipeCreate, principal: Principal) -> Recipe:
        """Create a recipe owned by the caller.  Always starts Pending."""
        title = (payload.title or "").strip()
        if not title:
            raise ValidationError("Title is required.")

        tag_names = _unique_tags(payload.tags)
        ingredients = _to_ingredients(payload.ingredients)
        too_long = [i.name for i in ingredients if len(i.name) > INGREDIENT_NAME_MAX]
        if too_long:
            raise ValidationError(f"Ingredient names must be at most {INGREDIENT_NAME_MAX} characters.")
        steps = _to_steps(payload.steps)

        # Tags, recipe and children go in with one commit.  A unique-name
        # conflict means another request created one of the new tags first:
        # roll back and rebuild once against the committed rows.
        recipe = self._build(payload, title, tag_names, ingredients, steps, principal)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.warning("Tag created concurrently, retrying submit | author_id=%d", principal.user_id)
            recipe = self._build(payload, title, tag_names, ingredients, steps, principal)
            self.db.commit()
        self.db.refresh(recipe)

        logger.info("Recipe submitted | recipe_id=%d author_id=%d", recipe.id, principal.user_id)
        return recipe

    def _build(self, payload, title, tag_names, ingredients, steps, principal) -> Recipe:
        recipe = Recipe(
            title=title,
            short_description=_clean(payload.short_description),
            image_url=_clean(payload.image_url),
            instructions_summary=_clean(payload.instructions_summary),
            author_id=principal.user_id,
            state=moderation.INITIAL_STATE,
        )
        recipe.tag_links = [
            RecipeTag(tag=self._tag(name), position=i) for i, name in enumerate(tag_names)
        ]
        recipe.ingredients = [
            Ingredient(position=i, name=ing.name, quantity=ing.quantity, unit=ing.unit)
            for i, ing in enumerate(ingredients)
        ]
        recipe.steps = [
            RecipeStep(step_number=s.step_number, description=s.description) for s in steps
        ]
        self.db.add(recipe)
        return recipe

    # -- Moderation ------------------------------------------------------------

    def _moderate(self, recipe_id: int, principal: Principal, target: RecipeState) -> Recipe:
        # Checked before the lookup so non-admins learn nothing about ids
        if not principal.is_admin:
            raise Forbidden()

        recipe = self._get(recipe_id)
        previous = recipe.state
        if moderation.transition(recipe, target):
            self.db.commit()
            logger.info(
                "Recipe moderated | recipe_id=%d %s -> %s by user_id=%d",
                recipe.id,
                RecipeState(previous).value,
                target.value,
                principal.user_id,
            )
        return recipe

    def approve(self, recipe_id: int, principal: Principal) -> Recipe:
        return self._moderate(recipe_id, principal, RecipeState.APPROVED)

    def disable(self, recipe_id: int, principal: Principal) -> Recipe:
        return self._moderate(recipe_id, principal, RecipeState.DISABLED)

    # -- Queries ---------------------------------------------------------------

    def list_public(self, search: Optional[str] = None) -> list[Recipe]:
        """Approved recipes, optionally filtered by title / description substring."""
        q = self._base_query().filter(Recipe.state.in_(list(moderation.PUBLIC_STATES)))

        term = (search or "").strip()
        if term:
            q = q.filter(
                or_(
                    Recipe.title.icontains(term, autoescape=True),
                    Recipe.short_description.icontains(term, autoescape=True),
                )
            )
        return q.all()

    def list_pending(self, principal: Principal) -> list[Recipe]:
        if not principal.is_admin:
            raise Forbidden()
        return self._base_query().filter(Recipe.state == RecipeState.PENDING).all()

    def list_mine(self, principal: Principal) -> list[Recipe]:
        return self._base_query().filter(Recipe.author_id == principal.user_id).all()

    def get_visible(self, recipe_id: int, principal: Optional[Principal] = None) -> Recipe:
        """
        Load one recipe as seen by *principal* (None = anonymous).  Hidden
        recipes raise NotFound, the same as missing ones.
        """
        recipe = self._get(recipe_id)
        if moderation.is_publicly_visible(recipe):
            return recipe
        if principal and (principal.is_admin or principal.user_id == recipe.author_id):
            return recipe
        raise NotFound("Recipe not found.")

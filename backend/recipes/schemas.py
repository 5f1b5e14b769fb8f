# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""Pydantic request / response models for the recipe endpoints."""

from datetime import datetime
from typing import Annotated, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel

from models.recipe import (
    IMAGE_URL_MAX,
    INGREDIENT_NAME_MAX,
    QUANTITY_MAX,
    SHORT_DESCRIPTION_MAX,
    TAG_NAME_MAX,
    TITLE_MAX,
    UNIT_MAX,
    Recipe,
    RecipeState,
)

_CAMEL = ConfigDict(alias_generator=to_camel, populate_by_name=True, from_attributes=True)


# -- Requests --------------------------------------------------------------
# Ingredients and steps may arrive structured, as a list of raw text lines,
# or as one multi-line text block; raw text goes through recipes/parsing.py.
# Client step numbers are ignored – the server numbers steps by input order.
# String limits mirror the column sizes in models/recipe.py.

TagName = Annotated[str, Field(max_length=TAG_NAME_MAX)]
IngredientLine = Annotated[str, Field(max_length=INGREDIENT_NAME_MAX)]


class IngredientIn(BaseModel):
    model_config = _CAMEL

    name: str = Field(max_length=INGREDIENT_NAME_MAX)
    quantity: Optional[str] = Field(default=None, max_length=QUANTITY_MAX)
    unit: Optional[str] = Field(default=None, max_length=UNIT_MAX)


class StepIn(BaseModel):
    model_config = _CAMEL

    description: str
    step_number: Optional[int] = None


class RecipeCreate(BaseModel):
    model_config = _CAMEL

    title: str = Field(max_length=TITLE_MAX)
    short_description: Optional[str] = Field(default=None, max_length=SHORT_DESCRIPTION_MAX)
    image_url: Optional[str] = Field(default=None, max_length=IMAGE_URL_MAX)
    instructions_summary: Optional[str] = None
    tags: List[TagName] = Field(default_factory=list)
    ingredients: Union[str, List[Union[IngredientIn, IngredientLine]]] = Field(default_factory=list)
    steps: Union[str, List[Union[StepIn, str]]] = Field(default_factory=list)


# -- Responses -------------------------------------------------------------


class IngredientOut(BaseModel):
    model_config = _CAMEL

    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None


class StepOut(BaseModel):
    model_config = _CAMEL

    step_number: int
    description: str


class RecipeResponse(BaseModel):
    model_config = _CAMEL

    id: int
    title: str
    short_description: Optional[str] = None
    image_url: Optional[str] = None
    instructions_summary: Optional[str] = None
    tags: List[str]
    ingredients: List[IngredientOut]
    steps: List[StepOut]
    state: RecipeState
    is_approved: bool
    created_by_id: int
    created_by_display_name: Optional[str] = None
    # Same value as created_by_display_name; the web client reads recipe.author
    author: Optional[str] = None
    created_at_utc: Optional[datetime] = None

    @classmethod
    def from_recipe(cls, recipe: Recipe) -> "RecipeResponse":
        author = recipe.author.display_name if recipe.author else None
        return cls(
            id=recipe.id,
            title=recipe.title,
            short_description=recipe.short_description,
            image_url=recipe.image_url,
            instructions_summary=recipe.instructions_summary,
            tags=recipe.tags,
            ingredients=[IngredientOut.model_validate(i) for i in recipe.ingredients],
            steps=[StepOut.model_validate(s) for s in recipe.steps],
            state=recipe.state,
            is_approved=recipe.state == RecipeState.APPROVED,
            created_by_id=recipe.author_id,
            created_by_display_name=author,
            author=author,
            created_at_utc=recipe.created_at,
        )

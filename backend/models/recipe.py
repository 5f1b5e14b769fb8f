# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""Recipe ORM models – recipes, their tags, ingredients and steps."""

import enum

from sqlalchemy import Column, Integer, String, Text, DateTime, Enum, ForeignKey
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from database import Base
from models.user import User

# Column sizes – request schemas and the ingredient parser respect these
TITLE_MAX = 200
SHORT_DESCRIPTION_MAX = 500
IMAGE_URL_MAX = 2048
TAG_NAME_MAX = 64
INGREDIENT_NAME_MAX = 255
QUANTITY_MAX = 64
UNIT_MAX = 64


class RecipeState(str, enum.Enum):
    """Moderation state.  Transitions live in recipes/moderation.py."""

    PENDING = "Pending"
    APPROVED = "Approved"
    DISABLED = "Disabled"


class Tag(Base):
    __tablename__ = "tags"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(TAG_NAME_MAX), unique=True, nullable=False)


class RecipeTag(Base):
    """Association row; ``position`` keeps the author's display order."""

    __tablename__ = "recipe_tags"

    recipe_id = Column(Integer, ForeignKey("recipes.id", ondelete="CASCADE"), primary_key=True)
    tag_id = Column(Integer, ForeignKey("tags.id", ondelete="CASCADE"), primary_key=True)
    position = Column(Integer, nullable=False, default=0)

    tag = relationship(Tag, lazy="joined")


class Ingredient(Base):
    __tablename__ = "ingredients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    position = Column(Integer, nullable=False)
    name = Column(String(INGREDIENT_NAME_MAX), nullable=False)
    # Free text on purpose: "1/2", "a pinch", "2-3"
    quantity = Column(String(QUANTITY_MAX), nullable=True)
    unit = Column(String(UNIT_MAX), nullable=True)


class RecipeStep(Base):
    __tablename__ = "recipe_steps"

    id = Column(Integer, primary_key=True, autoincrement=True)
    recipe_id = Column(
        Integer,
        ForeignKey("recipes.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    step_number = Column(Integer, nullable=False)   # 1-based, assigned server-side
    description = Column(Text, nullable=False)


class Recipe(Base):
    __tablename__ = "recipes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    title = Column(String(TITLE_MAX), nullable=False)
    short_description = Column(String(SHORT_DESCRIPTION_MAX), nullable=True)
    image_url = Column(String(IMAGE_URL_MAX), nullable=True)
    instructions_summary = Column(Text, nullable=True)
    author_id = Column(
        Integer,
        ForeignKey("users.id"),
        nullable=False,
        index=True,
    )
    state = Column(
        Enum(
            RecipeState,
            name="recipe_state",
            values_callable=lambda states: [s.value for s in states],
        ),
        nullable=False,
        default=RecipeState.PENDING,
        index=True,
    )
    created_at = Column(DateTime(timezone=True), server_default=func.now(), nullable=False)

    author = relationship(User, lazy="joined")
    tag_links = relationship(
        RecipeTag,
        order_by=RecipeTag.position,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    ingredients = relationship(
        Ingredient,
        order_by=Ingredient.position,
        cascade="all, delete-orphan",
        lazy="selectin",
    )
    steps = relationship(
        RecipeStep,
        order_by=RecipeStep.step_number,
        cascade="all, delete-orphan",
        lazy="selectin",
    )

    @property
    def tags(self) -> list[str]:
        return [link.tag.name for link in self.tag_links]

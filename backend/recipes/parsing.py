# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Lenient parsing of free-text ingredient and step lines.

Ingredient lines are expected to look like "quantity unit name"
("2 cups flour") but anything is accepted: a line that doesn't fit the shape
still becomes an ingredient, never an error.
"""

from dataclasses import dataclass
from typing import Iterable, Optional

from models.recipe import QUANTITY_MAX, UNIT_MAX


@dataclass
class ParsedIngredient:
    name: str
    quantity: Optional[str] = None
    unit: Optional[str] = None


@dataclass
class ParsedStep:
    step_number: int
    description: str


def parse_ingredient_line(line: str) -> Optional[ParsedIngredient]:
    """
    Best-effort split of one ingredient line.

    * blank                → None
    * one token            → bare name ("salt")
    * two tokens           → quantity + unit, name repeats both ("2 eggs")
    * three or more tokens → quantity, unit, rest is the name

    A quantity or unit too long for its column is not a quantity or unit;
    the whole line is kept as the name instead.
    """
    text = (line or "").strip()
    if not text:
        return None

    parts = text.split()
    if len(parts) < 2:
        return ParsedIngredient(name=text)

    quantity, unit = parts[0], parts[1]
    if len(quantity) > QUANTITY_MAX or len(unit) > UNIT_MAX:
        return ParsedIngredient(name=" ".join(parts))
    name = " ".join(parts[2:]) or f"{quantity} {unit}"
    return ParsedIngredient(name=name, quantity=quantity, unit=unit)


def parse_ingredient_lines(text: str) -> list[ParsedIngredient]:
    parsed = (parse_ingredient_line(line) for line in (text or "").splitlines())
    return [p for p in parsed if p is not None]


def number_steps(descriptions: Iterable[str]) -> list[ParsedStep]:
    """Drop blank descriptions and number the rest 1..n in input order."""
    cleaned = [d.strip() for d in descriptions if d and d.strip()]
    return [ParsedStep(step_number=i, description=d) for i, d in enumerate(cleaned, start=1)]


def parse_step_lines(text: str) -> list[ParsedStep]:
    return number_steps((text or "").splitlines())

# ---------------------------------------------------------------------------
# Author  : Kyle <kyle@hacking-linux.com>
# Version : 20261017v1
# ---------------------------------------------------------------------------
"""
Recipe moderation state machine.

    Pending ──approve──▶ Approved ◀──approve── Disabled
       │                    │                     ▲
       └──────disable───────┴──────disable────────┘

Every recipe starts Pending.  Nothing returns to Pending.  Approving an
Approved recipe and disabling a Disabled one are successful no-ops.
"""

from core.errors import ValidationError
from models.recipe import Recipe, RecipeState

INITIAL_STATE = RecipeState.PENDING

# target state → states it may be entered from
_ALLOWED_FROM = {
    RecipeState.APPROVED: {RecipeState.PENDING, RecipeState.DISABLED, RecipeState.APPROVED},
    RecipeState.DISABLED: {RecipeState.PENDING, RecipeState.APPROVED, RecipeState.DISABLED},
    RecipeState.PENDING: set(),
}

# Only Approved recipes show up in public listings
PUBLIC_STATES = frozenset({RecipeState.APPROVED})


def can_transition(current: RecipeState, target: RecipeState) -> bool:
    return current in _ALLOWED_FROM.get(target, set())


def transition(recipe: Recipe, target: RecipeState) -> bool:
    """
    Move *recipe* to *target* in memory.  Returns True when the state
    actually changed, False for an idempotent repeat.

    Raises ValidationError for a move the machine does not define.
    """
    current = RecipeState(recipe.state)
    if not can_transition(current, target):
        raise ValidationError(f"Cannot move recipe from {current.value} to {target.value}.")
    if current == target:
        return False
    recipe.state = target
    return True


def is_publicly_visible(recipe: Recipe) -> bool:
    return RecipeState(recipe.state) in PUBLIC_STATES

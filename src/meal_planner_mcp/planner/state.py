"""
Meal plan selection state.

A reducer threads an immutable MealPlannerState through actions:
- ToggleRecipe: add/remove a recipe from the plan
- ToggleOwnedIngredient: mark/unmark an ingredient as already owned
- ResetSelections: clear everything

After every toggle the shopping list, the items left to buy and their
total are recomputed from scratch against the recipe catalog the reducer
was built with.
"""

from dataclasses import dataclass
from typing import Callable, FrozenSet, Iterable, Tuple, Union

from .aggregation import aggregate_ingredients
from .models import AggregatedIngredient, Recipe
from .ownership import calculate_total_price, get_ingredients_left_to_buy


@dataclass(frozen=True)
class MealPlannerState:
    selected_recipe_ids: FrozenSet[str] = frozenset()
    owned_ingredient_ids: FrozenSet[str] = frozenset()
    aggregated_ingredients: Tuple[AggregatedIngredient, ...] = ()
    remaining_to_buy: Tuple[AggregatedIngredient, ...] = ()
    total_price: float = 0.0


@dataclass(frozen=True)
class ToggleRecipe:
    recipe_id: str


@dataclass(frozen=True)
class ToggleOwnedIngredient:
    ingredient_id: str


@dataclass(frozen=True)
class ResetSelections:
    pass


MealPlannerAction = Union[ToggleRecipe, ToggleOwnedIngredient, ResetSelections]
MealPlannerReducer = Callable[[MealPlannerState, MealPlannerAction], MealPlannerState]


def create_initial_state() -> MealPlannerState:
    return MealPlannerState()


def _toggle(ids: FrozenSet[str], item_id: str) -> FrozenSet[str]:
    if item_id in ids:
        return ids - {item_id}
    return ids | {item_id}


def recalculate_state(
    selected_recipe_ids: FrozenSet[str],
    owned_ingredient_ids: FrozenSet[str],
    all_recipes: Iterable[Recipe]
) -> MealPlannerState:
    """
    Build a state with derived fields computed from the two id sets.

    Selected recipes are taken in catalog order, so the aggregated list
    does not depend on the order recipes were toggled.
    """
    selected_recipes = [
        recipe for recipe in all_recipes
        if recipe.id in selected_recipe_ids
    ]

    aggregated = aggregate_ingredients(selected_recipes)
    remaining = get_ingredients_left_to_buy(aggregated, owned_ingredient_ids)

    return MealPlannerState(
        selected_recipe_ids=selected_recipe_ids,
        owned_ingredient_ids=owned_ingredient_ids,
        aggregated_ingredients=tuple(aggregated),
        remaining_to_buy=tuple(remaining),
        total_price=calculate_total_price(remaining),
    )


def create_meal_planner_reducer(all_recipes: Iterable[Recipe]) -> MealPlannerReducer:
    """
    Create a reducer bound to a snapshot of the recipe catalog.

    The catalog is copied; refreshing recipes means creating a new reducer.

    Args:
        all_recipes: Full recipe catalog

    Returns:
        Function (state, action) -> new state
    """
    catalog: Tuple[Recipe, ...] = tuple(all_recipes)

    def meal_planner_reducer(
        state: MealPlannerState,
        action: MealPlannerAction
    ) -> MealPlannerState:
        if isinstance(action, ToggleRecipe):
            return recalculate_state(
                _toggle(state.selected_recipe_ids, action.recipe_id),
                state.owned_ingredient_ids,
                catalog
            )

        if isinstance(action, ToggleOwnedIngredient):
            return recalculate_state(
                state.selected_recipe_ids,
                _toggle(state.owned_ingredient_ids, action.ingredient_id),
                catalog
            )

        if isinstance(action, ResetSelections):
            return create_initial_state()

        return state

    return meal_planner_reducer

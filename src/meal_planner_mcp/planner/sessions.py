"""
Meal plan session business logic.

Provides functions for:
- Starting a meal plan over a snapshot of the recipe catalog
- Selecting recipes and marking ingredients as already owned
- Building the shopping list with totals and spend target progress
- Recommending recipes that reuse ingredients of the current plan
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Sequence

from .config import load_config
from .costs import calculate_recipe_price
from .models import AggregatedIngredient, Recipe
from .ownership import separate_ingredients_by_shelf, target_progress
from .repository import list_recipes
from .similarity import (
    calculate_general_similarity_score,
    calculate_recommendation_score,
    sort_recipes_by_recommendation,
)
from .state import (
    MealPlannerAction,
    MealPlannerReducer,
    MealPlannerState,
    ResetSelections,
    ToggleOwnedIngredient,
    ToggleRecipe,
    create_initial_state,
    create_meal_planner_reducer,
)


@dataclass
class MealPlanSession:
    """Selection state bound to the catalog snapshot it was started with."""

    recipes: Sequence[Recipe]
    reducer: MealPlannerReducer
    state: MealPlannerState

    def dispatch(self, action: MealPlannerAction) -> MealPlannerState:
        self.state = self.reducer(self.state, action)
        return self.state

    def find_recipe(self, recipe_id: str) -> Optional[Recipe]:
        for recipe in self.recipes:
            if recipe.id == recipe_id:
                return recipe
        return None

    def selected_recipes(self) -> List[Recipe]:
        return [r for r in self.recipes if r.id in self.state.selected_recipe_ids]


# Current session (lazy started)
_session: Optional[MealPlanSession] = None


def start_meal_plan(recipes: Optional[Sequence[Recipe]] = None) -> Dict[str, Any]:
    """
    Start a new meal plan with an empty selection.

    Args:
        recipes: Recipe catalog to plan from (defaults to all saved recipes)

    Returns:
        Session summary
    """
    global _session

    catalog = tuple(recipes if recipes is not None else list_recipes())
    _session = MealPlanSession(
        recipes=catalog,
        reducer=create_meal_planner_reducer(catalog),
        state=create_initial_state(),
    )

    return {
        'success': True,
        'recipe_count': len(catalog),
        'message': f"Started a new meal plan with {len(catalog)} recipes available"
    }


def get_session() -> MealPlanSession:
    """Get the current session, starting one from saved recipes if needed."""
    if _session is None:
        start_meal_plan()
    return _session


def end_session() -> None:
    """Drop the current session (for testing purposes)."""
    global _session
    _session = None


def _item_to_dict(item: AggregatedIngredient) -> Dict[str, Any]:
    ingredient = item.ingredient
    return {
        'ingredient_id': ingredient.id,
        'name': ingredient.name,
        'amount': item.amount,
        'unit': ingredient.unit,
        'shelf': ingredient.shelf,
        'total_cost': round(item.total_cost, 2),
        'store_url': ingredient.source.url,
    }


def _plan_summary(session: MealPlanSession) -> Dict[str, Any]:
    state = session.state
    return {
        'selected_count': len(state.selected_recipe_ids),
        'items_to_buy': len(state.remaining_to_buy),
        'owned_count': len(state.owned_ingredient_ids),
        'total_price': round(state.total_price, 2),
    }


def toggle_recipe(recipe_id: str) -> Dict[str, Any]:
    """
    Add a recipe to the plan, or remove it if already selected.

    Unknown recipe ids are accepted but contribute no ingredients.
    """
    session = get_session()
    state = session.dispatch(ToggleRecipe(recipe_id))
    recipe = session.find_recipe(recipe_id)

    result = {
        'success': True,
        'recipe_id': recipe_id,
        'recipe_name': recipe.name if recipe else None,
        'selected': recipe_id in state.selected_recipe_ids,
        'summary': _plan_summary(session),
    }
    if recipe is None:
        result['warning'] = f"Recipe '{recipe_id}' is not in the current catalog"
    return result


def toggle_owned_ingredient(ingredient_id: str) -> Dict[str, Any]:
    """Mark an ingredient as already owned, or unmark it."""
    session = get_session()
    state = session.dispatch(ToggleOwnedIngredient(ingredient_id))

    return {
        'success': True,
        'ingredient_id': ingredient_id,
        'owned': ingredient_id in state.owned_ingredient_ids,
        'summary': _plan_summary(session),
    }


def reset_meal_plan() -> Dict[str, Any]:
    session = get_session()
    session.dispatch(ResetSelections())
    return {
        'success': True,
        'message': 'Cleared selected recipes and owned ingredients',
        'summary': _plan_summary(session),
    }


def get_shopping_list(target_amount: Optional[float] = None) -> Dict[str, Any]:
    """
    Get the shopping list for the current plan.

    Args:
        target_amount: Spend target (defaults to configured target_amount)

    Returns:
        Items left to buy split into shelf/non-shelf, owned items, totals
        and progress toward the target
    """
    config = load_config()
    session = get_session()
    state = session.state
    target = config.target_amount if target_amount is None else target_amount

    separated = separate_ingredients_by_shelf(state.remaining_to_buy)
    owned = [
        item for item in state.aggregated_ingredients
        if item.ingredient.id in state.owned_ingredient_ids
    ]

    return {
        'success': True,
        'currency_symbol': config.currency_symbol,
        'recipes': [
            {
                'recipe_id': recipe.id,
                'name': recipe.name,
                'price': round(calculate_recipe_price(recipe), 2),
            }
            for recipe in session.selected_recipes()
        ],
        'shelf_items': [_item_to_dict(i) for i in separated['shelf_ingredients']],
        'fresh_items': [_item_to_dict(i) for i in separated['non_shelf_ingredients']],
        'already_owned': [_item_to_dict(i) for i in owned],
        'total_price': round(state.total_price, 2),
        'target': target_progress(state.total_price, target),
        'summary': _plan_summary(session),
    }


def get_recommended_recipes(limit: Optional[int] = None) -> Dict[str, Any]:
    """
    Get recipes ordered for building the plan.

    Selected recipes come first, then the rest ranked by ingredient
    overlap with the selection.

    Args:
        limit: Max unselected suggestions (defaults to recommendation_limit)

    Returns:
        Ordered recipes with score, price and selected flag
    """
    config = load_config()
    session = get_session()
    limit = config.recommendation_limit if limit is None else limit

    selected = session.selected_recipes()
    selected_ids = [recipe.id for recipe in selected]
    ordered = sort_recipes_by_recommendation(
        session.recipes, selected_ids, config.avoid_shelf_items
    )

    suggestions = []
    unselected_count = 0
    for recipe in ordered:
        is_selected = recipe.id in session.state.selected_recipe_ids
        if not is_selected:
            if unselected_count >= limit:
                break
            unselected_count += 1

        suggestions.append({
            'recipe_id': recipe.id,
            'name': recipe.name,
            'selected': is_selected,
            'score': round(calculate_recommendation_score(
                recipe, selected, config.avoid_shelf_items), 3),
            'price': round(calculate_recipe_price(recipe), 2),
        })

    return {
        'success': True,
        'recipes': suggestions,
        'summary': {
            'selected_count': len(selected),
            'suggested_count': unselected_count,
            'catalog_size': len(session.recipes),
        }
    }


def get_collection_similarity() -> Dict[str, Any]:
    """Average ingredient overlap between all recipes in the catalog."""
    config = load_config()
    session = get_session()
    score = calculate_general_similarity_score(session.recipes, config.avoid_shelf_items)

    return {
        'success': True,
        'recipe_count': len(session.recipes),
        'similarity_score': round(score, 3),
    }

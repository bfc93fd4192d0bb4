"""
Shopping list filtering by owned ingredients, totals and spend targets.
"""

from typing import Any, Collection, Dict, Iterable, List

from .models import AggregatedIngredient


def get_ingredients_left_to_buy(
    aggregated_ingredients: Iterable[AggregatedIngredient],
    owned_ingredient_ids: Collection[str]
) -> List[AggregatedIngredient]:
    """
    Filter out ingredients the user already has.

    Owned items are removed entirely; costs of the remaining items are
    not recalculated.
    """
    owned = set(owned_ingredient_ids)
    return [
        item for item in aggregated_ingredients
        if item.ingredient.id not in owned
    ]


def calculate_total_price(ingredients: Iterable[AggregatedIngredient]) -> float:
    return sum((item.total_cost for item in ingredients), 0.0)


def calculate_remaining_to_target(current_total: float, target: float) -> float:
    """Amount still to spend to reach target, never negative."""
    return max(0.0, target - current_total)


def separate_ingredients_by_shelf(
    ingredients: Iterable[AggregatedIngredient]
) -> Dict[str, List[AggregatedIngredient]]:
    """
    Partition ingredients into shelf and non-shelf lists.

    Relative order is preserved in both lists.

    Returns:
        Dict with 'shelf_ingredients' and 'non_shelf_ingredients'
    """
    result: Dict[str, List[AggregatedIngredient]] = {
        'shelf_ingredients': [],
        'non_shelf_ingredients': [],
    }
    for item in ingredients:
        key = 'shelf_ingredients' if item.ingredient.shelf else 'non_shelf_ingredients'
        result[key].append(item)
    return result


def target_progress(current_total: float, target: float) -> Dict[str, Any]:
    """
    Summarize progress of a basket total toward a spend target.

    Args:
        current_total: Current basket total
        target: Spend target (e.g., 40.0 for a free-delivery threshold)

    Returns:
        Dict with total, target, remaining, percent and target_reached
    """
    remaining = calculate_remaining_to_target(current_total, target)
    if target > 0:
        percent = min(100.0, current_total / target * 100)
    else:
        percent = 100.0

    return {
        'total': round(current_total, 2),
        'target': target,
        'remaining': round(remaining, 2),
        'percent': round(percent, 1),
        'target_reached': remaining == 0,
    }

"""
Ingredient aggregation across a set of recipes.

Combines the requirements of every recipe into one shopping list:
- Perishables needed by several recipes have their amounts summed and
  are costed once on the combined amount
- Shelf items are bought once; later occurrences are ignored
"""

from dataclasses import replace
from typing import Dict, Iterable, List

from .costs import calculate_ingredient_cost
from .models import AggregatedIngredient, Recipe


def aggregate_ingredients(recipes: Iterable[Recipe]) -> List[AggregatedIngredient]:
    """
    Aggregate ingredients from multiple recipes.

    Entries are keyed by ingredient id and returned in order of first
    appearance.

    Args:
        recipes: Recipes to combine

    Returns:
        New list of aggregated ingredients with computed costs
    """
    aggregated: Dict[str, AggregatedIngredient] = {}

    for recipe in recipes:
        for requirement in recipe.ingredients:
            ingredient = requirement.ingredient
            existing = aggregated.get(ingredient.id)

            if existing is None:
                aggregated[ingredient.id] = AggregatedIngredient(
                    ingredient=ingredient,
                    amount=requirement.amount,
                    total_cost=calculate_ingredient_cost(requirement),
                    order_index=requirement.order_index,
                )
                continue

            # Shelf items keep their first amount and cost
            if ingredient.shelf:
                continue

            combined_amount = existing.amount + requirement.amount
            aggregated[ingredient.id] = replace(
                existing,
                amount=combined_amount,
                total_cost=calculate_ingredient_cost(
                    replace(requirement, amount=combined_amount)
                ),
            )

    return list(aggregated.values())

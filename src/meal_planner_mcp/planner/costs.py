"""
Purchase cost of ingredient requirements.

Ingredients are bought in store-sized packs:
- Shelf (pantry) items cost one pack regardless of the amount needed
- Perishables cost their share of the pack price, but never less than
  one full pack

Example:
- Onions, pack of 3 for £1, recipe needs 2 -> max(2 * 0.33, 1.00) = £1.00
- Onions, pack of 3 for £1, recipe needs 5 -> max(5 * 0.33, 1.00) = £1.67
"""

from .models import Recipe, RecipeIngredient


def calculate_ingredient_cost(requirement: RecipeIngredient) -> float:
    """
    Calculate the cost of an ingredient requirement.

    The pack amount of a perishable must be greater than zero; a zero
    pack amount raises ZeroDivisionError.

    Args:
        requirement: Ingredient plus the amount needed

    Returns:
        Cost of buying enough packs' worth for the requirement
    """
    source = requirement.ingredient.source

    if requirement.ingredient.shelf:
        return source.price

    cost_per_unit = source.price / source.amount
    return max(requirement.amount * cost_per_unit, source.price)


def calculate_recipe_price(recipe: Recipe) -> float:
    """Total cost of a single recipe's ingredients, summed per requirement."""
    return sum(
        (calculate_ingredient_cost(requirement) for requirement in recipe.ingredients),
        0.0,
    )

"""
Recipe similarity and recommendation ordering.

Recipes are compared by the Jaccard similarity of their ingredient id sets.
Shelf items are left out by default: pantry staples like salt and oil
appear in most recipes and would make everything look alike.

Unselected recipes are ranked by their best match against any selected
recipe, so a recipe that reuses the perishables of even one chosen meal
comes first.
"""

from itertools import combinations
from typing import Iterable, List, Sequence

from .models import Recipe


def calculate_jaccard_similarity(set_a: Iterable[str], set_b: Iterable[str]) -> float:
    """
    Calculate Jaccard similarity between two id collections.

    Returns:
        Value between 0 (no overlap) and 1 (identical sets); two empty
        collections count as identical
    """
    unique_a = set(set_a)
    unique_b = set(set_b)

    if not unique_a and not unique_b:
        return 1.0
    if not unique_a or not unique_b:
        return 0.0

    return len(unique_a & unique_b) / len(unique_a | unique_b)


def _ingredient_ids(recipe: Recipe, avoid_shelf_items: bool) -> List[str]:
    return [
        requirement.ingredient.id
        for requirement in recipe.ingredients
        if not (avoid_shelf_items and requirement.ingredient.shelf)
    ]


def calculate_recipe_similarity(
    recipe_a: Recipe,
    recipe_b: Recipe,
    avoid_shelf_items: bool = True
) -> float:
    """Similarity between two recipes based on their ingredients."""
    return calculate_jaccard_similarity(
        _ingredient_ids(recipe_a, avoid_shelf_items),
        _ingredient_ids(recipe_b, avoid_shelf_items),
    )


def calculate_recommendation_score(
    recipe: Recipe,
    selected_recipes: Sequence[Recipe],
    avoid_shelf_items: bool = True
) -> float:
    """
    Score a recipe against the selected recipes.

    Returns:
        Maximum similarity with any selected recipe, 0 if none selected
    """
    if not selected_recipes:
        return 0.0

    return max(
        calculate_recipe_similarity(recipe, selected, avoid_shelf_items)
        for selected in selected_recipes
    )


def sort_recipes_by_recommendation(
    recipes: Sequence[Recipe],
    selected_recipe_ids: Iterable[str],
    avoid_shelf_items: bool = True
) -> List[Recipe]:
    """
    Order recipes for display while building a meal plan.

    Selected recipes come first, in the order of selected_recipe_ids
    (ids with no matching recipe are dropped). The rest follow by
    descending recommendation score, ties broken by name. With nothing
    selected, all recipes are sorted by name.

    Args:
        recipes: Full recipe collection
        selected_recipe_ids: Ids of recipes already in the plan
        avoid_shelf_items: Ignore shelf items when comparing recipes

    Returns:
        New ordered list of recipes
    """
    by_id = {recipe.id: recipe for recipe in recipes}

    selected: List[Recipe] = []
    seen = set()
    for recipe_id in selected_recipe_ids:
        if recipe_id in by_id and recipe_id not in seen:
            selected.append(by_id[recipe_id])
            seen.add(recipe_id)

    if not selected:
        return sorted(recipes, key=lambda r: r.name)

    scored = [
        (calculate_recommendation_score(recipe, selected, avoid_shelf_items), recipe)
        for recipe in recipes
        if recipe.id not in seen
    ]
    scored.sort(key=lambda item: (-item[0], item[1].name))

    return selected + [recipe for _, recipe in scored]


def calculate_general_similarity_score(
    recipes: Sequence[Recipe],
    avoid_shelf_items: bool = True
) -> float:
    """
    Average pairwise similarity across a recipe collection.

    A collection health metric: high values mean most recipes share
    ingredients, low values mean a varied collection.

    Returns:
        Mean similarity over all unordered pairs, 0 for fewer than two recipes
    """
    if len(recipes) < 2:
        return 0.0

    similarities = [
        calculate_recipe_similarity(a, b, avoid_shelf_items)
        for a, b in combinations(recipes, 2)
    ]
    return sum(similarities) / len(similarities)

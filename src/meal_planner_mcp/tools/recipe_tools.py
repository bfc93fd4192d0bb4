"""
Recipe and ingredient catalog tools.

Provides tools for:
- Saving recipes with priced ingredients
- Browsing, editing and deleting saved recipes
- Listing and searching the ingredient catalog for reuse
"""

from dataclasses import asdict
from typing import Any, Dict, List, Optional

from fastmcp import Context
from pydantic import Field

from ..planner import repository
from ..planner.costs import calculate_recipe_price
from ..planner.validation import (
    validate_ingredient_updates,
    validate_ingredients,
    validate_recipe_form,
    validate_recipe_name,
)


def _recipe_price(recipe) -> Optional[float]:
    """Single-recipe price, or None when an ingredient has no pack size."""
    try:
        return round(calculate_recipe_price(recipe), 2)
    except ZeroDivisionError:
        return None


def _recipe_summary(recipe) -> Dict[str, Any]:
    return {
        "id": recipe.id,
        "name": recipe.name,
        "ingredient_count": len(recipe.ingredients),
        "price": _recipe_price(recipe),
    }


def _known_ingredient_ids() -> set:
    return {ingredient.id for ingredient in repository.list_ingredients()}


# ========== Recipe Management Tools ==========


async def save_recipe(
    name: str = Field(description="Recipe name (3-100 characters)"),
    ingredients: List[Dict[str, Any]] = Field(
        description="List of ingredients. Each has: amount (required) and "
        "ingredient: {id (optional, reuse catalog entry), name, unit, shelf, "
        "source: {url, price, amount}}"
    ),
    instructions: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Ordered steps, each {text, ingredient_ids (optional)}"
    ),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Save a recipe with priced ingredients.

    New ingredients need a store source: the pack price and the pack
    amount in the ingredient's unit, e.g. onions sold 3 for £1:
    {"amount": 2, "ingredient": {"name": "Onion", "unit": "unit",
    "shelf": false, "source": {"url": "https://...", "price": 1, "amount": 3}}}

    An id that is not in the catalog is treated as a new ingredient and
    needs a source too.

    Mark pantry staples (flour, oil, spices) as shelf items: they are
    costed as one pack no matter how much a recipe uses.
    """
    try:
        validation = validate_recipe_form(name, ingredients, _known_ingredient_ids())
        if not validation.is_valid:
            return {"success": False, "errors": validation.errors}

        recipe = repository.save_recipe(name, ingredients, instructions)

        if ctx:
            await ctx.info(f"Saved recipe '{name}' with {len(ingredients)} ingredients")

        return {
            "success": True,
            "recipe_id": recipe.id,
            "message": f"Recipe '{name}' saved successfully",
            "recipe": _recipe_summary(recipe)
        }

    except Exception as e:
        return {"success": False, "error": f"Failed to save recipe: {str(e)}"}


async def get_recipes(
    limit: int = Field(default=50, ge=1, le=500, description="Max recipes"),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Get list of saved recipes sorted by name.

    Returns recipe summaries with their single-recipe price.
    Use get_recipe with a specific ID for full details.
    """
    try:
        recipes = repository.list_recipes()
        summaries = [_recipe_summary(r) for r in recipes[:limit]]

        return {
            "success": True,
            "recipes": summaries,
            "count": len(summaries),
            "total_saved": len(recipes)
        }

    except Exception as e:
        return {"success": False, "error": f"Failed to get recipes: {str(e)}"}


async def get_recipe(
    recipe_id: str = Field(description="Recipe ID to retrieve"),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Get full details of a specific recipe including all ingredients.
    """
    try:
        recipe = repository.get_recipe(recipe_id)
        if not recipe:
            return {
                "success": False,
                "error": f"Recipe '{recipe_id}' not found"
            }

        return {
            "success": True,
            "recipe": asdict(recipe),
            "price": _recipe_price(recipe)
        }

    except Exception as e:
        return {"success": False, "error": f"Failed to get recipe: {str(e)}"}


async def edit_recipe(
    recipe_id: str = Field(description="Recipe ID to update"),
    name: Optional[str] = Field(default=None, description="New recipe name"),
    ingredients_to_update: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="Changes to existing ingredients: {id (recipe ingredient "
        "row id), amount (optional), ingredient: {id, name, unit, shelf, source}}"
    ),
    ingredients_to_delete: Optional[List[int]] = Field(
        default=None,
        description="Recipe ingredient row ids to remove"
    ),
    ingredients_to_add: Optional[List[Dict[str, Any]]] = Field(
        default=None,
        description="New ingredients, same shape as save_recipe"
    ),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Edit an existing recipe. Only provided changes are applied.

    Updating an ingredient's name, unit, shelf flag or source changes
    the shared catalog entry, so every recipe using it sees the change.
    A recipe may not end up listing the same ingredient twice.
    """
    try:
        errors = []
        if name is not None:
            errors.extend(validate_recipe_name(name).errors)
        if ingredients_to_update:
            errors.extend(validate_ingredient_updates(ingredients_to_update).errors)
        if ingredients_to_add:
            errors.extend(
                validate_ingredients(ingredients_to_add, _known_ingredient_ids()).errors
            )
        if errors:
            return {"success": False, "errors": errors}

        recipe = repository.edit_recipe(
            recipe_id,
            name=name,
            ingredients_to_update=ingredients_to_update,
            ingredients_to_delete=ingredients_to_delete,
            ingredients_to_add=ingredients_to_add
        )

        if ctx:
            await ctx.info(f"Updated recipe '{recipe.name}'")

        return {
            "success": True,
            "message": f"Recipe '{recipe_id}' updated",
            "recipe": _recipe_summary(recipe)
        }

    except Exception as e:
        return {"success": False, "error": f"Failed to update recipe: {str(e)}"}


async def delete_recipe(
    recipe_id: str = Field(description="Recipe ID to delete"),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Delete a saved recipe. Its ingredients stay in the catalog.
    """
    try:
        if not repository.delete_recipe(recipe_id):
            return {
                "success": False,
                "error": f"Recipe '{recipe_id}' not found"
            }

        return {
            "success": True,
            "message": f"Recipe '{recipe_id}' deleted"
        }

    except Exception as e:
        return {"success": False, "error": f"Failed to delete recipe: {str(e)}"}


# ========== Ingredient Catalog Tools ==========


async def get_ingredients(ctx: Context = None) -> Dict[str, Any]:
    """
    Get every ingredient in the catalog, sorted by name.

    Reuse catalog ingredients (by id) when saving recipes so that
    shopping lists combine them.
    """
    try:
        ingredients = repository.list_ingredients()
        return {
            "success": True,
            "ingredients": [asdict(i) for i in ingredients],
            "count": len(ingredients)
        }

    except Exception as e:
        return {"success": False, "error": f"Failed to get ingredients: {str(e)}"}


async def search_ingredients(
    query: str = Field(description="Text to look for in ingredient names"),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Search catalog ingredients by name (case-insensitive substring).
    """
    try:
        matches = repository.search_ingredients(query)
        return {
            "success": True,
            "query": query,
            "ingredients": [asdict(i) for i in matches],
            "count": len(matches)
        }

    except Exception as e:
        return {"success": False, "error": f"Failed to search ingredients: {str(e)}"}


def register_tools(mcp):
    """Register recipe-related tools with the FastMCP server."""
    for tool in (
        save_recipe,
        get_recipes,
        get_recipe,
        edit_recipe,
        delete_recipe,
        get_ingredients,
        search_ingredients,
    ):
        mcp.tool()(tool)

"""
Meal planner tools for building a plan and its shopping list.

Provides tools for:
- Selecting recipes for the plan and marking ingredients already owned
- Viewing the combined shopping list with costs and spend target progress
- Recommending recipes that reuse ingredients already in the plan
- Viewing and updating planner configuration
"""

from typing import Any, Dict, Optional

from fastmcp import Context
from pydantic import Field

from ..planner import config as planner_config
from ..planner import sessions


# ========== Plan Selection Tools ==========


async def start_meal_plan(ctx: Context = None) -> Dict[str, Any]:
    """
    Start a new meal plan from the currently saved recipes.

    Clears any selection. Call again after saving or editing recipes so
    the plan sees the latest recipe data.
    """
    try:
        result = sessions.start_meal_plan()
        if ctx:
            await ctx.info(result['message'])
        return result

    except Exception as e:
        return {"success": False, "error": f"Failed to start meal plan: {str(e)}"}


async def toggle_recipe(
    recipe_id: str = Field(description="Recipe to add to or remove from the plan"),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Add a recipe to the meal plan, or remove it if already selected.

    Returns the updated plan summary (selected count, items to buy,
    total price).
    """
    try:
        result = sessions.toggle_recipe(recipe_id)
        if ctx and result.get('warning'):
            await ctx.warning(result['warning'])
        return result

    except Exception as e:
        return {"success": False, "error": f"Failed to toggle recipe: {str(e)}"}


async def toggle_owned_ingredient(
    ingredient_id: str = Field(description="Ingredient the user already has"),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Mark an ingredient as already owned, or unmark it.

    Owned ingredients are removed from the items left to buy and from
    the total price.
    """
    try:
        return sessions.toggle_owned_ingredient(ingredient_id)

    except Exception as e:
        return {"success": False, "error": f"Failed to toggle ingredient: {str(e)}"}


async def reset_meal_plan(ctx: Context = None) -> Dict[str, Any]:
    """
    Clear all selected recipes and owned ingredients.
    """
    try:
        return sessions.reset_meal_plan()

    except Exception as e:
        return {"success": False, "error": f"Failed to reset meal plan: {str(e)}"}


# ========== Shopping List Tools ==========


async def get_shopping_list(
    target_amount: Optional[float] = Field(
        default=None,
        ge=0,
        description="Spend target (defaults to configured target)"
    ),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Get the shopping list for the selected recipes.

    Ingredients shared between recipes are combined: perishables add
    up and are costed on the combined amount (never less than one pack),
    shelf items are bought once. Items are split into shelf and fresh
    lists; owned items are listed separately and excluded from the total.
    """
    try:
        result = sessions.get_shopping_list(target_amount=target_amount)
        if ctx and result.get('success') and result['target']['target_reached']:
            await ctx.info("Spend target reached")
        return result

    except Exception as e:
        return {"success": False, "error": f"Failed to get shopping list: {str(e)}"}


async def get_recommended_recipes(
    limit: Optional[int] = Field(
        default=None,
        ge=1,
        le=100,
        description="Max suggestions besides selected recipes"
    ),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Get recipes to add next, ranked by ingredient overlap with the plan.

    Selected recipes are listed first. The rest are ordered by their best
    ingredient overlap with any selected recipe, so picking them reuses
    ingredients already being bought. Pantry staples are ignored.
    """
    try:
        return sessions.get_recommended_recipes(limit=limit)

    except Exception as e:
        return {"success": False, "error": f"Failed to get recommendations: {str(e)}"}


async def get_collection_similarity(ctx: Context = None) -> Dict[str, Any]:
    """
    Get the average ingredient overlap across all recipes (0-1).

    Low values mean a varied recipe collection; high values mean most
    recipes share ingredients.
    """
    try:
        return sessions.get_collection_similarity()

    except Exception as e:
        return {"success": False, "error": f"Failed to score collection: {str(e)}"}


# ========== Configuration Tools ==========


async def get_planner_config(ctx: Context = None) -> Dict[str, Any]:
    """
    Get current planner configuration (spend target, recommendations).
    """
    try:
        return planner_config.get_config_summary()

    except Exception as e:
        return {"success": False, "error": f"Failed to get config: {str(e)}"}


async def update_planner_config(
    target_amount: Optional[float] = Field(
        default=None, ge=0, description="Spend target for the basket"
    ),
    currency_symbol: Optional[str] = Field(
        default=None, description="Currency symbol for display"
    ),
    avoid_shelf_items: Optional[bool] = Field(
        default=None,
        description="Ignore pantry staples when comparing recipes"
    ),
    recommendation_limit: Optional[int] = Field(
        default=None, ge=1, le=100, description="Default number of suggestions"
    ),
    ctx: Context = None
) -> Dict[str, Any]:
    """
    Update planner configuration. Only provided fields are changed.
    """
    try:
        result = planner_config.update_config(
            target_amount=target_amount,
            currency_symbol=currency_symbol,
            avoid_shelf_items=avoid_shelf_items,
            recommendation_limit=recommendation_limit
        )
        if ctx and result.get('updated_fields'):
            await ctx.info(f"Updated config: {', '.join(result['updated_fields'])}")
        return result

    except Exception as e:
        return {"success": False, "error": f"Failed to update config: {str(e)}"}


def register_tools(mcp):
    """Register meal planner tools with the FastMCP server."""
    for tool in (
        start_meal_plan,
        toggle_recipe,
        toggle_owned_ingredient,
        reset_meal_plan,
        get_shopping_list,
        get_recommended_recipes,
        get_collection_similarity,
        get_planner_config,
        update_planner_config,
    ):
        mcp.tool()(tool)

"""
MCP prompts for the Meal Planner MCP server
"""

from typing import Optional
from fastmcp import Context


def register_prompts(mcp):
    """Register prompts with the FastMCP server"""

    @mcp.prompt()
    async def plan_meals_to_budget(
        meal_count: int = 4,
        target_amount: Optional[float] = None,
        ctx: Context = None
    ) -> str:
        """
        Generate a prompt asking for a meal plan that reuses ingredients.

        Args:
            meal_count: Number of meals to plan
            target_amount: Optional spend target for the basket

        Returns:
            A prompt asking for an ingredient-efficient meal plan
        """
        target_line = (
            f"Try to get the basket total close to {target_amount:.2f} without going far over."
            if target_amount is not None
            else "Use the configured spend target from get_planner_config."
        )

        return f"""Please help me plan {meal_count} meals from my saved recipes.

1. Start a fresh plan with start_meal_plan.
2. Pick a first recipe I'd enjoy, then use get_recommended_recipes to choose the
   rest, favouring recipes that reuse fresh ingredients already in the plan so
   less food goes to waste.
3. Show me the result of get_shopping_list, split into fresh and shelf items.

{target_line}

Before finalizing, ask me which shelf items I already have in the cupboard and
mark them with toggle_owned_ingredient.
"""

    @mcp.prompt()
    async def use_up_ingredients(ingredients: str, ctx: Context = None) -> str:
        """
        Generate a prompt asking for recipes that use ingredients on hand.

        Args:
            ingredients: Ingredients the user already has

        Returns:
            A prompt asking for recipes that make use of them
        """
        return f"""I already have these ingredients at home:

{ingredients}

Please use search_ingredients to find each of them in the ingredient catalog,
mark the matches as owned with toggle_owned_ingredient, and then suggest recipes
from my collection that use them. Show me how much the remaining shopping list
would cost with get_shopping_list.

IMPORTANT: Don't save or edit any recipes - only plan with the existing ones.
"""

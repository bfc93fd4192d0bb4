"""
FastMCP server for meal planning and shopping list costing
"""

from fastmcp import FastMCP

from .prompts import register_prompts
from .tools import meal_planner_tools, recipe_tools


def create_server() -> FastMCP:
    """Create and configure the FastMCP server instance"""
    mcp = FastMCP(
        name="Meal Planner",
        instructions="""
This MCP server helps plan meals from saved recipes and builds a costed
shopping list.

Ingredients are priced by store pack: perishables cost their share of the
pack price but never less than one pack, shelf items (pantry staples) cost
one pack no matter how many recipes use them.

Typical workflow:
1. Save recipes with save_recipe (reuse catalog ingredients via search_ingredients)
2. start_meal_plan, then toggle_recipe for each chosen meal
3. get_recommended_recipes to find meals that reuse the same fresh ingredients
4. toggle_owned_ingredient for anything already at home
5. get_shopping_list for the final list, totals and spend target progress
"""
    )

    recipe_tools.register_tools(mcp)
    meal_planner_tools.register_tools(mcp)
    register_prompts(mcp)

    return mcp


def main():
    """Main entry point for the Meal Planner MCP server"""
    mcp = create_server()
    mcp.run()


if __name__ == "__main__":
    main()

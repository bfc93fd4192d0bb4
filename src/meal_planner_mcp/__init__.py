"""
Meal Planner MCP server: recipe costing, shopping lists and meal plan recommendations.
"""

__version__ = "0.1.0"

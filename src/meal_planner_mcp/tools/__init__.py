"""
MCP tool registration for the Meal Planner server.
"""

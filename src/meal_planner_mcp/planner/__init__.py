"""
Planner package for recipe costing, shopping lists and recommendations.

This package provides:
- Pack-based ingredient costing (shelf items vs perishables)
- Ingredient aggregation across selected recipes
- Owned-ingredient filtering, totals and spend targets
- Jaccard-based recipe similarity and recommendation ordering
- A reducer-style meal plan selection state
- SQLite-backed recipe repository and ingredient catalog
"""

from .models import (
    VALID_UNITS,
    Source,
    Ingredient,
    RecipeIngredient,
    Instruction,
    Recipe,
    AggregatedIngredient,
    recipe_from_dict,
)
from .costs import (
    calculate_ingredient_cost,
    calculate_recipe_price,
)
from .aggregation import (
    aggregate_ingredients,
)
from .ownership import (
    get_ingredients_left_to_buy,
    calculate_total_price,
    calculate_remaining_to_target,
    separate_ingredients_by_shelf,
    target_progress,
)
from .similarity import (
    calculate_jaccard_similarity,
    calculate_recipe_similarity,
    calculate_recommendation_score,
    sort_recipes_by_recommendation,
    calculate_general_similarity_score,
)
from .state import (
    MealPlannerState,
    ToggleRecipe,
    ToggleOwnedIngredient,
    ResetSelections,
    create_initial_state,
    create_meal_planner_reducer,
)
from .database import (
    get_db_connection,
    initialize_database,
    ensure_initialized,
)
from .repository import (
    list_ingredients,
    get_ingredient,
    search_ingredients,
    create_ingredient,
    list_recipes,
    get_recipe,
    create_recipe,
    save_recipe,
    edit_recipe,
    delete_recipe,
)
from .validation import (
    ValidationResult,
    validate_recipe_name,
    validate_ingredient,
    validate_ingredients,
    validate_ingredient_updates,
    validate_recipe_form,
)
from .config import (
    load_config,
    save_config,
    update_config,
    reset_config,
    get_config_summary,
    PlannerConfig,
)

__all__ = [
    # Models
    'VALID_UNITS',
    'Source',
    'Ingredient',
    'RecipeIngredient',
    'Instruction',
    'Recipe',
    'AggregatedIngredient',
    'recipe_from_dict',
    # Costs
    'calculate_ingredient_cost',
    'calculate_recipe_price',
    # Aggregation
    'aggregate_ingredients',
    # Ownership
    'get_ingredients_left_to_buy',
    'calculate_total_price',
    'calculate_remaining_to_target',
    'separate_ingredients_by_shelf',
    'target_progress',
    # Similarity
    'calculate_jaccard_similarity',
    'calculate_recipe_similarity',
    'calculate_recommendation_score',
    'sort_recipes_by_recommendation',
    'calculate_general_similarity_score',
    # State
    'MealPlannerState',
    'ToggleRecipe',
    'ToggleOwnedIngredient',
    'ResetSelections',
    'create_initial_state',
    'create_meal_planner_reducer',
    # Database
    'get_db_connection',
    'initialize_database',
    'ensure_initialized',
    # Repository
    'list_ingredients',
    'get_ingredient',
    'search_ingredients',
    'create_ingredient',
    'list_recipes',
    'get_recipe',
    'create_recipe',
    'save_recipe',
    'edit_recipe',
    'delete_recipe',
    # Validation
    'ValidationResult',
    'validate_recipe_name',
    'validate_ingredient',
    'validate_ingredients',
    'validate_ingredient_updates',
    'validate_recipe_form',
    # Config
    'load_config',
    'save_config',
    'update_config',
    'reset_config',
    'get_config_summary',
    'PlannerConfig',
]

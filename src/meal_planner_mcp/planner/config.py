"""
Centralized configuration for meal planning.

Provides the spend target, currency and recommendation settings with
persistence to meal_planner_preferences.json.
"""

import json
import os
from dataclasses import dataclass, asdict
from typing import Any, Dict, Optional

# Config file location (working directory)
CONFIG_FILE = "meal_planner_preferences.json"


@dataclass
class PlannerConfig:
    """Configuration for shopping totals and recommendations."""

    # Basket target (e.g., minimum spend for free delivery)
    target_amount: float = 40.0
    currency_symbol: str = "£"

    # Recommendations
    avoid_shelf_items: bool = True  # Pantry staples don't count toward overlap
    recommendation_limit: int = 10


# Global config instance (lazy loaded)
_config: Optional[PlannerConfig] = None

_FIELD_TYPES = {
    'target_amount': float,
    'currency_symbol': str,
    'avoid_shelf_items': bool,
    'recommendation_limit': int,
}


def load_config() -> PlannerConfig:
    """
    Load configuration from file or return defaults.

    Returns:
        PlannerConfig instance
    """
    global _config

    if _config is not None:
        return _config

    _config = PlannerConfig()

    if os.path.exists(CONFIG_FILE):
        try:
            with open(CONFIG_FILE, 'r') as f:
                data = json.load(f)

            planner_config = data.get('planner_config', {})

            for key, cast in _FIELD_TYPES.items():
                if key in planner_config:
                    setattr(_config, key, cast(planner_config[key]))

        except (json.JSONDecodeError, IOError, KeyError, ValueError):
            # On any error, use defaults
            _config = PlannerConfig()

    return _config


def save_config(config: PlannerConfig) -> Dict[str, Any]:
    """
    Save configuration to file.

    Args:
        config: PlannerConfig to save

    Returns:
        Dict with success status
    """
    global _config

    # Preserve other settings in the preferences file
    existing = {}
    if os.path.exists(CONFIG_FILE):
        try:
            with open(CONFIG_FILE, 'r') as f:
                existing = json.load(f)
        except (json.JSONDecodeError, IOError):
            existing = {}

    existing['planner_config'] = asdict(config)

    try:
        with open(CONFIG_FILE, 'w') as f:
            json.dump(existing, f, indent=2)

        _config = config
        return {'success': True, 'config': asdict(config)}
    except IOError as e:
        print(f"Warning: Could not save planner config: {e}")
        return {'success': False, 'error': str(e)}


def update_config(**kwargs) -> Dict[str, Any]:
    """
    Update specific configuration values.

    Args:
        **kwargs: Configuration fields to update (None values are skipped)

    Returns:
        Dict with success status and updated config
    """
    config = load_config()

    updated = []
    for key, value in kwargs.items():
        if key in _FIELD_TYPES and value is not None:
            if key == 'target_amount' and float(value) < 0:
                return {'success': False, 'error': 'target_amount must be >= 0'}
            if key == 'recommendation_limit' and int(value) < 1:
                return {'success': False, 'error': 'recommendation_limit must be >= 1'}
            setattr(config, key, _FIELD_TYPES[key](value))
            updated.append(key)

    if updated:
        result = save_config(config)
        result['updated_fields'] = updated
        return result

    return {'success': True, 'message': 'No changes made', 'config': asdict(config)}


def reset_config() -> Dict[str, Any]:
    """Reset configuration to defaults."""
    global _config
    _config = PlannerConfig()
    return save_config(_config)


def reset_config_cache() -> None:
    """Drop the cached config so the next load re-reads the file (for testing)."""
    global _config
    _config = None


def get_config_summary() -> Dict[str, Any]:
    """
    Get current configuration as a summary.

    Returns:
        Dict with all config values
    """
    config = load_config()
    return {
        'target': {
            'amount': config.target_amount,
            'currency_symbol': config.currency_symbol,
            'description': 'Basket total to aim for when building a plan'
        },
        'recommendations': {
            'avoid_shelf_items': config.avoid_shelf_items,
            'limit': config.recommendation_limit,
            'description': 'Ignore pantry staples when comparing recipes; max suggestions'
        }
    }

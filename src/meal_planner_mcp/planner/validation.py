"""
Validation of recipe and ingredient input before it is saved.

Produces user-facing messages rather than raising, so callers can report
every problem with a form at once.
"""

from dataclasses import dataclass, field
from typing import Any, Collection, Dict, List, Optional

from pydantic import AnyHttpUrl, TypeAdapter, ValidationError

from .models import VALID_UNITS

RECIPE_NAME_MIN_LENGTH = 3
RECIPE_NAME_MAX_LENGTH = 100

_url_adapter = TypeAdapter(AnyHttpUrl)


@dataclass
class ValidationResult:
    is_valid: bool
    errors: List[str] = field(default_factory=list)


def _result(errors: List[str]) -> ValidationResult:
    return ValidationResult(is_valid=not errors, errors=errors)


def _is_valid_url(url: str) -> bool:
    try:
        _url_adapter.validate_python(url)
    except ValidationError:
        return False
    return True


def _positive(value: Any) -> bool:
    try:
        return float(value) > 0
    except (TypeError, ValueError):
        return False


def validate_recipe_name(name: str) -> ValidationResult:
    errors = []
    name = (name or "").strip()

    if not name:
        errors.append("Recipe name is required")
    elif len(name) < RECIPE_NAME_MIN_LENGTH:
        errors.append(f"Recipe name must be at least {RECIPE_NAME_MIN_LENGTH} characters")
    elif len(name) > RECIPE_NAME_MAX_LENGTH:
        errors.append(f"Recipe name must be less than {RECIPE_NAME_MAX_LENGTH} characters")

    return _result(errors)


def _source_errors(source: Dict[str, Any]) -> List[str]:
    errors = []

    if not source.get('url'):
        errors.append("Store URL is required")
    elif not _is_valid_url(source['url']):
        errors.append("Store URL must be valid")

    if not _positive(source.get('price')):
        errors.append("Store price must be greater than 0")

    if not _positive(source.get('amount')):
        errors.append("Store amount must be greater than 0")

    return errors


def validate_ingredient(
    entry: Dict[str, Any],
    known_ingredient_ids: Optional[Collection[str]] = None
) -> ValidationResult:
    """
    Validate one recipe ingredient entry.

    Entry shape: {'amount', 'ingredient': {'id'?, 'name', 'unit',
    'shelf', 'source': {'url', 'price', 'amount'}}}. Pack details are
    only required for new ingredients, since existing catalog entries
    were checked when created. An entry is new when it has no id, or
    when known_ingredient_ids is given and does not contain its id.
    """
    errors = []
    ingredient = entry.get('ingredient') or {}

    if not (ingredient.get('name') or "").strip():
        errors.append("Ingredient name is required")

    if not _positive(entry.get('amount')):
        errors.append("Amount must be greater than 0")

    if ingredient.get('unit') not in VALID_UNITS:
        errors.append(f"Unit must be one of: {', '.join(VALID_UNITS)}")

    ingredient_id = ingredient.get('id')
    is_new = not ingredient_id or (
        known_ingredient_ids is not None and ingredient_id not in known_ingredient_ids
    )
    if is_new:
        errors.extend(_source_errors(ingredient.get('source') or {}))

    return _result(errors)


def validate_ingredients(
    ingredients: List[Dict[str, Any]],
    known_ingredient_ids: Optional[Collection[str]] = None
) -> ValidationResult:
    """Validate an ingredient list, including duplicate name detection."""
    errors = []

    if not ingredients:
        errors.append("At least one ingredient is required")

    names = [
        ((entry.get('ingredient') or {}).get('name') or "").strip().lower()
        for entry in ingredients
    ]
    if len(set(names)) != len(names):
        errors.append("Duplicate ingredient names are not allowed")

    for index, entry in enumerate(ingredients):
        result = validate_ingredient(entry, known_ingredient_ids)
        if not result.is_valid:
            errors.append(f"Ingredient {index + 1}: {', '.join(result.errors)}")

    return _result(errors)


def validate_ingredient_updates(changes: List[Dict[str, Any]]) -> ValidationResult:
    """
    Validate edits to existing recipe ingredients.

    Change shape: {'id', 'amount'?, 'ingredient': {'id', 'name'?,
    'unit'?, 'shelf'?, 'source'?}}. Only the fields present are checked,
    but a replacement source must be complete.
    """
    errors = []

    for index, change in enumerate(changes):
        problems = []
        ingredient = change.get('ingredient') or {}

        if change.get('id') is None:
            problems.append("Recipe ingredient id is required")

        if change.get('amount') is not None and not _positive(change['amount']):
            problems.append("Amount must be greater than 0")

        if 'name' in ingredient and not (ingredient['name'] or "").strip():
            problems.append("Ingredient name is required")

        if ingredient.get('unit') is not None and ingredient['unit'] not in VALID_UNITS:
            problems.append(f"Unit must be one of: {', '.join(VALID_UNITS)}")

        if ingredient.get('source') is not None:
            problems.extend(_source_errors(ingredient['source']))

        if problems:
            errors.append(f"Ingredient update {index + 1}: {', '.join(problems)}")

    return _result(errors)


def validate_recipe_form(
    name: str,
    ingredients: List[Dict[str, Any]],
    known_ingredient_ids: Optional[Collection[str]] = None
) -> ValidationResult:
    """Validate a whole recipe: name plus ingredients."""
    errors = (
        validate_recipe_name(name).errors
        + validate_ingredients(ingredients, known_ingredient_ids).errors
    )
    return _result(errors)

"""
Recipe and ingredient entities shared by the planner modules.

All entities are frozen dataclasses: every computation builds new values
rather than updating existing ones.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

# Closed set of measurement units accepted for ingredients
VALID_UNITS = ('g', 'kg', 'ml', 'l', 'tsp', 'tbsp', 'cup', 'oz', 'lb', 'unit')


@dataclass(frozen=True)
class Source:
    """A purchasable pack: price for a fixed amount of the ingredient."""

    url: str = ""
    price: float = 0.0
    amount: float = 0.0


@dataclass(frozen=True)
class Ingredient:
    """Catalog entry for an ingredient."""

    id: str
    name: str
    unit: str
    shelf: bool = False
    source: Source = field(default_factory=Source)


@dataclass(frozen=True)
class RecipeIngredient:
    """An ingredient needed by a recipe, in the ingredient's unit."""

    ingredient: Ingredient
    amount: float
    order_index: int = 0
    id: Optional[int] = None  # storage row id, used when editing


@dataclass(frozen=True)
class Instruction:
    text: str
    ingredient_ids: Tuple[str, ...] = ()


@dataclass(frozen=True)
class Recipe:
    id: str
    name: str
    ingredients: Tuple[RecipeIngredient, ...] = ()
    instructions: Tuple[Instruction, ...] = ()


@dataclass(frozen=True)
class AggregatedIngredient:
    """A shopping list line: combined requirement plus its purchase cost."""

    ingredient: Ingredient
    amount: float
    total_cost: float
    order_index: int = 0


def source_from_dict(data: Optional[Dict[str, Any]]) -> Source:
    """Build a Source, treating a missing source as an empty pack."""
    if not data:
        return Source()
    return Source(
        url=data.get('url') or "",
        price=float(data.get('price') or 0),
        amount=float(data.get('amount') or 0),
    )


def ingredient_from_dict(data: Dict[str, Any]) -> Ingredient:
    return Ingredient(
        id=str(data['id']),
        name=data['name'],
        unit=data['unit'],
        shelf=bool(data.get('shelf', False)),
        source=source_from_dict(data.get('source')),
    )


def recipe_from_dict(data: Dict[str, Any]) -> Recipe:
    """
    Build a Recipe from its dict form.

    Each ingredient entry is {'ingredient': {...}, 'amount': n,
    'order_index': i}; entries are ordered by order_index.

    Args:
        data: Recipe dict (as produced by dataclasses.asdict)

    Returns:
        Recipe instance
    """
    requirements: List[RecipeIngredient] = []
    for position, entry in enumerate(data.get('ingredients') or []):
        requirements.append(RecipeIngredient(
            ingredient=ingredient_from_dict(entry['ingredient']),
            amount=float(entry['amount']),
            order_index=int(entry.get('order_index', position)),
            id=entry.get('id'),
        ))
    requirements.sort(key=lambda r: r.order_index)

    instructions = tuple(
        Instruction(
            text=step['text'],
            ingredient_ids=tuple(step.get('ingredient_ids') or ()),
        )
        for step in data.get('instructions') or []
    )

    return Recipe(
        id=str(data['id']),
        name=data['name'],
        ingredients=tuple(requirements),
        instructions=instructions,
    )

"""
Recipe repository and ingredient catalog backed by SQLite.

Provides functions for:
- Listing, searching and creating catalog ingredients
- Loading recipes with their ordered ingredients and instructions
- Saving new recipes (creating or reusing ingredients by name)
- Editing and deleting recipes
"""

import json
import sqlite3
import uuid
from datetime import datetime
from typing import Any, Dict, List, Optional

from .database import get_db_connection, get_db_cursor, ensure_initialized
from .models import (
    VALID_UNITS,
    Ingredient,
    Instruction,
    Recipe,
    RecipeIngredient,
    Source,
)


def _new_id() -> str:
    return str(uuid.uuid4())[:8]


def _check_unit(unit: str) -> None:
    if unit not in VALID_UNITS:
        raise ValueError(f"Invalid unit '{unit}'. Must be one of: {', '.join(VALID_UNITS)}")


def _check_amount(amount: Any) -> float:
    amount = float(amount)
    if amount <= 0:
        raise ValueError("Amount must be greater than 0")
    return amount


def _check_pack(name: str, shelf: bool, source: Optional[Dict[str, Any]]) -> None:
    """Perishables are costed per pack, so they need a pack size."""
    source = source or {}
    if source.get('price') is not None and float(source['price']) < 0:
        raise ValueError(f"Ingredient '{name}' has a negative store price")
    if shelf:
        return
    if not source.get('amount') or float(source['amount']) <= 0:
        raise ValueError(
            f"Ingredient '{name}' needs a store pack amount greater than 0"
        )


def _row_to_ingredient(row: sqlite3.Row) -> Ingredient:
    """Convert an ingredients row; a missing source becomes an empty pack."""
    if row['source_price'] is None and row['source_amount'] is None:
        source = Source()
    else:
        source = Source(
            url=row['source_url'] or "",
            price=row['source_price'] or 0.0,
            amount=row['source_amount'] or 0.0,
        )
    return Ingredient(
        id=row['id'],
        name=row['name'],
        unit=row['unit'],
        shelf=bool(row['shelf']),
        source=source,
    )


# ============== Ingredient Catalog ==============


def list_ingredients() -> List[Ingredient]:
    """Get all catalog ingredients sorted by name."""
    ensure_initialized()

    conn = get_db_connection()
    try:
        cursor = conn.execute("SELECT * FROM ingredients ORDER BY name")
        return [_row_to_ingredient(row) for row in cursor.fetchall()]
    finally:
        conn.close()


def get_ingredient(ingredient_id: str) -> Optional[Ingredient]:
    ensure_initialized()

    conn = get_db_connection()
    try:
        row = conn.execute(
            "SELECT * FROM ingredients WHERE id = ?", (ingredient_id,)
        ).fetchone()
        return _row_to_ingredient(row) if row else None
    finally:
        conn.close()


def search_ingredients(query: str) -> List[Ingredient]:
    """
    Find ingredients whose name contains the query (case-insensitive).

    An empty query returns the whole catalog.
    """
    query = (query or "").strip().lower()
    return [
        ingredient for ingredient in list_ingredients()
        if query in ingredient.name.lower()
    ]


def _find_ingredient_by_name(cursor: sqlite3.Cursor, name: str) -> Optional[Ingredient]:
    row = cursor.execute(
        "SELECT * FROM ingredients WHERE name = ? COLLATE NOCASE", (name.strip(),)
    ).fetchone()
    return _row_to_ingredient(row) if row else None


def _insert_ingredient(
    cursor: sqlite3.Cursor,
    name: str,
    unit: str,
    source: Optional[Dict[str, Any]],
    shelf: bool
) -> Ingredient:
    existing = _find_ingredient_by_name(cursor, name)
    if existing:
        return existing

    _check_unit(unit)
    _check_pack(name, shelf, source)

    ingredient_id = _new_id()
    source = source or {}
    cursor.execute("""
        INSERT INTO ingredients
        (id, name, unit, source_url, source_price, source_amount, shelf)
        VALUES (?, ?, ?, ?, ?, ?, ?)
    """, (
        ingredient_id, name.strip(), unit,
        source.get('url'), source.get('price'), source.get('amount'),
        int(bool(shelf))
    ))

    row = cursor.execute(
        "SELECT * FROM ingredients WHERE id = ?", (ingredient_id,)
    ).fetchone()
    return _row_to_ingredient(row)


def create_ingredient(
    name: str,
    unit: str,
    source: Optional[Dict[str, Any]] = None,
    shelf: bool = False
) -> Ingredient:
    """
    Create a catalog ingredient, or return the existing one with that name.

    Names are matched case-insensitively; an existing record is returned
    unchanged.

    Args:
        name: Ingredient name
        unit: Measurement unit (one of VALID_UNITS)
        source: Optional pack info {'url', 'price', 'amount'}
        shelf: Whether this is a pantry item bought once

    Returns:
        The new or existing Ingredient
    """
    if not name or not name.strip():
        raise ValueError("Ingredient name is required")

    ensure_initialized()

    with get_db_cursor() as cursor:
        return _insert_ingredient(cursor, name, unit, source, shelf)


# ============== Recipes ==============


def _load_recipe(conn: sqlite3.Connection, recipe_row: sqlite3.Row) -> Recipe:
    """Assemble a Recipe with ordered ingredients and instructions."""
    recipe_id = recipe_row['id']

    cursor = conn.execute("""
        SELECT ri.id AS row_id, ri.amount, ri.order_index, i.*
        FROM recipe_ingredients ri
        JOIN ingredients i ON ri.ingredient_id = i.id
        WHERE ri.recipe_id = ?
        ORDER BY ri.order_index, ri.id
    """, (recipe_id,))
    ingredients = tuple(
        RecipeIngredient(
            ingredient=_row_to_ingredient(row),
            amount=row['amount'],
            order_index=row['order_index'],
            id=row['row_id'],
        )
        for row in cursor.fetchall()
    )

    cursor = conn.execute("""
        SELECT instruction_text, ingredient_ids
        FROM recipe_instructions
        WHERE recipe_id = ?
        ORDER BY step_number
    """, (recipe_id,))
    instructions = tuple(
        Instruction(
            text=row['instruction_text'],
            ingredient_ids=tuple(json.loads(row['ingredient_ids'] or '[]')),
        )
        for row in cursor.fetchall()
    )

    return Recipe(
        id=recipe_id,
        name=recipe_row['name'],
        ingredients=ingredients,
        instructions=instructions,
    )


def list_recipes() -> List[Recipe]:
    """Get all recipes with their ingredients, sorted by name."""
    ensure_initialized()

    conn = get_db_connection()
    try:
        rows = conn.execute("SELECT * FROM recipes ORDER BY name").fetchall()
        return [_load_recipe(conn, row) for row in rows]
    finally:
        conn.close()


def get_recipe(recipe_id: str) -> Optional[Recipe]:
    ensure_initialized()

    conn = get_db_connection()
    try:
        row = conn.execute(
            "SELECT * FROM recipes WHERE id = ?", (recipe_id,)
        ).fetchone()
        return _load_recipe(conn, row) if row else None
    finally:
        conn.close()


def _insert_instructions(
    cursor: sqlite3.Cursor,
    recipe_id: str,
    instructions: List[Dict[str, Any]]
) -> None:
    for position, step in enumerate(instructions):
        cursor.execute("""
            INSERT INTO recipe_instructions
            (recipe_id, step_number, instruction_text, ingredient_ids)
            VALUES (?, ?, ?, ?)
        """, (
            recipe_id,
            step.get('step_number', position + 1),
            step['instruction_text'],
            json.dumps(list(step.get('ingredient_ids') or []))
        ))


def _check_duplicate_ingredients(cursor: sqlite3.Cursor, recipe_id: str) -> None:
    """Each catalog ingredient may appear once per recipe."""
    row = cursor.execute("""
        SELECT i.name
        FROM recipe_ingredients ri
        JOIN ingredients i ON ri.ingredient_id = i.id
        WHERE ri.recipe_id = ?
        GROUP BY ri.ingredient_id
        HAVING COUNT(*) > 1
        ORDER BY i.name
    """, (recipe_id,)).fetchone()
    if row:
        raise ValueError(f"Duplicate ingredient names are not allowed: {row['name']}")


def _insert_recipe(
    cursor: sqlite3.Cursor,
    name: str,
    requirements: List[Dict[str, Any]],
    instructions: List[Dict[str, Any]]
) -> str:
    recipe_id = _new_id()
    now = datetime.now().isoformat()

    cursor.execute(
        "INSERT INTO recipes (id, name, created_at, updated_at) VALUES (?, ?, ?, ?)",
        (recipe_id, name.strip(), now, now)
    )

    for position, requirement in enumerate(requirements):
        ingredient_id = requirement['ingredient_id']
        found = cursor.execute(
            "SELECT 1 FROM ingredients WHERE id = ?", (ingredient_id,)
        ).fetchone()
        if not found:
            raise ValueError(f"Ingredient '{ingredient_id}' not found")

        cursor.execute("""
            INSERT INTO recipe_ingredients
            (recipe_id, ingredient_id, amount, order_index)
            VALUES (?, ?, ?, ?)
        """, (
            recipe_id, ingredient_id,
            _check_amount(requirement['amount']),
            requirement.get('order_index', position)
        ))

    _check_duplicate_ingredients(cursor, recipe_id)
    _insert_instructions(cursor, recipe_id, instructions)
    return recipe_id


def create_recipe(
    name: str,
    requirements: List[Dict[str, Any]],
    instructions: Optional[List[Dict[str, Any]]] = None
) -> Recipe:
    """
    Create a recipe from existing catalog ingredients.

    Args:
        name: Recipe name
        requirements: [{'ingredient_id', 'amount', 'order_index'}]
        instructions: Optional [{'step_number', 'instruction_text',
            'ingredient_ids'}]

    Returns:
        The created Recipe
    """
    if not name or not name.strip():
        raise ValueError("Recipe name is required")

    ensure_initialized()

    with get_db_cursor() as cursor:
        recipe_id = _insert_recipe(cursor, name, requirements, instructions or [])

    return get_recipe(recipe_id)


def save_recipe(
    name: str,
    ingredients: List[Dict[str, Any]],
    instructions: Optional[List[Dict[str, Any]]] = None
) -> Recipe:
    """
    Save a recipe, creating any ingredients not yet in the catalog.

    Each entry is {'amount', 'ingredient': {'id'?, 'name', 'unit',
    'shelf', 'source'}}. An ingredient with a known id is used as is;
    otherwise it is created, or reused when one with the same name exists.
    Instructions are [{'text', 'ingredient_ids'}].

    Returns:
        The created Recipe
    """
    if not name or not name.strip():
        raise ValueError("Recipe name is required")

    ensure_initialized()

    with get_db_cursor() as cursor:
        requirements = []
        for position, entry in enumerate(ingredients):
            data = entry['ingredient']
            ingredient_id = data.get('id')

            known = ingredient_id and cursor.execute(
                "SELECT 1 FROM ingredients WHERE id = ?", (ingredient_id,)
            ).fetchone()
            if not known:
                ingredient_id = _insert_ingredient(
                    cursor,
                    data['name'],
                    data['unit'],
                    data.get('source'),
                    data.get('shelf', False)
                ).id

            requirements.append({
                'ingredient_id': ingredient_id,
                'amount': entry['amount'],
                'order_index': position,
            })

        steps = [
            {
                'step_number': position + 1,
                'instruction_text': step['text'],
                'ingredient_ids': step.get('ingredient_ids') or [],
            }
            for position, step in enumerate(instructions or [])
        ]
        recipe_id = _insert_recipe(cursor, name, requirements, steps)

    return get_recipe(recipe_id)


def edit_recipe(
    recipe_id: str,
    name: Optional[str] = None,
    ingredients_to_update: Optional[List[Dict[str, Any]]] = None,
    ingredients_to_delete: Optional[List[int]] = None,
    ingredients_to_add: Optional[List[Dict[str, Any]]] = None
) -> Recipe:
    """
    Apply edits to a saved recipe.

    Args:
        recipe_id: Recipe identifier
        name: New recipe name
        ingredients_to_update: [{'id': row id, 'amount'?, 'ingredient':
            {'id', 'name'?, 'unit'?, 'shelf'?, 'source'?}}]; ingredient
            fields update the shared catalog entry
        ingredients_to_delete: Row ids of requirements to remove
        ingredients_to_add: [{'amount', 'ingredient': {...}}], appended
            after the current last ingredient

    Returns:
        The updated Recipe
    """
    ensure_initialized()

    with get_db_cursor() as cursor:
        found = cursor.execute(
            "SELECT 1 FROM recipes WHERE id = ?", (recipe_id,)
        ).fetchone()
        if not found:
            raise ValueError(f"Recipe '{recipe_id}' not found")

        if name:
            cursor.execute(
                "UPDATE recipes SET name = ?, updated_at = ? WHERE id = ?",
                (name.strip(), datetime.now().isoformat(), recipe_id)
            )

        for change in ingredients_to_update or []:
            data = change.get('ingredient') or {}
            if data.get('id'):
                _update_ingredient(cursor, data)

            if change.get('amount') is not None:
                cursor.execute("""
                    UPDATE recipe_ingredients SET amount = ?
                    WHERE id = ? AND recipe_id = ?
                """, (_check_amount(change['amount']), change['id'], recipe_id))

        for row_id in ingredients_to_delete or []:
            cursor.execute(
                "DELETE FROM recipe_ingredients WHERE id = ? AND recipe_id = ?",
                (row_id, recipe_id)
            )

        if ingredients_to_add:
            row = cursor.execute(
                "SELECT MAX(order_index) FROM recipe_ingredients WHERE recipe_id = ?",
                (recipe_id,)
            ).fetchone()
            next_index = (row[0] if row[0] is not None else -1) + 1

            for entry in ingredients_to_add:
                data = entry['ingredient']
                ingredient = _insert_ingredient(
                    cursor,
                    data['name'],
                    data['unit'],
                    data.get('source'),
                    data.get('shelf', False)
                )
                cursor.execute("""
                    INSERT INTO recipe_ingredients
                    (recipe_id, ingredient_id, amount, order_index)
                    VALUES (?, ?, ?, ?)
                """, (recipe_id, ingredient.id, _check_amount(entry['amount']), next_index))
                next_index += 1

        _check_duplicate_ingredients(cursor, recipe_id)

    return get_recipe(recipe_id)


def _update_ingredient(cursor: sqlite3.Cursor, data: Dict[str, Any]) -> None:
    """Update provided fields of a catalog ingredient."""
    updates = []
    params: List[Any] = []

    if data.get('name'):
        updates.append("name = ?")
        params.append(data['name'].strip())
    if data.get('unit'):
        _check_unit(data['unit'])
        updates.append("unit = ?")
        params.append(data['unit'])
    if data.get('shelf') is not None:
        updates.append("shelf = ?")
        params.append(int(bool(data['shelf'])))
    if data.get('source') is not None:
        source = data['source']
        updates.extend(["source_url = ?", "source_price = ?", "source_amount = ?"])
        params.extend([source.get('url'), source.get('price'), source.get('amount')])

    if updates:
        params.append(data['id'])
        cursor.execute(
            f"UPDATE ingredients SET {', '.join(updates)} WHERE id = ?",
            params
        )

    row = cursor.execute(
        "SELECT * FROM ingredients WHERE id = ?", (data['id'],)
    ).fetchone()
    if row:
        ingredient = _row_to_ingredient(row)
        _check_pack(ingredient.name, ingredient.shelf, {
            'price': row['source_price'],
            'amount': row['source_amount'],
        })


def delete_recipe(recipe_id: str) -> bool:
    """
    Delete a recipe with its ingredient links and instructions.

    Catalog ingredients are kept for reuse.

    Returns:
        True if a recipe was deleted
    """
    ensure_initialized()

    with get_db_cursor() as cursor:
        cursor.execute("DELETE FROM recipes WHERE id = ?", (recipe_id,))
        return cursor.rowcount > 0

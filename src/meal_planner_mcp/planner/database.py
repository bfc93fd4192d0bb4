"""
SQLite database connection and schema management for recipes and ingredients.
"""

import sqlite3
from contextlib import contextmanager

# Database file location (working directory)
DB_FILE = "meal_planner.db"

# Global initialization flag
_initialized = False


def get_db_connection() -> sqlite3.Connection:
    """
    Get a connection to the SQLite database.

    Returns:
        sqlite3.Connection: Database connection with row_factory set to Row
    """
    conn = sqlite3.connect(DB_FILE)
    conn.row_factory = sqlite3.Row
    # Enable foreign keys
    conn.execute("PRAGMA foreign_keys = ON")
    return conn


@contextmanager
def get_db_cursor():
    """
    Context manager for database operations with automatic commit/rollback.

    Usage:
        with get_db_cursor() as cursor:
            cursor.execute("INSERT INTO ...")
    """
    conn = get_db_connection()
    cursor = conn.cursor()
    try:
        yield cursor
        conn.commit()
    except Exception:
        conn.rollback()
        raise
    finally:
        conn.close()


def initialize_database() -> None:
    """
    Create all database tables if they don't exist.
    """
    conn = get_db_connection()
    try:
        conn.executescript("""
            -- Ingredient catalog, one purchasable pack per ingredient
            CREATE TABLE IF NOT EXISTS ingredients (
                id TEXT PRIMARY KEY,
                name TEXT UNIQUE NOT NULL COLLATE NOCASE,
                unit TEXT NOT NULL CHECK (unit IN (
                    'g', 'kg', 'ml', 'l', 'tsp', 'tbsp', 'cup', 'oz', 'lb', 'unit'
                )),
                source_url TEXT,
                source_price REAL,
                source_amount REAL,
                shelf INTEGER DEFAULT 0,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP
            );

            -- Saved recipes
            CREATE TABLE IF NOT EXISTS recipes (
                id TEXT PRIMARY KEY,
                name TEXT NOT NULL,
                created_at TEXT DEFAULT CURRENT_TIMESTAMP,
                updated_at TEXT
            );

            -- Recipe ingredient requirements
            CREATE TABLE IF NOT EXISTS recipe_ingredients (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                recipe_id TEXT NOT NULL,
                ingredient_id TEXT NOT NULL,
                amount REAL NOT NULL,
                order_index INTEGER NOT NULL DEFAULT 0,
                FOREIGN KEY (recipe_id) REFERENCES recipes(id) ON DELETE CASCADE,
                FOREIGN KEY (ingredient_id) REFERENCES ingredients(id)
            );

            -- Recipe steps, optionally referencing ingredients
            CREATE TABLE IF NOT EXISTS recipe_instructions (
                id INTEGER PRIMARY KEY AUTOINCREMENT,
                recipe_id TEXT NOT NULL,
                step_number INTEGER NOT NULL,
                instruction_text TEXT NOT NULL,
                ingredient_ids TEXT,
                FOREIGN KEY (recipe_id) REFERENCES recipes(id) ON DELETE CASCADE
            );

            -- Indexes for performance
            CREATE INDEX IF NOT EXISTS idx_recipe_ingredients_recipe
                ON recipe_ingredients(recipe_id);
            CREATE INDEX IF NOT EXISTS idx_recipe_ingredients_ingredient
                ON recipe_ingredients(ingredient_id);
            CREATE INDEX IF NOT EXISTS idx_recipe_instructions_recipe
                ON recipe_instructions(recipe_id);
        """)
        conn.commit()
    finally:
        conn.close()


def ensure_initialized() -> None:
    """
    Ensure database is initialized.

    This should be called before any repository operations.
    """
    global _initialized
    if _initialized:
        return

    initialize_database()
    _initialized = True


def reset_initialization() -> None:
    """Reset the initialization flag (for testing purposes)."""
    global _initialized
    _initialized = False

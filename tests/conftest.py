import pytest

from meal_planner_mcp.planner import config, database, sessions
from meal_planner_mcp.planner.models import Ingredient, Recipe, RecipeIngredient, Source


def create_test_ingredient(
    ingredient_id,
    name=None,
    unit="unit",
    shelf=False,
    price=1.0,
    pack_amount=1.0,
    url="https://shop.example.com/item",
):
    return Ingredient(
        id=ingredient_id,
        name=name or ingredient_id.title(),
        unit=unit,
        shelf=shelf,
        source=Source(url=url, price=price, amount=pack_amount),
    )


def create_test_recipe(recipe_id, ingredients, name=None):
    """Build a recipe from (Ingredient, amount) pairs."""
    return Recipe(
        id=recipe_id,
        name=name or recipe_id,
        ingredients=tuple(
            RecipeIngredient(ingredient=ingredient, amount=amount, order_index=i)
            for i, (ingredient, amount) in enumerate(ingredients)
        ),
    )


@pytest.fixture
def flour():
    return create_test_ingredient(
        "flour", unit="g", shelf=True, price=2.0, pack_amount=1000
    )


@pytest.fixture
def onion():
    return create_test_ingredient("onion", price=1.0, pack_amount=3)


@pytest.fixture
def scenario_recipes(flour, onion):
    """R1: 200g flour + 2 onions, R2: 100g flour + 1 onion."""
    return [
        create_test_recipe("r1", [(flour, 200), (onion, 2)], name="Onion Bread"),
        create_test_recipe("r2", [(flour, 100), (onion, 1)], name="Onion Pancakes"),
    ]


@pytest.fixture
def temp_db(tmp_path, monkeypatch):
    monkeypatch.setattr(database, "DB_FILE", str(tmp_path / "meal_planner.db"))
    database.reset_initialization()
    yield
    database.reset_initialization()


@pytest.fixture(autouse=True)
def temp_config(tmp_path, monkeypatch):
    monkeypatch.setattr(config, "CONFIG_FILE", str(tmp_path / "preferences.json"))
    config.reset_config_cache()
    yield
    config.reset_config_cache()


@pytest.fixture(autouse=True)
def clean_session():
    sessions.end_session()
    yield
    sessions.end_session()

from dataclasses import asdict

from meal_planner_mcp.planner.models import Source, recipe_from_dict
from tests.conftest import create_test_recipe


def test_recipe_from_dict_orders_ingredients_and_fills_missing_source():
    recipe = recipe_from_dict({
        "id": "soup",
        "name": "Leek Soup",
        "ingredients": [
            {"amount": 2, "order_index": 1, "ingredient": {
                "id": "leek", "name": "Leek", "unit": "unit", "shelf": False,
                "source": {"url": "https://shop.example.com/leeks", "price": 1.5, "amount": 2},
            }},
            {"amount": 5, "order_index": 0, "ingredient": {
                "id": "salt", "name": "Salt", "unit": "g", "shelf": True, "source": None,
            }},
        ],
        "instructions": [{"text": "Simmer", "ingredient_ids": ["leek"]}],
    })

    assert [ri.ingredient.id for ri in recipe.ingredients] == ["salt", "leek"]
    assert recipe.ingredients[0].ingredient.source == Source()
    assert recipe.instructions[0].ingredient_ids == ("leek",)


def test_recipe_from_dict_reads_asdict_output(scenario_recipes):
    original = scenario_recipes[0]

    assert recipe_from_dict(asdict(original)) == original


def test_recipes_are_hashable_values(flour):
    a = create_test_recipe("a", [(flour, 1)])
    b = create_test_recipe("a", [(flour, 1)])

    assert a == b
    assert len({a, b}) == 1

import pytest

from meal_planner_mcp.planner import repository, sessions
from tests.conftest import create_test_ingredient, create_test_recipe


@pytest.fixture
def plan(scenario_recipes):
    sessions.start_meal_plan(scenario_recipes)
    return scenario_recipes


def test_start_meal_plan_reports_catalog_size(scenario_recipes):
    result = sessions.start_meal_plan(scenario_recipes)

    assert result["success"] is True
    assert result["recipe_count"] == 2


def test_shopping_list_scenario(plan):
    sessions.toggle_recipe("r1")
    sessions.toggle_recipe("r2")

    shopping = sessions.get_shopping_list()

    assert [i["name"] for i in shopping["shelf_items"]] == ["Flour"]
    assert [(i["name"], i["amount"], i["total_cost"]) for i in shopping["fresh_items"]] == [
        ("Onion", 3, 1.0)
    ]
    assert shopping["total_price"] == 3.0
    assert shopping["target"]["remaining"] == 37.0
    assert [r["price"] for r in shopping["recipes"]] == [3.0, 3.0]


def test_owned_ingredient_moves_to_already_owned(plan):
    sessions.toggle_recipe("r1")
    sessions.toggle_recipe("r2")

    result = sessions.toggle_owned_ingredient("flour")
    shopping = sessions.get_shopping_list(target_amount=1.0)

    assert result["owned"] is True
    assert result["summary"]["total_price"] == 1.0
    assert shopping["shelf_items"] == []
    assert [i["ingredient_id"] for i in shopping["already_owned"]] == ["flour"]
    assert shopping["target"]["target_reached"] is True


def test_toggle_unknown_recipe_warns(plan):
    result = sessions.toggle_recipe("missing")

    assert result["selected"] is True
    assert "warning" in result
    assert result["summary"]["items_to_buy"] == 0


def test_reset_meal_plan(plan):
    sessions.toggle_recipe("r1")

    result = sessions.reset_meal_plan()

    assert result["summary"] == {
        "selected_count": 0, "items_to_buy": 0, "owned_count": 0, "total_price": 0.0
    }


def test_recommendations_rank_overlap_and_respect_limit():
    chicken = create_test_ingredient("chicken")
    pepper = create_test_ingredient("pepper")
    tofu = create_test_ingredient("tofu")
    beef = create_test_ingredient("beef")
    recipes = [
        create_test_recipe("stirfry", [(chicken, 1), (pepper, 1)], name="Stir Fry"),
        create_test_recipe("fajitas", [(chicken, 1), (pepper, 1), (beef, 1)], name="Fajitas"),
        create_test_recipe("curry", [(tofu, 1)], name="Curry"),
        create_test_recipe("burger", [(beef, 1)], name="Burger"),
    ]
    sessions.start_meal_plan(recipes)
    sessions.toggle_recipe("stirfry")

    result = sessions.get_recommended_recipes(limit=2)

    assert [(r["recipe_id"], r["selected"]) for r in result["recipes"]] == [
        ("stirfry", True), ("fajitas", False), ("burger", False)
    ]
    assert result["recipes"][1]["score"] == pytest.approx(0.667)
    assert result["summary"]["suggested_count"] == 2


def test_collection_similarity(plan):
    # both recipes share their only fresh ingredient
    assert sessions.get_collection_similarity()["similarity_score"] == 1.0


@pytest.mark.usefixtures("temp_db")
def test_session_loads_saved_recipes_lazily():
    repository.save_recipe("Leek Soup", [{"amount": 2, "ingredient": {
        "name": "Leek", "unit": "unit", "shelf": False,
        "source": {"url": "https://shop.example.com/leeks", "price": 1.5, "amount": 2},
    }}])

    result = sessions.get_recommended_recipes()

    assert [r["name"] for r in result["recipes"]] == ["Leek Soup"]
    assert result["recipes"][0]["price"] == 1.5

import pytest

from meal_planner_mcp.planner.aggregation import aggregate_ingredients
from meal_planner_mcp.planner.ownership import (
    calculate_remaining_to_target,
    calculate_total_price,
    get_ingredients_left_to_buy,
    separate_ingredients_by_shelf,
    target_progress,
)
from tests.conftest import create_test_ingredient, create_test_recipe


def test_owned_ingredients_are_removed_without_recosting(scenario_recipes):
    aggregated = aggregate_ingredients(scenario_recipes)

    remaining = get_ingredients_left_to_buy(aggregated, ["flour"])

    assert [item.ingredient.id for item in remaining] == ["onion"]
    assert remaining[0] is aggregated[1]


def test_unknown_owned_ids_have_no_effect(scenario_recipes):
    aggregated = aggregate_ingredients(scenario_recipes)

    assert get_ingredients_left_to_buy(aggregated, {"saffron"}) == aggregated


def test_total_price(scenario_recipes):
    aggregated = aggregate_ingredients(scenario_recipes)

    assert calculate_total_price(aggregated) == pytest.approx(3.0)
    assert calculate_total_price([]) == 0.0


@pytest.mark.parametrize("current, target, expected", [
    (50, 40, 0),
    (10, 40, 30),
    (40, 40, 0),
    (0, 0, 0),
])
def test_remaining_to_target_is_never_negative(current, target, expected):
    assert calculate_remaining_to_target(current, target) == expected


def test_separate_by_shelf_preserves_order(flour, onion):
    salt = create_test_ingredient("salt", shelf=True)
    leek = create_test_ingredient("leek")
    recipe = create_test_recipe("mix", [(onion, 1), (flour, 10), (leek, 1), (salt, 1)])

    separated = separate_ingredients_by_shelf(aggregate_ingredients([recipe]))

    assert [i.ingredient.id for i in separated['shelf_ingredients']] == ["flour", "salt"]
    assert [i.ingredient.id for i in separated['non_shelf_ingredients']] == ["onion", "leek"]


def test_target_progress_below_target():
    progress = target_progress(10.0, 40.0)

    assert progress['remaining'] == 30.0
    assert progress['percent'] == 25.0
    assert progress['target_reached'] is False


def test_target_progress_caps_percent():
    progress = target_progress(55.0, 40.0)

    assert progress['remaining'] == 0
    assert progress['percent'] == 100.0
    assert progress['target_reached'] is True

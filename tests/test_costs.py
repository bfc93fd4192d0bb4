import pytest

from meal_planner_mcp.planner.costs import calculate_ingredient_cost, calculate_recipe_price
from meal_planner_mcp.planner.models import RecipeIngredient
from tests.conftest import create_test_ingredient, create_test_recipe


def test_perishable_cost_scales_with_amount():
    chicken = create_test_ingredient("chicken", unit="g", price=5.0, pack_amount=500)

    cost = calculate_ingredient_cost(RecipeIngredient(ingredient=chicken, amount=1000))

    assert cost == pytest.approx(10.0)


@pytest.mark.parametrize("amount", [0.5, 1, 2, 3])
def test_perishable_cost_never_below_one_pack(onion, amount):
    cost = calculate_ingredient_cost(RecipeIngredient(ingredient=onion, amount=amount))

    assert cost >= onion.source.price


def test_perishable_partial_pack_costs_full_pack(onion):
    assert calculate_ingredient_cost(RecipeIngredient(ingredient=onion, amount=2)) == 1.0


@pytest.mark.parametrize("amount", [1, 200, 1000, 5000])
def test_shelf_cost_is_pack_price_regardless_of_amount(flour, amount):
    assert calculate_ingredient_cost(RecipeIngredient(ingredient=flour, amount=amount)) == 2.0


def test_zero_pack_amount_on_perishable_is_not_handled():
    broken = create_test_ingredient("broken", price=1.0, pack_amount=0)

    with pytest.raises(ZeroDivisionError):
        calculate_ingredient_cost(RecipeIngredient(ingredient=broken, amount=1))


def test_zero_pack_amount_on_shelf_item_is_fine():
    salt = create_test_ingredient("salt", shelf=True, price=0.5, pack_amount=0)

    assert calculate_ingredient_cost(RecipeIngredient(ingredient=salt, amount=5)) == 0.5


def test_recipe_price_sums_each_requirement(flour, onion):
    recipe = create_test_recipe("bread", [(flour, 200), (onion, 6)])

    # flour pack 2.00 + two packs of onions 2.00
    assert calculate_recipe_price(recipe) == pytest.approx(4.0)


def test_recipe_price_counts_repeated_shelf_item_twice(flour):
    recipe = create_test_recipe("double", [(flour, 100), (flour, 100)])

    assert calculate_recipe_price(recipe) == pytest.approx(4.0)


def test_empty_recipe_price_is_zero():
    assert calculate_recipe_price(create_test_recipe("empty", [])) == 0.0

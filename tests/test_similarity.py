import pytest

from meal_planner_mcp.planner.similarity import (
    calculate_general_similarity_score,
    calculate_jaccard_similarity,
    calculate_recipe_similarity,
    calculate_recommendation_score,
    sort_recipes_by_recommendation,
)
from tests.conftest import create_test_ingredient, create_test_recipe


@pytest.fixture
def pantry():
    return {
        name: create_test_ingredient(name, shelf=True)
        for name in ("salt", "oil")
    }


@pytest.fixture
def fresh():
    return {
        name: create_test_ingredient(name)
        for name in ("chicken", "pepper", "rice_noodles", "beef", "carrot", "tofu")
    }


@pytest.fixture
def abc_recipes(pantry, fresh):
    # B shares 2 of A's 3 fresh ingredients, C shares none
    a = create_test_recipe("A", [
        (fresh["chicken"], 1), (fresh["pepper"], 1), (fresh["carrot"], 1), (pantry["oil"], 1),
    ])
    b = create_test_recipe("B", [
        (fresh["chicken"], 1), (fresh["pepper"], 1), (fresh["beef"], 1), (pantry["salt"], 1),
    ])
    c = create_test_recipe("C", [
        (fresh["tofu"], 1), (fresh["rice_noodles"], 1), (pantry["oil"], 1), (pantry["salt"], 1),
    ])
    return a, b, c


def test_jaccard_boundaries():
    assert calculate_jaccard_similarity([], []) == 1
    assert calculate_jaccard_similarity([], ["x"]) == 0
    assert calculate_jaccard_similarity(["x"], []) == 0
    assert calculate_jaccard_similarity(["a", "b"], ["a", "c"]) == pytest.approx(1 / 3)


def test_jaccard_ignores_duplicates():
    assert calculate_jaccard_similarity(["a", "a", "b"], ["b", "a"]) == 1


def test_recipe_similarity_ignores_shelf_items_by_default(pantry, fresh):
    a = create_test_recipe("a", [(fresh["chicken"], 1), (pantry["salt"], 1), (pantry["oil"], 1)])
    b = create_test_recipe("b", [(fresh["beef"], 1), (pantry["salt"], 1), (pantry["oil"], 1)])

    assert calculate_recipe_similarity(a, b) == 0
    assert calculate_recipe_similarity(a, b, avoid_shelf_items=False) == pytest.approx(0.5)


def test_recipes_of_only_shelf_items_count_as_identical(pantry):
    a = create_test_recipe("a", [(pantry["salt"], 1)])
    b = create_test_recipe("b", [(pantry["oil"], 1)])

    assert calculate_recipe_similarity(a, b) == 1


def test_recommendation_score_is_max_over_selection(abc_recipes):
    a, b, c = abc_recipes

    assert calculate_recommendation_score(b, []) == 0
    assert calculate_recommendation_score(b, [c]) == 0
    assert calculate_recommendation_score(b, [a, c]) == pytest.approx(0.5)


def test_sort_puts_selected_first_then_by_score(abc_recipes):
    a, b, c = abc_recipes

    ordered = sort_recipes_by_recommendation([a, b, c], ["A"])

    assert [r.id for r in ordered] == ["A", "B", "C"]


def test_sort_with_unsorted_input(abc_recipes):
    a, b, c = abc_recipes

    ordered = sort_recipes_by_recommendation([c, b, a], ["A"])

    assert [r.id for r in ordered] == ["A", "B", "C"]


def test_sort_breaks_ties_by_name(fresh):
    base = create_test_recipe("base", [(fresh["chicken"], 1)], name="Base")
    zeta = create_test_recipe("z", [(fresh["tofu"], 1)], name="Zeta")
    alpha = create_test_recipe("a", [(fresh["beef"], 1)], name="Alpha")
    lower = create_test_recipe("l", [(fresh["carrot"], 1)], name="alpha")

    ordered = sort_recipes_by_recommendation([zeta, lower, base, alpha], ["base"])

    # case-sensitive: uppercase sorts before lowercase
    assert [r.name for r in ordered] == ["Base", "Alpha", "Zeta", "alpha"]


def test_sort_selected_follow_selection_order_and_drop_unknown(abc_recipes):
    a, b, c = abc_recipes

    ordered = sort_recipes_by_recommendation([a, b, c], ["C", "missing", "A"])

    assert [r.id for r in ordered][:2] == ["C", "A"]
    assert len(ordered) == 3


def test_sort_without_selection_is_by_name(abc_recipes):
    a, b, c = abc_recipes

    assert [r.id for r in sort_recipes_by_recommendation([c, a, b], [])] == ["A", "B", "C"]
    assert [r.id for r in sort_recipes_by_recommendation([c, a, b], ["missing"])] == ["A", "B", "C"]


def test_general_similarity(abc_recipes):
    a, b, c = abc_recipes

    assert calculate_general_similarity_score([]) == 0
    assert calculate_general_similarity_score([a]) == 0
    # pairs: A-B 0.5, A-C 0, B-C 0
    assert calculate_general_similarity_score([a, b, c]) == pytest.approx(0.5 / 3)

"""재주문 제안 테스트"""
from __future__ import annotations

from recipe_forecast.analytics.ingredients import IngredientUsageForecastPipeline
from recipe_forecast.analytics.reorder import ReorderSuggestionGenerator

from conftest import COMPANY


def _generator(source, **kwargs):
    return ReorderSuggestionGenerator(
        IngredientUsageForecastPipeline(source, source, source), **kwargs
    )


def test_default_threshold_is_seven_days(bakery_source):
    suggestions = _generator(bakery_source).generate_reorder_suggestions(COMPANY)

    assert [s.ingredient_id for s in suggestions] == [20, 10]
    assert all(s.days_until_reorder <= 7 for s in suggestions)


def test_threshold_filters_suggestions(bakery_source):
    """남은 일수 4인 밀가루는 임계값 3을 넘어 제외"""
    suggestions = _generator(bakery_source).generate_reorder_suggestions(COMPANY, 3)

    assert [s.ingredient_id for s in suggestions] == [20]


def test_constructor_threshold_used_as_default(bakery_source):
    generator = _generator(bakery_source, max_days_until_reorder=0)

    assert [s.ingredient_id for s in generator.generate_reorder_suggestions(COMPANY)] == [20]
    assert len(generator.generate_reorder_suggestions(COMPANY, 30)) == 2


def test_urgent_suggestions_below_half_threshold(bakery_source):
    generator = _generator(bakery_source)

    assert [s.ingredient_id for s in generator.generate_urgent_suggestions(COMPANY)] == [20]
    assert [s.ingredient_id for s in generator.generate_urgent_suggestions(COMPANY, 10)] == [20, 10]


def test_no_history_no_suggestions():
    from recipe_forecast.data_sources.memory import InMemoryDataSource

    assert _generator(InMemoryDataSource()).generate_reorder_suggestions(COMPANY) == []

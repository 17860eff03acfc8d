"""Analytics layer facade: ingredient usage, sales and reorder pipelines."""

from .ingredients import IngredientUsageForecastPipeline, days_until_reorder
from .reorder import ReorderSuggestionGenerator
from .sales import SalesForecastPipeline

__all__ = [
    "IngredientUsageForecastPipeline",
    "SalesForecastPipeline",
    "ReorderSuggestionGenerator",
    "days_until_reorder",
]

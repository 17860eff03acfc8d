"""재주문 제안."""

from __future__ import annotations

import logging
from typing import List, Optional

from ..common.cancellation import InvocationGuard
from ..domain.models import ForecastingFilters, IngredientForecast
from .ingredients import IngredientUsageForecastPipeline

logger = logging.getLogger(__name__)


class ReorderSuggestionGenerator:
    """
    "지금 무엇을 재주문해야 하는가"를 한 번의 호출로 표현하는 필터.

    기간 제한 없이 재료 사용량 예측을 실행한 뒤
    ``days_until_reorder <= max_days_until_reorder``인 항목만 남깁니다.
    정렬 순서(남은 일수 오름차순)는 그대로 유지됩니다.
    """

    def __init__(
        self,
        ingredient_pipeline: IngredientUsageForecastPipeline,
        *,
        max_days_until_reorder: Optional[int] = None,
    ) -> None:
        self.ingredient_pipeline = ingredient_pipeline
        self.default_max_days = (
            ingredient_pipeline.config.reorder.max_days_until_reorder
            if max_days_until_reorder is None
            else max_days_until_reorder
        )

    def generate_reorder_suggestions(
        self,
        company_id: int,
        max_days_until_reorder: Optional[int] = None,
        *,
        guard: Optional[InvocationGuard] = None,
    ) -> List[IngredientForecast]:
        max_days = self.default_max_days if max_days_until_reorder is None else max_days_until_reorder
        forecasts = self.ingredient_pipeline.forecast_ingredient_usage(
            ForecastingFilters(company_id=company_id), guard=guard
        )
        suggestions = [f for f in forecasts if f.days_until_reorder <= max_days]
        logger.info(
            f"Reorder suggestions: {len(suggestions)} of {len(forecasts)} within {max_days} days"
        )
        return suggestions

    def generate_urgent_suggestions(
        self,
        company_id: int,
        max_days_until_reorder: Optional[int] = None,
        *,
        guard: Optional[InvocationGuard] = None,
    ) -> List[IngredientForecast]:
        """재주문 제안 중 남은 일수가 임계값의 절반 미만인 긴급 항목만 반환합니다."""
        max_days = self.default_max_days if max_days_until_reorder is None else max_days_until_reorder
        return [
            f
            for f in self.generate_reorder_suggestions(company_id, max_days, guard=guard)
            if f.days_until_reorder < max_days / 2
        ]

"""재료 사용량 예측 및 재주문점 계산.

생산 이력을 재료별 사용량 시계열로 펼치고, 이동평균으로 사용량을 예측한 뒤
재주문점, 제안 주문량, 재주문까지 남은 일수를 계산합니다.
"""

from __future__ import annotations

import logging
import math
from decimal import Decimal
from typing import List, Optional

from ..common.cancellation import InvocationGuard, check_guard
from ..common.decimal_utils import ZERO, decimal_mean, to_decimal
from ..common.performance import measure_time_context
from ..core.config import CONFIG, ForecastConfig
from ..data_sources.base import (
    InventorySource,
    MetadataSource,
    ProductionHistorySource,
    call_source,
)
from ..domain.filters import filter_by_ids, filter_date_range
from ..domain.models import ForecastingFilters, IngredientForecast
from ..domain.normalization import native_id, production_usage_frame, to_series
from ..domain.validation import validate_config, validate_filters
from ..forecast.moving_average import MovingAverageForecaster
from .metadata import resolve_names

logger = logging.getLogger(__name__)


def days_until_reorder(current_stock: Decimal, avg_usage: Decimal) -> int:
    """
    ``ceil(current_stock / avg_usage)``. 재고나 평균 사용량이 0 이하이면 0.

    0은 "지금 재고 없음"과 "측정 가능한 사용량 없음"을 모두 뜻합니다.
    """
    if current_stock > 0 and avg_usage > 0:
        return int(math.ceil(current_stock / avg_usage))
    return 0


class IngredientUsageForecastPipeline:
    """
    재료별 사용량 예측 파이프라인.

    처리 단계:
    1. 회사/기간 범위의 생산 이력 조회 (본문 + 구역 재료 항목 포함)
    2. 재료별 사용량 시계열 생성 (per_batch_quantity × quantity_produced)
    3. 관측치가 min_observations(3)보다 적은 재료 제외
    4. 이동평균 예측 (윈도우 = min(max_period, 관측치 수 - 1))
    5. 마지막 예측점 → predicted_usage / confidence
    6. 평균 사용량으로 재주문점과 제안 주문량 계산
    7. 현재 재고로 재주문까지 남은 일수 계산
    8. 재료 이름 조회 (없으면 "Ingredient {id}")
    9. days_until_reorder 오름차순 정렬

    Examples:
        >>> pipeline = IngredientUsageForecastPipeline(source, source, source)
        >>> forecasts = pipeline.forecast_ingredient_usage(ForecastingFilters(company_id=1))
    """

    def __init__(
        self,
        production: ProductionHistorySource,
        inventory: Optional[InventorySource] = None,
        metadata: Optional[MetadataSource] = None,
        *,
        config: ForecastConfig = CONFIG,
    ) -> None:
        validate_config(config)
        self.production = production
        self.inventory = inventory
        self.metadata = metadata
        self.config = config
        self.forecaster = MovingAverageForecaster(config.moving_average)

    def _window_for(self, observations: int) -> int:
        """
        이동평균 윈도우 = ``max(1, min(max_period, n - 1))``.

        n이 max_period보다 크면 ``min(max_period, n)``과 같습니다.
        n <= max_period이면 ``min(max_period, n)`` = n 으로는 예측점이 나오지 않으므로
        n - 1로 줄여 마지막 관측치에 대한 예측점 하나를 만듭니다.
        """
        return max(1, min(self.config.moving_average.max_period, observations - 1))

    def forecast_ingredient_usage(
        self,
        filters: ForecastingFilters,
        *,
        guard: Optional[InvocationGuard] = None,
    ) -> List[IngredientForecast]:
        """
        Args:
            filters: 회사 범위, 선택적 기간과 재료 ID 제한
            guard: 호출 단위 타임아웃/취소

        Returns:
            재주문까지 남은 일수 오름차순 IngredientForecast 리스트

        Raises:
            ValidationError: 필터가 올바르지 않을 경우
            DataLoadError: 협력자 조회 실패 시
            ForecastCancelledError: 타임아웃/취소 시
        """
        validate_filters(filters)

        with measure_time_context("forecast_ingredient_usage") as perf:
            # ========================================
            # 1단계: 생산 이력 조회 및 사용량 펼치기
            # ========================================
            records = call_source(
                "production history",
                self.production.fetch_production_history,
                filters.company_id,
                filters.start_date,
                filters.end_date,
            )
            check_guard(guard, "forecast_ingredient_usage")

            usage = production_usage_frame(records)
            usage = filter_date_range(usage, filters.start_date, filters.end_date)
            usage = filter_by_ids(usage, filters.ingredient_ids, id_col="ingredient_id")

            if usage.empty:
                logger.info("No production usage in scope; no ingredient forecasts")
                return []

            # ========================================
            # 2단계: 재료별 예측
            # ========================================
            cfg = self.config.reorder
            drafts = []
            for ingredient_id, group in usage.groupby("ingredient_id", sort=True):
                check_guard(guard, "forecast_ingredient_usage")

                if len(group) < self.config.min_observations:
                    logger.debug(
                        f"Ingredient {ingredient_id}: {len(group)} observations, skipped"
                    )
                    continue

                series = to_series(group)
                points = self.forecaster.forecast(series, self._window_for(len(series)))
                if not points:
                    logger.debug(f"Ingredient {ingredient_id}: no forecast points, skipped")
                    continue

                latest = points[-1]
                avg_usage = decimal_mean([p.value for p in series])
                safety_stock = avg_usage * cfg.safety_stock_days
                drafts.append(
                    {
                        "ingredient_id": native_id(ingredient_id),
                        "predicted_usage": latest.predicted_value,
                        "confidence": latest.confidence,
                        "avg_usage": avg_usage,
                        "reorder_point": avg_usage * cfg.lead_time_days + safety_stock,
                        "suggested_order_quantity": avg_usage * cfg.order_coverage_days,
                    }
                )

            if not drafts:
                perf.record(entities=usage["ingredient_id"].nunique(), forecasts=0)
                return []

            # ========================================
            # 3단계: 재고 및 이름 조회
            # ========================================
            ids = [d["ingredient_id"] for d in drafts]
            stock = {}
            if self.inventory is not None:
                stock = call_source(
                    "inventory levels",
                    self.inventory.fetch_inventory_levels,
                    filters.company_id,
                    list(filters.ingredient_ids) if filters.ingredient_ids else None,
                )
            check_guard(guard, "forecast_ingredient_usage")

            names = resolve_names(
                ids,
                self.metadata.ingredient_name if self.metadata is not None else None,
                description="ingredient metadata",
                max_workers=self.config.metadata_workers,
            )
            check_guard(guard, "forecast_ingredient_usage")

            # ========================================
            # 4단계: 결과 조립 및 정렬
            # ========================================
            forecasts = []
            for draft in drafts:
                ingredient_id = draft["ingredient_id"]
                raw_stock = stock.get(ingredient_id)
                current_stock = ZERO if raw_stock is None else to_decimal(raw_stock)

                forecasts.append(
                    IngredientForecast(
                        ingredient_id=ingredient_id,
                        ingredient_name=names.get(ingredient_id) or f"Ingredient {ingredient_id}",
                        current_stock=current_stock,
                        predicted_usage=draft["predicted_usage"],
                        reorder_point=draft["reorder_point"],
                        suggested_order_quantity=draft["suggested_order_quantity"],
                        days_until_reorder=days_until_reorder(current_stock, draft["avg_usage"]),
                        confidence=draft["confidence"],
                    )
                )

            forecasts.sort(key=lambda f: f.days_until_reorder)
            perf.record(
                entities=usage["ingredient_id"].nunique(), forecasts=len(forecasts)
            )
            return forecasts

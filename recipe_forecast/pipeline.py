"""End-to-end orchestration helpers for the recipe forecast engine."""

from __future__ import annotations

import datetime as dt
import logging
from dataclasses import dataclass, field
from typing import List, Optional, Union

from .analytics.ingredients import IngredientUsageForecastPipeline
from .analytics.reorder import ReorderSuggestionGenerator
from .analytics.sales import SalesForecastPipeline
from .common.cancellation import InvocationGuard
from .core.config import CONFIG, ForecastConfig
from .data_sources.base import (
    InventorySource,
    MetadataSource,
    ProductionHistorySource,
    SalesRecordSource,
    SeasonalTrendSource,
)
from .domain.exceptions import ValidationError
from .domain.models import ForecastingFilters, IngredientForecast, SalesForecast
from .forecast.seasonal import SeasonalAdjuster

logger = logging.getLogger(__name__)

FORECAST_TYPES = ("sales", "ingredients", "reorder")

ForecastResult = Union[List[SalesForecast], List[IngredientForecast]]


@dataclass(frozen=True)
class ForecastingEngine:
    """
    협력자와 설정을 묶어 세 파이프라인을 제공하는 파사드.

    엔진 자체는 상태를 갖지 않으며, 같은 입력과 같은 협력자 스냅샷이면
    항상 같은 결과를 반환합니다.

    Examples:
        >>> engine = ForecastingEngine.from_source(InMemoryDataSource(...))
        >>> engine.forecast_sales(ForecastingFilters(company_id=1))
        >>> engine.run_forecast("reorder", ForecastingFilters(company_id=1), max_days=7)
    """

    production: ProductionHistorySource
    sales: SalesRecordSource
    inventory: Optional[InventorySource] = None
    seasonal: Optional[SeasonalTrendSource] = None
    metadata: Optional[MetadataSource] = None
    config: ForecastConfig = field(default=CONFIG)
    today: Optional[dt.date] = None

    @classmethod
    def from_source(
        cls,
        source,
        *,
        config: ForecastConfig = CONFIG,
        today: Optional[dt.date] = None,
    ) -> "ForecastingEngine":
        """모든 협력자 프로토콜을 구현한 객체 하나로 엔진을 생성합니다."""
        return cls(
            production=source,
            sales=source,
            inventory=source,
            seasonal=source,
            metadata=source,
            config=config,
            today=today,
        )

    @property
    def ingredient_pipeline(self) -> IngredientUsageForecastPipeline:
        return IngredientUsageForecastPipeline(
            self.production,
            self.inventory,
            self.metadata,
            config=self.config,
        )

    @property
    def sales_pipeline(self) -> SalesForecastPipeline:
        return SalesForecastPipeline(
            self.sales,
            SeasonalAdjuster(self.seasonal),
            self.metadata,
            config=self.config,
            today=self.today,
        )

    @property
    def reorder_generator(self) -> ReorderSuggestionGenerator:
        return ReorderSuggestionGenerator(self.ingredient_pipeline)

    def forecast_ingredient_usage(
        self,
        filters: ForecastingFilters,
        *,
        guard: Optional[InvocationGuard] = None,
    ) -> List[IngredientForecast]:
        return self.ingredient_pipeline.forecast_ingredient_usage(filters, guard=guard)

    def forecast_sales(
        self,
        filters: ForecastingFilters,
        *,
        guard: Optional[InvocationGuard] = None,
    ) -> List[SalesForecast]:
        return self.sales_pipeline.forecast_sales(filters, guard=guard)

    def generate_reorder_suggestions(
        self,
        company_id: int,
        max_days_until_reorder: Optional[int] = None,
        *,
        guard: Optional[InvocationGuard] = None,
    ) -> List[IngredientForecast]:
        return self.reorder_generator.generate_reorder_suggestions(
            company_id, max_days_until_reorder, guard=guard
        )

    def run_forecast(
        self,
        forecast_type: str,
        filters: ForecastingFilters,
        *,
        max_days: Optional[int] = None,
        timeout: Optional[float] = None,
    ) -> ForecastResult:
        """
        예측 종류 이름으로 파이프라인을 선택해 실행합니다.

        Args:
            forecast_type: "sales", "ingredients", "reorder"
            filters: 조회 조건 ("reorder"는 company_id만 사용)
            max_days: "reorder"의 재주문 임계 일수
            timeout: 호출 전체 허용 시간 (초)

        Raises:
            ValidationError: 알 수 없는 forecast_type일 경우
        """
        kind = str(forecast_type).strip().lower()
        if kind not in FORECAST_TYPES:
            logger.error(f"Unknown forecast type: {forecast_type!r}")
            raise ValidationError(
                f"알 수 없는 예측 종류입니다: {forecast_type!r} "
                f"(가능한 값: {', '.join(FORECAST_TYPES)})"
            )

        guard = InvocationGuard(timeout=timeout) if timeout is not None else None
        logger.debug(f"Running {kind} forecast for company {filters.company_id}")

        if kind == "sales":
            return self.forecast_sales(filters, guard=guard)
        if kind == "ingredients":
            return self.forecast_ingredient_usage(filters, guard=guard)
        return self.generate_reorder_suggestions(filters.company_id, max_days, guard=guard)


def run_forecast(
    engine: ForecastingEngine,
    forecast_type: str,
    filters: ForecastingFilters,
    *,
    max_days: Optional[int] = None,
    timeout: Optional[float] = None,
) -> ForecastResult:
    """``ForecastingEngine.run_forecast`` 함수형 진입점."""
    return engine.run_forecast(
        forecast_type, filters, max_days=max_days, timeout=timeout
    )

"""레시피 판매 예측.

판매 기록을 레시피별 시계열로 묶어 지수평활로 예측하고,
최근 추세와 계절 배수를 적용합니다.
"""

from __future__ import annotations

import datetime as dt
import logging
from typing import Dict, List, Optional

import pandas as pd

from ..common.cancellation import InvocationGuard, check_guard
from ..common.performance import measure_time_context
from ..core.config import CONFIG, ForecastConfig
from ..data_sources.base import MetadataSource, SalesRecordSource, call_source
from ..domain.filters import filter_by_ids, filter_date_range
from ..domain.models import ForecastingFilters, SalesForecast
from ..domain.normalization import bucket_observations, native_id, sales_frame, to_series
from ..domain.validation import validate_config, validate_filters
from ..forecast.seasonal import SeasonalAdjuster
from ..forecast.smoothing import ExponentialSmoothingForecaster
from ..forecast.trend import TrendClassifier
from .metadata import resolve_names

logger = logging.getLogger(__name__)


def _first_name(group: pd.DataFrame) -> Optional[str]:
    for name in group.sort_values("seq", kind="mergesort")["recipe_name"]:
        if isinstance(name, str) and name.strip():
            return name
    return None


class SalesForecastPipeline:
    """
    레시피별 판매 예측 파이프라인.

    처리 단계:
    1. 회사/기간/레시피 범위의 판매 기록 조회
    2. 레시피별 시계열 생성 (레시피 없는 행 제외, 선택적 일/주 단위 집계)
    3. 관측치가 min_observations(3)보다 적은 레시피 제외
    4. 지수평활 예측, 마지막 예측점 → 기본 예측값/신뢰도
    5. 최근 7개 관측치로 추세 분류
    6. 이번 달 계절 배수 적용: predicted_sales = 기본 예측값 × 배수
    7. 레시피 이름 결정 (판매 행 → 메타데이터 → "Recipe {id}")
    8. predicted_sales 내림차순 정렬

    Args:
        sales: 판매 기록 협력자
        seasonal: 계절 배수 조회기 (None이면 항상 1)
        metadata: 레시피 이름 협력자 (선택)
        config: 예측 설정
        today: 계절 배수 조회 기준일 (None이면 호출 시점의 오늘)
    """

    def __init__(
        self,
        sales: SalesRecordSource,
        seasonal: Optional[SeasonalAdjuster] = None,
        metadata: Optional[MetadataSource] = None,
        *,
        config: ForecastConfig = CONFIG,
        today: Optional[dt.date] = None,
    ) -> None:
        validate_config(config)
        self.sales = sales
        self.seasonal = seasonal or SeasonalAdjuster()
        self.metadata = metadata
        self.config = config
        self.today = today
        self.forecaster = ExponentialSmoothingForecaster(config.smoothing)
        self.trend_classifier = TrendClassifier(config.trend)

    def forecast_sales(
        self,
        filters: ForecastingFilters,
        *,
        guard: Optional[InvocationGuard] = None,
    ) -> List[SalesForecast]:
        """
        Args:
            filters: 회사 범위, 선택적 기간과 레시피 ID 제한
            guard: 호출 단위 타임아웃/취소

        Returns:
            predicted_sales 내림차순 SalesForecast 리스트

        Raises:
            ValidationError: 필터가 올바르지 않을 경우
            DataLoadError: 협력자 조회 실패 시
            ForecastCancelledError: 타임아웃/취소 시
        """
        validate_filters(filters)
        month = (self.today or dt.date.today()).month

        with measure_time_context("forecast_sales") as perf:
            records = call_source(
                "sales records",
                self.sales.fetch_sales_records,
                filters.company_id,
                filters.start_date,
                filters.end_date,
                list(filters.recipe_ids) if filters.recipe_ids else None,
            )
            check_guard(guard, "forecast_sales")

            frame = sales_frame(records)
            frame = filter_date_range(frame, filters.start_date, filters.end_date)
            frame = filter_by_ids(frame, filters.recipe_ids, id_col="recipe_id")

            if frame.empty:
                logger.info("No sales records in scope; no sales forecasts")
                return []

            drafts = []
            for recipe_id, group in frame.groupby("recipe_id", sort=True):
                check_guard(guard, "forecast_sales")
                recipe_id = native_id(recipe_id)

                observations = bucket_observations(group, self.config.sales.bucket)
                if len(observations) < self.config.min_observations:
                    logger.debug(
                        f"Recipe {recipe_id}: {len(observations)} observations, skipped"
                    )
                    continue

                series = to_series(observations)
                points = self.forecaster.forecast(series)
                if not points:
                    logger.debug(f"Recipe {recipe_id}: no forecast points, skipped")
                    continue

                latest = points[-1]
                multiplier = self.seasonal.multiplier_for(
                    filters.company_id, recipe_id, month
                )
                drafts.append(
                    {
                        "recipe_id": recipe_id,
                        "row_name": _first_name(group),
                        "predicted_sales": latest.predicted_value * multiplier,
                        "confidence": latest.confidence,
                        "trend": self.trend_classifier.classify(
                            series[-self.config.trend.window :]
                        ),
                        "seasonal_multiplier": multiplier,
                    }
                )

            # ========================================
            # 판매 행에 이름이 없는 레시피만 메타데이터 조회
            # ========================================
            missing = [d["recipe_id"] for d in drafts if not d["row_name"]]
            names: Dict[int, Optional[str]] = {}
            if missing:
                names = resolve_names(
                    missing,
                    self.metadata.recipe_name if self.metadata is not None else None,
                    description="recipe metadata",
                    max_workers=self.config.metadata_workers,
                )
                check_guard(guard, "forecast_sales")

            forecasts = [
                SalesForecast(
                    recipe_id=d["recipe_id"],
                    recipe_name=d["row_name"]
                    or names.get(d["recipe_id"])
                    or f"Recipe {d['recipe_id']}",
                    predicted_sales=d["predicted_sales"],
                    confidence=d["confidence"],
                    trend=d["trend"],
                    seasonal_multiplier=d["seasonal_multiplier"],
                )
                for d in drafts
            ]

            forecasts.sort(key=lambda f: f.predicted_sales, reverse=True)
            perf.record(entities=frame["recipe_id"].nunique(), forecasts=len(forecasts))
            return forecasts

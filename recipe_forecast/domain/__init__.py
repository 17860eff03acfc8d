"""
도메인 계층 퍼블릭 API

이 모듈은 도메인 계층의 주요 클래스와 함수를 재수출하여
일관된 퍼블릭 API를 제공합니다.
"""
from __future__ import annotations

from .exceptions import (
    DataLoadError,
    DomainError,
    ForecastCancelledError,
    ValidationError,
)
from .filters import filter_by_ids, filter_date_range
from .models import (
    ForecastingFilters,
    ForecastPoint,
    IngredientForecast,
    ProductionRecord,
    RecipeLineItem,
    RecipeSection,
    SalesForecast,
    SalesRecord,
    SeasonalTrend,
    TimeSeriesPoint,
    Trend,
)
from .normalization import (
    bucket_observations,
    native_id,
    production_usage_frame,
    sales_frame,
    to_series,
)
from .validation import (
    validate_alpha,
    validate_config,
    validate_filters,
    validate_month,
    validate_period,
)

__all__ = [
    # 예외
    "DomainError",
    "ValidationError",
    "DataLoadError",
    "ForecastCancelledError",
    # 모델
    "TimeSeriesPoint",
    "ForecastPoint",
    "Trend",
    "IngredientForecast",
    "SalesForecast",
    "ForecastingFilters",
    "RecipeLineItem",
    "RecipeSection",
    "ProductionRecord",
    "SalesRecord",
    "SeasonalTrend",
    # 정규화
    "production_usage_frame",
    "sales_frame",
    "bucket_observations",
    "native_id",
    "to_series",
    # 필터
    "filter_date_range",
    "filter_by_ids",
    # 검증
    "validate_filters",
    "validate_config",
    "validate_period",
    "validate_alpha",
    "validate_month",
]

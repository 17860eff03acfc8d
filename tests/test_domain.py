"""도메인 계층(정규화/필터/검증/Decimal 헬퍼) 테스트"""
from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal

import numpy as np
import pandas as pd
import pytest

from recipe_forecast.common.decimal_utils import (
    clamp_unit,
    confidence_from_dispersion,
    safe_ratio,
    to_decimal,
)
from recipe_forecast.common.performance import measure_time_context
from recipe_forecast.core.config import ForecastConfig, ReorderConfig, SalesConfig
from recipe_forecast.data_sources.base import call_source
from recipe_forecast.domain import (
    DataLoadError,
    ProductionRecord,
    RecipeLineItem,
    RecipeSection,
    SalesRecord,
    ValidationError,
    bucket_observations,
    filter_by_ids,
    filter_date_range,
    production_usage_frame,
    sales_frame,
    to_series,
    validate_config,
    validate_month,
    validate_period,
)

from conftest import START


# ============================================================
# 정규화
# ============================================================

def test_production_usage_frame_expands_sections():
    record = ProductionRecord(
        recipe_id=1,
        production_date=START,
        quantity_produced=3,
        items=[RecipeLineItem(10, "2")],
        sections=[RecipeSection("필링", [RecipeLineItem(20, "0.5"), RecipeLineItem(10, "1")])],
    )

    frame = production_usage_frame([record])

    assert list(frame["ingredient_id"]) == [10, 20, 10]
    assert list(frame["value"]) == [Decimal(6), Decimal("1.5"), Decimal(3)]
    assert (frame["date"] == pd.Timestamp(START)).all()


def test_production_usage_frame_empty():
    frame = production_usage_frame([])

    assert frame.empty
    assert list(frame.columns) == ["ingredient_id", "date", "value", "seq"]


def test_sales_frame_skips_rows_without_recipe():
    records = [
        SalesRecord(1, "식빵", START, 3),
        SalesRecord(None, "기타", START, 99),
        SalesRecord(2, None, START, "4.5"),
    ]

    frame = sales_frame(records)

    assert list(frame["recipe_id"]) == [1, 2]
    assert list(frame["value"]) == [Decimal(3), Decimal("4.5")]


def test_bucket_observations_by_day_and_week():
    records = [
        SalesRecord(1, None, dt.date(2024, 3, 6), 1),   # 수요일
        SalesRecord(1, None, dt.date(2024, 3, 6), 2),
        SalesRecord(1, None, dt.date(2024, 3, 10), 4),  # 일요일, 같은 주
        SalesRecord(1, None, dt.date(2024, 3, 11), 8),  # 다음 주 월요일
    ]
    frame = sales_frame(records)

    daily = bucket_observations(frame, "day")
    weekly = bucket_observations(frame, "week")

    assert list(daily["value"]) == [Decimal(3), Decimal(4), Decimal(8)]
    assert [p.date for p in to_series(weekly)] == [dt.date(2024, 3, 4), dt.date(2024, 3, 11)]
    assert [p.value for p in to_series(weekly)] == [Decimal(7), Decimal(8)]
    assert bucket_observations(frame, "transaction") is frame


def test_to_series_is_stable_for_same_date():
    records = [
        SalesRecord(1, None, dt.date(2024, 3, 2), 1),
        SalesRecord(1, None, dt.date(2024, 3, 1), 2),
        SalesRecord(1, None, dt.date(2024, 3, 1), 3),
    ]

    series = to_series(sales_frame(records))

    assert [p.value for p in series] == [Decimal(2), Decimal(3), Decimal(1)]


# ============================================================
# 필터
# ============================================================

def _dated_frame():
    return pd.DataFrame(
        {
            "id": [1, 2, 3],
            "date": pd.to_datetime(["2024-03-01", "2024-03-05", "2024-03-10"]),
        }
    )


def test_filter_date_range_bounds_are_independent():
    df = _dated_frame()

    assert list(filter_date_range(df, dt.date(2024, 3, 5), None)["id"]) == [2, 3]
    assert list(filter_date_range(df, None, dt.date(2024, 3, 5))["id"]) == [1, 2]
    assert list(filter_date_range(df, None, None)["id"]) == [1, 2, 3]


def test_filter_by_ids_empty_means_unrestricted():
    df = _dated_frame()

    assert list(filter_by_ids(df, [3, 1], id_col="id")["id"]) == [1, 3]
    assert len(filter_by_ids(df, [], id_col="id")) == 3
    assert len(filter_by_ids(df, None, id_col="id")) == 3


# ============================================================
# 검증 / 헬퍼
# ============================================================

@pytest.mark.parametrize(
    "config",
    [
        ForecastConfig(min_observations=0),
        ForecastConfig(metadata_workers=0),
        ForecastConfig(reorder=ReorderConfig(lead_time_days=-1)),
        ForecastConfig(sales=SalesConfig(bucket="month")),
    ],
)
def test_validate_config_rejects_unusable_values(config):
    with pytest.raises(ValidationError):
        validate_config(config)


def test_default_config_is_valid():
    validate_config(ForecastConfig())


def test_to_decimal_conversions():
    assert to_decimal(0.1) == Decimal("0.1")
    assert to_decimal("1,250.5") == Decimal("1250.5")
    assert to_decimal(7) == Decimal(7)
    with pytest.raises(TypeError):
        to_decimal(None)
    with pytest.raises(TypeError):
        to_decimal(True)


def test_ratio_helpers_never_divide_by_zero():
    assert safe_ratio(Decimal(1), Decimal(0)) is None
    assert confidence_from_dispersion(Decimal(3), Decimal(0)) == 0.0
    assert clamp_unit(Decimal("1.7")) == 1.0
    assert clamp_unit(Decimal("-0.2")) == 0.0


def test_call_source_wraps_collaborator_errors():
    def boom():
        raise KeyError("missing")

    with pytest.raises(DataLoadError) as excinfo:
        call_source("inventory levels", boom)

    assert isinstance(excinfo.value.__cause__, KeyError)


def test_call_source_passes_domain_errors_through():
    def invalid():
        raise ValidationError("bad input")

    with pytest.raises(ValidationError):
        call_source("inventory levels", invalid)


@pytest.mark.parametrize("value", [float("nan"), float("-inf"), "NaN", "Infinity", Decimal("NaN"), "-"])
def test_to_decimal_non_finite_becomes_zero(value):
    assert to_decimal(value) == Decimal(0)


def test_to_decimal_accepts_numpy_scalars():
    assert to_decimal(np.int64(4)) == Decimal(4)
    assert to_decimal(np.float64(2.5)) == Decimal("2.5")
    assert to_decimal(np.float64("nan")) == Decimal(0)


def test_numpy_integers_are_valid_period_and_month():
    validate_period(np.int64(2))
    validate_month(np.int32(12))

    with pytest.raises(ValidationError):
        validate_period(np.int64(0))
    with pytest.raises(ValidationError):
        validate_period(2.0)


def test_production_usage_frame_clamps_negative_quantities():
    record = ProductionRecord(1, START, 2, items=[RecipeLineItem(10, "-3")])

    assert list(production_usage_frame([record])["value"]) == [Decimal(0)]


# ============================================================
# 성능 로깅
# ============================================================

def test_performance_context_logs_entity_counts(caplog):
    caplog.set_level(logging.INFO, logger="recipe_forecast")

    with measure_time_context("forecast_sales") as perf:
        perf.record(entities=3, forecasts=2)

    assert perf.forecasts == 2
    assert "forecast_sales: 2/3 entities forecast in" in caplog.text


def test_performance_context_logs_failure_and_propagates(caplog):
    caplog.set_level(logging.INFO, logger="recipe_forecast")

    with pytest.raises(DataLoadError):
        with measure_time_context("forecast_ingredient_usage"):
            raise DataLoadError("inventory levels 조회에 실패했습니다")

    assert "forecast_ingredient_usage aborted by DataLoadError" in caplog.text

"""
이동평균 / 지수평활 예측기 테스트

윈도우 처리, 신뢰도, 예측 구간 불변식과 퇴화 입력을 검증합니다.
"""
from __future__ import annotations

from decimal import Decimal

import pytest

from recipe_forecast.core.config import MovingAverageConfig
from recipe_forecast.domain.exceptions import ValidationError
from recipe_forecast.forecast.moving_average import (
    MovingAverageForecaster,
    calculate_moving_average,
)
from recipe_forecast.forecast.smoothing import (
    ExponentialSmoothingForecaster,
    calculate_exponential_smoothing,
)


def _assert_bounds(points):
    for p in points:
        assert 0 <= p.lower_bound <= p.predicted_value <= p.upper_bound
        assert 0.0 <= p.confidence <= 1.0


# ============================================================
# 이동평균
# ============================================================

@pytest.mark.parametrize("length,period", [(0, 1), (3, 7), (6, 7)])
def test_moving_average_shorter_than_period_is_empty(series_factory, length, period):
    """기간보다 짧은 시계열은 빈 리스트"""
    series = series_factory([5] * length)

    assert calculate_moving_average(series, period) == []


def test_moving_average_constant_series(series_factory):
    """상수 시계열: 분산 0 → 신뢰도 1, 구간 폭 0"""
    series = series_factory([10] * 8)

    points = calculate_moving_average(series, 7)

    assert len(points) == 1
    point = points[0]
    assert point.predicted_value == Decimal("10")
    assert point.confidence == 1.0
    assert point.lower_bound == Decimal("10")
    assert point.upper_bound == Decimal("10")
    assert point.date == series[7].date


def test_moving_average_uses_trailing_window(series_factory):
    """예측점 i는 series[i-period:i] 평균이며 날짜는 series[i]"""
    series = series_factory([2, 4, 6, 8, 10])

    points = calculate_moving_average(series, 2)

    assert [p.predicted_value for p in points] == [Decimal(3), Decimal(5), Decimal(7)]
    assert [p.date for p in points] == [s.date for s in series[2:]]
    # 윈도우 [2, 4]: std = 1 → confidence = 1 - 1/3
    assert points[0].confidence == pytest.approx(2 / 3)
    assert points[0].upper_bound == Decimal("4.96")
    assert points[0].lower_bound == Decimal("1.04")
    _assert_bounds(points)


def test_moving_average_lower_bound_clamped_to_zero(series_factory):
    """분산이 큰 윈도우: 하한은 0으로 잘리고 신뢰도는 0"""
    series = series_factory([0, 100, 0, 100, 0])

    points = calculate_moving_average(series, 4)

    assert points[0].predicted_value == Decimal(50)
    assert points[0].lower_bound == Decimal(0)
    assert points[0].confidence == 0.0
    _assert_bounds(points)


def test_moving_average_all_zero_confidence_is_zero(series_factory):
    """평균이 0이면 나눗셈 없이 신뢰도 0"""
    points = calculate_moving_average(series_factory([0, 0, 0, 0]), 3)

    assert points[0].confidence == 0.0
    assert points[0].predicted_value == 0


def test_moving_average_custom_z_score(series_factory):
    forecaster = MovingAverageForecaster(MovingAverageConfig(z_score=Decimal(1)))

    points = forecaster.forecast(series_factory([2, 4, 6]), 2)

    assert points[0].upper_bound == Decimal(4)
    assert points[0].lower_bound == Decimal(2)


def test_moving_average_rejects_invalid_period(series_factory):
    with pytest.raises(ValidationError):
        calculate_moving_average(series_factory([1, 2, 3]), 0)


# ============================================================
# 지수평활
# ============================================================

@pytest.mark.parametrize("values", [[], [5]])
def test_exponential_smoothing_short_series_is_empty(series_factory, values):
    """관측치 2개 미만은 빈 리스트"""
    assert calculate_exponential_smoothing(series_factory(values)) == []


def test_exponential_smoothing_recursion(series_factory):
    """smoothed = 0.3*v + 0.7*smoothed, 첫 관측치는 예측점 없음"""
    series = series_factory([10, 20, 20])

    points = calculate_exponential_smoothing(series)

    assert len(points) == 2
    assert points[0].predicted_value == Decimal("13")
    assert points[1].predicted_value == Decimal("15.1")
    assert points[0].date == series[1].date
    # error = |20 - 13| = 7 → confidence = 1 - 7/20, margin = 14
    assert points[0].confidence == pytest.approx(0.65)
    assert points[0].upper_bound == Decimal("27")
    assert points[0].lower_bound == Decimal("0")
    _assert_bounds(points)


def test_exponential_smoothing_alpha_one_tracks_last_value(series_factory):
    points = ExponentialSmoothingForecaster().forecast(series_factory([3, 7, 9]), alpha=1)

    assert [p.predicted_value for p in points] == [Decimal(7), Decimal(9)]
    assert all(p.confidence == 1.0 for p in points)


def test_exponential_smoothing_zero_value_confidence_is_zero(series_factory):
    """관측값이 0이면 신뢰도 0 (0으로 나누지 않음)"""
    points = calculate_exponential_smoothing(series_factory([4, 0]))

    assert points[0].confidence == 0.0
    _assert_bounds(points)


@pytest.mark.parametrize("alpha", [0, -0.1, 1.5])
def test_exponential_smoothing_rejects_invalid_alpha(series_factory, alpha):
    with pytest.raises(ValidationError):
        calculate_exponential_smoothing(series_factory([1, 2, 3]), alpha)


def test_bounds_invariant_on_noisy_series(series_factory):
    """잡음이 큰 시계열에서도 0 <= lower <= predicted <= upper"""
    values = [3, 17, 0, 42, 8, 8, 1, 30, 12, 0, 5]
    series = series_factory(values)

    _assert_bounds(calculate_moving_average(series, 3))
    _assert_bounds(calculate_exponential_smoothing(series))

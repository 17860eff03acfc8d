"""Forecast 계산 모듈.

이동평균/지수평활 예측기, 추세 분류기, 계절 보정기를 re-export합니다.
"""

from .moving_average import MovingAverageForecaster, calculate_moving_average
from .seasonal import SeasonalAdjuster
from .smoothing import ExponentialSmoothingForecaster, calculate_exponential_smoothing
from .trend import TrendClassifier, classify_trend

__all__ = [
    "MovingAverageForecaster",
    "calculate_moving_average",
    "ExponentialSmoothingForecaster",
    "calculate_exponential_smoothing",
    "TrendClassifier",
    "classify_trend",
    "SeasonalAdjuster",
]

"""최근 수요 추세 분류 (increasing / decreasing / stable)."""

from __future__ import annotations

from decimal import Decimal
from typing import Any, Optional, Sequence

from ..common.decimal_utils import decimal_mean, safe_ratio, to_decimal
from ..core.config import CONFIG, TrendConfig
from ..domain.models import TimeSeriesPoint, Trend


def _point_value(point: Any) -> Decimal:
    # TimeSeriesPoint, {"date", "quantity"} 매핑, 숫자를 모두 허용
    if isinstance(point, TimeSeriesPoint):
        return point.value
    if isinstance(point, dict):
        return to_decimal(point["quantity"] if "quantity" in point else point["value"])
    return to_decimal(point)


class TrendClassifier:
    """
    최근 윈도우를 앞/뒤 절반으로 나눠 평균 변화율로 추세를 분류합니다.

    - 윈도우: 가장 최근 ``window``개 (기본 7), 순서 유지
    - 앞 절반 = ``points[:n // 2]``, 뒤 절반 = ``points[n // 2:]``
    - 변화율 > threshold → increasing, < -threshold → decreasing, 그 외 stable
    - 관측치가 min_points보다 적으면 stable
    - 앞 절반 평균이 0이면 뒤 절반 평균이 양수일 때만 increasing

    Examples:
        >>> TrendClassifier().classify([1, 1, 1, 2, 2, 2])
        <Trend.INCREASING: 'increasing'>
    """

    def __init__(self, config: Optional[TrendConfig] = None) -> None:
        self.config = config or CONFIG.trend

    def classify(self, points: Sequence[Any], min_points: Optional[int] = None) -> Trend:
        required = self.config.min_points if min_points is None else min_points
        recent = list(points)[-self.config.window :]
        if len(recent) < required or len(recent) < 2:
            return Trend.STABLE

        values = [_point_value(p) for p in recent]
        half = len(values) // 2
        first_mean = decimal_mean(values[:half])
        second_mean = decimal_mean(values[half:])

        change = safe_ratio(second_mean - first_mean, first_mean)
        if change is None:
            return Trend.INCREASING if second_mean > 0 else Trend.STABLE

        if change > self.config.threshold:
            return Trend.INCREASING
        if change < -self.config.threshold:
            return Trend.DECREASING
        return Trend.STABLE


def classify_trend(points: Sequence[Any], min_points: int = 2) -> Trend:
    return TrendClassifier().classify(points, min_points)

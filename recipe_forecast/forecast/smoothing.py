"""단순 지수평활 예측.

판매 시계열처럼 최근 변화에 빠르게 반응해야 하는 경우에 사용합니다.
"""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import List, Optional, Sequence

from ..common.decimal_utils import ONE, confidence_from_dispersion, non_negative, to_decimal
from ..core.config import CONFIG, SmoothingConfig
from ..domain.models import ForecastPoint, TimeSeriesPoint
from ..domain.validation import validate_alpha

logger = logging.getLogger(__name__)


class ExponentialSmoothingForecaster:
    """
    재귀 평활 예측기.

    ``smoothed = alpha * value + (1 - alpha) * smoothed``를 첫 관측치에서 시작해
    두 번째 관측치부터 예측점을 하나씩 만듭니다.

    - error = |value - smoothed|
    - confidence = clamp(1 - error/value, 0, 1), value == 0이면 0
    - margin = margin_multiplier * error (기본 2)

    관측값은 0 이상이어야 합니다 (파이프라인은 정규화 단계에서 음수를 0으로 자릅니다).
    하위 파이프라인은 마지막 예측점만 사용합니다.
    """

    def __init__(self, config: Optional[SmoothingConfig] = None) -> None:
        self.config = config or CONFIG.smoothing

    def forecast(
        self,
        series: Sequence[TimeSeriesPoint],
        alpha: Optional[float] = None,
    ) -> List[ForecastPoint]:
        """
        Args:
            series: 날짜 오름차순 시계열
            alpha: 평활 계수 (0, 1]. 기본값은 config.alpha (0.3)

        Returns:
            예측점 리스트. 관측치가 2개 미만이면 빈 리스트.

        Raises:
            ValidationError: alpha가 (0, 1] 범위 밖일 경우
        """
        alpha_value = self.config.alpha if alpha is None else alpha
        validate_alpha(alpha_value)

        if len(series) < 2:
            logger.debug(f"Exponential smoothing skipped: {len(series)} points < 2")
            return []

        weight: Decimal = to_decimal(alpha_value)
        smoothed = series[0].value
        forecasts: List[ForecastPoint] = []

        for point in series[1:]:
            smoothed = point.value * weight + smoothed * (ONE - weight)
            error = abs(point.value - smoothed)

            margin = error * self.config.margin_multiplier
            forecasts.append(
                ForecastPoint(
                    date=point.date,
                    predicted_value=smoothed,
                    confidence=confidence_from_dispersion(error, point.value),
                    lower_bound=non_negative(smoothed - margin),
                    upper_bound=smoothed + margin,
                )
            )

        return forecasts


def calculate_exponential_smoothing(
    series: Sequence[TimeSeriesPoint],
    alpha: float = 0.3,
) -> List[ForecastPoint]:
    """기본 설정의 ``ExponentialSmoothingForecaster.forecast`` 단축 함수."""
    return ExponentialSmoothingForecaster().forecast(series, alpha)

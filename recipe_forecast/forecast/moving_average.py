"""이동평균 예측.

직전 ``period``개 관측치의 산술평균을 예측값으로 쓰고,
같은 윈도우의 모표준편차로 신뢰도와 예측 구간을 계산합니다.
"""

from __future__ import annotations

import logging
from typing import List, Optional, Sequence

from ..common.decimal_utils import (
    confidence_from_dispersion,
    decimal_mean,
    non_negative,
    population_variance,
)
from ..core.config import CONFIG, MovingAverageConfig
from ..domain.models import ForecastPoint, TimeSeriesPoint
from ..domain.validation import validate_period

logger = logging.getLogger(__name__)


class MovingAverageForecaster:
    """
    후행 윈도우 이동평균 예측기.

    관측치 ``i``(``period <= i < len(series)``)마다 ``series[i-period:i]`` 윈도우로
    예측점 하나를 만듭니다. 예측점의 날짜는 ``series[i].date``입니다.

    - confidence = clamp(1 - std/avg, 0, 1), avg == 0이면 0
    - margin = z_score * std (기본 1.96, 약 95% 양측 구간)
    - lower = max(0, avg - margin), upper = avg + margin

    관측값은 0 이상이어야 합니다.

    Examples:
        >>> forecaster = MovingAverageForecaster()
        >>> points = forecaster.forecast(series, period=7)
        >>> points[-1].predicted_value
        Decimal('10')
    """

    def __init__(self, config: Optional[MovingAverageConfig] = None) -> None:
        self.config = config or CONFIG.moving_average

    def forecast(
        self,
        series: Sequence[TimeSeriesPoint],
        period: Optional[int] = None,
    ) -> List[ForecastPoint]:
        """
        Args:
            series: 날짜 오름차순 시계열 (정렬은 호출자 책임)
            period: 윈도우 길이 (기본: config.max_period)

        Returns:
            예측점 리스트. 관측치가 period보다 적으면 빈 리스트.

        Raises:
            ValidationError: period가 1 미만일 경우
        """
        window_size = self.config.max_period if period is None else period
        validate_period(window_size)
        window_size = int(window_size)

        if len(series) < window_size:
            logger.debug(
                f"Moving average skipped: {len(series)} points < period {window_size}"
            )
            return []

        values = [point.value for point in series]
        forecasts: List[ForecastPoint] = []

        for i in range(window_size, len(series)):
            window = values[i - window_size : i]
            average = decimal_mean(window)
            std_dev = population_variance(window, average).sqrt()

            margin = std_dev * self.config.z_score
            forecasts.append(
                ForecastPoint(
                    date=series[i].date,
                    predicted_value=average,
                    confidence=confidence_from_dispersion(std_dev, average),
                    lower_bound=non_negative(average - margin),
                    upper_bound=average + margin,
                )
            )

        return forecasts


def calculate_moving_average(
    series: Sequence[TimeSeriesPoint],
    period: int = 7,
) -> List[ForecastPoint]:
    """기본 설정의 ``MovingAverageForecaster.forecast`` 단축 함수."""
    return MovingAverageForecaster().forecast(series, period)

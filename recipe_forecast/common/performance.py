"""
성능 모니터링 유틸리티

파이프라인 호출 단위의 실행 시간을 측정하고 로깅하는 컨텍스트 매니저를 제공합니다.
"""

from __future__ import annotations

import logging
import time
from typing import Any

logger = logging.getLogger(__name__)

# 로그 레벨 전환 임계값 (초)
WARN_THRESHOLD_S = 1.0
ERROR_THRESHOLD_S = 10.0


def measure_time_context(operation_name: str) -> PerformanceContext:
    """
    컨텍스트 매니저를 사용한 코드 블록 성능 측정.

    Args:
        operation_name: 측정할 작업의 이름

    Returns:
        PerformanceContext 인스턴스

    Examples:
        >>> with measure_time_context("forecast_ingredient_usage") as perf:
        ...     forecasts = build_forecasts(groups)
        ...     perf.record(entities=len(groups), forecasts=len(forecasts))
        INFO - forecast_ingredient_usage: 2/3 entities forecast in 0.02s
    """
    return PerformanceContext(operation_name)


class PerformanceContext:
    """
    예측 호출 하나의 실행 시간과 처리 규모를 함께 기록하는 컨텍스트 매니저.

    파이프라인은 블록 안에서 ``record()``로 대상 엔티티 수와 생성된 예측 수를 남기고,
    종료 시 한 줄 요약으로 로깅됩니다. 실행 시간이 1초 이상이면 WARNING,
    10초 이상이면 ERROR 레벨입니다. 예외는 그대로 전파됩니다.

    Attributes:
        operation_name: 측정할 작업의 이름
        entities: 예측 대상이 된 엔티티(재료/레시피) 수
        forecasts: 결과로 반환된 예측 수
        elapsed: 경과 시간 (초)
    """

    def __init__(self, operation_name: str) -> None:
        self.operation_name = operation_name
        self.entities = 0
        self.forecasts = 0
        self.start_time: float = 0.0
        self.elapsed: float = 0.0

    def record(self, *, entities: int, forecasts: int) -> None:
        self.entities = entities
        self.forecasts = forecasts

    @property
    def summary(self) -> str:
        return (
            f"{self.operation_name}: {self.forecasts}/{self.entities} entities "
            f"forecast in {self.elapsed:.2f}s"
        )

    def __enter__(self) -> PerformanceContext:
        self.start_time = time.perf_counter()
        logger.debug(f"Starting: {self.operation_name}")
        return self

    def __exit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        self.elapsed = time.perf_counter() - self.start_time

        if exc_type is not None:
            logger.error(
                f"{self.operation_name} aborted by {exc_type.__name__} "
                f"after {self.elapsed:.2f}s"
            )
        elif self.elapsed >= ERROR_THRESHOLD_S:
            logger.error(f"SLOW: {self.summary} (threshold: {ERROR_THRESHOLD_S:.0f}s)")
        elif self.elapsed >= WARN_THRESHOLD_S:
            logger.warning(f"{self.summary} (threshold: {WARN_THRESHOLD_S:.0f}s)")
        else:
            logger.info(self.summary)

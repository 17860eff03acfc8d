"""공통 유틸리티 모듈.

Decimal 연산, 성능 측정, 호출 단위 취소 헬퍼를 제공합니다.
"""

from .cancellation import InvocationGuard, check_guard
from .decimal_utils import (
    ONE,
    ZERO,
    clamp_unit,
    confidence_from_dispersion,
    decimal_mean,
    decimal_sum,
    non_negative,
    population_variance,
    safe_ratio,
    to_decimal,
)
from .performance import PerformanceContext, measure_time_context

__all__ = [
    "ZERO",
    "ONE",
    "to_decimal",
    "decimal_sum",
    "decimal_mean",
    "population_variance",
    "safe_ratio",
    "clamp_unit",
    "confidence_from_dispersion",
    "non_negative",
    "InvocationGuard",
    "check_guard",
    "measure_time_context",
    "PerformanceContext",
]

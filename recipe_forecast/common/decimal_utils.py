"""Decimal 연산 헬퍼.

수량/원가 계산은 모두 ``decimal.Decimal``로 수행합니다.
이진 부동소수점 누적 오차를 피하기 위함이며, 0으로 나누는 경우는
호출부가 지정한 안전한 기본값으로 대체합니다.
"""

from __future__ import annotations

import logging
import numbers
from decimal import Decimal, InvalidOperation
from typing import Iterable, Optional, Sequence

ZERO = Decimal(0)
ONE = Decimal(1)

logger = logging.getLogger(__name__)


def _coerce(value: object) -> Decimal:
    if isinstance(value, Decimal):
        return value
    if isinstance(value, bool) or value is None:
        raise TypeError(f"cannot convert {value!r} to Decimal")
    if isinstance(value, numbers.Integral):
        return Decimal(int(value))
    if isinstance(value, numbers.Real):
        return Decimal(str(float(value)))
    if isinstance(value, str):
        try:
            return Decimal(value.strip().replace(",", ""))
        except InvalidOperation:
            logger.warning(f"Unparseable quantity {value!r} coerced to 0")
            return ZERO
    raise TypeError(f"cannot convert {type(value).__name__} to Decimal")


def to_decimal(value: object) -> Decimal:
    """숫자/문자열 값을 Decimal로 변환합니다.

    float는 ``str``을 거쳐 변환하여 ``Decimal(0.1)`` 같은 이진 표현 잔여값을 막습니다.
    NaN/Infinity와 숫자로 읽을 수 없는 문자열은 0으로 대체합니다
    (``pd.to_numeric(errors="coerce").fillna(0)``과 같은 규칙).

    Raises:
        TypeError: None이나 변환할 수 없는 타입일 경우
    """
    result = _coerce(value)
    if not result.is_finite():
        logger.warning(f"Non-finite quantity {value!r} coerced to 0")
        return ZERO
    return result


def decimal_sum(values: Iterable[Decimal]) -> Decimal:
    total = ZERO
    for value in values:
        total += value
    return total


def decimal_mean(values: Sequence[Decimal]) -> Decimal:
    """산술 평균. 빈 시퀀스는 0을 반환합니다."""
    if not values:
        return ZERO
    return decimal_sum(values) / len(values)


def population_variance(values: Sequence[Decimal], mean: Optional[Decimal] = None) -> Decimal:
    """모분산 (n으로 나눔)."""
    if not values:
        return ZERO
    avg = decimal_mean(values) if mean is None else mean
    return decimal_sum((v - avg) * (v - avg) for v in values) / len(values)


def safe_ratio(numerator: Decimal, denominator: Decimal) -> Optional[Decimal]:
    """분모가 0이면 None, 아니면 numerator / denominator."""
    if denominator == 0:
        return None
    return numerator / denominator


def clamp_unit(value: Decimal) -> float:
    """값을 [0, 1] 구간으로 잘라 float로 반환합니다."""
    if value < 0:
        return 0.0
    if value > 1:
        return 1.0
    return float(value)


def confidence_from_dispersion(dispersion: Decimal, scale: Decimal) -> float:
    """``clamp(1 - dispersion/scale, 0, 1)``. ``scale == 0``이면 0.0."""
    ratio = safe_ratio(dispersion, scale)
    if ratio is None:
        return 0.0
    return clamp_unit(ONE - ratio)


def non_negative(value: Decimal) -> Decimal:
    return value if value > 0 else ZERO


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
]

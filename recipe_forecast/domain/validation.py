"""
도메인 입력 검증 로직

파이프라인 실행 전에 조회 필터와 설정값의 정합성을 검증합니다.
데이터 부족은 검증 대상이 아니며 예외를 발생시키지 않습니다.
"""

from __future__ import annotations

import logging
import numbers

from ..core.config import ForecastConfig
from .exceptions import ValidationError
from .models import ForecastingFilters

logger = logging.getLogger(__name__)


def validate_period(period: int) -> None:
    if isinstance(period, bool) or not isinstance(period, numbers.Integral) or period < 1:
        logger.error(f"Invalid moving average period: {period!r}")
        raise ValidationError(f"이동평균 기간은 1 이상의 정수여야 합니다: {period!r}")


def validate_alpha(alpha: float) -> None:
    if not (0 < float(alpha) <= 1):
        logger.error(f"Invalid smoothing alpha: {alpha!r}")
        raise ValidationError(f"평활 계수 alpha는 (0, 1] 범위여야 합니다: {alpha!r}")


def validate_month(month: int) -> None:
    if isinstance(month, bool) or not isinstance(month, numbers.Integral) or not 1 <= month <= 12:
        logger.error(f"Invalid month: {month!r}")
        raise ValidationError(f"월은 1~12 사이여야 합니다: {month!r}")


def validate_filters(filters: ForecastingFilters) -> None:
    """
    조회 필터의 구조적 정합성을 검증합니다.

    검증 항목:
    1. ForecastingFilters 인스턴스인지 확인
    2. company_id 존재 여부
    3. 날짜 범위가 유효한지 확인 (end >= start)

    Raises:
        ValidationError: 검증 실패 시 발생
    """
    logger.debug("Validating forecasting filters")

    if not isinstance(filters, ForecastingFilters):
        logger.error(f"Filters is not ForecastingFilters: {type(filters)}")
        raise ValidationError("조회 조건이 올바르지 않습니다.")

    if filters.company_id is None:
        logger.error("Missing company scope")
        raise ValidationError("company_id는 필수입니다.")

    if (
        filters.start_date is not None
        and filters.end_date is not None
        and filters.end_date < filters.start_date
    ):
        logger.error(
            f"Invalid date range: start={filters.start_date}, end={filters.end_date}"
        )
        raise ValidationError("조회 종료일이 시작일보다 빠릅니다.")


def validate_config(config: ForecastConfig) -> None:
    """
    설정값이 계산 가능한 범위인지 검증합니다.

    Raises:
        ValidationError: 음수 일수, 0 이하 윈도우 등 계산 불가능한 값일 경우
    """
    if config.min_observations < 1:
        raise ValidationError("min_observations는 1 이상이어야 합니다.")
    if config.metadata_workers < 1:
        raise ValidationError("metadata_workers는 1 이상이어야 합니다.")

    validate_period(config.moving_average.max_period)
    validate_alpha(config.smoothing.alpha)

    if config.moving_average.z_score < 0 or config.smoothing.margin_multiplier < 0:
        raise ValidationError("예측 구간 배수는 음수일 수 없습니다.")
    if config.trend.window < 1 or config.trend.min_points < 1:
        raise ValidationError("추세 윈도우와 최소 관측치는 1 이상이어야 합니다.")

    reorder = config.reorder
    if min(
        reorder.lead_time_days,
        reorder.safety_stock_days,
        reorder.order_coverage_days,
        reorder.max_days_until_reorder,
    ) < 0:
        raise ValidationError("재주문 정책 일수는 음수일 수 없습니다.")

    if config.sales.bucket not in ("transaction", "day", "week"):
        raise ValidationError(
            f"판매 집계 단위는 transaction/day/week 중 하나여야 합니다: {config.sales.bucket!r}"
        )

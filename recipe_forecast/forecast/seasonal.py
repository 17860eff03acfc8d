"""계절 수요 배수 조회."""

from __future__ import annotations

import logging
from decimal import Decimal
from typing import Optional

from ..common.decimal_utils import ONE
from ..data_sources.base import SeasonalTrendSource, call_source
from ..domain.validation import validate_month

logger = logging.getLogger(__name__)


class SeasonalAdjuster:
    """
    (회사, 레시피, 월) 단위 수요 배수를 외부 계절 추세 협력자에서 조회합니다.

    활성 추세가 없거나 협력자가 주어지지 않으면 중립값 1을 반환합니다.
    캐시하지 않으며 매 호출마다 조회합니다.
    """

    def __init__(self, source: Optional[SeasonalTrendSource] = None) -> None:
        self.source = source

    def multiplier_for(self, company_id: int, recipe_id: int, month: int) -> Decimal:
        """
        Args:
            company_id: 회사 범위
            recipe_id: 레시피 ID
            month: 1~12

        Returns:
            수요 배수 (Decimal). 없으면 Decimal(1).

        Raises:
            ValidationError: month가 1~12 밖일 경우
            DataLoadError: 협력자 조회 실패 시
        """
        validate_month(month)
        if self.source is None:
            return ONE

        trend = call_source(
            "seasonal trend",
            self.source.find_seasonal_trend,
            company_id,
            recipe_id,
            month,
        )
        if trend is None or not trend.is_active:
            return ONE

        logger.debug(
            f"Seasonal multiplier {trend.demand_multiplier} for recipe {recipe_id} month {month}"
        )
        return trend.demand_multiplier

"""External collaborator interfaces.

엔진이 읽기 전용으로 의존하는 협력자 인터페이스를 ``typing.Protocol``로 정의합니다.
모든 협력자는 느리거나 빈 결과를 줄 수 있다고 가정합니다.
"""

from __future__ import annotations

import datetime as dt
import logging
from decimal import Decimal
from typing import Any, Callable, Mapping, Optional, Protocol, Sequence, TypeVar

from ..domain.exceptions import DataLoadError, DomainError
from ..domain.models import ProductionRecord, SalesRecord, SeasonalTrend

logger = logging.getLogger(__name__)

T = TypeVar("T")


def call_source(description: str, fetch: Callable[..., T], *args: Any) -> T:
    """
    협력자 조회를 실행하고 실패를 ``DataLoadError``로 감싸 전파합니다.

    재시도하지 않습니다. 도메인 예외는 그대로 전파됩니다.

    Args:
        description: 로그/에러 메시지에 쓸 조회 이름 (예: "production history")
        fetch: 협력자 메서드
        *args: 조회 인자

    Raises:
        DataLoadError: 협력자가 예외를 발생시킨 경우
    """
    try:
        return fetch(*args)
    except DomainError:
        raise
    except Exception as exc:
        logger.error(f"Failed to fetch {description}: {exc}")
        raise DataLoadError(f"{description} 조회에 실패했습니다: {exc}") from exc


class ProductionHistorySource(Protocol):
    def fetch_production_history(
        self,
        company_id: int,
        start_date: Optional[dt.date],
        end_date: Optional[dt.date],
    ) -> Sequence[ProductionRecord]:
        """회사 범위/기간의 생산 이력 (재료 항목 포함)을 반환합니다."""
        ...


class SalesRecordSource(Protocol):
    def fetch_sales_records(
        self,
        company_id: int,
        start_date: Optional[dt.date],
        end_date: Optional[dt.date],
        recipe_ids: Optional[Sequence[int]],
    ) -> Sequence[SalesRecord]:
        ...


class InventorySource(Protocol):
    def fetch_inventory_levels(
        self,
        company_id: int,
        ingredient_ids: Optional[Sequence[int]],
    ) -> Mapping[int, Decimal]:
        """재료 ID → 현재 보유 수량 (기본 단위)."""
        ...


class SeasonalTrendSource(Protocol):
    def find_seasonal_trend(
        self,
        company_id: int,
        recipe_id: int,
        month: int,
    ) -> Optional[SeasonalTrend]:
        ...


class MetadataSource(Protocol):
    def ingredient_name(self, ingredient_id: int) -> Optional[str]:
        ...

    def recipe_name(self, recipe_id: int) -> Optional[str]:
        ...


__all__ = [
    "call_source",
    "ProductionHistorySource",
    "SalesRecordSource",
    "InventorySource",
    "SeasonalTrendSource",
    "MetadataSource",
]

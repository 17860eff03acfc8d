"""메모리 스냅샷 기반 협력자 구현.

이미 메모리에 행을 가지고 있는 호출자와 테스트를 위한 참조 어댑터입니다.
모든 협력자 프로토콜을 구현하며, 조회는 부수효과 없는 읽기입니다.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Dict, Mapping, Optional, Sequence, Tuple

from ..common.decimal_utils import to_decimal
from ..domain.models import ProductionRecord, SalesRecord, SeasonalTrend


def _in_range(
    value: Optional[dt.date],
    start: Optional[dt.date],
    end: Optional[dt.date],
) -> bool:
    if value is None:
        return False
    if start is not None and value < start:
        return False
    if end is not None and value > end:
        return False
    return True


def _in_scope(row_company: Optional[int], company_id: int) -> bool:
    # company_id가 없는 행은 모든 회사 범위에 포함
    return row_company is None or row_company == company_id


@dataclass(frozen=True)
class InMemoryDataSource:
    """
    단일 스냅샷을 들고 있는 협력자 묶음.

    Attributes:
        production: 생산 이력 레코드
        sales: 판매 기록
        inventory: (company_id, ingredient_id) → 보유 수량
        seasonal_trends: 계절 추세 레코드 (비활성 포함 가능)
        ingredient_names: 재료 ID → 표시 이름
        recipe_names: 레시피 ID → 표시 이름

    Examples:
        >>> source = InMemoryDataSource(
        ...     production=[ProductionRecord(1, dt.date(2024, 1, 1), 2, items=[...])],
        ...     inventory={(1, 10): Decimal("50")},
        ... )
        >>> engine = ForecastingEngine.from_source(source)
    """

    production: Sequence[ProductionRecord] = ()
    sales: Sequence[SalesRecord] = ()
    inventory: Mapping[Tuple[int, int], Decimal] = field(default_factory=dict)
    seasonal_trends: Sequence[SeasonalTrend] = ()
    ingredient_names: Mapping[int, str] = field(default_factory=dict)
    recipe_names: Mapping[int, str] = field(default_factory=dict)

    def fetch_production_history(
        self,
        company_id: int,
        start_date: Optional[dt.date],
        end_date: Optional[dt.date],
    ) -> Sequence[ProductionRecord]:
        return [
            record
            for record in self.production
            if _in_scope(record.company_id, company_id)
            and _in_range(record.production_date, start_date, end_date)
        ]

    def fetch_sales_records(
        self,
        company_id: int,
        start_date: Optional[dt.date],
        end_date: Optional[dt.date],
        recipe_ids: Optional[Sequence[int]],
    ) -> Sequence[SalesRecord]:
        allowed = set(recipe_ids) if recipe_ids else None
        return [
            record
            for record in self.sales
            if _in_scope(record.company_id, company_id)
            and _in_range(record.transaction_date, start_date, end_date)
            and (allowed is None or record.recipe_id in allowed)
        ]

    def fetch_inventory_levels(
        self,
        company_id: int,
        ingredient_ids: Optional[Sequence[int]],
    ) -> Mapping[int, Decimal]:
        allowed = set(ingredient_ids) if ingredient_ids else None
        levels: Dict[int, Decimal] = {}
        for (company, ingredient_id), quantity in self.inventory.items():
            if company != company_id:
                continue
            if allowed is not None and ingredient_id not in allowed:
                continue
            levels[ingredient_id] = to_decimal(quantity)
        return levels

    def find_seasonal_trend(
        self,
        company_id: int,
        recipe_id: int,
        month: int,
    ) -> Optional[SeasonalTrend]:
        for trend in self.seasonal_trends:
            if (
                trend.is_active
                and trend.company_id == company_id
                and trend.recipe_id == recipe_id
                and trend.month == month
            ):
                return trend
        return None

    def ingredient_name(self, ingredient_id: int) -> Optional[str]:
        return self.ingredient_names.get(ingredient_id)

    def recipe_name(self, recipe_id: int) -> Optional[str]:
        return self.recipe_names.get(recipe_id)

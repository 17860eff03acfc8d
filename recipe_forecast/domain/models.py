"""
도메인 모델: 예측 엔진의 핵심 데이터 구조

이 모듈은 예측 엔진이 주고받는 값 객체를 정의합니다.
모든 모델은 불변(frozen) 데이터클래스로 구현되며 호출마다 새로 생성됩니다.
수량은 모두 ``Decimal``입니다.
"""

from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from typing import Any, Iterable, Mapping, Optional, Tuple

import pandas as pd

from ..common.decimal_utils import to_decimal
from .exceptions import ValidationError


# ============================================================
# 시계열 / 예측 결과
# ============================================================

@dataclass(frozen=True)
class TimeSeriesPoint:
    """하루에 관측된 사용량 또는 판매량 하나."""

    date: dt.date
    value: Decimal


@dataclass(frozen=True)
class ForecastPoint:
    """
    예측기가 입력 관측치 하나마다 내놓는 예측값.

    불변식: ``0 <= lower_bound <= predicted_value <= upper_bound``,
    ``0 <= confidence <= 1``. 하한은 0으로 잘립니다.

    Attributes:
        date: 예측 대상 관측치의 날짜
        predicted_value: 예측값
        confidence: 분산/오차 기반 휴리스틱 신뢰도 (확률로 보정된 값이 아님)
        lower_bound: 예측 구간 하한
        upper_bound: 예측 구간 상한
    """

    date: dt.date
    predicted_value: Decimal
    confidence: float
    lower_bound: Decimal
    upper_bound: Decimal


class Trend(str, Enum):
    """최근 수요 방향의 3단계 분류."""

    INCREASING = "increasing"
    DECREASING = "decreasing"
    STABLE = "stable"


@dataclass(frozen=True)
class IngredientForecast:
    """
    재료 하나에 대한 사용량 예측과 재주문 정보.

    ``days_until_reorder == 0``은 재고가 없거나 측정 가능한 사용량이 없음을 뜻합니다.
    두 경우 모두 정렬 시 맨 앞에 옵니다.
    """

    ingredient_id: int
    ingredient_name: str
    current_stock: Decimal
    predicted_usage: Decimal
    reorder_point: Decimal
    suggested_order_quantity: Decimal
    days_until_reorder: int
    confidence: float


@dataclass(frozen=True)
class SalesForecast:
    """레시피 하나에 대한 판매 예측. ``predicted_sales``는 계절 보정 후 값입니다."""

    recipe_id: int
    recipe_name: str
    predicted_sales: Decimal
    confidence: float
    trend: Trend
    seasonal_multiplier: Decimal


# ============================================================
# 조회 필터
# ============================================================

def _parse_date(value: Any) -> Optional[dt.date]:
    if value is None or (isinstance(value, str) and not value.strip()):
        return None
    if isinstance(value, dt.datetime):
        return value.date()
    if isinstance(value, dt.date):
        return value
    ts = pd.to_datetime(value, errors="coerce")
    if pd.isna(ts):
        raise ValidationError(f"날짜 형식이 올바르지 않습니다: {value!r}")
    return ts.date()


def _parse_ids(value: Any) -> Optional[Tuple[int, ...]]:
    if value is None:
        return None
    if isinstance(value, str):
        parts = [p.strip() for p in value.split(",") if p.strip()]
    elif isinstance(value, int):
        parts = [value]
    else:
        parts = list(value)
    try:
        return tuple(int(p) for p in parts)
    except (TypeError, ValueError) as exc:
        raise ValidationError(f"ID 목록 형식이 올바르지 않습니다: {value!r}") from exc


@dataclass(frozen=True)
class ForecastingFilters:
    """
    파이프라인 호출 하나에 쓰이는 읽기 전용 조회 조건.

    Attributes:
        company_id: 회사 범위 (필수)
        start_date: 조회 시작일 (포함, 선택)
        end_date: 조회 종료일 (포함, 선택)
        recipe_ids: 판매 예측 대상 레시피 ID 제한 (선택)
        ingredient_ids: 사용량 예측 대상 재료 ID 제한 (선택)

    Examples:
        >>> ForecastingFilters(company_id=1, start_date=dt.date(2024, 1, 1))
        >>> ForecastingFilters.from_query({"companyId": "1", "recipeIds": "3,4"})
    """

    company_id: int
    start_date: Optional[dt.date] = None
    end_date: Optional[dt.date] = None
    recipe_ids: Optional[Tuple[int, ...]] = None
    ingredient_ids: Optional[Tuple[int, ...]] = None

    def __post_init__(self) -> None:
        # 리스트로 넘어온 ID를 해시 가능한 튜플로 고정
        if self.recipe_ids is not None and not isinstance(self.recipe_ids, tuple):
            object.__setattr__(self, "recipe_ids", tuple(self.recipe_ids))
        if self.ingredient_ids is not None and not isinstance(self.ingredient_ids, tuple):
            object.__setattr__(self, "ingredient_ids", tuple(self.ingredient_ids))

    @classmethod
    def from_query(cls, params: Mapping[str, Any]) -> "ForecastingFilters":
        """
        요청 파라미터 형태의 매핑으로부터 필터를 생성합니다.

        camelCase(``companyId``, ``startDate`` ...)와 snake_case 키를 모두 받습니다.
        ID 목록은 리스트 또는 콤마 구분 문자열을 허용합니다.

        Raises:
            ValidationError: company_id가 없거나 날짜/ID 형식이 올바르지 않을 경우
        """

        def pick(*keys: str) -> Any:
            for key in keys:
                if key in params and params[key] is not None:
                    return params[key]
            return None

        company = pick("company_id", "companyId")
        if company is None:
            raise ValidationError("company_id는 필수입니다.")
        try:
            company_id = int(company)
        except (TypeError, ValueError) as exc:
            raise ValidationError(f"company_id 형식이 올바르지 않습니다: {company!r}") from exc

        return cls(
            company_id=company_id,
            start_date=_parse_date(pick("start_date", "startDate")),
            end_date=_parse_date(pick("end_date", "endDate")),
            recipe_ids=_parse_ids(pick("recipe_ids", "recipeIds")),
            ingredient_ids=_parse_ids(pick("ingredient_ids", "ingredientIds")),
        )


# ============================================================
# 협력자 행(row) 타입
# ============================================================

@dataclass(frozen=True)
class RecipeLineItem:
    """레시피 한 배치에 필요한 재료 수량 (기본 단위로 정규화된 값)."""

    ingredient_id: int
    per_batch_quantity: Decimal

    def __post_init__(self) -> None:
        object.__setattr__(self, "per_batch_quantity", to_decimal(self.per_batch_quantity))


@dataclass(frozen=True)
class RecipeSection:
    """레시피 안의 이름 붙은 구역 (예: 반죽, 토핑)."""

    name: str
    items: Tuple[RecipeLineItem, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "items", tuple(self.items))


@dataclass(frozen=True)
class ProductionRecord:
    """
    생산 이력 한 건: 특정 날짜에 레시피를 몇 배치 생산했는지.

    ``items``는 레시피 본문 재료, ``sections``는 구역별 재료입니다.
    """

    recipe_id: int
    production_date: dt.date
    quantity_produced: Decimal
    company_id: Optional[int] = None
    items: Tuple[RecipeLineItem, ...] = ()
    sections: Tuple[RecipeSection, ...] = ()

    def __post_init__(self) -> None:
        object.__setattr__(self, "production_date", _parse_date(self.production_date))
        object.__setattr__(self, "quantity_produced", to_decimal(self.quantity_produced))
        object.__setattr__(self, "items", tuple(self.items))
        object.__setattr__(self, "sections", tuple(self.sections))

    def all_items(self) -> Iterable[RecipeLineItem]:
        """본문 재료와 모든 구역의 재료를 순서대로 반환합니다."""
        yield from self.items
        for section in self.sections:
            yield from section.items


@dataclass(frozen=True)
class SalesRecord:
    """판매 기록 한 건. 레시피와 연결되지 않은 행은 ``recipe_id``가 None입니다."""

    recipe_id: Optional[int]
    recipe_name: Optional[str]
    transaction_date: dt.date
    quantity: Decimal
    company_id: Optional[int] = None

    def __post_init__(self) -> None:
        object.__setattr__(self, "transaction_date", _parse_date(self.transaction_date))
        object.__setattr__(self, "quantity", to_decimal(self.quantity))


@dataclass(frozen=True)
class SeasonalTrend:
    """회사/레시피/월 단위 수요 배수."""

    company_id: int
    recipe_id: int
    month: int
    demand_multiplier: Decimal
    is_active: bool = True

    def __post_init__(self) -> None:
        object.__setattr__(self, "demand_multiplier", to_decimal(self.demand_multiplier))


__all__ = [
    "TimeSeriesPoint",
    "ForecastPoint",
    "Trend",
    "IngredientForecast",
    "SalesForecast",
    "ForecastingFilters",
    "RecipeLineItem",
    "RecipeSection",
    "ProductionRecord",
    "SalesRecord",
    "SeasonalTrend",
]

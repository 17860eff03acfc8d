import datetime as dt
import sys
from decimal import Decimal
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from recipe_forecast.data_sources.memory import InMemoryDataSource
from recipe_forecast.domain.models import (
    ProductionRecord,
    RecipeLineItem,
    RecipeSection,
    SalesRecord,
    SeasonalTrend,
    TimeSeriesPoint,
)

START = dt.date(2024, 3, 1)
COMPANY = 1


def make_series(values, start=START):
    """숫자 리스트를 하루 간격 TimeSeriesPoint 리스트로 변환합니다."""
    return [
        TimeSeriesPoint(date=start + dt.timedelta(days=i), value=Decimal(str(v)))
        for i, v in enumerate(values)
    ]


@pytest.fixture
def series_factory():
    return make_series


@pytest.fixture
def bakery_source():
    """빵집 한 곳의 생산/판매/재고 스냅샷.

    - 재료 10 (밀가루): 레시피 100 본문, 하루 2배치 × 5 = 10/일, 5일
    - 재료 20 (버터): 레시피 100 "토핑" 구역, 하루 2배치 × 1 = 2/일, 5일
    - 재료 30 (소금): 이틀만 생산되어 관측치 부족
    - 레시피 200 판매: 증가 추세, 레시피 300 판매: 관측치 부족
    """
    croissant_items = [RecipeLineItem(10, "5")]
    croissant_sections = [RecipeSection("토핑", [RecipeLineItem(20, "1")])]
    production = [
        ProductionRecord(
            recipe_id=100,
            production_date=START + dt.timedelta(days=i),
            quantity_produced=2,
            company_id=COMPANY,
            items=croissant_items,
            sections=croissant_sections,
        )
        for i in range(5)
    ]
    production += [
        ProductionRecord(
            recipe_id=101,
            production_date=START + dt.timedelta(days=i),
            quantity_produced=1,
            company_id=COMPANY,
            items=[RecipeLineItem(30, "0.5")],
        )
        for i in range(2)
    ]
    # 다른 회사의 이력은 결과에 섞이지 않아야 함
    production.append(
        ProductionRecord(
            recipe_id=100,
            production_date=START,
            quantity_produced=100,
            company_id=2,
            items=croissant_items,
        )
    )

    sales = [
        SalesRecord(200, "크루아상", START + dt.timedelta(days=i), qty, company_id=COMPANY)
        for i, qty in enumerate([10, 10, 10, 20, 20, 20])
    ]
    sales += [
        SalesRecord(300, "바게트", START + dt.timedelta(days=i), 5, company_id=COMPANY)
        for i in range(2)
    ]
    sales.append(SalesRecord(None, "기타", START, 50, company_id=COMPANY))

    return InMemoryDataSource(
        production=production,
        sales=sales,
        inventory={(COMPANY, 10): Decimal("35"), (COMPANY, 20): Decimal("0")},
        seasonal_trends=[
            SeasonalTrend(COMPANY, 200, 3, "1.5"),
            SeasonalTrend(COMPANY, 200, 4, "2.0", is_active=False),
        ],
        ingredient_names={10: "밀가루"},
        recipe_names={200: "크루아상"},
    )

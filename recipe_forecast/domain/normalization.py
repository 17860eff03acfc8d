"""
협력자 행(row) 정규화

생산 이력과 판매 기록을 예측용 long-format DataFrame으로 펼치고,
엔티티별 시계열(TimeSeriesPoint 리스트)로 변환합니다.

표준 스키마:
- usage frame: ingredient_id, date, value, seq
- sales frame: recipe_id, recipe_name, date, value, seq

``value`` 컬럼은 Decimal(object dtype)이며, ``seq``는 원본 순서로
같은 날짜 안에서의 정렬 안정성을 보장합니다. 음수 수량(환불, 재고 조정 등)은
0으로 잘라 예측 구간 하한이 예측값을 넘지 않도록 합니다.
"""

from __future__ import annotations

from typing import Any, Iterable, List

import numpy as np
import pandas as pd

from ..common.decimal_utils import decimal_sum, non_negative
from .models import ProductionRecord, SalesRecord, TimeSeriesPoint

USAGE_COLUMNS = ["ingredient_id", "date", "value", "seq"]
SALES_COLUMNS = ["recipe_id", "recipe_name", "date", "value", "seq"]


def _finalize(frame: pd.DataFrame, columns: List[str]) -> pd.DataFrame:
    if frame.empty:
        return pd.DataFrame(columns=columns)

    # ========================================
    # 날짜 정규화 및 유효하지 않은 행 제거
    # ========================================
    frame["date"] = pd.to_datetime(frame["date"], errors="coerce").dt.normalize()
    frame = frame.dropna(subset=["date"])
    return frame[columns].reset_index(drop=True)


def production_usage_frame(records: Iterable[ProductionRecord]) -> pd.DataFrame:
    """
    생산 이력을 재료 사용량 long-format DataFrame으로 펼칩니다.

    생산 행 하나의 재료 항목(본문 + 모든 구역)마다 관측치 하나를 만듭니다:
    ``value = per_batch_quantity * quantity_produced``.
    단위 변환은 수행하지 않으며, 수량은 이미 기본 단위로 정규화되어 있어야 합니다.

    Args:
        records: 생산 이력 레코드

    Returns:
        ingredient_id, date, value, seq 컬럼을 가진 DataFrame
    """
    rows = []
    for record in records:
        for item in record.all_items():
            rows.append(
                {
                    "ingredient_id": item.ingredient_id,
                    "date": record.production_date,
                    "value": non_negative(item.per_batch_quantity * record.quantity_produced),
                    "seq": len(rows),
                }
            )
    return _finalize(pd.DataFrame(rows), USAGE_COLUMNS)


def sales_frame(records: Iterable[SalesRecord]) -> pd.DataFrame:
    """
    판매 기록을 레시피별 long-format DataFrame으로 변환합니다.

    레시피와 연결되지 않은 행(recipe_id가 None)은 제외합니다.
    """
    rows = []
    for record in records:
        if record.recipe_id is None:
            continue
        rows.append(
            {
                "recipe_id": record.recipe_id,
                "recipe_name": record.recipe_name,
                "date": record.transaction_date,
                "value": non_negative(record.quantity),
                "seq": len(rows),
            }
        )
    return _finalize(pd.DataFrame(rows), SALES_COLUMNS)


def bucket_observations(group: pd.DataFrame, bucket: str = "transaction") -> pd.DataFrame:
    """
    관측치를 집계 단위별로 합산합니다.

    Args:
        group: date, value, seq 컬럼을 가진 단일 엔티티 DataFrame
        bucket: "transaction" (그대로), "day" (일별 합계), "week" (월요일 시작 주별 합계)

    Returns:
        같은 컬럼 구조의 DataFrame. 주별 집계의 date는 주 시작일입니다.
    """
    if bucket == "transaction" or group.empty:
        return group

    work = group.copy()
    if bucket == "week":
        work["date"] = work["date"] - pd.to_timedelta(work["date"].dt.weekday, unit="D")

    agg = (
        work.groupby("date", sort=True)
        .agg(value=("value", decimal_sum), seq=("seq", "min"))
        .reset_index()
    )
    return agg


def native_id(value: Any) -> Any:
    """groupby 키(numpy 스칼라)를 파이썬 기본 타입으로 변환합니다."""
    if isinstance(value, np.generic):
        return value.item()
    return value


def to_series(group: pd.DataFrame) -> List[TimeSeriesPoint]:
    """
    단일 엔티티 DataFrame을 날짜 오름차순 TimeSeriesPoint 리스트로 변환합니다.

    같은 날짜는 원본 순서(seq)를 유지합니다.
    """
    ordered = group.sort_values(["date", "seq"], kind="mergesort")
    return [
        TimeSeriesPoint(date=ts.date(), value=value)
        for ts, value in zip(ordered["date"], ordered["value"])
    ]

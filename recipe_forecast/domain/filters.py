"""
DataFrame 필터 헬퍼

협력자에서 받은 행을 회사/날짜/ID 조건으로 한 번 더 거릅니다.
협력자가 이미 거른 데이터에 다시 적용해도 결과가 같습니다.
"""

from __future__ import annotations

import datetime as dt
from typing import Optional, Sequence

import pandas as pd


def filter_date_range(
    df: pd.DataFrame,
    start: Optional[dt.date],
    end: Optional[dt.date],
    *,
    date_col: str = "date",
) -> pd.DataFrame:
    """
    DataFrame을 날짜 범위로 필터링합니다. 경계는 각각 독립적으로 적용됩니다.

    Args:
        df: 필터링할 DataFrame (date_col은 datetime64)
        start: 시작일 (포함). None이면 하한 없음.
        end: 종료일 (포함). None이면 상한 없음.
        date_col: 날짜 컬럼명 (기본: 'date')

    Returns:
        필터링된 DataFrame (복사본)
    """
    if df.empty or date_col not in df.columns:
        return df.copy()

    mask = pd.Series(True, index=df.index)
    if start is not None:
        mask &= df[date_col] >= pd.Timestamp(start)
    if end is not None:
        mask &= df[date_col] <= pd.Timestamp(end)
    return df[mask].copy()


def filter_by_ids(
    df: pd.DataFrame,
    ids: Optional[Sequence[int]],
    *,
    id_col: str,
) -> pd.DataFrame:
    """
    DataFrame을 ID 목록으로 필터링합니다.

    ``ids``가 None이면 제한 없음, 빈 목록이면 전체를 유지합니다
    (빈 목록을 "조건 없음"으로 보는 기존 조회 규칙과 동일).
    """
    if df.empty or id_col not in df.columns or not ids:
        return df.copy()
    return df[df[id_col].isin(list(ids))].copy()

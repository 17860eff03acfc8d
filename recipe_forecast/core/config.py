"""Configuration and constants for the recipe forecast engine.

예측기 파라미터, 재주문 정책 상수 등 전역 설정을 제공합니다.
파이프라인은 설정 객체를 명시적으로 전달받으므로 테스트에서 값을 바꿔 쓸 수 있습니다.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal


# ============================================================
# 예측기 설정
# ============================================================

@dataclass(frozen=True)
class MovingAverageConfig:
    """이동평균 예측 관련 설정"""

    # 이동평균 윈도우 최대 길이 (관측치 개수)
    max_period: int = 7

    # 신뢰구간 z-score (1.96 ≈ 95% 양측 정규 구간)
    z_score: Decimal = Decimal("1.96")


@dataclass(frozen=True)
class SmoothingConfig:
    """지수평활 예측 관련 설정"""

    # 평활 계수 (0 < alpha <= 1)
    alpha: float = 0.3

    # 오차 대비 구간 폭 배수
    margin_multiplier: Decimal = Decimal(2)


@dataclass(frozen=True)
class TrendConfig:
    """추세 분류 관련 설정"""

    # 추세 판단에 사용하는 최근 관측치 개수
    window: int = 7

    # 상승/하락 판정 임계 변화율 (0.10 = 10%)
    threshold: Decimal = Decimal("0.10")

    # 이보다 적으면 항상 stable
    min_points: int = 2


# ============================================================
# 재주문 정책 설정
# ============================================================

@dataclass(frozen=True)
class ReorderConfig:
    """재주문점/주문량 계산 정책.

    리드타임과 안전재고 일수는 데이터에서 추정하지 않는 고정 정책값입니다.
    """

    # 발주 후 입고까지 가정하는 일수
    lead_time_days: int = 7

    # 안전재고 일수 (평균 사용량 기준)
    safety_stock_days: int = 2

    # 제안 주문량이 커버하는 일수 (2주)
    order_coverage_days: int = 14

    # 재주문 제안 기본 임계 일수
    max_days_until_reorder: int = 7


@dataclass(frozen=True)
class SalesConfig:
    """판매 예측 관련 설정"""

    # 판매 시계열 집계 단위: "transaction" (행 단위), "day", "week"
    bucket: str = "transaction"


@dataclass(frozen=True)
class ForecastConfig:
    """예측 엔진 전역 설정"""

    # 예측에 필요한 최소 관측치 수
    min_observations: int = 3

    # 메타데이터(이름) 조회 동시 실행 수 (1이면 순차 실행)
    metadata_workers: int = 1

    moving_average: MovingAverageConfig = field(default_factory=MovingAverageConfig)
    smoothing: SmoothingConfig = field(default_factory=SmoothingConfig)
    trend: TrendConfig = field(default_factory=TrendConfig)
    reorder: ReorderConfig = field(default_factory=ReorderConfig)
    sales: SalesConfig = field(default_factory=SalesConfig)


# ============================================================
# 전역 설정 인스턴스
# ============================================================

# 전역 설정 객체 (불변)
CONFIG = ForecastConfig()

"""
Recipe Forecast 패키지

생산/판매 이력으로부터 사용량·판매량 예측과 재주문 제안을 계산하는
순수 계산 계층입니다.
주요 구성:
- forecast: 이동평균/지수평활 예측기, 추세 분류, 계절 보정
- analytics: 재료 사용량 예측, 레시피 판매 예측, 재주문 제안
- data_sources: 외부 협력자(이력/재고/메타데이터) 인터페이스
- pipeline: 위 구성요소를 묶는 ForecastingEngine 파사드
"""

from __future__ import annotations

from .pipeline import ForecastingEngine, run_forecast

__version__ = "1.0.0"

__all__ = ["ForecastingEngine", "run_forecast", "__version__"]

"""
도메인 계층 예외 정의

예측 엔진에서 발생할 수 있는 모든 예외를 정의합니다.
데이터 부족(관측치 3개 미만 등)은 예외가 아니며, 해당 엔티티를 결과에서 제외할 뿐입니다.
호출자는 이 예외들을 잡아서 사용자 메시지로 변환합니다.
"""

from __future__ import annotations


class DomainError(Exception):
    """
    도메인 계층의 기본 예외 클래스.

    모든 도메인 예외는 이 클래스를 상속합니다.
    """

    pass


class ValidationError(DomainError):
    """
    입력 검증 실패 시 발생하는 예외.

    필터나 예측 파라미터가 규칙을 만족하지 않을 때 발생합니다.
    예: 시작일이 종료일보다 늦음, alpha가 (0, 1] 범위 밖, 기간이 1 미만 등
    """

    pass


class DataLoadError(DomainError):
    """
    협력자(생산 이력, 판매 기록, 재고, 계절 추세, 메타데이터) 조회 실패 시 발생하는 예외.

    조회 하나가 실패하면 호출 전체가 실패하며, 엔진 내부에서 재시도하지 않습니다.
    원본 예외는 ``__cause__``로 연결됩니다.
    """

    pass


class ForecastCancelledError(DomainError):
    """
    호출 단위 타임아웃 또는 취소 요청으로 파이프라인이 중단되었을 때 발생하는 예외.

    중단된 호출은 부분 결과를 반환하지 않습니다.
    """

    pass

"""호출 단위 협조적 취소/타임아웃.

파이프라인은 엔티티 사이마다 ``InvocationGuard.check()``를 호출합니다.
타임아웃이 지났거나 취소 이벤트가 설정되면 ``ForecastCancelledError``가 발생하여
호출 전체가 중단됩니다.
"""

from __future__ import annotations

import logging
import threading
import time
from typing import Optional

from ..domain.exceptions import ForecastCancelledError

logger = logging.getLogger(__name__)


class InvocationGuard:
    """
    파이프라인 호출 하나에 대한 마감 시간과 취소 신호를 묶은 객체.

    Args:
        timeout: 호출 시작 시점부터의 허용 시간 (초). None이면 무제한.
        cancel_event: 외부에서 set()하면 다음 check()에서 중단되는 이벤트.

    Examples:
        >>> guard = InvocationGuard(timeout=5.0)
        >>> pipeline.forecast_ingredient_usage(filters, guard=guard)
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        cancel_event: Optional[threading.Event] = None,
    ) -> None:
        self.timeout = timeout
        self.cancel_event = cancel_event
        self._deadline = time.monotonic() + timeout if timeout is not None else None

    @property
    def cancelled(self) -> bool:
        return self.cancel_event is not None and self.cancel_event.is_set()

    @property
    def expired(self) -> bool:
        return self._deadline is not None and time.monotonic() >= self._deadline

    def check(self, operation: str = "forecast") -> None:
        if self.cancelled:
            logger.warning(f"{operation} cancelled by caller")
            raise ForecastCancelledError(f"{operation} was cancelled")
        if self.expired:
            logger.warning(f"{operation} exceeded timeout of {self.timeout}s")
            raise ForecastCancelledError(
                f"{operation} exceeded timeout of {self.timeout}s"
            )


def check_guard(guard: Optional[InvocationGuard], operation: str) -> None:
    if guard is not None:
        guard.check(operation)

"""엔티티 표시 이름 조회 헬퍼."""

from __future__ import annotations

import concurrent.futures
from typing import Callable, Dict, Optional, Sequence

from ..data_sources.base import call_source


def resolve_names(
    ids: Sequence[int],
    lookup: Optional[Callable[[int], Optional[str]]],
    *,
    description: str,
    max_workers: int = 1,
) -> Dict[int, Optional[str]]:
    """
    ID 목록의 표시 이름을 조회합니다.

    ``max_workers > 1``이면 스레드 풀로 동시에 조회합니다.
    엔티티 간 의존성이 없으므로 결과는 순차 조회와 같습니다.
    조회 실패는 ``DataLoadError``로 호출 전체를 실패시킵니다.

    Returns:
        ID → 이름 (없으면 None)
    """
    if lookup is None or not ids:
        return {entity_id: None for entity_id in ids}

    def _fetch(entity_id: int) -> Optional[str]:
        return call_source(description, lookup, entity_id)

    if max_workers <= 1 or len(ids) == 1:
        return {entity_id: _fetch(entity_id) for entity_id in ids}

    with concurrent.futures.ThreadPoolExecutor(max_workers=max_workers) as executor:
        names = list(executor.map(_fetch, ids))
    return dict(zip(ids, names))

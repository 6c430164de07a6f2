"""
이력 관련 도메인 이벤트를 외부 구독자에게 전달합니다.

합치기(aggregation)로 직전 이력의 내용이 바뀌면 JournalAggregatedEvent를 발행한다.
발행은 commit 이후에만 하며, 구독자 오류는 기록만 하고 트랜잭션 결과에 영향을 주지 않는다.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, List

logger = logging.getLogger(__name__)

JOURNAL_AGGREGATE_BEFORE_DESTROY = "journal_aggregate_before_destroy"


@dataclass(frozen=True)
class JournalAggregatedEvent:
    journal_id: int
    journable_type: str
    journable_id: int
    new_state: Dict[str, Any] = field(default_factory=dict)
    predecessor_snapshot: Dict[str, Any] = field(default_factory=dict)
    name: str = JOURNAL_AGGREGATE_BEFORE_DESTROY


Handler = Callable[[JournalAggregatedEvent], None]


class JournalEventBus:
    def __init__(self) -> None:
        self._lock = threading.Lock()
        self._handlers: List[Handler] = []

    def subscribe(self, handler: Handler) -> Handler:
        with self._lock:
            if handler not in self._handlers:
                self._handlers.append(handler)
        return handler

    def unsubscribe(self, handler: Handler) -> None:
        with self._lock:
            if handler in self._handlers:
                self._handlers.remove(handler)

    def publish(self, event: JournalAggregatedEvent) -> int:
        """구독자에게 이벤트를 전달하고 성공한 구독자 수를 돌려준다."""
        with self._lock:
            handlers = list(self._handlers)
        delivered = 0
        for handler in handlers:
            try:
                handler(event)
                delivered += 1
            except Exception as exc:
                logger.warning(
                    "[journal] event handler %s failed for journal #%s: %s",
                    getattr(handler, "__name__", handler), event.journal_id, exc,
                )
        return delivered


events = JournalEventBus()

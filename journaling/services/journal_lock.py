"""
journable 단위 직렬화 잠금입니다.

같은 journable에 대한 두 호출이 동시에 직전 이력/버전을 읽으면 버전이 중복되거나
둘 다 합치기 대상으로 판단될 수 있다. 이를 막기 위해 이력 생성 전체 구간 동안 잠금을 잡는다.

- ProcessLocalLock: 한 프로세스 안의 스레드 간 직렬화. 제한 시간 안에 못 잡으면 ConflictError.
- PostgresAdvisoryLock: pg_advisory_xact_lock. 트랜잭션이 끝나면 DB가 해제한다.
"""

from __future__ import annotations

import hashlib
import logging
import threading
from contextlib import contextmanager
from typing import Dict, Iterator, List, Optional, Tuple

from sqlalchemy import text
from sqlalchemy.orm import Session

from journaling.config import settings
from journaling.errors import ConflictError

logger = logging.getLogger(__name__)


class ProcessLocalLock:
    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout
        self._guard = threading.Lock()
        # key -> [lock, 대기/보유 중인 호출 수]
        self._locks: Dict[Tuple[str, int], List] = {}

    def _checkout(self, key: Tuple[str, int]) -> threading.Lock:
        with self._guard:
            entry = self._locks.setdefault(key, [threading.Lock(), 0])
            entry[1] += 1
            return entry[0]

    def _checkin(self, key: Tuple[str, int]) -> None:
        with self._guard:
            entry = self._locks.get(key)
            if entry is None:
                return
            entry[1] -= 1
            if entry[1] <= 0:
                del self._locks[key]

    def is_held(self, journable_type: str, journable_id: int) -> bool:
        with self._guard:
            entry = self._locks.get((journable_type, int(journable_id)))
            return entry is not None and entry[0].locked()

    @contextmanager
    def hold(self, db: Session, journable_type: str, journable_id: int) -> Iterator[None]:
        key = (journable_type, int(journable_id))
        timeout = settings.JOURNAL_LOCK_TIMEOUT_SECONDS if self.timeout is None else self.timeout
        lock = self._checkout(key)
        try:
            if not lock.acquire(timeout=timeout):
                raise ConflictError(
                    f"Could not lock {journable_type} #{journable_id} within {timeout}s",
                    details={"journable_type": journable_type, "journable_id": journable_id},
                )
            try:
                yield
            finally:
                lock.release()
        finally:
            self._checkin(key)


def advisory_key(journable_type: str, journable_id: int) -> int:
    digest = hashlib.sha256(f"journals:{journable_type}:{int(journable_id)}".encode("utf-8")).digest()
    return int.from_bytes(digest[:8], "big", signed=True)


class PostgresAdvisoryLock:
    def __init__(self, timeout: Optional[float] = None) -> None:
        self.timeout = timeout

    @contextmanager
    def hold(self, db: Session, journable_type: str, journable_id: int) -> Iterator[None]:
        timeout = settings.JOURNAL_LOCK_TIMEOUT_SECONDS if self.timeout is None else self.timeout
        # lock_timeout 초과 시 OperationalError가 발생하고 호출자가 ConflictError로 바꾼다.
        db.execute(text(f"SET LOCAL lock_timeout = {int(timeout * 1000)}"))
        db.execute(
            text("SELECT pg_advisory_xact_lock(:key)"),
            {"key": advisory_key(journable_type, journable_id)},
        )
        yield


default_lock = ProcessLocalLock()


def lock_for(db: Session):
    if db.get_bind().dialect.name == "postgresql":
        return PostgresAdvisoryLock()
    return default_lock

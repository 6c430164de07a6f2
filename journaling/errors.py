"""
이력(journal) 생성 과정에서 발생하는 오류 타입입니다.

- JournalError: 기본 예외
- ConflictError: 잠금/트랜잭션 경합. 호출자가 재시도할 수 있다.
- ConfigurationError: 타입별 설정 누락. 배포/등록 결함이므로 재시도하지 않는다.
- ConstraintError: 저장소가 쓰기를 거부함(FK 위반 등). 트랜잭션은 롤백된다.

변경이 없어 이력이 필요 없는 경우는 오류가 아니라 ServiceResult.noop()으로 표현한다.
"""

from __future__ import annotations

from typing import Any, Dict, Optional


class JournalError(Exception):
    """Base exception for journal creation failures.

    Attributes:
        message: Error message
        code: Error code for programmatic handling
        retryable: Whether the caller may retry the whole operation
        details: Additional error context
    """

    code = "JOURNAL_ERROR"
    retryable = False

    def __init__(self, message: str, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details or {}


class ConflictError(JournalError):
    """Lock or transaction contention.

    Raised when:
    - The per-journable lock cannot be acquired in time
    - The database reports a lock/serialization failure
    """

    code = "CONFLICT"
    retryable = True


class ConfigurationError(JournalError):
    """A journable type is not registered or its registration is incomplete."""

    code = "CONFIGURATION_ERROR"


class ConstraintError(JournalError):
    """The database rejected a write (e.g. a broken foreign key)."""

    code = "CONSTRAINT_VIOLATION"

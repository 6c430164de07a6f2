"""서비스 호출 결과(성공/무변경/실패)를 표현합니다."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from journaling.errors import JournalError
from journaling.models.journal import Journal


class ResultStatus(str, Enum):
    CREATED = "created"
    AGGREGATED = "aggregated"
    NOOP = "noop"
    FAILED = "failed"


@dataclass(frozen=True)
class ServiceResult:
    """
    Result of CreateService.call().

    A no-op is a successful outcome without a journal.
    """

    status: ResultStatus
    journal: Optional[Journal] = None
    error: Optional[JournalError] = None

    @classmethod
    def created(cls, journal: Journal) -> "ServiceResult":
        return cls(status=ResultStatus.CREATED, journal=journal)

    @classmethod
    def aggregated(cls, journal: Journal) -> "ServiceResult":
        return cls(status=ResultStatus.AGGREGATED, journal=journal)

    @classmethod
    def noop(cls) -> "ServiceResult":
        return cls(status=ResultStatus.NOOP)

    @classmethod
    def failure(cls, error: JournalError) -> "ServiceResult":
        return cls(status=ResultStatus.FAILED, error=error)

    @property
    def success(self) -> bool:
        return self.status != ResultStatus.FAILED

    @property
    def is_noop(self) -> bool:
        return self.status == ResultStatus.NOOP

"""
journable(예: WorkPackage, Meeting)의 변경 이력을 만드는 서비스입니다.

이력은 journable 본문, 사용자 정의 필드 값, 첨부를 그대로 복사한 스냅샷이다.
현재 상태와 최신 이력이 다를 때(또는 메모가 있을 때)만 복사한다.

한 사용자 동작이 만든 상태를 정확히 기록하려면 같은 시점에 다른 호출이 같은 journable을
바꾸지 않아야 한다. 그래서 잠금 → 직전 이력 조회 → 합치기 판단 → 변경 감지 → 기록 → commit
전체를 journable 단위 잠금 안에서 하나의 트랜잭션으로 수행한다.

    result = CreateService(db, work_package, current_user).call(notes="검토 완료")
"""

from __future__ import annotations

import logging
from typing import Callable, Optional

from sqlalchemy import inspect
from sqlalchemy.exc import IntegrityError, OperationalError
from sqlalchemy.orm import Session
from sqlalchemy.orm.exc import StaleDataError

from journaling.config import settings
from journaling.errors import ConflictError, ConstraintError, JournalError
from journaling.models.user import User
from journaling.services import journal_aggregation, journal_lock, journal_snapshot, journal_versions
from journaling.services.journal_events import JournalAggregatedEvent, JournalEventBus, events as default_events
from journaling.services.journal_registry import JournableRegistry, registry as default_registry
from journaling.services.service_result import ServiceResult
from journaling.utils.helpers import utcnow

logger = logging.getLogger(__name__)


class CreateService:
    def __init__(
        self,
        db: Session,
        journable,
        user: User,
        *,
        aggregation_minutes: Optional[int] = None,
        lock=None,
        events: Optional[JournalEventBus] = None,
        registry: Optional[JournableRegistry] = None,
        clock: Callable = utcnow,
    ) -> None:
        self.db = db
        self.journable = journable
        self.user = user
        self.aggregation_minutes = (
            settings.JOURNAL_AGGREGATION_TIME_MINUTES if aggregation_minutes is None else aggregation_minutes
        )
        self.lock = lock
        self.events = events or default_events
        self.registry = registry or default_registry
        self.clock = clock

    def call(self, notes: str = "") -> ServiceResult:
        try:
            descriptor = self.registry.descriptor_for(self.journable)
            # 호출자가 변경한 내용을 먼저 DB에 반영해야 현재 상태를 읽을 수 있다.
            self.db.flush()
            journable_id = getattr(self.journable, descriptor.id_attribute)
            lock = self.lock or journal_lock.lock_for(self.db)

            with lock.hold(self.db, descriptor.journable_type, journable_id):
                try:
                    predecessor = journal_versions.last_journal(self.db, descriptor.journable_type, journable_id)
                    now = self.clock()
                    decision = journal_aggregation.decide(
                        predecessor, notes, self.user, now, self.aggregation_minutes
                    )
                    outcome = journal_snapshot.write(
                        self.db, descriptor, journable_id, predecessor, decision, notes, self.user, now
                    )
                    self.db.commit()
                except Exception:
                    # 다음 호출자가 잠금을 잡기 전에 트랜잭션을 끝낸다.
                    self.db.rollback()
                    raise
        except JournalError as exc:
            return self._fail(exc)
        except StaleDataError as exc:
            return self._fail(ConflictError(f"Journable was modified concurrently: {exc}"))
        except OperationalError as exc:
            return self._fail(ConflictError(f"Database rejected the journal write: {exc.orig}"))
        except IntegrityError as exc:
            return self._fail(ConstraintError(f"Journal write violates a constraint: {exc.orig}"))

        if outcome is None:
            return ServiceResult.noop()

        self._reload_journals()
        journal = outcome.journal
        if outcome.aggregated:
            self.events.publish(
                JournalAggregatedEvent(
                    journal_id=journal.journal_id,
                    journable_type=descriptor.journable_type,
                    journable_id=journable_id,
                    new_state=outcome.new_state or {},
                    predecessor_snapshot=outcome.predecessor_snapshot or {},
                )
            )
            return ServiceResult.aggregated(journal)
        return ServiceResult.created(journal)

    def _fail(self, error: JournalError) -> ServiceResult:
        self.db.rollback()
        logger.warning("[journal] %s for %r: %s", error.code, self.journable, error.message)
        return ServiceResult.failure(error)

    def _reload_journals(self) -> None:
        # 호출자가 journals 관계를 이미 읽어 둔 경우 새 이력이 보이도록 만료시킨다.
        state = inspect(self.journable)
        if "journals" in state.mapper.relationships and "journals" not in state.unloaded:
            self.db.expire(self.journable, ["journals"])

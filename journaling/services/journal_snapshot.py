"""
journable의 현재 상태를 이력(Journal)과 스냅샷 테이블에 기록합니다.

호출자는 트랜잭션과 잠금을 이미 잡고 있어야 한다. 이 모듈은 flush까지만 하고
commit/rollback은 호출자(CreateService)가 한다.

기록 순서:
1. 현재 상태를 읽고 변경 여부를 판단한다. 변경이 없고 메모도 없으면 아무 행도 건드리지 않는다.
2. 스냅샷 데이터 행을 만든다(텍스트 컬럼은 줄바꿈 정규화).
3. 새 이력을 추가하거나, 합치는 경우 직전 이력의 스냅샷을 지우고 그 행을 다시 쓴다(버전 유지).
4. 사용자 정의 필드 값/첨부 스냅샷을 현재 상태로 다시 만든다.
5. 메모가 있는 이력이면 journable의 수정 시각을 이력 생성 시각으로 맞춘다(lock_version 유지).
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Any, Dict, Optional

from sqlalchemy import update
from sqlalchemy.orm import Session

from journaling.models.journal import AttachableJournal, CustomizableJournal, Journal
from journaling.models.user import User
from journaling.services import journal_changes, journal_service, journal_versions
from journaling.services.journal_aggregation import AggregationDecision
from journaling.services.journal_changes import LiveState, normalize_newlines
from journaling.services.journal_registry import JournableDescriptor
from journaling.utils.helpers import is_blank

logger = logging.getLogger(__name__)


@dataclass
class SnapshotOutcome:
    journal: Journal
    aggregated: bool = False
    new_state: Optional[Dict[str, Any]] = None
    predecessor_snapshot: Optional[Dict[str, Any]] = None


def write(
    db: Session,
    descriptor: JournableDescriptor,
    journable_id: int,
    predecessor: Optional[Journal],
    decision: AggregationDecision,
    notes: Optional[str],
    user: User,
    now: datetime,
) -> Optional[SnapshotOutcome]:
    """이력을 만들거나 직전 이력을 다시 쓴다. 기록할 것이 없으면 None."""
    live = journal_changes.load_live_state(db, descriptor, journable_id)
    if live is None:
        logger.debug("[journal] no live row for %s #%s", descriptor.journable_type, journable_id)
        return None

    if is_blank(notes) and not journal_changes.changed(db, descriptor, live, predecessor):
        return None

    aggregate = decision == AggregationDecision.AGGREGATE and predecessor is not None
    timestamp = _journal_timestamp(live, notes, now)
    data = _insert_data(db, descriptor, live)

    predecessor_snapshot = None
    if aggregate:
        predecessor_snapshot = journal_service.snapshot_of(db, predecessor, descriptor)
        journal = _rewrite_predecessor(db, descriptor, predecessor, data, notes, timestamp)
        logger.info(
            "[journal] aggregated into %s #%s v%s",
            descriptor.journable_type, journable_id, journal.version,
        )
    else:
        logger.debug("[journal] inserting new journal for %s #%s", descriptor.journable_type, journable_id)
        journal = _insert_journal(db, descriptor, journable_id, predecessor, data, notes, user, timestamp)

    _insert_customizable(journal, live)
    _insert_attachable(journal, live)
    db.flush()

    if not is_blank(journal.notes):
        _touch_journable(db, descriptor, journable_id, journal.created_at)

    return SnapshotOutcome(
        journal=journal,
        aggregated=aggregate,
        new_state=journal_service.snapshot_of(db, journal, descriptor) if aggregate else None,
        predecessor_snapshot=predecessor_snapshot,
    )


def _journal_timestamp(live: LiveState, notes: Optional[str], now: datetime) -> datetime:
    # 메모는 그 자체로 새 사건이므로 현재 시각을 쓴다.
    if is_blank(notes) and live.timestamp is not None:
        return live.timestamp
    return now


def _insert_data(db: Session, descriptor: JournableDescriptor, live: LiveState):
    values = dict(live.attributes)
    for name in descriptor.text_columns:
        values[name] = normalize_newlines(values.get(name))
    data = descriptor.data_model(**values)
    db.add(data)
    db.flush()
    return data


def _data_id(descriptor: JournableDescriptor, data) -> int:
    return getattr(data, descriptor.data_model.__mapper__.get_property_by_column(descriptor.data_id_column).key)


def _insert_journal(
    db: Session,
    descriptor: JournableDescriptor,
    journable_id: int,
    predecessor: Optional[Journal],
    data,
    notes: Optional[str],
    user: User,
    timestamp: datetime,
) -> Journal:
    journal = Journal(
        journable_type=descriptor.journable_type,
        journable_id=journable_id,
        version=journal_versions.next_version(
            db, descriptor.journable_type, journable_id, predecessor, AggregationDecision.CREATE_NEW
        ),
        activity_type=descriptor.activity_type,
        user_id=user.user_id,
        notes=notes or "",
        created_at=timestamp,
        updated_at=timestamp,
        data_type=descriptor.data_type,
        data_id=_data_id(descriptor, data),
    )
    db.add(journal)
    db.flush()
    return journal


def _rewrite_predecessor(
    db: Session,
    descriptor: JournableDescriptor,
    predecessor: Journal,
    data,
    notes: Optional[str],
    timestamp: datetime,
) -> Journal:
    # 이력 행 자체는 지우지 않는다. 이 이력을 참조하는 곳이 그대로 유지되어야 한다.
    old_data = db.get(descriptor.data_model, predecessor.data_id)
    if old_data is not None:
        db.delete(old_data)
    predecessor.customizable_journals.clear()
    predecessor.attachable_journals.clear()

    if not is_blank(notes):
        predecessor.notes = notes
    predecessor.created_at = timestamp
    predecessor.updated_at = timestamp
    predecessor.data_type = descriptor.data_type
    predecessor.data_id = _data_id(descriptor, data)
    db.flush()
    return predecessor


def _insert_customizable(journal: Journal, live: LiveState) -> None:
    for field_id, value in live.custom_values:
        if value is None or value == "":
            continue
        journal.customizable_journals.append(
            CustomizableJournal(custom_field_id=field_id, value=normalize_newlines(value))
        )


def _insert_attachable(journal: Journal, live: LiveState) -> None:
    for attachment_id, filename in live.attachments:
        journal.attachable_journals.append(
            AttachableJournal(attachment_id=attachment_id, filename=filename)
        )


def _touch_journable(db: Session, descriptor: JournableDescriptor, journable_id: int, timestamp: datetime) -> None:
    # ORM flush를 거치지 않으므로 lock_version이 올라가지 않는다.
    db.execute(
        update(descriptor.table)
        .where(descriptor.id_column == journable_id)
        .values({name: timestamp for name in descriptor.timestamp_columns})
    )

"""
현재 상태와 최신 이력 스냅샷을 비교해 이력 생성이 필요한지 판단합니다.

비교 대상은 세 가지다.
- 이력 대상 컬럼: 텍스트 컬럼은 NULL을 빈 문자열로 보고 CRLF를 LF로 맞춘 뒤 비교한다.
- 사용자 정의 필드 값: 필드 ID 기준. 빈 값은 값이 없는 것과 같다.
- 첨부: 첨부 ID 기준. 한쪽에만 있으면 변경이다.
이 모듈은 읽기만 한다.
"""

from __future__ import annotations

from collections import defaultdict
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, Iterable, List, Optional, Set, Tuple

from sqlalchemy import select
from sqlalchemy.orm import Session

from journaling.models.attachment import Attachment
from journaling.models.custom_field import CustomValue
from journaling.models.journal import AttachableJournal, CustomizableJournal, Journal
from journaling.services.journal_registry import JournableDescriptor

TIMESTAMP_LABEL = "__journable_timestamp"


def normalize_newlines(value: Any) -> str:
    if value is None:
        return ""
    return str(value).replace("\r\n", "\n")


@dataclass
class LiveState:
    """DB에 반영된 journable의 현재 상태."""

    attributes: Dict[str, Any]
    timestamp: Optional[datetime]
    custom_values: List[Tuple[int, Optional[str]]] = field(default_factory=list)
    attachments: List[Tuple[int, str]] = field(default_factory=list)


def load_live_state(db: Session, descriptor: JournableDescriptor, journable_id: int) -> Optional[LiveState]:
    table = descriptor.table
    columns = [table.c[name] for name in descriptor.journaled_columns]
    stmt = (
        select(*columns, table.c[descriptor.timestamp_attribute].label(TIMESTAMP_LABEL))
        .where(descriptor.id_column == journable_id, *descriptor.source_criteria())
    )
    row = db.execute(stmt).mappings().first()
    if row is None:
        return None

    custom_values = db.execute(
        select(CustomValue.custom_field_id, CustomValue.value)
        .where(
            CustomValue.customized_type == descriptor.journable_type,
            CustomValue.customized_id == journable_id,
        )
        .order_by(CustomValue.custom_value_id)
    ).all()
    attachments = db.execute(
        select(Attachment.attachment_id, Attachment.filename)
        .where(
            Attachment.container_type == descriptor.journable_type,
            Attachment.container_id == journable_id,
        )
        .order_by(Attachment.attachment_id)
    ).all()

    return LiveState(
        attributes={name: row[name] for name in descriptor.journaled_columns},
        timestamp=row[TIMESTAMP_LABEL],
        custom_values=[(int(field_id), value) for field_id, value in custom_values],
        attachments=[(int(attachment_id), filename) for attachment_id, filename in attachments],
    )


def load_journal_data(db: Session, descriptor: JournableDescriptor, journal: Journal) -> Optional[Dict[str, Any]]:
    data_table = descriptor.data_table
    row = db.execute(
        select(data_table).where(descriptor.data_id_column == journal.data_id)
    ).mappings().first()
    if row is None:
        return None
    return {name: row[name] for name in descriptor.journaled_columns}


def data_changed(descriptor: JournableDescriptor, current: Dict[str, Any], previous: Optional[Dict[str, Any]]) -> bool:
    if previous is None:
        return True
    text_columns = set(descriptor.text_columns)
    for name in descriptor.journaled_columns:
        if name in text_columns:
            if normalize_newlines(current.get(name)) != normalize_newlines(previous.get(name)):
                return True
        elif current.get(name) != previous.get(name):
            return True
    return False


def _custom_value_map(pairs: Iterable[Tuple[int, Optional[str]]]) -> Dict[int, List[str]]:
    values: Dict[int, List[str]] = defaultdict(list)
    for field_id, value in pairs:
        if value is None or value == "":
            continue
        values[int(field_id)].append(normalize_newlines(value))
    return {field_id: sorted(items) for field_id, items in values.items()}


def custom_values_changed(
    current: Iterable[Tuple[int, Optional[str]]],
    previous: Iterable[Tuple[int, Optional[str]]],
) -> bool:
    return _custom_value_map(current) != _custom_value_map(previous)


def attachments_changed(current: Iterable[int], previous: Iterable[int]) -> bool:
    current_ids: Set[int] = {int(attachment_id) for attachment_id in current}
    previous_ids: Set[int] = {int(attachment_id) for attachment_id in previous}
    return current_ids != previous_ids


def changed(
    db: Session,
    descriptor: JournableDescriptor,
    live: LiveState,
    predecessor: Optional[Journal],
) -> bool:
    """predecessor 스냅샷 대비 live 상태가 달라졌으면 True. predecessor가 없으면 항상 True."""
    if predecessor is None:
        return True

    previous_data = load_journal_data(db, descriptor, predecessor)
    if data_changed(descriptor, live.attributes, previous_data):
        return True

    previous_custom = db.execute(
        select(CustomizableJournal.custom_field_id, CustomizableJournal.value)
        .where(CustomizableJournal.journal_id == predecessor.journal_id)
    ).all()
    if custom_values_changed(live.custom_values, previous_custom):
        return True

    previous_attachments = db.execute(
        select(AttachableJournal.attachment_id)
        .where(AttachableJournal.journal_id == predecessor.journal_id)
    ).scalars().all()
    return attachments_changed((attachment_id for attachment_id, _ in live.attachments), previous_attachments)

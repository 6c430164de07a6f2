"""변경 이력(Journal) 조회와 응답 변환을 담당하는 도메인 서비스입니다."""

from typing import Any, Dict, List, Optional

from fastapi import HTTPException
from sqlalchemy import select
from sqlalchemy.orm import Session

from journaling.errors import ConfigurationError
from journaling.models.journal import AttachableJournal, CustomizableJournal, Journal
from journaling.services.journal_changes import load_journal_data
from journaling.services.journal_registry import JournableDescriptor, registry
from journaling.services.service_result import ServiceResult


def list_journals(db: Session, *, journable_type: str, journable_id: int) -> List[Journal]:
    return (
        db.query(Journal)
        .filter(
            Journal.journable_type == journable_type,
            Journal.journable_id == journable_id,
        )
        .order_by(Journal.version.asc())
        .all()
    )


def get_journal(db: Session, journal_id: int) -> Journal:
    row = db.query(Journal).filter(Journal.journal_id == journal_id).first()
    if not row:
        raise HTTPException(status_code=404, detail="변경 이력을 찾을 수 없습니다.")
    return row


def snapshot_of(db: Session, journal: Journal, descriptor: Optional[JournableDescriptor] = None) -> Dict[str, Any]:
    """이력 한 건과 스냅샷(속성/사용자 정의 필드/첨부)을 dict로 읽는다."""
    if descriptor is None:
        descriptor = registry.descriptor_for(journal.journable_type)
    custom_values = db.execute(
        select(CustomizableJournal.custom_field_id, CustomizableJournal.value)
        .where(CustomizableJournal.journal_id == journal.journal_id)
        .order_by(CustomizableJournal.custom_field_id, CustomizableJournal.id)
    ).all()
    attachments = db.execute(
        select(AttachableJournal.attachment_id, AttachableJournal.filename)
        .where(AttachableJournal.journal_id == journal.journal_id)
        .order_by(AttachableJournal.attachment_id)
    ).all()
    return {
        "journal_id": journal.journal_id,
        "journable_type": journal.journable_type,
        "journable_id": journal.journable_id,
        "version": journal.version,
        "user_id": journal.user_id,
        "notes": journal.notes or "",
        "created_at": journal.created_at,
        "updated_at": journal.updated_at,
        "data": load_journal_data(db, descriptor, journal) or {},
        "custom_values": [
            {"custom_field_id": field_id, "value": value} for field_id, value in custom_values
        ],
        "attachments": [
            {"attachment_id": attachment_id, "filename": filename} for attachment_id, filename in attachments
        ],
    }


def to_response(db: Session, journal: Journal) -> Dict[str, Any]:
    payload = snapshot_of(db, journal)
    payload["activity_type"] = journal.activity_type
    return payload


def resolve_route(route_key: str):
    try:
        return registry.descriptor_for_route(route_key)
    except ConfigurationError:
        raise HTTPException(status_code=404, detail="이력을 지원하지 않는 대상입니다.")


def ensure_success(result: ServiceResult) -> ServiceResult:
    if result.success:
        return result
    error = result.error
    if error is not None and error.retryable:
        raise HTTPException(status_code=409, detail="다른 변경과 충돌했습니다. 다시 시도해 주세요.")
    if isinstance(error, ConfigurationError):
        raise HTTPException(status_code=500, detail="이력 설정이 올바르지 않습니다.")
    raise HTTPException(status_code=422, detail="변경 이력을 저장하지 못했습니다.")

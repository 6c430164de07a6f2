"""Journals 기능 API 라우터입니다. 이력 조회와 메모 이력 작성을 처리합니다."""

from typing import List

from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session
from journaling.database import get_db
from journaling.schemas.journal import JournalNoteCreate, JournalOut, JournalWriteOut
from journaling.middleware.auth_middleware import get_current_user
from journaling.models.user import User
from journaling.services import journal_service
from journaling.services.journal_create_service import CreateService

router = APIRouter(tags=["journals"])


def _get_journable(db: Session, route_key: str, journable_id: int):
    descriptor = journal_service.resolve_route(route_key)
    journable = db.get(descriptor.model, journable_id)
    if journable is None:
        raise HTTPException(status_code=404, detail="대상을 찾을 수 없습니다.")
    return descriptor, journable


@router.get("/api/journals/{journal_id}", response_model=JournalOut)
def get_journal(
    journal_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return journal_service.to_response(db, journal_service.get_journal(db, journal_id))


@router.get("/api/{route_key}/{journable_id}/journals", response_model=List[JournalOut])
def list_journals(
    route_key: str,
    journable_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    descriptor, _ = _get_journable(db, route_key, journable_id)
    rows = journal_service.list_journals(
        db, journable_type=descriptor.journable_type, journable_id=journable_id
    )
    return [journal_service.to_response(db, row) for row in rows]


@router.post("/api/{route_key}/{journable_id}/journals", response_model=JournalWriteOut)
def create_journal(
    route_key: str,
    journable_id: int,
    data: JournalNoteCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    _, journable = _get_journable(db, route_key, journable_id)
    result = CreateService(db, journable, current_user).call(notes=data.notes)
    journal_service.ensure_success(result)
    journal = journal_service.to_response(db, result.journal) if result.journal is not None else None
    return {"status": result.status.value, "journal": journal}

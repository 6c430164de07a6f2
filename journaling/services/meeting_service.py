"""Meeting Service 도메인 서비스 레이어입니다."""

from fastapi import HTTPException
from sqlalchemy.orm import Session

from journaling.models.meeting import Meeting
from journaling.models.user import User
from journaling.schemas.meeting import MeetingCreate, MeetingUpdate
from journaling.services import journal_service
from journaling.services.journal_create_service import CreateService


def get_meeting(db: Session, meeting_id: int) -> Meeting:
    meeting = db.query(Meeting).filter(Meeting.meeting_id == meeting_id).first()
    if not meeting:
        raise HTTPException(status_code=404, detail="회의를 찾을 수 없습니다.")
    return meeting


def create_meeting(db: Session, data: MeetingCreate, current_user: User) -> Meeting:
    meeting = Meeting(**data.model_dump(exclude={"notes"}), author_id=current_user.user_id)
    db.add(meeting)
    db.flush()
    result = CreateService(db, meeting, current_user).call(notes=data.notes or "")
    journal_service.ensure_success(result)
    db.refresh(meeting)
    return meeting


def update_meeting(db: Session, meeting_id: int, data: MeetingUpdate, current_user: User) -> Meeting:
    meeting = get_meeting(db, meeting_id)
    for k, v in data.model_dump(exclude_unset=True, exclude={"notes"}).items():
        setattr(meeting, k, v)
    result = CreateService(db, meeting, current_user).call(notes=data.notes or "")
    journal_service.ensure_success(result)
    db.refresh(meeting)
    return meeting

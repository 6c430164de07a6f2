"""Meetings 기능 API 라우터입니다."""

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from journaling.database import get_db
from journaling.schemas.meeting import MeetingCreate, MeetingUpdate, MeetingOut
from journaling.middleware.auth_middleware import get_current_user
from journaling.models.user import User
from journaling.services import meeting_service

router = APIRouter(prefix="/api/meetings", tags=["meetings"])


@router.post("", response_model=MeetingOut)
def create_meeting(
    data: MeetingCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return meeting_service.create_meeting(db, data, current_user)


@router.get("/{meeting_id}", response_model=MeetingOut)
def get_meeting(
    meeting_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return meeting_service.get_meeting(db, meeting_id)


@router.put("/{meeting_id}", response_model=MeetingOut)
def update_meeting(
    meeting_id: int,
    data: MeetingUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return meeting_service.update_meeting(db, meeting_id, data, current_user)

"""Meeting 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class MeetingBase(BaseModel):
    title: str
    location: Optional[str] = None
    start_time: Optional[datetime] = None
    duration: Optional[float] = None
    state: Optional[str] = "open"
    agenda: Optional[str] = None


class MeetingCreate(MeetingBase):
    notes: Optional[str] = None


class MeetingUpdate(BaseModel):
    title: Optional[str] = None
    location: Optional[str] = None
    start_time: Optional[datetime] = None
    duration: Optional[float] = None
    state: Optional[str] = None
    agenda: Optional[str] = None
    notes: Optional[str] = None


class MeetingOut(MeetingBase):
    meeting_id: int
    author_id: int
    lock_version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

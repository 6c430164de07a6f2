"""변경 이력(Journal) 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from datetime import datetime
from typing import Any, Dict, List, Optional

from pydantic import BaseModel


class CustomValueSnapshotOut(BaseModel):
    custom_field_id: int
    value: Optional[str] = None


class AttachmentSnapshotOut(BaseModel):
    attachment_id: int
    filename: str


class JournalOut(BaseModel):
    journal_id: int
    journable_type: str
    journable_id: int
    version: int
    activity_type: Optional[str] = None
    user_id: int
    notes: str = ""
    created_at: datetime
    updated_at: datetime
    data: Dict[str, Any]
    custom_values: List[CustomValueSnapshotOut] = []
    attachments: List[AttachmentSnapshotOut] = []


class JournalNoteCreate(BaseModel):
    notes: str


class JournalWriteOut(BaseModel):
    status: str
    journal: Optional[JournalOut] = None

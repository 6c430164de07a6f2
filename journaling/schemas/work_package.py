"""WorkPackage 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import Dict, Optional
from datetime import date, datetime


class WorkPackageBase(BaseModel):
    subject: str
    description: Optional[str] = None
    status: Optional[str] = "new"
    priority: Optional[str] = "normal"
    assigned_to_id: Optional[int] = None
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    done_ratio: Optional[int] = 0
    estimated_hours: Optional[float] = None


class WorkPackageCreate(WorkPackageBase):
    custom_values: Dict[int, Optional[str]] = {}
    notes: Optional[str] = None


class WorkPackageUpdate(BaseModel):
    subject: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    priority: Optional[str] = None
    assigned_to_id: Optional[int] = None
    start_date: Optional[date] = None
    due_date: Optional[date] = None
    done_ratio: Optional[int] = None
    estimated_hours: Optional[float] = None
    # 값이 None이거나 빈 문자열이면 해당 필드 값을 지운다.
    custom_values: Optional[Dict[int, Optional[str]]] = None
    notes: Optional[str] = None
    lock_version: Optional[int] = None


class WorkPackageOut(WorkPackageBase):
    work_package_id: int
    author_id: int
    lock_version: int
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

"""CustomField 요청/응답 계약을 위한 Pydantic 스키마입니다."""

from pydantic import BaseModel
from typing import Optional
from datetime import datetime


class CustomFieldCreate(BaseModel):
    name: str
    field_format: str = "string"
    is_multi_value: bool = False


class CustomFieldOut(CustomFieldCreate):
    custom_field_id: int
    created_at: Optional[datetime] = None

    model_config = {"from_attributes": True}

"""CustomFields 기능 API 라우터입니다."""

from typing import List

from fastapi import APIRouter, Depends
from sqlalchemy.orm import Session
from journaling.database import get_db
from journaling.schemas.custom_field import CustomFieldCreate, CustomFieldOut
from journaling.middleware.auth_middleware import get_current_user
from journaling.models.user import User
from journaling.services import custom_field_service

router = APIRouter(prefix="/api/custom_fields", tags=["custom_fields"])


@router.get("", response_model=List[CustomFieldOut])
def list_custom_fields(db: Session = Depends(get_db), current_user: User = Depends(get_current_user)):
    return custom_field_service.list_custom_fields(db)


@router.post("", response_model=CustomFieldOut)
def create_custom_field(
    data: CustomFieldCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return custom_field_service.create_custom_field(db, data)

"""SQLAlchemy 모델 패키지 초기화 모듈입니다."""

from journaling.models.user import User
from journaling.models.work_package import WorkPackage
from journaling.models.meeting import Meeting
from journaling.models.custom_field import CustomField, CustomValue
from journaling.models.attachment import Attachment
from journaling.models.journal import (
    Journal,
    CustomizableJournal,
    AttachableJournal,
    WorkPackageJournal,
    MeetingJournal,
)

__all__ = [
    "User",
    "WorkPackage",
    "Meeting",
    "CustomField", "CustomValue",
    "Attachment",
    "Journal", "CustomizableJournal", "AttachableJournal",
    "WorkPackageJournal", "MeetingJournal",
]

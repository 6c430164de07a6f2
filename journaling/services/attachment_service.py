"""Attachment Service 도메인 서비스 레이어입니다. 첨부 추가/삭제 후 컨테이너 이력을 남깁니다."""

from typing import Any, Dict

from fastapi import HTTPException
from sqlalchemy.orm import Session

from journaling.models.attachment import Attachment
from journaling.models.user import User
from journaling.services import journal_service
from journaling.services.journal_create_service import CreateService
from journaling.services.journal_registry import registry


def create_attachment(db: Session, container, info: Dict[str, Any], current_user: User) -> Attachment:
    descriptor = registry.descriptor_for(container)
    attachment = Attachment(
        container_type=descriptor.journable_type,
        container_id=getattr(container, descriptor.id_attribute),
        filename=info["filename"],
        disk_filename=info.get("disk_filename"),
        filesize=info.get("filesize") or 0,
        content_type=info.get("content_type"),
        author_id=current_user.user_id,
    )
    db.add(attachment)
    result = CreateService(db, container, current_user).call()
    journal_service.ensure_success(result)
    db.refresh(attachment)
    return attachment


def delete_attachment(db: Session, attachment_id: int, current_user: User) -> None:
    attachment = db.query(Attachment).filter(Attachment.attachment_id == attachment_id).first()
    if not attachment:
        raise HTTPException(status_code=404, detail="첨부 파일을 찾을 수 없습니다.")
    descriptor = registry.descriptor_for(attachment.container_type)
    container = db.get(descriptor.model, attachment.container_id)
    db.delete(attachment)
    if container is None:
        db.commit()
        return
    result = CreateService(db, container, current_user).call()
    journal_service.ensure_success(result)

"""WorkPackage Service 도메인 서비스 레이어입니다. 변경 후 이력 생성까지 한 흐름으로 처리합니다."""

from fastapi import HTTPException
from sqlalchemy.orm import Session

from journaling.models.user import User
from journaling.models.work_package import WorkPackage
from journaling.schemas.work_package import WorkPackageCreate, WorkPackageUpdate
from journaling.services import custom_field_service, journal_service
from journaling.services.journal_create_service import CreateService

JOURNABLE_TYPE = "WorkPackage"


def get_work_package(db: Session, work_package_id: int) -> WorkPackage:
    wp = db.query(WorkPackage).filter(WorkPackage.work_package_id == work_package_id).first()
    if not wp:
        raise HTTPException(status_code=404, detail="작업 항목을 찾을 수 없습니다.")
    return wp


def create_work_package(db: Session, data: WorkPackageCreate, current_user: User) -> WorkPackage:
    payload = data.model_dump(exclude={"custom_values", "notes"})
    wp = WorkPackage(**payload, author_id=current_user.user_id)
    db.add(wp)
    db.flush()
    custom_field_service.apply_custom_values(
        db,
        customized_type=JOURNABLE_TYPE,
        customized_id=wp.work_package_id,
        values=data.custom_values,
    )
    result = CreateService(db, wp, current_user).call(notes=data.notes or "")
    journal_service.ensure_success(result)
    db.refresh(wp)
    return wp


def update_work_package(
    db: Session,
    work_package_id: int,
    data: WorkPackageUpdate,
    current_user: User,
) -> WorkPackage:
    wp = get_work_package(db, work_package_id)
    if data.lock_version is not None and data.lock_version != wp.lock_version:
        raise HTTPException(status_code=409, detail="다른 사용자가 먼저 수정했습니다. 새로고침 후 다시 시도해 주세요.")

    payload = data.model_dump(exclude_unset=True, exclude={"custom_values", "notes", "lock_version"})
    for k, v in payload.items():
        setattr(wp, k, v)
    if data.custom_values is not None:
        custom_field_service.apply_custom_values(
            db,
            customized_type=JOURNABLE_TYPE,
            customized_id=wp.work_package_id,
            values=data.custom_values,
        )
    result = CreateService(db, wp, current_user).call(notes=data.notes or "")
    journal_service.ensure_success(result)
    db.refresh(wp)
    return wp

"""WorkPackages 기능 API 라우터입니다. 요청을 검증하고 서비스 레이어로 비즈니스 로직을 위임합니다."""

from fastapi import APIRouter, Depends, UploadFile, File
from sqlalchemy.orm import Session
from journaling.database import get_db
from journaling.schemas.work_package import WorkPackageCreate, WorkPackageUpdate, WorkPackageOut
from journaling.middleware.auth_middleware import get_current_user
from journaling.models.user import User
from journaling.services import attachment_service, work_package_service
from journaling.utils.helpers import save_upload

router = APIRouter(tags=["work_packages"])


@router.post("/api/work_packages", response_model=WorkPackageOut)
def create_work_package(
    data: WorkPackageCreate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return work_package_service.create_work_package(db, data, current_user)


@router.get("/api/work_packages/{work_package_id}", response_model=WorkPackageOut)
def get_work_package(
    work_package_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return work_package_service.get_work_package(db, work_package_id)


@router.put("/api/work_packages/{work_package_id}", response_model=WorkPackageOut)
def update_work_package(
    work_package_id: int,
    data: WorkPackageUpdate,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    return work_package_service.update_work_package(db, work_package_id, data, current_user)


@router.post("/api/work_packages/{work_package_id}/attachments")
async def upload_attachment(
    work_package_id: int,
    file: UploadFile = File(...),
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    wp = work_package_service.get_work_package(db, work_package_id)
    info = await save_upload(file, subfolder="work_packages")
    attachment = attachment_service.create_attachment(db, wp, info, current_user)
    return {
        "attachment_id": attachment.attachment_id,
        "filename": attachment.filename,
        "filesize": attachment.filesize,
    }


@router.delete("/api/attachments/{attachment_id}")
def delete_attachment(
    attachment_id: int,
    db: Session = Depends(get_db),
    current_user: User = Depends(get_current_user),
):
    attachment_service.delete_attachment(db, attachment_id, current_user)
    return {"message": "삭제되었습니다."}

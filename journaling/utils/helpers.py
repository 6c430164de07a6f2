import os
import uuid
from datetime import datetime, timezone
from fastapi import UploadFile, HTTPException
from journaling.config import settings


def utcnow() -> datetime:
    # DB에는 timezone 없는 UTC로 저장한다.
    return datetime.now(timezone.utc).replace(tzinfo=None)


def is_blank(value) -> bool:
    return value is None or not str(value).strip()


def validate_file(file: UploadFile) -> None:
    ext = file.filename.rsplit(".", 1)[-1].lower() if "." in file.filename else ""
    if ext not in settings.ALLOWED_EXTENSIONS:
        raise HTTPException(
            status_code=400,
            detail=f"File type '{ext}' not allowed. Allowed: {', '.join(settings.ALLOWED_EXTENSIONS)}",
        )


async def save_upload(file: UploadFile, subfolder: str = "") -> dict:
    validate_file(file)
    content = await file.read()
    if len(content) > settings.MAX_UPLOAD_SIZE:
        raise HTTPException(status_code=400, detail="File exceeds 50 MB limit")

    folder = os.path.join(settings.UPLOAD_DIR, subfolder)
    os.makedirs(folder, exist_ok=True)

    ext = file.filename.rsplit(".", 1)[-1].lower()
    disk_filename = f"{uuid.uuid4().hex}.{ext}"
    path = os.path.join(folder, disk_filename)

    with open(path, "wb") as f:
        f.write(content)

    return {
        "filename": file.filename,
        "disk_filename": os.path.join(subfolder, disk_filename).replace("\\", "/"),
        "filesize": len(content),
        "content_type": file.content_type,
    }

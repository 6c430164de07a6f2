"""환경 변수 기반 애플리케이션 설정을 중앙에서 관리합니다."""

from pydantic_settings import BaseSettings
from typing import List
from pathlib import Path


class Settings(BaseSettings):
    DATABASE_URL: str = "sqlite:///./journaling.db"
    SECRET_KEY: str = "change-me-to-a-random-secret-key"
    DEBUG: bool = True
    LOG_LEVEL: str = "INFO"
    ALLOWED_ORIGINS: List[str] = ["http://localhost:3000", "http://localhost:8000"]

    # JWT
    ACCESS_TOKEN_EXPIRE_MINUTES: int = 480

    # File upload
    MAX_UPLOAD_SIZE: int = 50 * 1024 * 1024  # 50 MB
    ALLOWED_EXTENSIONS: List[str] = [
        "jpg", "jpeg", "png", "gif",
        "pdf", "ppt", "pptx", "xls", "xlsx", "csv",
        "doc", "docx", "txt", "zip",
    ]
    UPLOAD_DIR: str = "uploads"

    # Journals
    # 같은 사용자의 연속 변경을 하나의 이력으로 합치는 시간(분). 0이면 합치지 않는다.
    JOURNAL_AGGREGATION_TIME_MINUTES: int = 5
    JOURNAL_LOCK_TIMEOUT_SECONDS: float = 10.0

    class Config:
        env_file = str(Path(__file__).resolve().parents[1] / ".env")


settings = Settings()

"""Auth Service 도메인 서비스 레이어입니다. 로그인과 액세스 토큰 발급을 담당합니다."""

from datetime import timedelta
from jose import jwt
from sqlalchemy.orm import Session
from fastapi import HTTPException, status
from journaling.models.user import User
from journaling.config import settings
from journaling.utils.helpers import utcnow

ALGORITHM = "HS256"


def create_access_token(user_id: int) -> str:
    expire = utcnow() + timedelta(minutes=settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    payload = {"sub": str(user_id), "exp": expire}
    return jwt.encode(payload, settings.SECRET_KEY, algorithm=ALGORITHM)


def login(db: Session, login_name: str) -> User:
    user = db.query(User).filter(User.login == login_name, User.is_active == True).first()
    if not user:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail=f"로그인 '{login_name}'에 해당하는 활성 사용자를 찾을 수 없습니다.",
        )
    return user
